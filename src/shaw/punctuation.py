from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .tables import (
    COMPOUND_SEPARATORS,
    CONTRACTED_S_BASES,
    CONTRACTION_SUFFIXES,
    QUOTE_CLOSE,
    QUOTE_OPEN,
)

__all__ = [
    "PunctuationSplit",
    "SuffixKind",
    "clean_word",
    "convert_quotes",
    "escape_untranslated",
    "parse_escape",
    "restore_quotes",
    "split_token",
]

APOSTROPHES = "'’"
DOUBLE_QUOTES = '"“”'
SINGLE_QUOTES = "'‘’"
ESCAPE_PREFIX = "punctuation{"
_ESCAPE_PATTERN = re.compile(r"^punctuation\{(.*)\}$", re.DOTALL)
_NON_WORD_PATTERN = re.compile(r"[^\w']")
_CORE_EXTRA = frozenset("".join(COMPOUND_SEPARATORS))


class SuffixKind(Enum):
    POSSESSIVE = "possessive"
    CONTRACTION = "contraction"


@dataclass(frozen=True)
class PunctuationSplit:
    """
    A raw token cut into surrounding marks and the word between them.

    For apostrophe suffixes ``core`` holds the base word and ``suffix`` the
    literal suffix (``'s``, ``n't``...), so ``word`` rebuilds the surface form.
    """

    leading: str
    core: str
    trailing: str
    suffix: str = ""
    suffix_kind: SuffixKind | None = None

    @property
    def word(self) -> str:
        return f"{self.core}{self.suffix}"

    @property
    def is_punctuation(self) -> bool:
        return not self.core and not self.suffix

    @property
    def has_marks(self) -> bool:
        return bool(self.leading or self.trailing)


def clean_word(word: str) -> str:
    """Lower-case form used for table keys and context tracking."""
    return _NON_WORD_PATTERN.sub("", word.replace("’", "'").lower())


def _is_core_char(ch: str) -> bool:
    return ch.isalpha() or ch in _CORE_EXTRA


def _classify_apostrophe(
    leading: str,
    core: str,
    trailing: str,
    is_known: Callable[[str], bool] | None,
) -> PunctuationSplit | None:
    normalized = core.replace("’", "'").lower()
    idx = normalized.rfind("'")
    if idx <= 0:
        return None
    if normalized.endswith("n't") and len(normalized) > 3:
        return PunctuationSplit(leading, core[:-3], trailing, core[-3:], SuffixKind.CONTRACTION)
    base, suffix = core[:idx], core[idx:]
    suffix_key = normalized[idx:]
    base_key = clean_word(base)
    if (
        suffix_key == "'s"
        and base_key not in CONTRACTED_S_BASES
        and is_known is not None
        and is_known(base_key)
    ):
        return PunctuationSplit(leading, base, trailing, suffix, SuffixKind.POSSESSIVE)
    if suffix_key in CONTRACTION_SUFFIXES:
        return PunctuationSplit(leading, base, trailing, suffix, SuffixKind.CONTRACTION)
    return None


def split_token(raw: str, is_known: Callable[[str], bool] | None = None) -> PunctuationSplit:
    """
    Separate leading/trailing marks from the word they surround.

    ``is_known`` reports whether a lower-cased word exists in the lexicon; it
    gates possessive detection, which wins over contraction detection.
    Hyphens, dashes, ellipses and pipes stay inside ``core``.
    """
    if not any(ch.isalpha() for ch in raw):
        return PunctuationSplit(raw, "", "")

    start = 0
    while start < len(raw) and not _is_core_char(raw[start]):
        start += 1
    end = start
    while end < len(raw):
        ch = raw[end]
        if _is_core_char(ch):
            end += 1
            continue
        if ch in APOSTROPHES and end > start and end + 1 < len(raw) and raw[end + 1].isalpha():
            end += 1
            continue
        break

    leading, core, trailing = raw[:start], raw[start:end], raw[end:]

    # Plural possessive: "students'" with the apostrophe left in the trailing marks.
    if (
        trailing[:1] in APOSTROPHES
        and trailing
        and core.lower().endswith("s")
        and is_known is not None
        and is_known(clean_word(core))
    ):
        return PunctuationSplit(leading, core, trailing[1:], trailing[0], SuffixKind.POSSESSIVE)

    classified = _classify_apostrophe(leading, core, trailing, is_known)
    if classified is not None:
        return classified
    return PunctuationSplit(leading, core, trailing)


def escape_untranslated(original: str) -> str:
    return f"{ESCAPE_PREFIX}{original}}}"


def parse_escape(token: str) -> str | None:
    """Return the wrapped original of an escaped token, or ``None``."""
    match = _ESCAPE_PATTERN.match(token)
    if match is None:
        return None
    return match.group(1)


def convert_quotes(marks: str, position: str, double_open: bool) -> tuple[str, bool]:
    """
    Swap quotation marks for Shavian quote brackets.

    ``position`` is ``"leading"``, ``"trailing"`` or ``"standalone"``; single
    quotes only convert when their side of the word is known. Returns the
    converted marks and the updated double-quote state.
    """
    out: list[str] = []
    for ch in marks:
        if ch == "“":
            out.append(QUOTE_OPEN)
            double_open = True
        elif ch == "”":
            out.append(QUOTE_CLOSE)
            double_open = False
        elif ch in DOUBLE_QUOTES:
            out.append(QUOTE_CLOSE if double_open else QUOTE_OPEN)
            double_open = not double_open
        elif ch in SINGLE_QUOTES and position == "leading":
            out.append(QUOTE_OPEN)
        elif ch in SINGLE_QUOTES and position == "trailing":
            out.append(QUOTE_CLOSE)
        else:
            out.append(ch)
    return "".join(out), double_open


def restore_quotes(text: str) -> str:
    return text.replace(QUOTE_OPEN, '"').replace(QUOTE_CLOSE, '"')
