from __future__ import annotations

import re
from dataclasses import replace

from .dictionary import ReverseIndex
from .punctuation import parse_escape, restore_quotes
from .resolver import Resolution, TransliterationContext
from .tables import (
    PROPER_NAME_MARKER,
    QUOTE_CLOSE,
    QUOTE_OPEN,
    REVERSE_FUNCTION_WORDS,
    SENTENCE_TERMINATORS,
    SHAVIAN_FIRST,
    SHAVIAN_LAST,
)

__all__ = ["ReverseResolver", "contains_shavian", "is_shavian"]

_COMPOUND_PATTERN = re.compile(r"(—|–|-|…|\|)")
_STRIPPABLE = PROPER_NAME_MARKER + QUOTE_OPEN + QUOTE_CLOSE


def is_shavian(ch: str) -> bool:
    return SHAVIAN_FIRST <= ord(ch) <= SHAVIAN_LAST


def contains_shavian(text: str) -> bool:
    return any(is_shavian(ch) for ch in text)


def _ends_sentence(marks: str) -> bool:
    return any(ch in SENTENCE_TERMINATORS for ch in marks)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class ReverseResolver:
    """Shavian token → best-guess English spelling."""

    def __init__(self, index: ReverseIndex) -> None:
        self.index = index

    def lookup(self, glyphs: str) -> str | None:
        word = self.index.lookup(glyphs)
        if word is None:
            stripped = "".join(ch for ch in glyphs if ch not in _STRIPPABLE)
            if stripped and stripped != glyphs:
                word = self.index.lookup(stripped)
        return word

    def _passthrough(self, token: str, context: TransliterationContext) -> Resolution:
        marks = token
        in_title = context.in_title
        if in_title and QUOTE_CLOSE in marks:
            marks = marks.replace(QUOTE_CLOSE, "", 1)
            in_title = False
        ends = _ends_sentence(token)
        has_letters = any(ch.isalpha() for ch in token)
        after = replace(
            context,
            in_title=in_title,
            sentence_start=ends if has_letters else (context.sentence_start or ends),
            genuine_sentence_start=True if ends else context.genuine_sentence_start,
            after_name_initial=False if has_letters else context.after_name_initial,
        )
        return Resolution(token, restore_quotes(marks), "", "", "punctuation", after, is_word=has_letters)

    def resolve(self, token: str, context: TransliterationContext | None = None) -> Resolution:
        if context is None:
            context = TransliterationContext()

        original = parse_escape(token)
        if original is not None:
            after = replace(
                context,
                sentence_start=_ends_sentence(original),
                genuine_sentence_start=True,
                after_name_initial=False,
            )
            return Resolution(token, "", original, "", "escape", after, is_word=False)
        if "{" in token or "}" in token:
            return Resolution(token, "", token, "", None, context, is_word=False)
        if not contains_shavian(token):
            return self._passthrough(token, context)

        if " " in token.strip() and PROPER_NAME_MARKER in token:
            return self._resolve_spaced_name(token, context)
        if len(token) > 1 and _COMPOUND_PATTERN.search(token):
            return self._resolve_compound(token, context)

        start = 0
        while start < len(token) and not (is_shavian(token[start]) or token[start] == PROPER_NAME_MARKER):
            start += 1
        end = len(token)
        while end > start and not is_shavian(token[end - 1]):
            end -= 1
        leading, core, trailing = token[:start], token[start:end], token[end:]

        marked = core.startswith(PROPER_NAME_MARKER)
        core = core.lstrip(PROPER_NAME_MARKER)

        in_title = context.in_title
        if marked and leading.endswith(QUOTE_OPEN):
            leading = leading[: -len(QUOTE_OPEN)]
            in_title = True
        if in_title and QUOTE_CLOSE in trailing:
            trailing = trailing.replace(QUOTE_CLOSE, "", 1)
            in_title = False
        leading = restore_quotes(leading)
        trailing = restore_quotes(trailing)

        result = self.lookup(core)
        first_word = result or ""
        if result is None:
            body = f"{PROPER_NAME_MARKER}{core}" if marked else core
            after = replace(
                context,
                in_title=in_title,
                sentence_start=_ends_sentence(trailing),
                genuine_sentence_start=True,
                after_name_initial=False,
            )
            return Resolution(token, leading, body, trailing, None, after)

        if marked or context.after_name_initial:
            result = _capitalize(result)
        elif context.sentence_start:
            if not (first_word in REVERSE_FUNCTION_WORDS and not context.genuine_sentence_start):
                result = _capitalize(result)

        name_initial = (marked or context.after_name_initial) and len(first_word) == 1 and trailing.startswith(".")
        after = context.advance(first_word.lower(), None, marked or context.after_name_initial)
        if name_initial:
            after = replace(
                after,
                in_title=in_title,
                sentence_start=True,
                genuine_sentence_start=False,
                after_name_initial=True,
            )
        else:
            after = replace(
                after,
                in_title=in_title,
                sentence_start=_ends_sentence(trailing),
                genuine_sentence_start=True,
                after_name_initial=False,
            )
        return Resolution(token, leading, result, trailing, "reverse-index", after, proper_name=marked)

    def _resolve_spaced_name(self, token: str, context: TransliterationContext) -> Resolution:
        pieces: list[str] = []
        current = context
        resolved_any = False
        for index, piece in enumerate(token.split(" ")):
            if not piece:
                pieces.append(piece)
                continue
            resolution = self.resolve(piece, current)
            if index > 0 and resolution.resolved and current.previous_was_proper_name:
                resolution = replace(resolution, body=_capitalize(resolution.body))
            resolved_any = resolved_any or resolution.resolved
            pieces.append(resolution.text)
            current = resolution.context
        source = "reverse-index" if resolved_any else None
        return Resolution(token, "", " ".join(pieces), "", source, current, proper_name=True)

    def _resolve_compound(self, token: str, context: TransliterationContext) -> Resolution:
        pieces: list[str] = []
        current = context
        resolved_any = False
        proper_name = False
        for piece in _COMPOUND_PATTERN.split(token):
            if not piece or _COMPOUND_PATTERN.fullmatch(piece):
                pieces.append(piece)
                continue
            resolution = self.resolve(piece, current)
            resolved_any = resolved_any or resolution.source == "reverse-index"
            proper_name = proper_name or resolution.proper_name
            pieces.append(resolution.text)
            current = resolution.context
        source = "reverse-index" if resolved_any else None
        return Resolution(token, "", "".join(pieces), "", source, current, proper_name=proper_name)
