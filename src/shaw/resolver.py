"""
Forward resolution: one English token in, one Shavian rendering out.

The cascade is an ordered tuple of policy objects. Each policy either
returns a rendering or ``None`` to let the next one try; when every policy
declines, the original spelling is kept. Rolling state (previous word,
proper-name status, sentence position, quote parity) lives in an immutable
:class:`TransliterationContext` that callers thread from token to token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Mapping, Protocol, Sequence

from .dictionary import DictionaryStore, strip_delimiters
from .morphology import decompositions, direct_override, reconstruct
from .punctuation import (
    PunctuationSplit,
    SuffixKind,
    clean_word,
    convert_quotes,
    escape_untranslated,
    split_token,
)
from .tables import (
    CONTRACTION_SUFFIXES,
    FORCED_NAME_DELIMITER,
    FUNCTION_WORDS,
    LOWERCASE_DELIMITER,
    NAMES,
    NEGATIVE_STEMS,
    POSSESSIVE_SUFFIX,
    PROPER_NAME_MARKER,
    PROPER_NOUN_TAGS,
    SENTENCE_STARTERS,
    SENTENCE_TERMINATORS,
    TO_REDUCTIONS,
    VOICELESS_FINALS,
)

__all__ = [
    "CascadeResolver",
    "DEFAULT_POLICIES",
    "NameHints",
    "Policy",
    "ProperNameMarker",
    "Resolution",
    "TransliterationContext",
    "WordRequest",
]

_COMPOUND_PATTERN = re.compile(r"(—|–|-|…|\|)")


@dataclass(frozen=True)
class TransliterationContext:
    """Per-call rolling state. Create one per top-level call; never share it."""

    previous_word_clean: str = ""
    previous_pos: str | None = None
    previous_was_proper_name: bool = False
    sentence_start: bool = True
    double_quote_open: bool = False
    # Reverse direction only.
    in_title: bool = False
    after_name_initial: bool = False
    genuine_sentence_start: bool = True

    def advance(self, clean: str, pos: str | None, proper_name: bool) -> "TransliterationContext":
        return replace(
            self,
            previous_word_clean=clean,
            previous_pos=pos,
            previous_was_proper_name=proper_name,
            sentence_start=False,
        )


@dataclass(frozen=True)
class Resolution:
    """
    Outcome for one raw token.

    ``source`` names the policy that produced ``body``; ``None`` means the
    token is unresolved and ``body`` is the original word. ``escaped`` tokens
    serialize as ``punctuation{original}`` only when rendered through ``text``.
    """

    original: str
    leading: str
    body: str
    trailing: str
    source: str | None
    context: TransliterationContext
    pos: str | None = None
    is_word: bool = True
    proper_name: bool = False
    escaped: bool = False

    @property
    def resolved(self) -> bool:
        return self.source is not None

    @property
    def text(self) -> str:
        if self.escaped:
            return escape_untranslated(self.original)
        return f"{self.leading}{self.body}{self.trailing}"


@dataclass(frozen=True)
class NameHints:
    known: bool = False
    forced: bool = False
    suppressed: bool = False


@dataclass(frozen=True)
class WordRequest:
    word: str
    clean: str
    pos: str | None
    context: TransliterationContext
    split: PunctuationSplit
    hints: NameHints
    name_phrase: bool = False
    allow_morphology: bool = True


class Policy(Protocol):
    name: str

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None: ...


class ProperNameMarker:
    """Decides whether a word counts as a proper name and whether it gets ``·``."""

    def counts_as_name(self, request: WordRequest) -> bool:
        clean = request.clean
        hints = request.hints
        if hints.suppressed or clean == "i":
            return False
        if clean in FUNCTION_WORDS and not request.name_phrase:
            return False
        if hints.forced:
            return True
        if not request.word[:1].isupper() or clean in SENTENCE_STARTERS:
            return False
        if hints.known:
            return True
        return not request.context.sentence_start

    def should_mark(self, request: WordRequest) -> bool:
        return self.counts_as_name(request) and not request.context.previous_was_proper_name


@dataclass(frozen=True)
class NamesPolicy:
    name: str = "names"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        if not resolver.names_allowed(request.word, request.clean, request.name_phrase):
            return None
        return resolver.finish(request, resolver.names[request.clean])


@dataclass(frozen=True)
class ContextualReductionPolicy:
    name: str = "reduction"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        if request.clean != "to":
            return None
        return TO_REDUCTIONS.get(request.context.previous_word_clean)


@dataclass(frozen=True)
class FunctionWordPolicy:
    name: str = "function-word"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        return FUNCTION_WORDS.get(request.clean)


@dataclass(frozen=True)
class DictionaryPolicy:
    name: str = "dictionary"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        form = resolver.store.lookup(request.clean, request.pos)
        if form is None:
            return None
        return resolver.finish(request, form)


@dataclass(frozen=True)
class ApostrophePolicy:
    name: str = "apostrophe"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        split = request.split
        if split.suffix_kind is None:
            return None
        base_key = clean_word(split.core)
        if split.suffix_kind is SuffixKind.POSSESSIVE:
            base_form, _, _ = resolver.resolve_core(
                split.core, request.pos, request.context, allow_morphology=request.allow_morphology
            )
            if base_form is None:
                return None
            return base_form + POSSESSIVE_SUFFIX

        suffix_key = split.suffix.replace("’", "'").lower()
        if suffix_key == "n't" and base_key in NEGATIVE_STEMS:
            base_form = NEGATIVE_STEMS[base_key]
        else:
            base_form, _, _ = resolver.resolve_core(
                split.core, request.pos, request.context, allow_morphology=request.allow_morphology
            )
        if base_form is None:
            return None
        suffix_form = CONTRACTION_SUFFIXES[suffix_key]
        if suffix_key == "'s" and base_form[-1:] in VOICELESS_FINALS:
            suffix_form = "𐑕"
        return base_form + suffix_form


@dataclass(frozen=True)
class MorphologyPolicy:
    name: str = "morphology"

    def apply(self, request: WordRequest, resolver: "CascadeResolver") -> str | None:
        if not request.allow_morphology:
            return None
        override = direct_override(request.clean)
        if override is not None:
            return resolver.finish(request, override)
        for proposal in decompositions(request.clean):
            for candidate in proposal.candidates:
                base_form = resolver.resolve_base(candidate.base, proposal.tags)
                if base_form is None:
                    continue
                rebuilt = reconstruct(candidate, base_form)
                if rebuilt is not None:
                    return resolver.finish(request, rebuilt)
        return None


# Contextual reduction sits ahead of the closed-class table so "have to"
# can override the table entry for "to".
DEFAULT_POLICIES: tuple[Policy, ...] = (
    NamesPolicy(),
    ContextualReductionPolicy(),
    FunctionWordPolicy(),
    DictionaryPolicy(),
    ApostrophePolicy(),
    MorphologyPolicy(),
)


def _ends_sentence(marks: str) -> bool:
    return any(ch in SENTENCE_TERMINATORS for ch in marks)


class CascadeResolver:
    def __init__(
        self,
        store: DictionaryStore,
        *,
        policies: Sequence[Policy] | None = None,
        names: Mapping[str, str] | None = None,
        marker: ProperNameMarker | None = None,
        convert_quotes: bool = True,
        escape_untranslated: bool = False,
    ) -> None:
        self.store = store
        self.policies: tuple[Policy, ...] = tuple(policies) if policies is not None else DEFAULT_POLICIES
        self.names: dict[str, str] = dict(NAMES if names is None else names)
        self.marker = marker or ProperNameMarker()
        self.convert_quotes = convert_quotes
        self.escape_untranslated = escape_untranslated

    # -- helpers used by policies -------------------------------------------------

    def is_known(self, word: str) -> bool:
        key = word.lower()
        return (
            key in self.store
            or key in self.names
            or key in FUNCTION_WORDS
            or direct_override(key) is not None
        )

    def names_allowed(self, word: str, clean: str, name_phrase: bool) -> bool:
        if clean not in self.names or not word[:1].isupper() or clean in SENTENCE_STARTERS:
            return False
        return name_phrase or clean not in FUNCTION_WORDS

    def finish(self, request: WordRequest, form: str) -> str:
        glyphs = strip_delimiters(form)
        if self.marker.should_mark(request):
            return f"{PROPER_NAME_MARKER}{glyphs}"
        return glyphs

    def resolve_base(self, base: str, tags: Sequence[str]) -> str | None:
        for tag in tags:
            form = self.store.lookup_tagged(base, tag)
            if form is not None:
                return strip_delimiters(form)
        form = self.store.lookup(base)
        if form is not None:
            return strip_delimiters(form)
        return FUNCTION_WORDS.get(base)

    def _hints(self, word: str, clean: str, pos: str | None, name_phrase: bool) -> NameHints:
        form = self.store.lookup(clean, pos) or ""
        known = (
            name_phrase
            or (pos in PROPER_NOUN_TAGS)
            or self.names_allowed(word, clean, name_phrase)
        )
        return NameHints(
            known=known,
            forced=form.startswith(FORCED_NAME_DELIMITER),
            suppressed=form.startswith(LOWERCASE_DELIMITER),
        )

    # -- cascade ----------------------------------------------------------------

    def _request(
        self,
        word: str,
        pos: str | None,
        context: TransliterationContext,
        *,
        name_phrase: bool,
        allow_morphology: bool,
    ) -> WordRequest:
        clean = clean_word(word)
        return WordRequest(
            word=word,
            clean=clean,
            pos=pos,
            context=context,
            split=split_token(word, self.is_known),
            hints=self._hints(word, clean, pos, name_phrase),
            name_phrase=name_phrase,
            allow_morphology=allow_morphology,
        )

    def resolve_core(
        self,
        word: str,
        pos: str | None,
        context: TransliterationContext,
        *,
        name_phrase: bool = False,
        allow_morphology: bool = True,
    ) -> tuple[str | None, str | None, TransliterationContext]:
        """
        Run the cascade on a bare word (no surrounding marks).

        Returns ``(rendering, policy_name, context_after)``; the rendering is
        ``None`` when nothing matched.
        """
        request = self._request(
            word, pos, context, name_phrase=name_phrase, allow_morphology=allow_morphology
        )
        # "Shaw's" is a name exactly when "Shaw" is.
        name_request = request
        if request.split.suffix_kind is not None:
            name_request = self._request(
                request.split.core, pos, context, name_phrase=name_phrase, allow_morphology=allow_morphology
            )
        after = context.advance(request.clean, pos, self.marker.counts_as_name(name_request))
        for policy in self.policies:
            form = policy.apply(request, self)
            if form is not None:
                return form, policy.name, after
        return None, None, after

    def _quotes(self, marks: str, position: str, double_open: bool) -> tuple[str, bool]:
        if not self.convert_quotes or not marks:
            return marks, double_open
        return convert_quotes(marks, position, double_open)

    def resolve(
        self,
        raw: str,
        pos: str | None = None,
        context: TransliterationContext | None = None,
        *,
        name_phrase: bool = False,
    ) -> Resolution:
        """Resolve one whitespace-free token, returning its rendering and the next context."""
        if context is None:
            context = TransliterationContext()
        if len(raw) > 1 and _COMPOUND_PATTERN.search(raw) and any(ch.isalpha() for ch in raw):
            return self._resolve_compound(raw, pos, context, name_phrase=name_phrase)
        return self._resolve_single(raw, pos, context, name_phrase=name_phrase)

    def _resolve_compound(
        self,
        raw: str,
        pos: str | None,
        context: TransliterationContext,
        *,
        name_phrase: bool,
    ) -> Resolution:
        # Split before peeling marks: "hello,—world" keeps both words.
        pieces: list[str] = []
        current = context
        resolved_any = False
        for piece in _COMPOUND_PATTERN.split(raw):
            if not piece or _COMPOUND_PATTERN.fullmatch(piece):
                pieces.append(piece)
                continue
            part = self._resolve_single(piece, None, current, name_phrase=name_phrase, allow_escape=False)
            pieces.append(part.text)
            current = part.context
            resolved_any = resolved_any or (part.is_word and part.resolved)

        if not resolved_any:
            split = split_token(raw)
            has_digits = any(ch.isdigit() for ch in raw)
            if self.escape_untranslated and split.suffix_kind is None and (split.has_marks or has_digits):
                unchanged = replace(context, sentence_start=current.sentence_start)
                return Resolution(raw, "", raw, "", None, unchanged, pos=pos, is_word=False, escaped=True)
        source = "compound" if resolved_any else None
        return Resolution(
            raw, "", "".join(pieces), "", source, current, pos=pos, proper_name=current.previous_was_proper_name
        )

    def _resolve_single(
        self,
        raw: str,
        pos: str | None,
        context: TransliterationContext,
        *,
        name_phrase: bool,
        allow_escape: bool = True,
    ) -> Resolution:
        split = split_token(raw, self.is_known)
        if split.is_punctuation:
            marks, double_open = self._quotes(raw, "standalone", context.double_quote_open)
            after = replace(
                context,
                double_quote_open=double_open,
                sentence_start=context.sentence_start or _ends_sentence(raw),
            )
            return Resolution(raw, marks, "", "", "punctuation", after, pos=pos, is_word=False)

        leading, double_open = self._quotes(split.leading, "leading", context.double_quote_open)
        trailing, double_open = self._quotes(split.trailing, "trailing", double_open)
        word = split.word
        form, source, after = self.resolve_core(word, pos, context, name_phrase=name_phrase)
        after = replace(after, double_quote_open=double_open, sentence_start=_ends_sentence(split.trailing))

        if form is None:
            has_digits = any(ch.isdigit() for ch in raw)
            escape = allow_escape and self.escape_untranslated
            if escape and split.suffix_kind is None and (split.has_marks or has_digits):
                unchanged = replace(context, sentence_start=_ends_sentence(split.trailing))
                return Resolution(raw, "", raw, "", None, unchanged, pos=pos, is_word=False, escaped=True)
            return Resolution(
                raw, leading, word, trailing, None, after, pos=pos, proper_name=after.previous_was_proper_name
            )
        return Resolution(
            raw, leading, form, trailing, source, after, pos=pos, proper_name=after.previous_was_proper_name
        )
