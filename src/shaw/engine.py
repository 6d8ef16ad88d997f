"""
Text-level orchestration for both directions.

``ShavianEngine`` owns the lexicon, the reverse index and the two
resolvers. Every top-level call builds its own
:class:`~shaw.resolver.TransliterationContext`, so one engine can serve
concurrent callers as long as nobody calls ``add_entry`` meanwhile.
"""

from __future__ import annotations

import asyncio
import warnings
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Protocol, Sequence

from .dictionary import (
    DictionaryStore,
    ReverseIndex,
    dictionary_from_payload,
    load_default_dictionary,
    load_dictionary,
)
from .logging_utils import debug_log
from .nlp import PosTagger, PosTaggerUnavailableError
from .overrides import VocabularyOverride, load_vocabulary_overrides
from .punctuation import clean_word, split_token
from .resolver import CascadeResolver, Resolution, TransliterationContext
from .reverse import ReverseResolver
from .tables import NAME_PHRASES, QUOTE_CLOSE, QUOTE_OPEN
from .tokens import ResolvedToken, Token, TokenKind, segment_text

__all__ = [
    "EngineConfig",
    "ShavianEngine",
    "TaggerLike",
    "create_engine",
]


class TaggerLike(Protocol):
    def tag(self, text: str) -> list[tuple[str, str | None]]: ...


@dataclass(slots=True)
class EngineConfig:
    convert_quotes: bool = True
    escape_untranslated: bool = False
    pos_timeout: float = 5.0


class ShavianEngine:
    def __init__(
        self,
        dictionary: DictionaryStore | Mapping[str, object] | None = None,
        *,
        config: EngineConfig | None = None,
        tagger: TaggerLike | None = None,
    ) -> None:
        if dictionary is None:
            store = load_default_dictionary()
        elif isinstance(dictionary, DictionaryStore):
            store = dictionary
        else:
            store = dictionary_from_payload(dictionary)
        self.config = config or EngineConfig()
        self.store = store
        self.reverse_index = ReverseIndex.build(store)
        self.resolver = CascadeResolver(
            store,
            convert_quotes=self.config.convert_quotes,
            escape_untranslated=self.config.escape_untranslated,
        )
        self.reverse_resolver = ReverseResolver(self.reverse_index)
        self.tagger = tagger

    @classmethod
    def from_path(cls, path: Path | str, **kwargs) -> "ShavianEngine":
        return cls(load_dictionary(path), **kwargs)

    # -- vocabulary -------------------------------------------------------------

    def add_entry(self, word: str, form: str, pos: str | None = None) -> None:
        """Add or replace a word. Not safe while other calls are resolving."""
        self.store.add_entry(word, form, pos)
        if pos is None:
            self.reverse_index.add(form, word)

    def apply_overrides(self, overrides: Iterable[VocabularyOverride]) -> int:
        count = 0
        for override in overrides:
            self.add_entry(override.word, override.shavian, override.pos)
            count += 1
        debug_log(f"applied {count} vocabulary override(s)")
        return count

    # -- forward ------------------------------------------------------------------

    def _name_phrase_roles(self, tokens: Sequence[Token]) -> dict[int, str]:
        roles: dict[int, str] = {}
        for index, token in enumerate(tokens):
            if token.kind is not TokenKind.WORD or index in roles:
                continue
            for phrase in NAME_PHRASES:
                positions = [index + 2 * offset for offset in range(len(phrase))]
                if positions[-1] >= len(tokens):
                    continue
                if any(tokens[pos - 1].text != " " for pos in positions[1:]):
                    continue
                words = [split_token(tokens[pos].text).word for pos in positions]
                if all(
                    tokens[pos].kind is TokenKind.WORD and word[:1].isupper() and clean_word(word) == expected
                    for pos, word, expected in zip(positions, words, phrase)
                ):
                    for pos in positions:
                        roles[pos] = "inner"
                    roles[positions[0]] = "open"
                    roles[positions[-1]] = "close"
                    break
        return roles

    def _forward(self, tokens: Sequence[Token]) -> list[tuple[Token, Resolution | None]]:
        roles = self._name_phrase_roles(tokens)
        context = TransliterationContext()
        results: list[tuple[Token, Resolution | None]] = []
        for index, token in enumerate(tokens):
            if token.kind is TokenKind.WHITESPACE:
                results.append((token, None))
                continue
            role = roles.get(index)
            resolution = self.resolver.resolve(token.text, token.pos, context, name_phrase=role is not None)
            if role == "open" and resolution.resolved:
                resolution = _with_body(resolution, QUOTE_OPEN + resolution.body)
            elif role == "close" and resolution.resolved:
                resolution = _with_body(resolution, resolution.body + QUOTE_CLOSE)
            context = resolution.context
            results.append((token, resolution))
        return results

    @staticmethod
    def _render(results: Sequence[tuple[Token, Resolution | None]]) -> str:
        return "".join(token.text if resolution is None else resolution.text for token, resolution in results)

    def transliterate(self, text: str) -> str:
        return self._render(self._forward(segment_text(text)))

    def transliterate_word(self, word: str, pos: str | None = None) -> str:
        if any(ch.isspace() for ch in word):
            return self.transliterate(word)
        return self.resolver.resolve(word, pos).text

    def transliterate_with_parts_of_speech(self, tokens: Sequence[tuple[str, str | None]]) -> str:
        """
        Render externally tagged tokens.

        Whitespace tokens are kept as given; a word token that directly
        follows a non-whitespace token is separated from it by one space.
        """
        return self._render(self._forward(_tagged_tokens(tokens)))

    def resolve_tokens(
        self,
        text: str,
        tags: Sequence[tuple[str, str | None]] | None = None,
    ) -> list[ResolvedToken]:
        tokens = _tagged_tokens(tags) if tags is not None else segment_text(text)
        resolved: list[ResolvedToken] = []
        for token, resolution in self._forward(tokens):
            if resolution is None or not resolution.is_word:
                continue
            resolved.append(
                ResolvedToken(
                    surface=token.text,
                    start=token.start,
                    end=token.end,
                    rendering=resolution.text,
                    source=resolution.source,
                    pos=token.pos,
                    proper_name=resolution.proper_name,
                )
            )
        return resolved

    def _ensure_tagger(self) -> TaggerLike:
        if self.tagger is None:
            self.tagger = PosTagger()
        return self.tagger

    async def tag_text(
        self,
        text: str,
        tagger: TaggerLike | None = None,
        timeout: float | None = None,
    ) -> list[tuple[str, str | None]] | None:
        """Tag ``text`` off the event loop; ``None`` on any tagger failure or timeout."""
        limit = self.config.pos_timeout if timeout is None else timeout
        try:
            active = tagger or self._ensure_tagger()
            return await asyncio.wait_for(asyncio.to_thread(active.tag, text), timeout=limit)
        except PosTaggerUnavailableError as exc:
            warnings.warn(f"POS tagging unavailable: {exc}", RuntimeWarning, stacklevel=2)
        except asyncio.TimeoutError:
            warnings.warn(
                f"POS tagging timed out after {limit:.1f}s; using untagged lookup.",
                RuntimeWarning,
                stacklevel=2,
            )
        except Exception as exc:
            warnings.warn(f"POS tagging failed ({exc}); using untagged lookup.", RuntimeWarning, stacklevel=2)
        debug_log("falling back to untagged transliteration")
        return None

    async def transliterate_tagged(
        self,
        text: str,
        tagger: TaggerLike | None = None,
        timeout: float | None = None,
    ) -> str:
        tagged = await self.tag_text(text, tagger, timeout)
        if tagged is None:
            return self.transliterate(text)
        return self.transliterate_with_parts_of_speech(tagged)

    # -- reverse ------------------------------------------------------------------

    def reverse_transliterate(self, text: str) -> str:
        context = TransliterationContext()
        pieces: list[str] = []
        for token in segment_text(text):
            if token.kind is TokenKind.WHITESPACE:
                pieces.append(token.text)
                continue
            resolution = self.reverse_resolver.resolve(token.text, context)
            context = resolution.context
            pieces.append(resolution.text)
        return "".join(pieces)

    def reverse_transliterate_word(self, word: str) -> str:
        return self.reverse_resolver.resolve(word).text


def _with_body(resolution: Resolution, body: str) -> Resolution:
    return replace(resolution, body=body)


def _tagged_tokens(pairs: Sequence[tuple[str, str | None]]) -> list[Token]:
    tokens: list[Token] = []
    offset = 0
    for text, pos in pairs:
        if not text:
            continue
        if (
            tokens
            and tokens[-1].kind is not TokenKind.WHITESPACE
            and not text[:1].isspace()
            and any(ch.isalpha() for ch in text)
        ):
            tokens.append(Token(" ", TokenKind.WHITESPACE, offset, offset + 1))
            offset += 1
        segments = segment_text(text)
        word_count = sum(1 for segment in segments if segment.kind is TokenKind.WORD)
        for segment in segments:
            tag = pos if segment.kind is TokenKind.WORD and word_count == 1 else None
            tokens.append(
                Token(
                    segment.text,
                    segment.kind,
                    offset + segment.start,
                    offset + segment.end,
                    tag,
                )
            )
        offset += len(text)
    return tokens


def create_engine(
    dictionary_path: Path | str | None = None,
    overrides_path: Path | str | None = None,
    *,
    config: EngineConfig | None = None,
    tagger: TaggerLike | None = None,
) -> ShavianEngine:
    """Engine over a lexicon file (or the bundled one) with user overrides applied."""
    if dictionary_path is not None:
        engine = ShavianEngine.from_path(dictionary_path, config=config, tagger=tagger)
    else:
        engine = ShavianEngine(config=config, tagger=tagger)
    if overrides_path is not None:
        engine.apply_overrides(load_vocabulary_overrides(Path(overrides_path)))
    return engine
