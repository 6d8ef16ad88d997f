from __future__ import annotations

from typing import Callable, Sequence

from .logging_utils import debug_log
from .punctuation import split_token
from .tokens import TokenKind, segment_text

__all__ = [
    "PENN_TO_LEXICON_TAGS",
    "PosTagger",
    "PosTaggerUnavailableError",
    "map_penn_tag",
]


class PosTaggerUnavailableError(RuntimeError):
    """Raised when the optional nltk tagger cannot be initialized."""


PENN_TO_LEXICON_TAGS: dict[str, str] = {
    "VB": "VVI",
    "VBP": "VVB",
    "VBD": "VVD",
    "VBN": "VVN",
    "VBG": "VVG",
    "VBZ": "VVZ",
    "NN": "NN1",
    "NNS": "NN2",
    "NNP": "NP0",
    "NNPS": "NP0",
}


def map_penn_tag(tag: str | None) -> str | None:
    if not tag:
        return None
    mapped = PENN_TO_LEXICON_TAGS.get(tag)
    if mapped is not None:
        return mapped
    if tag.startswith("JJ"):
        return "AJ0"
    if tag.startswith("RB"):
        return "AV0"
    return None


class PosTagger:
    """Averaged-perceptron tagger from nltk, emitting lexicon POS tags."""

    def __init__(self) -> None:
        try:
            import nltk  # type: ignore
        except ImportError as exc:
            raise PosTaggerUnavailableError(
                "POS tagging requires 'nltk' to be installed (pip install 'shaw[pos]')."
            ) from exc

        self._pos_tag: Callable[[list[str]], list[tuple[str, str]]] = nltk.pos_tag
        try:
            self._pos_tag(["hello"])
        except LookupError as exc:
            raise PosTaggerUnavailableError(
                "nltk is installed but its tagger model is missing; "
                "run nltk.download('averaged_perceptron_tagger_eng')."
            ) from exc

    def tag_words(self, words: Sequence[str]) -> list[str | None]:
        if not words:
            return []
        tagged = self._pos_tag(list(words))
        return [map_penn_tag(tag) for _, tag in tagged]

    def tag(self, text: str) -> list[tuple[str, str | None]]:
        """
        Tag ``text`` as whitespace-preserving ``(segment, tag)`` pairs.

        Punctuation and whitespace segments carry ``None``; word segments are
        tagged by their bare word so surrounding marks do not confuse the model.
        """
        tokens = segment_text(text)
        words = [split_token(token.text).word for token in tokens if token.kind is TokenKind.WORD]
        tags = iter(self.tag_words(words))
        tagged: list[tuple[str, str | None]] = []
        for token in tokens:
            tag = next(tags, None) if token.kind is TokenKind.WORD else None
            tagged.append((token.text, tag))
        debug_log(f"tagged {len(words)} word(s)")
        return tagged
