from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

__all__ = [
    "ResolvedToken",
    "Token",
    "TokenKind",
    "segment_text",
    "serialize_resolved_tokens",
]

_WHITESPACE_SPLIT = re.compile(r"(\s+)")


class TokenKind(Enum):
    WORD = "word"
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class Token:
    text: str
    kind: TokenKind
    start: int = 0
    end: int = 0
    pos: str | None = None


def _kind_for(segment: str) -> TokenKind:
    if segment.isspace():
        return TokenKind.WHITESPACE
    if any(ch.isalpha() for ch in segment):
        return TokenKind.WORD
    return TokenKind.PUNCTUATION


def segment_text(text: str) -> list[Token]:
    """Split on whitespace runs, keeping the runs so output spacing is exact."""
    tokens: list[Token] = []
    offset = 0
    for segment in _WHITESPACE_SPLIT.split(text):
        if not segment:
            continue
        tokens.append(Token(segment, _kind_for(segment), offset, offset + len(segment)))
        offset += len(segment)
    return tokens


@dataclass
class ResolvedToken:
    """
    A word-level record of how one input token was rendered.

    ``source`` is the name of the cascade policy that produced ``rendering``
    (``None`` when the original spelling was kept) so callers can audit why a
    word came out the way it did.
    """

    surface: str
    start: int
    end: int
    rendering: str
    source: str | None = None
    pos: str | None = None
    proper_name: bool = False


def serialize_resolved_tokens(tokens: Iterable[ResolvedToken]) -> list[dict[str, object]]:
    payload: list[dict[str, object]] = []
    for token in tokens:
        payload.append(
            {
                "surface": token.surface,
                "start": token.start,
                "end": token.end,
                "rendering": token.rendering,
                "source": token.source,
                "pos": token.pos,
                "proper_name": token.proper_name,
            }
        )
    return payload

