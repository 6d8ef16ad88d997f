"""Heuristic base-form proposals for inflected words missing from the lexicon."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .tables import (
    BASE_VERB_TAG,
    IRREGULAR_PAST_TENSE,
    IRREGULAR_PLURALS,
    O_ES_EXCEPTIONS,
    PAST_TENSE_ENDING,
    PAST_TENSE_OVERRIDES,
    PLURAL_EXCLUDED_ENDINGS,
    PLURAL_OVERRIDES,
    SIBILANT_PLURAL_ENDINGS,
    SIBILANT_SINGULAR_ENDINGS,
    SINGULAR_TAGS,
    VOWELS,
)

__all__ = [
    "Candidate",
    "Decomposition",
    "Reconstruction",
    "decompositions",
    "direct_override",
    "propose_base",
    "reconstruct",
]


class Reconstruction(Enum):
    PAST_REGULAR = "past-regular"
    PAST_IRREGULAR = "past-irregular"
    PLURAL_S = "plural-s"
    PLURAL_ES = "plural-es"
    PLURAL_IES = "plural-ies"
    PLURAL_VES = "plural-ves"
    PLURAL_IRREGULAR = "plural-irregular"


@dataclass(frozen=True)
class Candidate:
    base: str
    rule: Reconstruction


@dataclass(frozen=True)
class Decomposition:
    word: str
    candidates: tuple[Candidate, ...]
    tags: tuple[str, ...]

    @property
    def base(self) -> str:
        return self.candidates[0].base

    @property
    def rule(self) -> Reconstruction:
        return self.candidates[0].rule


def direct_override(word: str) -> str | None:
    key = word.lower()
    return PAST_TENSE_OVERRIDES.get(key) or PLURAL_OVERRIDES.get(key)


def _past_tense(word: str) -> Decomposition | None:
    tags = (BASE_VERB_TAG,)
    if word in IRREGULAR_PAST_TENSE:
        return Decomposition(word, (Candidate(IRREGULAR_PAST_TENSE[word], Reconstruction.PAST_IRREGULAR),), tags)
    if not word.endswith("ed") or len(word) <= 3:
        return None

    stem = word[:-2]
    bases: list[str] = []
    if word.endswith("ied") and len(word) > 4:
        bases.append(word[:-3] + "y")
    if word.endswith("ssed"):
        bases.append(stem)
    elif len(stem) >= 2 and stem[-1] == stem[-2] and stem[-1] not in VOWELS:
        # stopped -> stop, but keep "called" reachable through the plain stem
        bases.extend([stem[:-1], stem])
    elif (
        stem[-1] not in VOWELS
        and stem[-2] in VOWELS
        and (len(stem) < 3 or stem[-3] not in VOWELS)
    ):
        # hoped -> hope before hop
        bases.extend([word[:-1], stem])
    else:
        bases.extend([stem, word[:-1]])

    unique = tuple(dict.fromkeys(base for base in bases if len(base) >= 2))
    if not unique:
        return None
    return Decomposition(word, tuple(Candidate(base, Reconstruction.PAST_REGULAR) for base in unique), tags)


def _plural(word: str) -> Decomposition | None:
    if word in IRREGULAR_PLURALS:
        rule = Reconstruction.PLURAL_VES if word.endswith("ves") else Reconstruction.PLURAL_IRREGULAR
        return Decomposition(word, (Candidate(IRREGULAR_PLURALS[word], rule),), SINGULAR_TAGS)
    if not word.endswith("s") or len(word) <= 3 or word.endswith(PLURAL_EXCLUDED_ENDINGS):
        return None

    S, ES = Reconstruction.PLURAL_S, Reconstruction.PLURAL_ES
    if word.endswith("ies") and len(word) > 4:
        candidates = [Candidate(word[:-3] + "y", Reconstruction.PLURAL_IES)]
    elif word.endswith(SIBILANT_PLURAL_ENDINGS):
        candidates = [Candidate(word[:-2], ES), Candidate(word[:-1], S)]
    elif word.endswith("oes") and word not in O_ES_EXCEPTIONS:
        candidates = [Candidate(word[:-2], S)]
    elif word.endswith("ves"):
        stem = word[:-3]
        candidates = [
            Candidate(stem + "f", Reconstruction.PLURAL_VES),
            Candidate(stem + "fe", Reconstruction.PLURAL_VES),
            Candidate(word[:-1], S),
        ]
    elif word.endswith("es"):
        candidates = [Candidate(word[:-1], S), Candidate(word[:-2], S)]
    else:
        candidates = [Candidate(word[:-1], S)]
    return Decomposition(word, tuple(candidates), SINGULAR_TAGS)


def decompositions(word: str) -> list[Decomposition]:
    """Verb-tense proposal first, then plural-noun proposal."""
    key = word.lower()
    found = []
    for strategy in (_past_tense, _plural):
        proposal = strategy(key)
        if proposal is not None:
            found.append(proposal)
    return found


def propose_base(word: str) -> Decomposition | None:
    proposals = decompositions(word)
    return proposals[0] if proposals else None


def reconstruct(candidate: Candidate, base_form: str) -> str | None:
    """Re-attach the inflection to a resolved base; ``None`` when no rule applies."""
    rule = candidate.rule
    if rule is Reconstruction.PAST_REGULAR:
        return base_form + PAST_TENSE_ENDING
    if rule is Reconstruction.PAST_IRREGULAR:
        return base_form
    if rule is Reconstruction.PLURAL_S:
        if candidate.base.endswith(SIBILANT_SINGULAR_ENDINGS):
            return base_form + "𐑩𐑟"
        return base_form + "𐑕"
    if rule is Reconstruction.PLURAL_ES:
        return base_form + "𐑩𐑟"
    if rule is Reconstruction.PLURAL_IES:
        if base_form.endswith("𐑦"):
            return base_form[:-1] + "𐑦𐑟"
        return base_form + "𐑦𐑟"
    if rule is Reconstruction.PLURAL_VES:
        if base_form.endswith("𐑓"):
            return base_form[:-1] + "𐑝𐑟"
        return base_form + "𐑝𐑟"
    return None
