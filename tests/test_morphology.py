from __future__ import annotations

from shaw.morphology import (
    Candidate,
    Reconstruction,
    decompositions,
    direct_override,
    propose_base,
    reconstruct,
)


def _bases(word: str) -> list[str]:
    proposal = propose_base(word)
    assert proposal is not None
    return [candidate.base for candidate in proposal.candidates]


def test_past_tense_candidates() -> None:
    assert _bases("stopped") == ["stop", "stopp"]
    assert _bases("hoped") == ["hope", "hop"]
    assert _bases("carried")[0] == "carry"
    assert _bases("missed") == ["miss"]
    assert _bases("walked") == ["walk", "walke"]


def test_irregular_past_tense_uses_table() -> None:
    proposal = propose_base("wrote")

    assert proposal is not None
    assert proposal.base == "write"
    assert proposal.rule is Reconstruction.PAST_IRREGULAR
    assert proposal.tags == ("VVI",)


def test_plural_candidates() -> None:
    assert _bases("cats") == ["cat"]
    assert _bases("boxes") == ["box", "boxe"]
    assert _bases("carries") == ["carry"]
    assert _bases("scarves") == ["scarf", "scarfe", "scarve"]
    assert _bases("potatoes") == ["potato"]
    assert _bases("horses") == ["horse", "hors"]


def test_plural_excluded_endings() -> None:
    assert propose_base("glass") is None
    assert propose_base("famous") is None
    assert propose_base("crisis") is None
    assert propose_base("bus") is None


def test_verb_proposal_precedes_plural_proposal() -> None:
    proposals = decompositions("wolves")

    assert [proposal.rule for proposal in proposals] == [Reconstruction.PLURAL_VES]
    assert decompositions("hello") == []


def test_direct_override_covers_both_tables() -> None:
    assert direct_override("Went") == "𐑢𐑧𐑯𐑑"
    assert direct_override("children") == "𐑗𐑦𐑤𐑛𐑮𐑩𐑯"
    assert direct_override("cats") is None


def test_reconstruct_plural_endings() -> None:
    assert reconstruct(Candidate("cat", Reconstruction.PLURAL_S), "𐑒𐑨𐑑") == "𐑒𐑨𐑑𐑕"
    assert reconstruct(Candidate("horse", Reconstruction.PLURAL_S), "𐑣𐑹𐑕") == "𐑣𐑹𐑕𐑩𐑟"
    assert reconstruct(Candidate("box", Reconstruction.PLURAL_ES), "𐑚𐑪𐑒𐑕") == "𐑚𐑪𐑒𐑕𐑩𐑟"
    assert reconstruct(Candidate("carry", Reconstruction.PLURAL_IES), "𐑒𐑨𐑮𐑦") == "𐑒𐑨𐑮𐑦𐑟"
    assert reconstruct(Candidate("scarf", Reconstruction.PLURAL_VES), "𐑕𐑒𐑭𐑓") == "𐑕𐑒𐑭𐑝𐑟"


def test_reconstruct_past_and_irregular() -> None:
    assert reconstruct(Candidate("stop", Reconstruction.PAST_REGULAR), "𐑕𐑑𐑪𐑐") == "𐑕𐑑𐑪𐑐𐑩𐑛"
    assert reconstruct(Candidate("keep", Reconstruction.PAST_IRREGULAR), "𐑒𐑰𐑐") == "𐑒𐑰𐑐"
    assert reconstruct(Candidate("child", Reconstruction.PLURAL_IRREGULAR), "𐑗𐑲𐑤𐑛") is None
