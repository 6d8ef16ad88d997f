from __future__ import annotations

from shaw.nlp import PosTagger, map_penn_tag


def _tagger_with(fake_pos_tag) -> PosTagger:
    tagger = PosTagger.__new__(PosTagger)
    tagger._pos_tag = fake_pos_tag
    return tagger


def test_map_penn_tag() -> None:
    assert map_penn_tag("VBD") == "VVD"
    assert map_penn_tag("NNS") == "NN2"
    assert map_penn_tag("NNPS") == "NP0"
    assert map_penn_tag("JJR") == "AJ0"
    assert map_penn_tag("RBS") == "AV0"
    assert map_penn_tag("DT") is None
    assert map_penn_tag(None) is None


def test_tag_preserves_whitespace_and_strips_marks() -> None:
    seen: list[list[str]] = []

    def _fake_pos_tag(words: list[str]) -> list[tuple[str, str]]:
        seen.append(words)
        return [(word, "VBD" if word == "read" else "NN") for word in words]

    tagged = _tagger_with(_fake_pos_tag).tag("I  read, ok")

    assert seen == [["I", "read", "ok"]]
    assert tagged == [("I", "NN1"), ("  ", None), ("read,", "VVD"), (" ", None), ("ok", "NN1")]


def test_tag_empty_text() -> None:
    assert _tagger_with(lambda words: []).tag("") == []
    assert _tagger_with(lambda words: []).tag_words([]) == []
