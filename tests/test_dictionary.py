from __future__ import annotations

import json
from pathlib import Path

import pytest

from shaw.dictionary import (
    DictionaryLoadError,
    DictionaryStore,
    ReverseIndex,
    dictionary_from_payload,
    load_default_dictionary,
    load_dictionary,
    normalize_form,
)


def _readlex_payload() -> dict[str, object]:
    return {
        "read_VVI_riːd": [
            {"Latn": "read", "Shaw": "𐑮𐑰𐑛", "pos": "VVI", "freq": 1900},
            {"Latn": "read", "Shaw": "𐑮𐑧𐑛", "pos": "VVD", "freq": 950},
        ],
        "cat_NN1_kat": [{"Latn": "cat", "Shaw": "𐑒𐑨𐑑", "pos": "NN1", "freq": 310}],
        "london_NP0_lʌndən": [{"Latn": "London", "Shaw": "·𐑤𐑳𐑯𐑛𐑩𐑯", "pos": "NP0", "freq": 1450}],
        "there_EX0_ðɛː": [{"Latn": "there", "Shaw": "𐑞𐑺", "pos": "EX0", "freq": 9100}],
        "their_DPS_ðɛː": [{"Latn": "their", "Shaw": "𐑞𐑺", "pos": "DPS", "freq": 8200}],
    }


def test_normalize_form_keeps_single_leading_delimiter() -> None:
    assert normalize_form("..𐑤𐑳𐑯𐑛𐑩𐑯") == ".𐑤𐑳𐑯𐑛𐑩𐑯"
    assert normalize_form(":𐑖𐑱𐑝𐑾𐑯:") == ":𐑖𐑱𐑝𐑾𐑯"
    assert normalize_form("·𐑚𐑻𐑯𐑼𐑛") == ".𐑚𐑻𐑯𐑼𐑛"
    assert normalize_form("...") == ""


def test_readlex_pos_tier_wins_over_basic_tier() -> None:
    store = DictionaryStore.from_readlex(_readlex_payload())

    assert store.lookup("read") == "𐑮𐑰𐑛"
    assert store.lookup("read", "VVD") == "𐑮𐑧𐑛"
    assert store.lookup("READ", "VVI") == "𐑮𐑰𐑛"
    # unknown tags fall back to the basic tier
    assert store.lookup("read", "XX0") == "𐑮𐑰𐑛"
    assert store.lookup_tagged("read", "XX0") is None


def test_readlex_keeps_highest_frequency_basic_form() -> None:
    payload = {
        "wind_NN1_wɪnd": [
            {"Latn": "wind", "Shaw": "𐑢𐑲𐑯𐑛", "pos": "VVI", "freq": 90},
            {"Latn": "wind", "Shaw": "𐑢𐑦𐑯𐑛", "pos": "NN1", "freq": 600},
        ]
    }
    store = DictionaryStore.from_readlex(payload)

    assert store.lookup("wind") == "𐑢𐑦𐑯𐑛"
    assert store.frequency("wind") == 600


def test_readlex_skips_malformed_rows() -> None:
    payload = _readlex_payload()
    payload["broken_NN1_x"] = "not-a-list"
    payload["empty_NN1_x"] = [{"Latn": "empty", "Shaw": ":."}, 7, {"Shaw": 3}]

    store = DictionaryStore.from_readlex(payload)

    assert "empty" not in store
    assert store.skipped_rows == 4
    assert store.lookup("cat") == "𐑒𐑨𐑑"


def test_readlex_rejects_non_object_payload() -> None:
    with pytest.raises(DictionaryLoadError):
        DictionaryStore.from_readlex(["not", "an", "object"])


def test_from_tiers_parses_word_pos_keys() -> None:
    store = dictionary_from_payload(
        {
            "basic": {"lead": "𐑤𐑰𐑛", "bad": 5},
            "pos": {"lead_NN1": "𐑤𐑧𐑛", "nounderscore": "𐑯"},
        }
    )

    assert store.lookup("lead") == "𐑤𐑰𐑛"
    assert store.lookup("lead", "NN1") == "𐑤𐑧𐑛"
    assert store.skipped_rows == 2


def test_add_entry_replaces_and_validates() -> None:
    store = DictionaryStore({"cat": "𐑒𐑨𐑑"})
    store.add_entry("Cat", "𐑒𐑨𐑑𐑟")
    store.add_entry("cat", "𐑒𐑩𐑑", pos="NN1")

    assert store.lookup("cat") == "𐑒𐑨𐑑𐑟"
    assert store.lookup("cat", "NN1") == "𐑒𐑩𐑑"
    with pytest.raises(ValueError):
        store.add_entry("cat", "::")


def test_reverse_index_prefers_frequent_word_and_applies_overrides() -> None:
    store = DictionaryStore.from_readlex(_readlex_payload())
    index = ReverseIndex.build(store)

    assert index.lookup("𐑞𐑺") == "there"
    assert index.lookup("𐑤𐑳𐑯𐑛𐑩𐑯") == "london"
    # function words are layered over the lexicon, names are capitalized
    assert index.lookup("𐑞") == "the"
    assert index.lookup("𐑖𐑷") == "Shaw"
    # overrides come last
    assert index.lookup("𐑮𐑰𐑛") == "read"
    assert index.lookup("𐑑") == "to"
    # reduced "to" forms map back to "to"
    assert index.lookup("𐑨𐑓") == "to"
    assert index.lookup("𐑕𐑑") == "to"


def test_reverse_index_add_normalizes_form() -> None:
    index = ReverseIndex()
    index.add(".𐑜𐑪𐑛𐑴", "Godot")

    assert "𐑜𐑪𐑛𐑴" in index
    assert index.lookup("𐑜𐑪𐑛𐑴") == "godot"


def test_load_dictionary_reports_bad_files(tmp_path: Path) -> None:
    missing = tmp_path / "missing.json"
    with pytest.raises(DictionaryLoadError) as excinfo:
        load_dictionary(missing)
    assert str(missing) in str(excinfo.value)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(DictionaryLoadError):
        load_dictionary(broken)


def test_load_dictionary_from_file(tmp_path: Path) -> None:
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps(_readlex_payload(), ensure_ascii=False), encoding="utf-8")

    store = load_dictionary(path)

    assert store.lookup("london") == ".𐑤𐑳𐑯𐑛𐑩𐑯"
    assert len(store) == 5


def test_default_dictionary_is_independent_per_call() -> None:
    first = load_default_dictionary()
    second = load_default_dictionary()
    first.add_entry("zzyzx", "𐑟𐑲𐑟𐑦𐑒𐑕")

    assert first.lookup("hello") == "𐑣𐑧𐑤𐑴"
    assert "zzyzx" not in second
