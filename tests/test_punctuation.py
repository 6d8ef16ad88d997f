from __future__ import annotations

from shaw.punctuation import (
    SuffixKind,
    clean_word,
    convert_quotes,
    escape_untranslated,
    parse_escape,
    restore_quotes,
    split_token,
)


def _known(*words: str):
    vocabulary = set(words)
    return lambda word: word in vocabulary


def test_split_token_separates_marks() -> None:
    split = split_token('("Hello!")')

    assert split.leading == '("'
    assert split.core == "Hello"
    assert split.trailing == '!")'
    assert split.word == "Hello"
    assert split.has_marks


def test_split_token_keeps_compound_separators_in_core() -> None:
    split = split_token("year-and-a-day,")

    assert split.core == "year-and-a-day"
    assert split.trailing == ","


def test_split_token_without_letters_is_punctuation() -> None:
    split = split_token("--")

    assert split.is_punctuation
    assert split.leading == "--"


def test_possessive_requires_known_base() -> None:
    known = split_token("Shaw's", _known("shaw"))
    unknown = split_token("Zork's", _known("shaw"))

    assert known.suffix_kind is SuffixKind.POSSESSIVE
    assert known.core == "Shaw"
    assert known.suffix == "'s"
    assert unknown.suffix_kind is SuffixKind.CONTRACTION


def test_pronoun_s_is_always_a_contraction() -> None:
    split = split_token("it's", _known("it"))

    assert split.suffix_kind is SuffixKind.CONTRACTION
    assert split.core == "it"


def test_negative_contraction_split() -> None:
    split = split_token("Don’t.")

    assert split.suffix_kind is SuffixKind.CONTRACTION
    assert split.core == "Do"
    assert split.suffix == "n’t"
    assert split.trailing == "."


def test_plural_possessive_moves_apostrophe_into_suffix() -> None:
    split = split_token("cats',", _known("cats"))

    assert split.suffix_kind is SuffixKind.POSSESSIVE
    assert split.core == "cats"
    assert split.suffix == "'"
    assert split.trailing == ","


def test_unknown_apostrophe_suffix_stays_in_core() -> None:
    split = split_token("o'clock")

    assert split.suffix_kind is None
    assert split.core == "o'clock"


def test_clean_word_normalizes_apostrophes() -> None:
    assert clean_word("Don’t!") == "don't"
    assert clean_word("HELLO,") == "hello"


def test_escape_round_trip_and_malformed_input() -> None:
    wrapped = escape_untranslated("x{y}!")

    assert wrapped == "punctuation{x{y}!}"
    assert parse_escape(wrapped) == "x{y}!"
    assert parse_escape("punctuation{unclosed") is None
    assert parse_escape("plain") is None


def test_convert_quotes_tracks_double_quote_parity() -> None:
    opened, state = convert_quotes('"', "leading", False)
    closed, state = convert_quotes('"!', "trailing", state)

    assert opened == "‹"
    assert closed == "›!"
    assert state is False


def test_convert_quotes_curly_and_single() -> None:
    assert convert_quotes("“", "leading", False) == ("‹", True)
    assert convert_quotes("”", "trailing", True) == ("›", False)
    assert convert_quotes("'", "leading", False) == ("‹", False)
    assert convert_quotes("'", "trailing", False) == ("›", False)
    assert convert_quotes("'", "standalone", False) == ("'", False)


def test_restore_quotes() -> None:
    assert restore_quotes("‹hi›") == '"hi"'
