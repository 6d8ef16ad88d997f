"""Lexicon storage: POS-tiered forward lookup plus the inverted reverse index."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterator, Mapping

from .logging_utils import debug_log
from .tables import (
    FORCED_NAME_DELIMITER,
    FUNCTION_WORDS,
    NAMES,
    PROPER_NAME_MARKER,
    REVERSE_OVERRIDES,
    SOURCE_DELIMITERS,
    TO_REDUCTIONS,
)

__all__ = [
    "DictionaryEntry",
    "DictionaryLoadError",
    "DictionaryStore",
    "ReverseIndex",
    "dictionary_from_payload",
    "load_default_dictionary",
    "load_dictionary",
    "normalize_form",
    "strip_delimiters",
]

DEFAULT_LEXICON_RESOURCE = "readlex.json"

_DEFAULT_PAYLOAD_CACHE: dict[str, Any] | None = None


class DictionaryLoadError(RuntimeError):
    """Raised when lexicon data cannot be parsed at all."""


@dataclass(frozen=True)
class DictionaryEntry:
    word: str
    form: str
    pos: str | None = None
    frequency: int = 0


def normalize_form(raw: str) -> str:
    """
    Strip source delimiters from a lexicon form.

    A single leading delimiter survives (``.`` forces the proper-name marker,
    ``:`` keeps the word lower-case); a leading namer dot counts as ``.``.
    """
    raw = raw.strip()
    if raw.startswith(PROPER_NAME_MARKER):
        raw = FORCED_NAME_DELIMITER + raw[len(PROPER_NAME_MARKER) :]
    lead = raw[0] if raw and raw[0] in SOURCE_DELIMITERS else ""
    glyphs = raw.strip(SOURCE_DELIMITERS)
    if not glyphs:
        return ""
    return f"{lead}{glyphs}"


def strip_delimiters(form: str) -> str:
    return form.lstrip(SOURCE_DELIMITERS)


def _coerce_frequency(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _parse_readlex_rows(payload: Mapping[str, Any]) -> tuple[list[DictionaryEntry], int]:
    entries: list[DictionaryEntry] = []
    skipped = 0
    for key, variants in payload.items():
        if not isinstance(variants, list):
            skipped += 1
            debug_log(f"skipping lexicon key {key!r}: expected a list of variants")
            continue
        key_parts = key.split("_", 2) if isinstance(key, str) else []
        for variant in variants:
            if not isinstance(variant, Mapping):
                skipped += 1
                debug_log(f"skipping malformed variant under {key!r}")
                continue
            word = variant.get("Latn")
            if not word and len(key_parts) == 3:
                word = key_parts[0]
            pos = variant.get("pos")
            if not pos and len(key_parts) == 3:
                pos = key_parts[1]
            shaw = variant.get("Shaw")
            if not isinstance(word, str) or not word.strip() or not isinstance(shaw, str):
                skipped += 1
                debug_log(f"skipping variant under {key!r}: missing Latn/Shaw")
                continue
            form = normalize_form(shaw)
            if not form:
                skipped += 1
                debug_log(f"skipping variant under {key!r}: empty Shavian form")
                continue
            entries.append(
                DictionaryEntry(
                    word=word.strip().lower(),
                    form=form,
                    pos=pos if isinstance(pos, str) and pos else None,
                    frequency=_coerce_frequency(variant.get("freq")),
                )
            )
    return entries, skipped


class DictionaryStore:
    """
    Forward lexicon with two tiers.

    The POS tier is keyed by ``(word, tag)`` and is consulted first when a
    tag is supplied; the basic tier holds one dominant form per word. Tags
    are opaque strings matched verbatim. ``add_entry`` mutates the store and
    must not run while other calls are resolving against it.
    """

    def __init__(
        self,
        basic: Mapping[str, str] | None = None,
        by_pos: Mapping[tuple[str, str], str] | None = None,
        *,
        frequencies: Mapping[str, int] | None = None,
        skipped_rows: int = 0,
    ) -> None:
        self._basic: dict[str, str] = {word.lower(): form for word, form in (basic or {}).items()}
        self._by_pos: dict[tuple[str, str], str] = {
            (word.lower(), tag): form for (word, tag), form in (by_pos or {}).items()
        }
        self._frequencies: dict[str, int] = dict(frequencies or {})
        self.skipped_rows = skipped_rows

    @classmethod
    def from_entries(cls, entries: list[DictionaryEntry], *, skipped_rows: int = 0) -> "DictionaryStore":
        basic: dict[str, str] = {}
        basic_freq: dict[str, int] = {}
        by_pos: dict[tuple[str, str], str] = {}
        pos_freq: dict[tuple[str, str], int] = {}
        for entry in entries:
            if entry.word not in basic or entry.frequency > basic_freq[entry.word]:
                basic[entry.word] = entry.form
                basic_freq[entry.word] = entry.frequency
            if entry.pos:
                key = (entry.word, entry.pos)
                if key not in by_pos or entry.frequency > pos_freq[key]:
                    by_pos[key] = entry.form
                    pos_freq[key] = entry.frequency
        return cls(basic, by_pos, frequencies=basic_freq, skipped_rows=skipped_rows)

    @classmethod
    def from_readlex(cls, payload: object) -> "DictionaryStore":
        if not isinstance(payload, Mapping):
            raise DictionaryLoadError("Lexicon data must be a JSON object keyed by word_POS_form.")
        entries, skipped = _parse_readlex_rows(payload)
        if skipped:
            debug_log(f"skipped {skipped} malformed lexicon row(s)")
        return cls.from_entries(entries, skipped_rows=skipped)

    @classmethod
    def from_tiers(
        cls,
        basic: Mapping[str, str],
        pos: Mapping[str, str] | None = None,
    ) -> "DictionaryStore":
        if not isinstance(basic, Mapping) or (pos is not None and not isinstance(pos, Mapping)):
            raise DictionaryLoadError("Lexicon tiers must be JSON objects.")
        skipped = 0
        basic_tier: dict[str, str] = {}
        for word, form in basic.items():
            if not isinstance(word, str) or not isinstance(form, str) or not normalize_form(form):
                skipped += 1
                debug_log(f"skipping basic entry {word!r}")
                continue
            basic_tier[word] = normalize_form(form)
        pos_tier: dict[tuple[str, str], str] = {}
        for key, form in (pos or {}).items():
            word, sep, tag = key.rpartition("_") if isinstance(key, str) else ("", "", "")
            if not sep or not word or not tag or not isinstance(form, str) or not normalize_form(form):
                skipped += 1
                debug_log(f"skipping POS entry {key!r}")
                continue
            pos_tier[(word, tag)] = normalize_form(form)
        return cls(basic_tier, pos_tier, skipped_rows=skipped)

    def lookup(self, word: str, pos: str | None = None) -> str | None:
        key = word.lower()
        if pos:
            form = self._by_pos.get((key, pos))
            if form is not None:
                return form
        return self._basic.get(key)

    def lookup_tagged(self, word: str, pos: str) -> str | None:
        """POS tier only, without the basic-tier fallback."""
        return self._by_pos.get((word.lower(), pos))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._basic

    def __len__(self) -> int:
        return len(self._basic)

    def frequency(self, word: str) -> int:
        return self._frequencies.get(word.lower(), 0)

    def basic_items(self) -> Iterator[tuple[str, str]]:
        return iter(self._basic.items())

    def add_entry(self, word: str, form: str, pos: str | None = None) -> None:
        normalized = normalize_form(form)
        if not word or not normalized:
            raise ValueError("add_entry requires a word and a non-empty Shavian form.")
        key = word.lower()
        if pos:
            self._by_pos[(key, pos)] = normalized
        else:
            self._basic[key] = normalized


class ReverseIndex:
    """Shavian form → canonical English word."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def build(
        cls,
        store: DictionaryStore,
        *,
        function_words: Mapping[str, str] = FUNCTION_WORDS,
        names: Mapping[str, str] = NAMES,
        reductions: Mapping[str, str] = TO_REDUCTIONS,
        overrides: Mapping[str, str] = REVERSE_OVERRIDES,
    ) -> "ReverseIndex":
        entries: dict[str, str] = {}
        weights: dict[str, int] = {}
        for word, form in store.basic_items():
            glyphs = strip_delimiters(form)
            weight = store.frequency(word)
            if glyphs not in entries or weight > weights[glyphs]:
                entries[glyphs] = word
                weights[glyphs] = weight
        for word, form in function_words.items():
            entries[form] = word
        for word, form in names.items():
            entries[form] = word.capitalize()
        for form in reductions.values():
            entries[form] = "to"
        entries.update(overrides)
        return cls(entries)

    def lookup(self, form: str) -> str | None:
        return self._entries.get(form)

    def add(self, form: str, word: str) -> None:
        glyphs = strip_delimiters(normalize_form(form))
        if glyphs:
            self._entries[glyphs] = word.lower()

    def __contains__(self, form: object) -> bool:
        return isinstance(form, str) and form in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def dictionary_from_payload(payload: object) -> DictionaryStore:
    """Build a store from either ReadLex rows or explicit ``basic``/``pos`` tiers."""
    if isinstance(payload, Mapping) and isinstance(payload.get("basic"), Mapping):
        return DictionaryStore.from_tiers(payload["basic"], payload.get("pos"))
    return DictionaryStore.from_readlex(payload)


def _read_json(text: str, source: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DictionaryLoadError(f"Failed to parse dictionary data: {source}") from exc


def load_dictionary(path: Path | str) -> DictionaryStore:
    target = Path(path)
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise DictionaryLoadError(f"Unable to read dictionary file: {target}") from exc
    return dictionary_from_payload(_read_json(text, str(target)))


def _load_default_payload() -> dict[str, Any]:
    global _DEFAULT_PAYLOAD_CACHE
    if _DEFAULT_PAYLOAD_CACHE is None:
        resource = resources.files("shaw") / "data" / DEFAULT_LEXICON_RESOURCE
        payload = _read_json(resource.read_text(encoding="utf-8"), DEFAULT_LEXICON_RESOURCE)
        if not isinstance(payload, dict):
            raise DictionaryLoadError("Bundled lexicon is not a JSON object.")
        _DEFAULT_PAYLOAD_CACHE = payload
    return _DEFAULT_PAYLOAD_CACHE


def load_default_dictionary() -> DictionaryStore:
    """Fresh store over the bundled lexicon (the parsed JSON is cached)."""
    return dictionary_from_payload(_load_default_payload())
