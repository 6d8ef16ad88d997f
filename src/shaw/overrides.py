from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .logging_utils import debug_log

__all__ = [
    "VocabularyOverride",
    "append_override_entry",
    "load_vocabulary_overrides",
]


@dataclass
class VocabularyOverride:
    word: str
    shavian: str
    pos: str | None = None


def _read_payload(config_path: Path) -> dict[str, object]:
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Failed to parse overrides file: {config_path}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name} must contain a JSON object.")
    return raw


def load_vocabulary_overrides(config_path: Path) -> list[VocabularyOverride]:
    """
    Read ``{"overrides": [{"word", "shavian", "pos"?}, ...]}``.

    Entries missing a word or a Shavian form are skipped; a file that is not
    JSON, or lacks the ``overrides`` array, raises ``ValueError``.
    """
    raw = _read_payload(config_path)
    overrides_payload = raw.get("overrides")
    if not isinstance(overrides_payload, list):
        raise ValueError(f"{config_path.name} must contain an 'overrides' array.")
    overrides: list[VocabularyOverride] = []
    for entry in overrides_payload:
        if not isinstance(entry, dict):
            continue
        word = entry.get("word")
        shavian = entry.get("shavian")
        if not isinstance(word, str) or not word.strip():
            continue
        if not isinstance(shavian, str) or not shavian.strip():
            debug_log(f"override for {word!r} has no Shavian form; skipped")
            continue
        pos = entry.get("pos")
        if pos is not None and not isinstance(pos, str):
            pos = None
        overrides.append(VocabularyOverride(word=word.strip(), shavian=shavian.strip(), pos=pos or None))
    return overrides


def append_override_entry(config_path: Path, word: str, shavian: str, pos: str | None = None) -> int:
    """Add or replace one entry, creating the file if needed. Returns the entry count."""
    if config_path.exists():
        raw = _read_payload(config_path)
        entries = raw.get("overrides")
        if not isinstance(entries, list):
            raise ValueError(f"{config_path.name} must contain an 'overrides' array.")
    else:
        raw = {}
        entries = []
    key = (word.strip().lower(), pos or None)
    kept = [
        entry
        for entry in entries
        if not (
            isinstance(entry, dict)
            and isinstance(entry.get("word"), str)
            and (entry["word"].strip().lower(), entry.get("pos") or None) == key
        )
    ]
    new_entry: dict[str, object] = {"word": word.strip(), "shavian": shavian.strip()}
    if pos:
        new_entry["pos"] = pos
    kept.append(new_entry)
    raw["overrides"] = kept
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(raw, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return len(kept)
