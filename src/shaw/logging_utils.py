from __future__ import annotations

from copy import copy, deepcopy
from typing import Any
from urllib.parse import unquote

from uvicorn.config import LOGGING_CONFIG
from uvicorn.logging import AccessFormatter as UvicornAccessFormatter

__all__ = [
    "Utf8AccessFormatter",
    "build_uvicorn_log_config",
    "debug_log",
    "debug_logging_enabled",
    "set_debug_logging",
]

_DEBUG_LOG = False


def set_debug_logging(enabled: bool) -> None:
    global _DEBUG_LOG
    _DEBUG_LOG = enabled


def debug_logging_enabled() -> bool:
    return _DEBUG_LOG


def debug_log(message: str) -> None:
    if _DEBUG_LOG:
        print(f"[shaw debug] {message}")


def _readable_path(path: object) -> object:
    if not isinstance(path, str) or "%" not in path:
        return path
    return unquote(path, errors="replace")


class Utf8AccessFormatter(UvicornAccessFormatter):
    """Access lines with percent-escapes decoded, so ``/api/word?word=𐑒`` logs as sent."""

    def formatMessage(self, record):  # type: ignore[override]
        if isinstance(record.args, tuple) and len(record.args) == 5:
            client, method, path, version, status = record.args
            record = copy(record)
            record.args = (client, method, _readable_path(path), version, status)
        return super().formatMessage(record)


def build_uvicorn_log_config() -> dict[str, Any]:
    """uvicorn's default logging config with the access formatter swapped for ours."""
    config = deepcopy(LOGGING_CONFIG)
    config["formatters"]["access"]["()"] = f"{__name__}.Utf8AccessFormatter"
    return config
