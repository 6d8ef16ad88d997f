from __future__ import annotations

import logging

from uvicorn.config import LOGGING_CONFIG

import shaw.logging_utils as logging_utils


def test_debug_log_respects_flag(capsys) -> None:
    logging_utils.set_debug_logging(False)
    logging_utils.debug_log("hidden")
    logging_utils.set_debug_logging(True)
    try:
        logging_utils.debug_log("shown")
    finally:
        logging_utils.set_debug_logging(False)

    output = capsys.readouterr().out
    assert "hidden" not in output
    assert "[shaw debug] shown" in output


def test_access_formatter_decodes_paths() -> None:
    formatter = logging_utils.Utf8AccessFormatter('%(request_line)s', use_colors=False)
    record = logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:5000", "GET", "/api/word?word=%F0%90%91%92", "1.1", 200),
        exc_info=None,
    )

    assert formatter.format(record) == "GET /api/word?word=𐑒 HTTP/1.1"


def test_uvicorn_log_config_uses_access_formatter() -> None:
    config = logging_utils.build_uvicorn_log_config()

    assert config["formatters"]["access"]["()"] == "shaw.logging_utils.Utf8AccessFormatter"
    assert LOGGING_CONFIG["formatters"]["access"]["()"] == "uvicorn.logging.AccessFormatter"
