from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

import shaw.cli as cli
import shaw.logging_utils as logging_utils
from shaw.nlp import PosTaggerUnavailableError


def test_convert_prints_shavian(capsys) -> None:
    exit_code = cli.main(["convert", "The", "cat", "sat."])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "𐑞 𐑒𐑨𐑑 𐑕𐑨𐑑."


def test_convert_reverse(capsys) -> None:
    cli.main(["convert", "--reverse", "𐑞 𐑒𐑨𐑑"])

    assert capsys.readouterr().out.strip() == "The cat"


def test_convert_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("hello world\n"))

    cli.main(["convert"])

    assert capsys.readouterr().out.strip() == "𐑣𐑧𐑤𐑴 𐑢𐑻𐑤𐑛"


def test_convert_without_text_exits(monkeypatch) -> None:
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO(""))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["convert"])
    assert "No text" in str(excinfo.value)


def test_convert_json_lists_tokens(capsys) -> None:
    cli.main(["convert", "--json", "the cats"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["result"] == "𐑞 𐑒𐑨𐑑𐑕"
    assert [token["source"] for token in payload["tokens"]] == ["function-word", "morphology"]


def test_convert_escape_and_no_quotes(capsys) -> None:
    cli.main(["convert", "--escape", "--no-quotes", '"cat"', "xyzzy!"])

    assert capsys.readouterr().out.strip() == '"𐑒𐑨𐑑" punctuation{xyzzy!}'


def test_convert_with_overrides_file(tmp_path: Path, capsys) -> None:
    overrides = tmp_path / "overrides.json"
    overrides.write_text('{"overrides": [{"word": "xyzzy", "shavian": "𐑟𐑦𐑟𐑦"}]}', encoding="utf-8")

    cli.main(["convert", "--overrides", str(overrides), "xyzzy"])

    assert capsys.readouterr().out.strip() == "𐑟𐑦𐑟𐑦"


def test_convert_bad_dictionary_exits(tmp_path: Path) -> None:
    broken = tmp_path / "lexicon.json"
    broken.write_text("[", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["convert", "--dictionary", str(broken), "cat"])
    assert "Failed to parse" in str(excinfo.value)


def test_convert_pos_requires_tagger(monkeypatch) -> None:
    def _unavailable():
        raise PosTaggerUnavailableError("POS tagging requires 'nltk'")

    monkeypatch.setattr(cli, "PosTagger", _unavailable)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["convert", "--pos", "I read it"])
    assert "nltk" in str(excinfo.value)


def test_convert_pos_uses_tagger(monkeypatch, capsys) -> None:
    class _StubTagger:
        def tag(self, text: str) -> list[tuple[str, str | None]]:
            return [("I", None), (" ", None), ("read", "VVD"), (" ", None), ("it", None)]

    monkeypatch.setattr(cli, "PosTagger", _StubTagger)

    cli.main(["convert", "--pos", "I read it"])

    assert capsys.readouterr().out.strip() == "𐑲 𐑮𐑧𐑛 𐑦𐑑"


def test_html_writes_converted_files(tmp_path: Path, capsys) -> None:
    source = tmp_path / "page.html"
    source.write_text("<p>the cat</p>", encoding="utf-8")
    out_dir = tmp_path / "out"

    exit_code = cli.main(["html", str(source), "-o", str(out_dir)])

    assert exit_code == 0
    assert (out_dir / "page.shaw.html").read_text(encoding="utf-8") == "<p>𐑞 𐑒𐑨𐑑</p>"


def test_html_reverse_writes_next_to_input(tmp_path: Path) -> None:
    source = tmp_path / "page.html"
    source.write_text("<p>𐑞 𐑒𐑨𐑑</p>", encoding="utf-8")

    cli.main(["html", "--reverse", str(source)])

    assert (tmp_path / "page.en.html").read_text(encoding="utf-8") == "<p>The cat</p>"


def test_html_missing_input_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["html", str(tmp_path / "missing.html")])
    assert "not found" in str(excinfo.value)


def test_learn_appends_override(tmp_path: Path, capsys) -> None:
    path = tmp_path / "overrides.json"

    cli.main(["learn", "xyzzy", "𐑟𐑦𐑟𐑦", "--overrides", str(path)])
    cli.main(["convert", "--overrides", str(path), "xyzzy"])

    output = capsys.readouterr().out
    assert "1 override" in output
    assert output.strip().endswith("𐑟𐑦𐑟𐑦")


def test_web_builds_app_and_runs_uvicorn(monkeypatch) -> None:
    calls: dict[str, object] = {}

    def _fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", _fake_run)

    exit_code = cli.main(["web", "--port", "9999", "--pos"])

    assert exit_code == 0
    assert calls["port"] == 9999
    assert calls["host"] == "127.0.0.1"
    assert calls["log_level"] == "info"
    assert calls["app"].state.config.enable_pos is True
    formatter = calls["log_config"]["formatters"]["access"]["()"]
    assert formatter == "shaw.logging_utils.Utf8AccessFormatter"


def test_web_debug_flag_lowers_uvicorn_log_level(monkeypatch) -> None:
    calls: dict[str, object] = {}
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.update(kwargs))
    monkeypatch.setattr(logging_utils, "_DEBUG_LOG", False)

    cli.main(["web", "--debug"])

    assert calls["log_level"] == "debug"


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["convert", "--version"])

    assert capsys.readouterr().out.startswith("shaw ")


def test_no_arguments_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "convert" in capsys.readouterr().out


def test_unknown_command_exits() -> None:
    with pytest.raises(SystemExit):
        cli.main(["frobnicate"])
