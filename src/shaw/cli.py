from __future__ import annotations

import argparse
import asyncio
import socket
import sys
from importlib import metadata
from pathlib import Path

import uvicorn
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

import tomllib

from .dictionary import DictionaryLoadError
from .engine import EngineConfig, ShavianEngine, create_engine
from .html import transliterate_html
from .logging_utils import (
    build_uvicorn_log_config,
    debug_log,
    debug_logging_enabled,
    set_debug_logging,
)
from .nlp import PosTagger, PosTaggerUnavailableError
from .overrides import append_override_entry
from .tokens import serialize_resolved_tokens
from .web import WebConfig, create_app


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("shaw")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"shaw {__version__}",
    )


def _add_dictionary_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dictionary",
        help="ReadLex-format JSON lexicon to use instead of the bundled one.",
    )
    parser.add_argument(
        "--overrides",
        help="JSON file with user vocabulary overrides ({\"overrides\": [...]}).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug diagnostics to stdout.",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shaw",
        description=(
            "Transliterate English to the Shavian alphabet and back. "
            "Subcommands: convert, html, learn, web."
        ),
    )
    _add_version_flag(ap)
    return ap


def build_convert_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shaw convert",
        description="Convert text to Shavian (or back with --reverse). Reads stdin when no text is given.",
    )
    _add_version_flag(ap)
    ap.add_argument(
        "text",
        nargs="*",
        help="Text to convert. Wrap the phrase in quotes if it contains spaces.",
    )
    ap.add_argument(
        "--reverse",
        action="store_true",
        help="Convert Shavian text back to English spelling.",
    )
    ap.add_argument(
        "--pos",
        action="store_true",
        help="Tag parts of speech with nltk before converting (requires shaw[pos]).",
    )
    ap.add_argument(
        "--json",
        action="store_true",
        help="Print the result together with per-word resolution details as JSON.",
    )
    ap.add_argument(
        "--escape",
        action="store_true",
        help="Wrap untranslatable tokens as punctuation{...} so they survive a reverse pass.",
    )
    ap.add_argument(
        "--no-quotes",
        action="store_true",
        help="Keep quotation marks as typed instead of converting them to ‹ ›.",
    )
    _add_dictionary_options(ap)
    return ap


def build_html_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shaw html",
        description="Transliterate the prose of HTML files, leaving markup, code and scripts untouched.",
    )
    _add_version_flag(ap)
    ap.add_argument("inputs", nargs="+", help="HTML files to convert.")
    ap.add_argument(
        "-o",
        "--output-dir",
        help="Directory for converted files (default: next to each input with a .shaw suffix).",
    )
    ap.add_argument(
        "--reverse",
        action="store_true",
        help="Convert Shavian prose back to English spelling.",
    )
    _add_dictionary_options(ap)
    return ap


def build_learn_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shaw learn",
        description="Record a user vocabulary override in an overrides JSON file.",
    )
    _add_version_flag(ap)
    ap.add_argument("word", help="English word.")
    ap.add_argument("shavian", help="Shavian spelling (prefix '.' to force the name marker).")
    ap.add_argument("--pos", help="Restrict the override to one lexicon POS tag (e.g. VVD).")
    ap.add_argument(
        "--overrides",
        default="shaw-overrides.json",
        help="Overrides file to update (default: shaw-overrides.json).",
    )
    return ap


def build_web_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shaw web",
        description="Serve the transliteration API and a small browser front end.",
    )
    _add_version_flag(ap)
    ap.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface for the web server (default: 127.0.0.1).",
    )
    ap.add_argument(
        "--port",
        type=int,
        default=2047,
        help="Port for the web server (default: 2047).",
    )
    ap.add_argument(
        "--pos",
        action="store_true",
        help="Tag parts of speech for every /api/transliterate request.",
    )
    _add_dictionary_options(ap)
    return ap


def _load_engine(args: argparse.Namespace, config: EngineConfig | None = None) -> ShavianEngine:
    try:
        return create_engine(args.dictionary, args.overrides, config=config)
    except (DictionaryLoadError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


def _read_input_text(args: argparse.Namespace) -> str:
    text = " ".join(args.text)
    if not text.strip() and not sys.stdin.isatty():
        text = sys.stdin.read()
    if not text.strip():
        raise SystemExit("No text provided for conversion.")
    return text.rstrip("\n")


def _run_convert(args: argparse.Namespace) -> int:
    set_debug_logging(args.debug)
    config = EngineConfig(
        convert_quotes=not args.no_quotes,
        escape_untranslated=args.escape,
    )
    engine = _load_engine(args, config)
    text = _read_input_text(args)

    tags = None
    if args.reverse:
        result = engine.reverse_transliterate(text)
    elif args.pos:
        try:
            tagger = PosTagger()
        except PosTaggerUnavailableError as exc:
            raise SystemExit(str(exc)) from exc
        tags = asyncio.run(engine.tag_text(text, tagger))
        result = (
            engine.transliterate_with_parts_of_speech(tags)
            if tags is not None
            else engine.transliterate(text)
        )
    else:
        result = engine.transliterate(text)

    if args.json:
        payload: dict[str, object] = {"text": text, "result": result}
        if not args.reverse:
            payload["tokens"] = serialize_resolved_tokens(engine.resolve_tokens(text, tags))
        Console().print_json(data=payload)
    else:
        print(result)
    return 0


def _html_output_path(source: Path, output_dir: Path | None, reverse: bool) -> Path:
    suffix = ".en" if reverse else ".shaw"
    name = f"{source.stem}{suffix}{source.suffix or '.html'}"
    if output_dir is not None:
        return output_dir / name
    return source.with_name(name)


def _run_html(args: argparse.Namespace) -> int:
    set_debug_logging(args.debug)
    sources = [Path(item).expanduser() for item in args.inputs]
    missing = [str(path) for path in sources if not path.is_file()]
    if missing:
        raise SystemExit(f"Input file not found: {', '.join(missing)}")
    output_dir = Path(args.output_dir).expanduser() if args.output_dir else None
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
    engine = _load_engine(args)

    console = Console(stderr=True)
    progress: Progress | None = None
    task_id = None
    if console.is_terminal and len(sources) > 1:
        progress = Progress(
            TextColumn("{task.description}", justify="left"),
            BarColumn(bar_width=None),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.fields[detail]}", justify="left"),
            console=console,
            transient=False,
        )
        progress.start()
        task_id = progress.add_task("HTML files", total=len(sources), detail="")
    written: list[Path] = []
    try:
        for source in sources:
            if progress is not None and task_id is not None:
                progress.update(task_id, detail=source.name)
            markup = source.read_text(encoding="utf-8")
            target = _html_output_path(source, output_dir, args.reverse)
            target.write_text(transliterate_html(markup, engine, reverse=args.reverse), encoding="utf-8")
            written.append(target)
            debug_log(f"wrote {target}")
            if progress is not None and task_id is not None:
                progress.advance(task_id)
    finally:
        if progress is not None:
            progress.stop()
    for target in written:
        console.print(f"[green]Wrote[/green] {target}")
    return 0


def _run_learn(args: argparse.Namespace) -> int:
    path = Path(args.overrides).expanduser()
    try:
        count = append_override_entry(path, args.word, args.shavian, args.pos)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    print(f"Saved {args.word} → {args.shavian} to {path} ({count} override(s)).")
    return 0


def _resolve_local_ip(host: str) -> str:
    if host not in {"0.0.0.0", "::"}:
        return host
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            return sock.getsockname()[0]
    except OSError:
        return "127.0.0.1"


def _run_web(args: argparse.Namespace) -> None:
    set_debug_logging(args.debug)
    config = WebConfig(
        dictionary_path=Path(args.dictionary).expanduser() if args.dictionary else None,
        overrides_path=Path(args.overrides).expanduser() if args.overrides else None,
        enable_pos=args.pos,
    )
    try:
        app = create_app(config)
    except (DictionaryLoadError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    url = f"http://{_resolve_local_ip(args.host)}:{args.port}/"
    print(f"Web URL: {url}")
    print("Press Ctrl+C to stop.\n")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="debug" if debug_logging_enabled() else "info",
        log_config=build_uvicorn_log_config(),
    )


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] == "convert":
        convert_args = build_convert_parser().parse_args(argv[1:])
        return _run_convert(convert_args)
    if argv and argv[0] == "html":
        html_args = build_html_parser().parse_args(argv[1:])
        return _run_html(html_args)
    if argv and argv[0] == "learn":
        learn_args = build_learn_parser().parse_args(argv[1:])
        return _run_learn(learn_args)
    if argv and argv[0] == "web":
        web_args = build_web_parser().parse_args(argv[1:])
        _run_web(web_args)
        return 0

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    parser.parse_args(argv)
    raise SystemExit(f"Unknown command: {argv[0]}. Use convert, html, learn or web.")


if __name__ == "__main__":
    raise SystemExit(main())
