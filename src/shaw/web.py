from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, JSONResponse

from .engine import EngineConfig, ShavianEngine, create_engine
from .html import transliterate_html
from .logging_utils import debug_log
from .tokens import serialize_resolved_tokens

__all__ = ["INDEX_HTML", "MAX_TEXT_LENGTH", "WebConfig", "create_app"]

MAX_TEXT_LENGTH = 200_000


@dataclass(slots=True)
class WebConfig:
    dictionary_path: Path | None = None
    overrides_path: Path | None = None
    engine: EngineConfig = field(default_factory=EngineConfig)
    enable_pos: bool = False


INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>shaw · Shavian transliterator</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    :root {
      color-scheme: dark;
      font-family: -apple-system, BlinkMacSystemFont, "Helvetica Neue", "Noto Sans Shavian", sans-serif;
      --bg: #090b12;
      --panel: #141724;
      --text: #f5f5f5;
      --muted: #9aa0b5;
      --accent: #3b82f6;
      --radius: 18px;
    }
    body {
      margin: 0;
      background: var(--bg);
      color: var(--text);
    }
    header {
      padding: 1.3rem 1.6rem 1rem;
      background: linear-gradient(135deg, rgba(59,130,246,0.18), transparent);
    }
    header h1 {
      margin: 0;
      font-size: 1.55rem;
    }
    header p {
      margin: 0.35rem 0 0;
      color: var(--muted);
    }
    main {
      padding: 0 1.6rem 2rem;
      display: flex;
      flex-direction: column;
      gap: 1rem;
    }
    section.panel {
      background: var(--panel);
      border-radius: var(--radius);
      margin-top: 1rem;
      padding: 1.2rem 1.4rem;
    }
    textarea {
      width: 100%;
      min-height: 8rem;
      box-sizing: border-box;
      background: #0d1020;
      color: var(--text);
      border: 1px solid #2a3050;
      border-radius: 10px;
      padding: 0.7rem;
      font-size: 1.05rem;
    }
    button {
      background: var(--accent);
      color: white;
      border: none;
      border-radius: 999px;
      padding: 0.5rem 1.2rem;
      margin-right: 0.5rem;
      cursor: pointer;
    }
    #output {
      white-space: pre-wrap;
      font-size: 1.25rem;
      min-height: 2rem;
    }
  </style>
</head>
<body>
  <header>
    <h1>shaw</h1>
    <p>English ⇄ Shavian</p>
  </header>
  <main>
    <section class="panel">
      <textarea id="input" placeholder="Type English or Shavian text"></textarea>
      <p>
        <button id="forward">To Shavian</button>
        <button id="reverse">To English</button>
        <label><input type="checkbox" id="pos"> POS tagging</label>
      </p>
    </section>
    <section class="panel">
      <div id="output"></div>
    </section>
  </main>
  <script>
    const input = document.getElementById("input");
    const output = document.getElementById("output");
    async function run(path, body) {
      const res = await fetch(path, {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(body),
      });
      const data = await res.json();
      output.textContent = res.ok ? data.result : (data.detail || "Request failed.");
    }
    document.getElementById("forward").addEventListener("click", () => {
      run("/api/transliterate", {text: input.value, pos: document.getElementById("pos").checked});
    });
    document.getElementById("reverse").addEventListener("click", () => {
      run("/api/reverse", {text: input.value});
    });
  </script>
</body>
</html>
"""


def _require_text(payload: object, key: str = "text") -> str:
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid payload.")
    value = payload.get(key)
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{key} must be a string.")
    if len(value) > MAX_TEXT_LENGTH:
        raise HTTPException(status_code=400, detail=f"{key} is too long.")
    return value


def _optional_flag(payload: dict[str, object], key: str) -> bool:
    value = payload.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise HTTPException(status_code=400, detail=f"{key} must be a boolean.")
    return value


def create_app(config: WebConfig, engine: ShavianEngine | None = None) -> FastAPI:
    if engine is None:
        engine = create_engine(
            config.dictionary_path,
            config.overrides_path,
            config=config.engine,
        )

    app = FastAPI(title="shaw")
    app.state.config = config
    app.state.engine = engine

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return INDEX_HTML

    @app.post("/api/transliterate")
    async def api_transliterate(payload: dict[str, object] = Body(...)) -> JSONResponse:
        text = _require_text(payload)
        use_pos = _optional_flag(payload, "pos") or config.enable_pos
        tags = await engine.tag_text(text) if use_pos and text.strip() else None
        if tags is not None:
            result = engine.transliterate_with_parts_of_speech(tags)
        else:
            result = engine.transliterate(text)
        tokens = engine.resolve_tokens(text, tags)
        debug_log(f"/api/transliterate: {len(tokens)} token(s), pos={tags is not None}")
        return JSONResponse(
            {
                "text": text,
                "result": result,
                "tokens": serialize_resolved_tokens(tokens),
            }
        )

    @app.post("/api/reverse")
    def api_reverse(payload: dict[str, object] = Body(...)) -> JSONResponse:
        text = _require_text(payload)
        return JSONResponse({"text": text, "result": engine.reverse_transliterate(text)})

    @app.get("/api/word")
    def api_word(
        word: str = Query(..., min_length=1),
        pos: str | None = Query(None),
    ) -> JSONResponse:
        word = word.strip()
        if not word:
            raise HTTPException(status_code=400, detail="word is required.")
        return JSONResponse({"word": word, "result": engine.transliterate_word(word, pos or None)})

    @app.post("/api/html")
    def api_html(payload: dict[str, object] = Body(...)) -> JSONResponse:
        markup = _require_text(payload, "html")
        reverse = _optional_flag(payload, "reverse")
        return JSONResponse({"html": transliterate_html(markup, engine, reverse=reverse)})

    return app
