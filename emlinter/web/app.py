"""FastAPI application exposing the formatter, minifier and contrast checker."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from emlinter import __version__
from emlinter.config import EmlinterConfig
from emlinter.models import MinifyOptions

logger = logging.getLogger(__name__)

_INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>EMLinter</title></head>
<body>
<h1>EMLinter</h1>
<p>POST HTML to <code>/api/format</code>, <code>/api/minify</code> or
<code>/api/analyze</code>.</p>
</body>
</html>
"""


class HtmlPayload(BaseModel):
    html: str


class MinifyPayload(HtmlPayload):
    keep_head: bool = False
    keep_styles: bool = False


def _require_html(payload: HtmlPayload) -> str:
    if not payload.html.strip():
        raise HTTPException(status_code=400, detail="No HTML supplied.")
    return payload.html


def create_app(config: EmlinterConfig | None = None) -> FastAPI:
    cfg = config or EmlinterConfig.load()
    app = FastAPI(title="EMLinter", version=__version__)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(_INDEX_HTML)

    # Formatting and analysis are CPU-bound, so they run off the event loop.

    @app.post("/api/format")
    async def format_endpoint(payload: HtmlPayload) -> dict:
        from emlinter.formatting.markup import format_html

        html = _require_html(payload)
        formatted = await asyncio.get_running_loop().run_in_executor(
            None, partial(format_html, html, cfg.format.indent)
        )
        return {"html": formatted}

    @app.post("/api/minify")
    async def minify_endpoint(payload: MinifyPayload) -> dict:
        from emlinter.formatting.minify import minify_html

        html = _require_html(payload)
        options = MinifyOptions(keep_head=payload.keep_head, keep_styles=payload.keep_styles)
        minified = await asyncio.get_running_loop().run_in_executor(
            None, partial(minify_html, html, options)
        )
        return {"html": minified, "original_size": len(html), "minified_size": len(minified)}

    @app.post("/api/analyze")
    async def analyze_endpoint(payload: HtmlPayload) -> dict:
        from emlinter.analyzer import ContrastAnalyzer
        from emlinter.dom.static import StaticDocument

        html = _require_html(payload)
        analyzer = ContrastAnalyzer(threshold=cfg.contrast.threshold, step=cfg.contrast.step)

        def _run() -> list:
            return analyzer.analyze(StaticDocument.from_html(html))

        loop = asyncio.get_running_loop()
        results = await loop.run_in_executor(None, _run)
        logger.info("Analyzed %d bytes of HTML, %d finding(s)", len(html), len(results))
        return {
            "threshold": cfg.contrast.threshold,
            "results": [r.to_dict() for r in results],
        }

    return app
