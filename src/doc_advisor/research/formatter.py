"""Render research results as Markdown."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from jinja2 import Template

from doc_advisor.domain.models import Citation, Query
from doc_advisor.web.search_client import WebResult

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
INSUFFICIENT_STATEMENT = "Insufficient information: no verified sources were found"


def _load_template(name: str) -> Template:
    return Template((TEMPLATES_DIR / name).read_text(encoding="utf-8"))


def _clip(text: str, max_chars: int) -> str:
    body = (text or "").strip()
    if max_chars and len(body) > max_chars:
        return body[:max_chars].rstrip() + "\n\n[...truncated]"
    return body


def web_citations(results: Sequence[WebResult]) -> List[Citation]:
    """One citation per distinct, non-empty URL. Results without a URL are dropped."""
    seen = set()
    citations = []
    for res in results:
        url = (res.url or "").strip()
        if not url or url in seen:
            continue
        seen.add(url)
        citations.append(Citation(label=(res.title or res.source or url).strip(), url=url))
    return citations


def render_primary(query: Query, library_id: str, content: str, citations: List[Citation], page: int = 1, max_chars: int = 4000) -> str:
    return _load_template("answer_primary.md").render(
        library=query.library,
        topic=query.topic,
        library_id=library_id,
        mode=query.mode.value,
        page=page,
        content=_clip(content, max_chars),
        citations=citations,
    ).strip() + "\n"


def render_web(query: Query, search_query: str, results: Sequence[WebResult], citations: List[Citation], fallback: bool = False) -> str:
    cited = {c.url for c in citations}
    shown = []
    for res in results:
        if res.url in cited and res.url not in {r.url for r in shown}:
            shown.append(res)
    return _load_template("answer_web.md").render(
        library=query.library,
        topic=query.topic,
        search_query=search_query,
        fallback=fallback,
        results=shown,
        citations=citations,
    ).strip() + "\n"


def render_insufficient(query: Query) -> str:
    return _load_template("answer_insufficient.md").render(
        library=query.library,
        topic=query.topic,
        query=query.raw,
    ).strip() + "\n"


__all__ = ["render_primary", "render_web", "render_insufficient", "web_citations", "INSUFFICIENT_STATEMENT"]
