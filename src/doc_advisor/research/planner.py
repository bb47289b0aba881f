"""Answer library questions from the documentation index, falling back to web search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from doc_advisor.config import load_config
from doc_advisor.docs.context7_client import Context7Client
from doc_advisor.domain.errors import PrimaryIndexError, WebSearchError
from doc_advisor.domain.models import Citation, DocMode, Query, ResearchResult, SourceChoice
from doc_advisor.logging import get_logger
from doc_advisor.research import formatter
from doc_advisor.research.policy import choose_source, docs_are_relevant, next_choice
from doc_advisor.research.query_parser import parse_query
from doc_advisor.research.resolver import library_id_for, select_library
from doc_advisor.web import search_client
from doc_advisor.web.query_builder import build_web_query

logger = get_logger(__name__)


@dataclass
class PrimaryLookup:
    library_id: Optional[str]
    content: Optional[str]
    reason: str

    @property
    def found(self) -> bool:
        return self.content is not None


def _lookup_primary(query: Query, client: Context7Client, page: int, min_chars: int) -> PrimaryLookup:
    library_id = query.library_id
    if not library_id:
        try:
            candidates = client.resolve(query.library)
        except PrimaryIndexError as exc:
            logger.warning("Primary resolve failed", extra={"library": query.library, "error": str(exc)})
            return PrimaryLookup(None, None, "primary_error")
        best = select_library(query.library, candidates)
        if best is None:
            return PrimaryLookup(None, None, "no_candidates")
        library_id = library_id_for(best, query.version)
        logger.info(
            "Resolved library",
            extra={"library": query.library, "library_id": library_id, "candidates": len(candidates)},
        )

    try:
        content = client.fetch_docs(library_id, topic=query.topic, mode=query.mode, page=page)
    except PrimaryIndexError as exc:
        logger.warning("Primary fetch failed", extra={"library_id": library_id, "error": str(exc)})
        return PrimaryLookup(library_id, None, "primary_error")
    if not docs_are_relevant(content, query.topic, min_chars=min_chars):
        return PrimaryLookup(library_id, None, "irrelevant_docs")
    return PrimaryLookup(library_id, content, "primary_indexed")


def research(
    text: str,
    *,
    primary_available: Optional[bool] = None,
    library: Optional[str] = None,
    topic: Optional[str] = None,
    mode: Optional[DocMode] = None,
    page: Optional[int] = None,
    config=None,
    primary_client: Optional[Context7Client] = None,
) -> ResearchResult:
    """Research ``text`` and return a formatted, cited answer.

    Primary index failures degrade to one web search. If the web search finds
    nothing with a URL, the outcome is ``INSUFFICIENT`` and no citations are
    produced. ``ClarificationNeeded`` from parsing is not caught.
    """
    cfg = config or load_config()
    query = parse_query(text, library=library, topic=topic, mode=mode)
    research_cfg = cfg.research
    if primary_available is None:
        primary_available = bool(getattr(cfg.context7, "enabled", False))
    page = page or getattr(research_cfg, "default_page", 1)

    decision = choose_source(query, primary_available, getattr(research_cfg, "unindexed_libraries", []))
    logger.info(
        "Source selected",
        extra={"library": query.library, "topic": query.topic, "choice": decision.choice.value, "reason": decision.reason},
    )

    tried: List[SourceChoice] = []
    current = decision.choice
    reason = decision.reason
    library_id = query.library_id

    if current is SourceChoice.PRIMARY_INDEXED:
        tried.append(SourceChoice.PRIMARY_INDEXED)
        client = primary_client or Context7Client.from_config(cfg)
        lookup = _lookup_primary(query, client, page, getattr(research_cfg, "min_doc_chars", 40))
        library_id = lookup.library_id or library_id
        current = next_choice(current, lookup.found)
        if current is SourceChoice.PRIMARY_INDEXED:
            citations = [Citation(label=f"Context7 {lookup.library_id}", url=client.doc_url(lookup.library_id))]
            text_out = formatter.render_primary(
                query,
                lookup.library_id,
                lookup.content,
                citations,
                page=page,
                max_chars=getattr(research_cfg, "max_content_chars", 4000),
            )
            return ResearchResult(
                query=query,
                selected=decision.choice,
                outcome=current,
                reason=reason,
                sources_tried=tried,
                library_id=lookup.library_id,
                content=lookup.content,
                citations=citations,
                text=text_out,
            )
        reason = f"fallback_{lookup.reason}"
        logger.warning("Primary source insufficient, using web search", extra={"library": query.library, "reason": lookup.reason})

    tried.append(SourceChoice.WEB_SEARCH)
    search_query = build_web_query(query)
    try:
        results = search_client.search(search_query, config=cfg)
    except WebSearchError as exc:
        logger.warning("Web search failed", extra={"query": search_query, "error": str(exc)})
        results = []
    citations = formatter.web_citations(results)
    current = next_choice(current, bool(citations))

    if current is SourceChoice.WEB_SEARCH:
        text_out = formatter.render_web(query, search_query, results, citations, fallback=reason.startswith("fallback_"))
        content = "\n".join(r.snippet for r in results if r.snippet)
    else:
        reason = "no_verified_sources"
        text_out = formatter.render_insufficient(query)
        content = ""
        citations = []

    logger.info(
        "Research finished",
        extra={"library": query.library, "outcome": current.value, "citations": len(citations)},
    )
    return ResearchResult(
        query=query,
        selected=decision.choice,
        outcome=current,
        reason=reason,
        sources_tried=tried,
        library_id=library_id,
        content=content,
        citations=citations,
        text=text_out,
    )


class DocResearchPlanner:
    """Holds config and an optional index client for repeated ``research`` calls."""

    def __init__(self, config=None, primary_client: Optional[Context7Client] = None):
        self.config = config or load_config()
        self.primary_client = primary_client

    def research(self, text: str, **kwargs) -> ResearchResult:
        kwargs.setdefault("primary_client", self.primary_client)
        return research(text, config=self.config, **kwargs)


__all__ = ["research", "DocResearchPlanner", "PrimaryLookup"]
