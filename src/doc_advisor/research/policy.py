"""Rule-based source selection for documentation questions.

Everything here is pure: no network, no config loading. The planner feeds in
what it observed and gets back the next ``SourceChoice``.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Iterable, List

from doc_advisor.domain.models import Query, SourceChoice

NO_CONTENT_MARKERS = ("no content available", "no documentation found", "library not found")


@dataclass
class RouteDecision:
    choice: SourceChoice
    reason: str
    suggested_queries: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["choice"] = self.choice.value
        return data


def _normalize(name: str) -> str:
    return re.sub(r"[\s._-]+", "", (name or "").lower())


def is_unindexed(library: str, unindexed: Iterable[str]) -> bool:
    target = _normalize(library)
    return any(target == _normalize(name) for name in unindexed if name)


def choose_source(query: Query, primary_available: bool, unindexed: Iterable[str] = ()) -> RouteDecision:
    if not primary_available:
        return RouteDecision(SourceChoice.WEB_SEARCH, "primary_unavailable", [query.raw])
    if is_unindexed(query.library, unindexed):
        return RouteDecision(SourceChoice.WEB_SEARCH, "library_unindexed", [query.raw])
    if query.realtime:
        return RouteDecision(SourceChoice.WEB_SEARCH, "realtime_information", [query.raw])
    return RouteDecision(SourceChoice.PRIMARY_INDEXED, "primary_indexed", [])


def next_choice(current: SourceChoice, found: bool) -> SourceChoice:
    """Advance the fallback chain by one step: primary, then web, then insufficient."""
    if current is SourceChoice.INSUFFICIENT or found:
        return current
    if current is SourceChoice.PRIMARY_INDEXED:
        return SourceChoice.WEB_SEARCH
    return SourceChoice.INSUFFICIENT


def docs_are_relevant(text: str, topic: str = "", min_chars: int = 40) -> bool:
    body = (text or "").strip()
    if len(body) < max(1, min_chars):
        return False
    lowered = body.lower()
    if any(lowered.startswith(marker) for marker in NO_CONTENT_MARKERS):
        return False
    terms = [t for t in re.findall(r"[\w-]+", (topic or "").lower()) if len(t) > 1]
    if not terms:
        return True
    return any(term in lowered for term in terms)


__all__ = ["RouteDecision", "choose_source", "next_choice", "docs_are_relevant", "is_unindexed"]
