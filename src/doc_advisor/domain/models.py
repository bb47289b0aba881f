"""Domain models for the advisors."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional


class SourceChoice(str, Enum):
    PRIMARY_INDEXED = "primary_indexed"
    WEB_SEARCH = "web_search"
    INSUFFICIENT = "insufficient"


class DocMode(str, Enum):
    CODE = "code"
    INFO = "info"


@dataclass(frozen=True)
class Query:
    raw: str
    library: str
    topic: str = ""
    mode: DocMode = DocMode.CODE
    library_id: Optional[str] = None
    version: Optional[str] = None
    realtime: bool = False


@dataclass(frozen=True)
class Citation:
    label: str
    url: str


@dataclass
class LibraryCandidate:
    id: str
    title: str
    description: str = ""
    snippet_count: int = 0
    trust_score: float = 0.0
    versions: List[str] = field(default_factory=list)


@dataclass
class ResearchResult:
    query: Query
    selected: SourceChoice
    outcome: SourceChoice
    reason: str
    sources_tried: List[SourceChoice] = field(default_factory=list)
    library_id: Optional[str] = None
    content: str = ""
    citations: List[Citation] = field(default_factory=list)
    text: str = ""

    @property
    def topic(self) -> str:
        return self.query.topic

    @property
    def mode(self) -> DocMode:
        return self.query.mode

    def to_dict(self) -> dict:
        return {
            "query": self.query.raw,
            "library": self.query.library,
            "library_id": self.library_id,
            "version": self.query.version,
            "topic": self.query.topic,
            "mode": self.query.mode.value,
            "selected": self.selected.value,
            "outcome": self.outcome.value,
            "reason": self.reason,
            "sources_tried": [s.value for s in self.sources_tried],
            "citations": [asdict(c) for c in self.citations],
            "text": self.text,
        }


@dataclass
class StyleAdvice:
    category: str
    title: str
    layer: str
    naming: List[str]
    validation: str
    transactions: str
    guidance: List[str] = field(default_factory=list)
    example: Optional[str] = None
    recognized: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


__all__ = [
    "SourceChoice",
    "DocMode",
    "Query",
    "Citation",
    "LibraryCandidate",
    "ResearchResult",
    "StyleAdvice",
]
