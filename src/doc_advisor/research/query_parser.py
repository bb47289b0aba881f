"""Turn free-text library questions into structured queries."""

from __future__ import annotations

import re
from typing import List, Optional

from doc_advisor.domain.errors import ClarificationNeeded
from doc_advisor.domain.models import DocMode, Query
from doc_advisor.web.query_builder import STOPWORDS, sanitize_text

INFO_CUES = [
    "what is",
    "what are",
    "why",
    "architecture",
    "concept",
    "concepts",
    "difference",
    "differences",
    "explain",
    "overview",
    "compare",
    "versus",
    " vs ",
    "when to use",
]
REALTIME_CUES = {
    "latest",
    "news",
    "release",
    "changelog",
    "community",
    "issue",
    "issues",
    "bug",
    "bugs",
    "deprecated",
    "roadmap",
    "recent",
}
# Words that carry mode or intent but are not part of the topic.
MODE_WORDS = {
    "usage",
    "use",
    "using",
    "example",
    "examples",
    "how",
    "what",
    "why",
    "when",
    "explain",
    "concept",
    "concepts",
    "overview",
    "docs",
    "documentation",
    "guide",
    "tutorial",
    "notes",
}
LEADING_FILLER = MODE_WORDS | STOPWORDS | {
    "please",
    "show",
    "help",
    "need",
    "get",
    "tell",
    "about",
    "difference",
    "differences",
    "between",
    "compare",
    "versus",
    "vs",
}

LIBRARY_ID_RE = re.compile(r"^/[\w.-]+/[\w.-]+(?:/[\w.-]+)?$")
VERSION_RE = re.compile(r"^(?:v\d+(?:\.\d+)*|\d+\.\d+(?:\.\d+)*|@\d+(?:\.\d+)*)$", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


def detect_mode(text: str) -> DocMode:
    lowered = f" {text.lower()} "
    return DocMode.INFO if any(cue in lowered for cue in INFO_CUES) else DocMode.CODE


def detect_realtime(text: str) -> bool:
    tokens = {t.lower() for t in re.findall(r"[A-Za-z]+", text)}
    return bool(tokens & REALTIME_CUES) or bool(YEAR_RE.search(text))


def _split_library_id(token: str) -> tuple[str, str, Optional[str]]:
    """Return the id as written, the project name and the version segment if any."""
    parts = token.strip("/").split("/")
    version = parts[2] if len(parts) > 2 else None
    return "/" + "/".join(parts), parts[1], version


def _topic_terms(tokens: List[str]) -> List[str]:
    terms = []
    for tok in tokens:
        low = tok.lower()
        if low in LEADING_FILLER or low in REALTIME_CUES or VERSION_RE.match(tok):
            continue
        if not re.search(r"[A-Za-z]", tok):
            continue
        terms.append(tok)
    return terms


def parse_query(
    text: str,
    library: Optional[str] = None,
    topic: Optional[str] = None,
    mode: Optional[DocMode] = None,
) -> Query:
    """Parse a question such as ``"React hooks"`` into library, topic and mode.

    Raises ``ClarificationNeeded`` when no library can be identified.
    """
    raw = (text or "").strip()
    cleaned = sanitize_text(raw)
    tokens = cleaned.split()
    if not tokens and not library:
        raise ClarificationNeeded("Query is empty; name the library and what you want to know about it.", query=raw)
    if tokens and not any(re.search(r"[A-Za-z]", t) for t in tokens) and not library:
        raise ClarificationNeeded("Query has no recognizable library or topic.", query=raw)

    library_id = None
    id_name = None
    version = None
    remaining = list(tokens)

    for tok in list(remaining):
        if LIBRARY_ID_RE.match(tok):
            library_id, id_name, version = _split_library_id(tok)
            remaining.remove(tok)
            break
    for tok in list(remaining):
        if VERSION_RE.match(tok):
            version = version or tok.lstrip("@")
            remaining.remove(tok)
            break

    lib_name = (library or "").strip()
    if not lib_name and id_name:
        lib_name = id_name
    if not lib_name:
        for idx, tok in enumerate(remaining):
            if tok.lower() in LEADING_FILLER or tok.lower() in REALTIME_CUES:
                continue
            if re.search(r"[A-Za-z]", tok):
                lib_name = tok
                remaining = remaining[:idx] + remaining[idx + 1 :]
                break
    elif library:
        remaining = [t for t in remaining if t.lower() != lib_name.lower()]

    if not lib_name:
        raise ClarificationNeeded("Could not tell which library the question is about; please name it.", query=raw)

    topic_text = topic.strip() if topic is not None else " ".join(_topic_terms(remaining))
    return Query(
        raw=raw,
        library=lib_name,
        topic=topic_text,
        mode=DocMode(mode) if mode else detect_mode(raw),
        library_id=library_id,
        version=version,
        realtime=detect_realtime(raw),
    )


__all__ = ["parse_query", "detect_mode", "detect_realtime"]
