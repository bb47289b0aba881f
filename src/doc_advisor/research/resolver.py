"""Pick the best index entry for a library name."""

from __future__ import annotations

import re
from typing import List, Optional

from doc_advisor.domain.models import LibraryCandidate


def _normalize(name: str) -> str:
    return re.sub(r"[\s._-]+", "", (name or "").lower())


def is_exact_match(name: str, candidate: LibraryCandidate) -> bool:
    target = _normalize(name)
    if not target:
        return False
    last_segment = candidate.id.rstrip("/").rsplit("/", 1)[-1]
    return target in {_normalize(candidate.title), _normalize(last_segment)}


def rank_candidates(name: str, candidates: List[LibraryCandidate]) -> List[LibraryCandidate]:
    """Exact name match first, then snippet count, then trust score."""
    return sorted(
        candidates,
        key=lambda c: (is_exact_match(name, c), c.snippet_count, c.trust_score),
        reverse=True,
    )


def select_library(name: str, candidates: List[LibraryCandidate]) -> Optional[LibraryCandidate]:
    ranked = rank_candidates(name, candidates)
    return ranked[0] if ranked else None


def library_id_for(candidate: LibraryCandidate, version: Optional[str] = None) -> str:
    if version:
        wanted = version.lstrip("vV@")
        for known in candidate.versions:
            if known.lstrip("vV@") == wanted:
                return f"{candidate.id}/{known}"
    return candidate.id


__all__ = ["is_exact_match", "rank_candidates", "select_library", "library_id_for"]
