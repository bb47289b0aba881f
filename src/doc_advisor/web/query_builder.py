"""Utilities to sanitize text and build concise web search queries."""

from __future__ import annotations

import re

from doc_advisor.domain.models import Query

FILENAME_EXTS = (".md", ".txt", ".pdf", ".html")
STOPWORDS = {
    "the",
    "and",
    "or",
    "of",
    "to",
    "in",
    "for",
    "on",
    "with",
    "a",
    "an",
    "is",
    "are",
    "this",
    "that",
    "these",
    "those",
    "as",
    "by",
    "from",
    "at",
    "be",
    "it",
    "its",
    "i",
    "do",
    "does",
    "can",
    "my",
    "me",
}


def sanitize_text(text: str) -> str:
    """Remove markdown, code fences, and filename extensions from queries.

    Underscores and ``#`` survive inside identifiers (``typing_extensions``,
    ``C#``); at word edges they are treated as markup.
    """
    if not text:
        return ""
    cleaned = re.sub(r"```.*?```", " ", text, flags=re.DOTALL)
    cleaned = re.sub(r"[`*>\\$?!,;()\[\]{}\"]+", " ", cleaned)
    cleaned = re.sub(r"(?<!\w)_+|_+(?!\w)", " ", cleaned)
    cleaned = re.sub(r"(?<!\w)#+", " ", cleaned)
    for ext in FILENAME_EXTS:
        cleaned = re.sub(re.escape(ext) + r"\b", " ", cleaned, flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", cleaned).strip()


def _clip_words(text: str, max_words: int = 12) -> str:
    return " ".join(text.split()[:max_words])


def build_web_query(query: Query, max_words: int = 12) -> str:
    """Build a single search query for the fallback lookup."""
    parts = [query.library]
    if query.version:
        parts.append(query.version)
    if query.topic:
        parts.append(query.topic)
    parts.append("latest" if query.realtime else "documentation")
    built = sanitize_text(" ".join(p for p in parts if p))
    if not query.library:
        built = sanitize_text(query.raw)
    return _clip_words(built, max_words)


__all__ = ["sanitize_text", "build_web_query", "STOPWORDS"]
