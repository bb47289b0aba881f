"""Fallback documentation lookup through a web search provider.

Only SerpAPI is wired in. Results are reduced to ``WebResult`` records and
filtered by the configured domain allow/block lists before they reach the
planner, which turns them into citations.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

import requests

from doc_advisor.config import load_config
from doc_advisor.domain.errors import WebSearchError

SERPAPI_URL = "https://serpapi.com/search"
SUPPORTED_PROVIDERS = {"serpapi"}


@dataclass
class WebResult:
    title: str
    url: str
    snippet: str
    source: str
    published_at: Optional[str] = None

    @property
    def domain(self) -> str:
        return _extract_domain(self.url) or self.source.lower()


def _extract_domain(url: str) -> str:
    try:
        return (urlparse(url).netloc or "").lower()
    except ValueError:
        return ""


def _matches(domain: str, suffixes: list[str]) -> bool:
    return any(domain.endswith(s) for s in suffixes)


def _filter_results(results: List[WebResult], allowlist: list[str], blocklist: list[str]) -> List[WebResult]:
    allow = [d.lower().strip() for d in allowlist if d]
    block = [d.lower().strip() for d in blocklist if d]
    kept = [r for r in results if not (block and _matches(r.domain, block))]
    if allow:
        kept = [r for r in kept if _matches(r.domain, allow)]
    return kept


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


def _parse_organic_results(data, max_results: int) -> List[WebResult]:
    """Map a SerpAPI response body to ``WebResult`` records.

    A body that is not an object, or whose ``organic_results`` is not a list,
    raises ``WebSearchError``. Entries that are not objects are skipped.
    """
    if not isinstance(data, dict):
        raise WebSearchError(f"Unexpected SerpAPI payload: {type(data).__name__}")
    if data.get("error"):
        raise WebSearchError(f"SerpAPI error: {data['error']}")
    items = data.get("organic_results") or []
    if not isinstance(items, list):
        raise WebSearchError(f"Unexpected SerpAPI organic_results: {type(items).__name__}")

    results: List[WebResult] = []
    for item in items:
        if len(results) >= max_results:
            break
        if not isinstance(item, dict):
            continue
        url = _text(item.get("link") or item.get("url"))
        results.append(
            WebResult(
                title=_text(item.get("title")),
                url=url,
                snippet=_text(item.get("snippet")),
                source=_text(item.get("source")) or _extract_domain(url),
                published_at=_text(item.get("date")) or None,
            )
        )
    return results


def _serpapi_search(query: str, api_key: str, max_results: int, timeout_s: int) -> List[WebResult]:
    if not api_key:
        raise WebSearchError("SerpAPI key missing; set WEB_API_KEY or web.api_key.")
    params = {"engine": "google", "q": query, "api_key": api_key, "num": max_results}
    try:
        resp = requests.get(SERPAPI_URL, params=params, timeout=timeout_s)
    except (requests.RequestException, socket.timeout) as exc:
        raise WebSearchError(f"SerpAPI request failed: {exc}") from exc
    if resp.status_code != 200:
        raise WebSearchError(f"SerpAPI returned {resp.status_code}: {resp.text}")
    try:
        data = resp.json()
    except ValueError as exc:
        raise WebSearchError(f"Invalid JSON from SerpAPI: {resp.text}") from exc
    return _parse_organic_results(data, max_results)


def search(
    query: str,
    max_results: Optional[int] = None,
    config=None,
    allowlist: Optional[list[str]] = None,
    blocklist: Optional[list[str]] = None,
) -> List[WebResult]:
    """Run one web search for documentation pages.

    ``WEB_API_KEY`` in the environment wins over ``web.api_key``. Domain lists
    default to ``web.allowed_domains`` / ``web.blocked_domains``.
    """
    cfg = config or load_config()
    web_cfg = cfg.web
    if not web_cfg.enabled:
        raise WebSearchError("Web search is disabled. Enable via WEB_ENABLED=true or web.enabled.")

    provider = (web_cfg.provider or "serpapi").lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise WebSearchError(f"Unsupported web provider: {provider}")

    env_api_key = os.getenv("WEB_API_KEY")
    results = _serpapi_search(
        query,
        api_key=env_api_key if env_api_key is not None else web_cfg.api_key,
        max_results=max_results or web_cfg.max_results,
        timeout_s=web_cfg.timeout_s,
    )
    allow = allowlist if allowlist is not None else getattr(web_cfg, "allowed_domains", [])
    block = blocklist if blocklist is not None else getattr(web_cfg, "blocked_domains", [])
    return _filter_results(results, allow or [], block or [])


__all__ = ["search", "WebResult", "WebSearchError"]
