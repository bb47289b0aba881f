"""Minimal client for the Context7 documentation index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import requests

from doc_advisor.domain.errors import PrimaryIndexError
from doc_advisor.domain.models import DocMode, LibraryCandidate


def _to_int(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _to_float(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _parse_candidate(item: dict) -> Optional[LibraryCandidate]:
    lib_id = str(item.get("id") or "").strip()
    if not lib_id:
        return None
    versions = item.get("versions")
    return LibraryCandidate(
        id=lib_id if lib_id.startswith("/") else f"/{lib_id}",
        title=str(item.get("title") or lib_id.rsplit("/", 1)[-1]),
        description=str(item.get("description") or ""),
        snippet_count=_to_int(item.get("totalSnippets", item.get("snippet_count"))),
        trust_score=_to_float(item.get("trustScore", item.get("trust_score"))),
        versions=[str(v) for v in versions] if isinstance(versions, list) else [],
    )


@dataclass
class Context7Client:
    base_url: str = "https://context7.com/api/v1"
    site_url: str = "https://context7.com"
    api_key: str = ""
    timeout_s: int = 20
    tokens: int = 5000

    @classmethod
    def from_config(cls, cfg) -> "Context7Client":
        c7 = cfg.context7
        return cls(
            base_url=c7.base_url,
            site_url=getattr(c7, "site_url", cls.site_url),
            api_key=c7.api_key,
            timeout_s=c7.timeout_s,
            tokens=c7.tokens,
        )

    def _headers(self) -> dict:
        headers = {"X-Context7-Source": "doc-advisor"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _get(self, url: str, params: dict):
        try:
            resp = requests.get(url, params=params, headers=self._headers(), timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise PrimaryIndexError(f"Context7 not reachable at {self.base_url}: {exc}") from exc
        if resp.status_code != 200:
            raise PrimaryIndexError(f"Context7 returned {resp.status_code}: {resp.text}")
        return resp

    def resolve(self, name: str) -> List[LibraryCandidate]:
        url = f"{self.base_url.rstrip('/')}/search"
        resp = self._get(url, {"query": name})
        try:
            data = resp.json()
        except ValueError as exc:
            raise PrimaryIndexError(f"Invalid JSON from Context7: {resp.text}") from exc
        if not isinstance(data, dict):
            raise PrimaryIndexError(f"Unexpected Context7 search payload: {type(data).__name__}")
        items = data.get("results") or []
        if not isinstance(items, list):
            raise PrimaryIndexError(f"Unexpected Context7 results field: {type(items).__name__}")
        candidates = [_parse_candidate(item) for item in items if isinstance(item, dict)]
        return [c for c in candidates if c is not None]

    def fetch_docs(self, library_id: str, topic: str = "", mode: DocMode = DocMode.CODE, page: int = 1) -> str:
        if not library_id.startswith("/"):
            library_id = f"/{library_id}"
        url = f"{self.base_url.rstrip('/')}{library_id}"
        params = {"type": "txt", "tokens": self.tokens, "mode": DocMode(mode).value, "page": page}
        if topic:
            params["topic"] = topic
        resp = self._get(url, params)
        return resp.text or ""

    def doc_url(self, library_id: str) -> str:
        return f"{self.site_url.rstrip('/')}{library_id}"


__all__ = ["Context7Client", "PrimaryIndexError"]
