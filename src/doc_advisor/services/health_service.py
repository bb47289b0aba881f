"""Health checks for the documentation sources."""

from __future__ import annotations

import os
from dataclasses import dataclass

import requests


@dataclass
class HealthResult:
    ok: bool
    detail: dict

    def to_dict(self) -> dict:
        return {"ok": self.ok, **self.detail}


def check_context7(cfg, session=None) -> dict:
    c7 = cfg.context7
    if not getattr(c7, "enabled", False):
        return HealthResult(ok=False, detail={"skipped": True, "reason": "disabled"}).to_dict()
    client = session or requests
    url = f"{c7.base_url.rstrip('/')}/search"
    headers = {"Authorization": f"Bearer {c7.api_key}"} if c7.api_key else {}
    try:
        resp = client.get(url, params={"query": "react"}, headers=headers, timeout=5)
    except Exception as exc:
        return HealthResult(ok=False, detail={"url": url, "error": str(exc)}).to_dict()
    if resp.status_code != 200:
        return HealthResult(ok=False, detail={"url": url, "status": resp.status_code, "text": getattr(resp, "text", "")}).to_dict()
    return HealthResult(ok=True, detail={"url": url, "status": resp.status_code}).to_dict()


def check_web(cfg) -> dict:
    web_cfg = cfg.web
    provider = (getattr(web_cfg, "provider", "") or "").lower()
    env_api_key = os.getenv("WEB_API_KEY")
    api_key = env_api_key if env_api_key is not None else getattr(web_cfg, "api_key", "")
    detail = {"enabled": bool(web_cfg.enabled), "provider": provider, "api_key_set": bool(api_key)}
    if not web_cfg.enabled:
        detail["error"] = "web search disabled"
        return HealthResult(ok=False, detail=detail).to_dict()
    if provider != "serpapi":
        detail["error"] = f"unsupported provider: {provider}"
        return HealthResult(ok=False, detail=detail).to_dict()
    if not api_key:
        detail["error"] = "api key missing"
        return HealthResult(ok=False, detail=detail).to_dict()
    return HealthResult(ok=True, detail=detail).to_dict()


def run_all_checks(cfg, *, session=None) -> dict:
    return {
        "context7": check_context7(cfg, session=session),
        "web": check_web(cfg),
    }


__all__ = ["check_context7", "check_web", "run_all_checks", "HealthResult"]
