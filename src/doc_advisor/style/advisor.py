"""Ports-and-adapters conventions lookup."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from jinja2 import Template

from doc_advisor.domain.models import StyleAdvice

CONVENTIONS_PATH = Path(__file__).resolve().parent / "conventions.yaml"
TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "style_advice.md"
GENERIC = "generic"


@lru_cache(maxsize=1)
def load_conventions(path: Optional[Path] = None) -> Dict[str, dict]:
    source = path or CONVENTIONS_PATH
    with Path(source).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if GENERIC not in data:
        raise ValueError(f"Conventions file {source} has no '{GENERIC}' entry")
    return data


def list_categories() -> List[str]:
    return [key for key in load_conventions() if key != GENERIC]


def _words(text: str) -> str:
    """Split CamelCase and snake_case into lowercase words: 'SqlOrderRepo' -> 'sql order repo'."""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", text or "")
    spaced = re.sub(r"[_\-./]+", " ", spaced)
    return " ".join(spaced.lower().split())


def _contains_phrase(haystack: str, phrase: str) -> bool:
    return re.search(rf"\b{re.escape(phrase.lower())}\b", haystack) is not None


def detect_category(description: str) -> Optional[str]:
    """Score categories by alias and keyword hits; longer alias phrases weigh more."""
    text = _words(description)
    if not text:
        return None
    best, best_score = None, 0
    for key, entry in load_conventions().items():
        if key == GENERIC:
            continue
        score = 0
        for alias in entry.get("aliases") or []:
            if _contains_phrase(text, alias):
                score += 2 * len(alias.split())
        for keyword in entry.get("keywords") or []:
            if _contains_phrase(text, keyword):
                score += 1
        if score > best_score:
            best, best_score = key, score
    return best


def _to_advice(category: str, entry: dict, recognized: bool) -> StyleAdvice:
    return StyleAdvice(
        category=category,
        title=entry.get("title") or category,
        layer=entry.get("layer") or "",
        naming=list(entry.get("naming") or []),
        validation=entry.get("validation") or "",
        transactions=entry.get("transactions") or "",
        guidance=list(entry.get("guidance") or []),
        example=(entry.get("example") or "").rstrip() or None,
        recognized=recognized,
    )


def advise(category_or_description: str) -> StyleAdvice:
    conventions = load_conventions()
    key = _words(category_or_description).replace(" ", "_")
    if key in conventions and key != GENERIC:
        return _to_advice(key, conventions[key], recognized=True)
    detected = detect_category(category_or_description)
    if detected:
        return _to_advice(detected, conventions[detected], recognized=True)
    return _to_advice(GENERIC, conventions[GENERIC], recognized=False)


def render_advice(advice: StyleAdvice) -> str:
    template = Template(TEMPLATE_PATH.read_text(encoding="utf-8"))
    return template.render(advice=advice).strip() + "\n"


class StyleGuideAdvisor:
    def advise(self, category_or_description: str) -> StyleAdvice:
        return advise(category_or_description)

    def categories(self) -> List[str]:
        return list_categories()

    def render(self, advice: StyleAdvice) -> str:
        return render_advice(advice)


__all__ = ["StyleGuideAdvisor", "advise", "detect_category", "list_categories", "load_conventions", "render_advice"]
