"""Ports-and-adapters style advisor."""

from doc_advisor.style.advisor import StyleGuideAdvisor, advise, detect_category, list_categories, render_advice

__all__ = ["StyleGuideAdvisor", "advise", "detect_category", "list_categories", "render_advice"]
