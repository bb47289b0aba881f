"""Configuration loader for doc-advisor."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from doc_advisor.domain.errors import ConfigError


class AppConfig(BaseModel):
    name: str = Field(default="doc-advisor")
    environment: str = Field(default="development")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")


class Context7Config(BaseModel):
    enabled: bool = Field(default=True)
    base_url: str = Field(default="https://context7.com/api/v1")
    site_url: str = Field(default="https://context7.com")
    api_key: str = Field(default="")
    timeout_s: int = Field(default=20)
    tokens: int = Field(default=5000)


class WebConfig(BaseModel):
    enabled: bool = Field(default=True)
    provider: str = Field(default="serpapi")
    api_key: str = Field(default="")
    max_results: int = Field(default=5)
    timeout_s: int = Field(default=20)
    allowed_domains: list[str] = Field(default_factory=list)
    blocked_domains: list[str] = Field(default_factory=list)


class ResearchConfig(BaseModel):
    unindexed_libraries: list[str] = Field(default_factory=list)
    min_doc_chars: int = Field(default=40)
    max_content_chars: int = Field(default=4000)
    default_page: int = Field(default=1)


class Settings(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    context7: Context7Config = Field(default_factory=Context7Config)
    web: WebConfig = Field(default_factory=WebConfig)
    research: ResearchConfig = Field(default_factory=ResearchConfig)


DEFAULT_CONFIG_PATH = Path("config/default.yaml")

BOOL_KEYS = {"enabled"}
INT_KEYS = {"timeout_s", "tokens", "max_results", "min_doc_chars", "max_content_chars"}


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(data: dict) -> dict:
    overrides = {
        ("app", "environment"): os.getenv("APP_ENV"),
        ("logging", "level"): os.getenv("LOG_LEVEL"),
        ("context7", "enabled"): os.getenv("CONTEXT7_ENABLED"),
        ("context7", "base_url"): os.getenv("CONTEXT7_BASE_URL"),
        ("context7", "api_key"): os.getenv("CONTEXT7_API_KEY"),
        ("context7", "timeout_s"): os.getenv("CONTEXT7_TIMEOUT_S"),
        ("context7", "tokens"): os.getenv("CONTEXT7_TOKENS"),
        ("web", "enabled"): os.getenv("WEB_ENABLED"),
        ("web", "provider"): os.getenv("WEB_PROVIDER"),
        ("web", "api_key"): os.getenv("WEB_API_KEY"),
        ("web", "max_results"): os.getenv("WEB_MAX_RESULTS"),
        ("web", "timeout_s"): os.getenv("WEB_TIMEOUT_S"),
        ("research", "min_doc_chars"): os.getenv("RESEARCH_MIN_DOC_CHARS"),
        ("research", "max_content_chars"): os.getenv("RESEARCH_MAX_CONTENT_CHARS"),
    }
    for (section, key), value in overrides.items():
        if value is None:
            continue
        if section not in data or data[section] is None:
            data[section] = {}
        if key in BOOL_KEYS:
            data[section][key] = str(value).strip().lower() in {"1", "true", "yes", "on"}
            continue
        if key in INT_KEYS:
            try:
                data[section][key] = int(value)
                continue
            except ValueError:
                # leave it to pydantic to report
                pass
        data[section][key] = value
    return data


def load_config(path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML and environment variables.

    An explicit ``path`` must exist. When no path is given and the default
    file is absent, built-in defaults are used.
    """
    load_dotenv()
    if path is not None:
        raw = _load_yaml(Path(path))
    elif DEFAULT_CONFIG_PATH.exists():
        raw = _load_yaml(DEFAULT_CONFIG_PATH)
    else:
        raw = {}
    merged = _apply_env_overrides(raw)
    try:
        return Settings(**merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "Settings",
    "AppConfig",
    "LoggingConfig",
    "Context7Config",
    "WebConfig",
    "ResearchConfig",
    "load_config",
]
