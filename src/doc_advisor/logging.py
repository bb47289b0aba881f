"""JSON logging utilities."""

from __future__ import annotations

import json
import logging
import sys
import uuid
from typing import Any

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)
        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if extra:
            log_entry.update(extra)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Send JSON log lines to stderr so stdout carries only command output."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_run_id() -> str:
    return str(uuid.uuid4())


__all__ = ["configure_logging", "get_logger", "get_run_id", "JsonFormatter"]
