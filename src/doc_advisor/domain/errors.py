"""Custom exceptions."""


class ConfigError(Exception):
    """Raised when configuration loading fails."""


class ClarificationNeeded(ValueError):
    """Raised when a query is too malformed or ambiguous to research."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query


class PrimaryIndexError(RuntimeError):
    """Raised when the documentation index lookup fails."""


class WebSearchError(RuntimeError):
    """Raised when web search fails."""
