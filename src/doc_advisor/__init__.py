"""Documentation research planner and ports-and-adapters style advisor."""

__version__ = "0.1.0"
