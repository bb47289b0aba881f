"""Research planner: query parsing, source policy, resolution and formatting."""
