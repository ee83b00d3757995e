"""Public API surface for flagdispatch.parsing."""
__all__ = [
    "callbacks",
    "parser",
]
