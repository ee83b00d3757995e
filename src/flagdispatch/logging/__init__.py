"""Logging helpers for flagdispatch."""
__all__ = [
    "factory",
    "helpers",
]
