"""CLI command modules."""

from . import scan, diff, history, find, catalog

__all__ = [
    "scan",
    "diff",
    "history",
    "find",
    "catalog",
]
