"""Observability utilities for better-attributes."""

from .context import QueryContext, query_scope, sanitize_extras

__all__ = [
    "QueryContext",
    "query_scope",
    "sanitize_extras",
]
