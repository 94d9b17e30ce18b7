"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of log lines emitted while a single query runs.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional, Tuple

from better_attributes.__version__ import __version__

query_id_var: ContextVar[Optional[str]] = ContextVar("query_id", default=None)
target_class_var: ContextVar[Optional[str]] = ContextVar("target_class", default=None)

_static_context: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Static context (environment and arbitrary extra keys) is applied first,
    then the per-query context variables.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        for key, value in _static_context.items():
            setattr(record, key, value)

        setattr(record, "query_id", query_id_var.get())
        setattr(record, "target_class", target_class_var.get())
        setattr(record, "sdk_name", "better-attributes")
        setattr(record, "sdk_version", __version__)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Replace the static context stamped on every record.

    Passing ``None`` for both arguments clears it.
    """
    _static_context.clear()
    if environment is not None:
        _static_context["environment"] = environment
    if extra:
        _static_context.update(extra)


QueryContextTokens = Tuple[Token, Token]


def set_query_context(
    query_id: Optional[str] = None,
    target_class: Optional[str] = None,
) -> QueryContextTokens:
    """Set query context variables.

    Returns:
        Tokens for ``reset_query_context``, which restores whatever context
        was active before, such as an enclosing query run from a callback.
    """
    return query_id_var.set(query_id), target_class_var.set(target_class)


def reset_query_context(tokens: QueryContextTokens) -> None:
    """Restore the query context active before ``set_query_context``."""
    query_token, target_token = tokens
    query_id_var.reset(query_token)
    target_class_var.reset(target_token)


def clear_query_context() -> None:
    """Clear all query context variables."""
    query_id_var.set(None)
    target_class_var.set(None)
