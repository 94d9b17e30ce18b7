"""Logging infrastructure for better-attributes.

This module provides structured logging with JSON output, per-query context
tracking and OpenTelemetry trace correlation.
"""

from better_attributes.logging.filters import ContextFilter
from better_attributes.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
