"""Core logging setup and configuration.

This module wires structured JSON logging with context propagation and
OpenTelemetry correlation while keeping configuration declarative via
``logging.config.dictConfig``. Library modules only ever call
``get_logger``; applications opt in to output with ``setup_logging``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    sample = logging.LogRecord(
        name="better_attributes.reserved",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(sample.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS and key not in log_record:
                log_record[key] = value

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the ``log_level`` setting.
        json_output: Use the JSON formatter. Defaults to the ``log_json`` setting.
    """
    from better_attributes.settings import get_settings

    settings = get_settings()
    level = level or settings.log_level
    if json_output is None:
        json_output = settings.log_json

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "ba_json": {
                "()": "better_attributes.logging.logger.CustomJsonFormatter",
            },
            "ba_text": {
                "format": "%(asctime)s %(levelname)s %(name)s [%(query_id)s] %(message)s",
            },
        },
        "filters": {
            "ba_context": {
                "()": "better_attributes.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level.upper(),
                "formatter": "ba_json" if json_output else "ba_text",
                "filters": ["ba_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "better_attributes": {
                "level": level.upper(),
                "handlers": ["console"],
                "propagate": False,
            }
        },
    }

    logging.config.dictConfig(config_dict)
