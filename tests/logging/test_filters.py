import json
import sys
import logging
from unittest.mock import patch

from better_attributes.logging.filters import (
    ContextFilter,
    reset_query_context,
    set_logging_context,
    set_query_context,
)
from better_attributes.logging.logger import CustomJsonFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample %s",
        args=("message",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_filter_respects_static_environment():
    set_logging_context(environment="qa", extra={"region": "us-east"})
    record = _record()
    assert ContextFilter().filter(record)
    assert getattr(record, "environment") == "qa"
    assert getattr(record, "region") == "us-east"


def test_context_filter_uses_query_context():
    set_logging_context(environment=None, extra=None)
    tokens = set_query_context(query_id="q-1", target_class="Sample")
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert record.query_id == "q-1"
        assert record.target_class == "Sample"
        assert record.sdk_name == "better-attributes"
    finally:
        reset_query_context(tokens)


def test_reset_restores_enclosing_query_context():
    outer = set_query_context(query_id="outer", target_class="Outer")
    try:
        inner = set_query_context(query_id="inner", target_class="Inner")
        reset_query_context(inner)

        record = _record()
        ContextFilter().filter(record)
        assert record.query_id == "outer"
        assert record.target_class == "Outer"
    finally:
        reset_query_context(outer)

    record = _record()
    ContextFilter().filter(record)
    assert record.query_id is None


def test_context_filter_no_config_is_graceful():
    set_logging_context(environment=None, extra=None)
    record = _record()
    assert ContextFilter().filter(record)
    assert not hasattr(record, "environment")
    assert record.query_id is None


def test_json_formatter_includes_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(match_count=2)))
    assert payload["message"] == "sample message"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["match_count"] == 2
    assert "trace_id" not in payload
    assert "pathname" not in payload


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(CustomJsonFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_setup_logging_configures_package_logger():
    with patch("logging.config.dictConfig") as dict_config:
        setup_logging("debug", json_output=False)

    config = dict_config.call_args.args[0]
    handler = config["handlers"]["console"]
    assert handler["level"] == "DEBUG"
    assert handler["formatter"] == "ba_text"
    assert config["loggers"]["better_attributes"]["level"] == "DEBUG"


def test_setup_logging_defaults_to_settings(monkeypatch):
    from better_attributes.settings import reload_settings

    monkeypatch.setenv("BETTER_ATTRIBUTES_LOG_JSON", "true")
    reload_settings()
    with patch("logging.config.dictConfig") as dict_config:
        setup_logging()

    assert dict_config.call_args.args[0]["handlers"]["console"]["formatter"] == "ba_json"
