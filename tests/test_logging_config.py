"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
import sys

from anatom.logging_config import JSONFormatter, get_logger, setup_logging


def test_json_formatter_outputs_valid_json():
    formatter = JSONFormatter()
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="test.py",
        lineno=1, msg="hello %s", args=("world",), exc_info=None
    )
    parsed = json.loads(formatter.format(record))
    assert parsed["message"] == "hello world"
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test"
    assert "timestamp" in parsed


def test_json_formatter_includes_exception():
    formatter = JSONFormatter()
    try:
        raise ValueError("test error")
    except ValueError:
        exc_info = sys.exc_info()
    record = logging.LogRecord(
        name="test", level=logging.ERROR, pathname="test.py",
        lineno=1, msg="fail", args=(), exc_info=exc_info
    )
    parsed = json.loads(formatter.format(record))
    assert parsed["exception"]["type"] == "ValueError"
    assert parsed["exception"]["message"] == "test error"


def test_json_formatter_collects_context_extras():
    formatter = JSONFormatter()
    record = logging.LogRecord(
        name="anatom.services.split_selector", level=logging.DEBUG, pathname="x.py",
        lineno=10, msg="Selected split template %s", args=("upper_lower",), exc_info=None
    )
    record.ctx_template = "upper_lower"
    record.unrelated = "ignored"
    parsed = json.loads(formatter.format(record))
    assert parsed["context"] == {"ctx_template": "upper_lower"}


def test_get_logger_returns_named_logger():
    log = get_logger("my.module")
    assert log.name == "my.module"
    assert isinstance(log, logging.Logger)


def test_setup_logging_idempotent():
    root = logging.getLogger()
    initial_count = len(root.handlers)
    setup_logging()
    setup_logging()
    # Should not add duplicate handlers
    assert len(root.handlers) <= initial_count + 1


def test_configure_from_settings_uses_env_profile(monkeypatch):
    import anatom.logging_config as logging_config

    calls = []
    monkeypatch.setattr(logging_config, "setup_logging", lambda level, json_output: calls.append((level, json_output)))
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("JSON_LOGS", raising=False)
    logging_config.configure_from_settings()
    assert calls == [("INFO", True)]
