"""Tests for logging_config: redaction, StructuredFormatter, setup_logging."""

import json
import logging

from favicon_studio.logging_config import StructuredFormatter, _redact, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redact_values():
    assert _redact("Bearer abc123") == "[REDACTED]"
    assert _redact("sk-abcdef") == "[REDACTED]"
    assert _redact("hello") == "hello"
    assert _redact({"api_key": "plain"}) == {"api_key": "[REDACTED]"}
    assert _redact([16, 32]) == [16, 32]


def test_structured_formatter_json_with_extra():
    out = StructuredFormatter(use_json=True).format(_record(sizes=[16, 32], app_name="Rocket"))
    data = json.loads(out)
    assert data["message"] == "hello"
    assert data["level"] == "INFO"
    assert data["sizes"] == [16, 32]
    assert data["app_name"] == "Rocket"
    assert "lineno" not in data


def test_structured_formatter_redacts_secret_fields():
    data = json.loads(StructuredFormatter(use_json=True).format(_record(api_key="abc")))
    assert data["api_key"] == "[REDACTED]"


def test_structured_formatter_key_value():
    out = StructuredFormatter(use_json=False).format(_record())
    assert "message='hello'" in out
    assert "level='INFO'" in out


def test_setup_logging_adds_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
