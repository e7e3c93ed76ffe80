"""Structured Logging — verifies JSON log lines and handler setup.

Tests:
    - Core keys always present; known extras surfaced, unknown extras dropped
    - Exceptions rendered under "exception"
    - Repeated setup_logging does not stack handlers
"""

import json
import logging
import sys

from portfolio.infrastructure import observability
from portfolio.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "portfolio.test", logging.WARNING, __file__, 1, msg, None, exc_info,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_has_core_keys():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "WARNING"
    assert line["logger"] == "portfolio.test"
    assert line["message"] == "hello"
    assert "timestamp" in line


def test_known_extras_surfaced():
    line = json.loads(JSONFormatter().format(
        _record(slug="hello-world", recipient="ada@example.com", secret="x"),
    ))
    assert line["slug"] == "hello-world"
    assert line["recipient"] == "ada@example.com"
    assert "secret" not in line


def test_exception_rendered():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())
    line = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in line["exception"]


def test_setup_logging_replaces_handler():
    setup_logging("DEBUG", "json")
    first = observability._handler
    setup_logging("INFO", "text")
    second = observability._handler
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
        assert not isinstance(second.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(second)
        observability._handler = None
