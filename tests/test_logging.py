"""Tests for logging setup."""

import io
import json
import logging
import sys

import pytest

from numberformat.formatter import NumberFormatter
from numberformat.infrastructure.config import FormatterSettings
from numberformat.infrastructure.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogLevel,
    configure_logging,
    reset_logging,
)
from numberformat.patterns import PatternCache


def make_record(msg="Compiled pattern", level=logging.INFO, **extra):
    record = logging.LogRecord("numberformat.test", level, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogLevel:
    """Tests for LogLevel."""

    def test_from_string(self):
        """Test level names."""
        assert LogLevel.from_string("debug") == LogLevel.DEBUG
        assert LogLevel.from_string("WARN") == LogLevel.WARNING
        assert LogLevel.from_string("fatal") == LogLevel.CRITICAL

    def test_unknown_defaults_to_info(self):
        """Test unknown names map to INFO."""
        assert LogLevel.from_string("verbose") == LogLevel.INFO

    def test_int(self):
        """Test stdlib level numbers."""
        assert LogLevel.from_string(logging.ERROR) == LogLevel.ERROR


class TestJsonFormatter:
    """Tests for JSON output."""

    def test_fields(self):
        """Test the standard fields."""
        data = json.loads(JsonFormatter().format(make_record()))
        assert data["level"] == "info"
        assert data["message"] == "Compiled pattern"
        assert data["logger"] == "numberformat.test"
        assert "timestamp" in data

    def test_extra_fields(self):
        """Test extra attributes are included."""
        data = json.loads(JsonFormatter().format(make_record(pattern="#,##0")))
        assert data["pattern"] == "#,##0"

    def test_exception(self):
        """Test exception details."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("numberformat", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        data = json.loads(JsonFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "boom"


class TestConsoleFormatter:
    """Tests for console output."""

    def test_format(self):
        """Test level, logger and message appear in order."""
        line = ConsoleFormatter().format(make_record(pattern="0.00"))
        assert "INFO" in line
        assert "[numberformat.test] Compiled pattern" in line
        assert line.endswith("pattern=0.00")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_stream(self):
        """Test package log records reach the configured stream."""
        stream = io.StringIO()
        configure_logging(level="debug", format="json", stream=stream)
        logging.getLogger("numberformat.sample").info("hello", extra={"locale": "de"})
        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "hello"
        assert data["locale"] == "de"

    def test_level_filters(self):
        """Test records below the level are dropped."""
        stream = io.StringIO()
        configure_logging(level="warning", stream=stream)
        logging.getLogger("numberformat.sample").info("quiet")
        assert stream.getvalue() == ""

    def test_replaces_handler(self):
        """Test repeated calls keep a single handler."""
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_unknown_format(self):
        """Test unknown formats are rejected."""
        with pytest.raises(ValueError):
            configure_logging(format="xml")

    def test_reset(self):
        """Test reset removes the handler."""
        logger = configure_logging(stream=io.StringIO())
        reset_logging()
        assert logger.handlers == []
        assert logger.propagate is True

    def test_formatter_logs_pattern_compilation(self):
        """Test the cache logs compiled patterns at debug level."""
        stream = io.StringIO()
        configure_logging(level="debug", stream=stream)
        formatter = NumberFormatter(FormatterSettings(), cache=PatternCache(preload=()))
        formatter.format(1.5, format="0.000")
        assert "0.000" in stream.getvalue()
