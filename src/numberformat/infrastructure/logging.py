"""Logging setup for numberformat.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications (and the ``numberformat`` CLI)
call :func:`configure_logging` to attach a console or JSON handler to the
``numberformat`` logger.

Usage:
    >>> from numberformat.infrastructure.logging import configure_logging
    >>>
    >>> configure_logging(level="debug", format="json")
    >>> format_number(1234.5)  # emits {"level": "debug", "message": "Compiled pattern ...", ...}
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import traceback
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, TextIO

ROOT_LOGGER = "numberformat"


class LogLevel(IntEnum):
    """Log severity levels, numerically equal to the stdlib levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_string(cls, level: "str | int | LogLevel") -> "LogLevel":
        """Convert string to LogLevel, defaulting to INFO for unknown names."""
        if isinstance(level, int):
            return cls(level)
        mapping = {
            "debug": cls.DEBUG,
            "info": cls.INFO,
            "warning": cls.WARNING,
            "warn": cls.WARNING,
            "error": cls.ERROR,
            "critical": cls.CRITICAL,
            "fatal": cls.CRITICAL,
        }
        return mapping.get(level.lower(), cls.INFO)


# Attributes every LogRecord has; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        data: dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        data.update(
            (key, value) for key, value in vars(record).items() if key not in _RESERVED_ATTRS
        )
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            data["exception"] = {
                "type": type(exc).__name__,
                "message": str(exc),
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
            }
        return json.dumps(data, default=str)


class ConsoleFormatter(logging.Formatter):
    """``<time> <LEVEL> [<logger>] <message> key=value ...``"""

    def __init__(self, timestamp_format: str = "%H:%M:%S") -> None:
        super().__init__()
        self._timestamp_format = timestamp_format

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            datetime.fromtimestamp(record.created).strftime(self._timestamp_format),
            record.levelname.ljust(8),
            f"[{record.name}]",
            record.getMessage(),
        ]
        fields = [f"{k}={v}" for k, v in vars(record).items() if k not in _RESERVED_ATTRS]
        if fields:
            parts.append(" ".join(fields))

        result = " ".join(parts)
        if record.exc_info:
            result = f"{result}\n{self.formatException(record.exc_info)}"
        return result


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "console": ConsoleFormatter,
    "json": JsonFormatter,
}

_handler: logging.Handler | None = None
_lock = threading.Lock()


def configure_logging(
    *,
    level: str | int | LogLevel = LogLevel.WARNING,
    format: str = "console",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a handler to the ``numberformat`` logger.

    Calling again replaces the previous handler.

    Args:
        level: Log level.
        format: Output format (console, json).
        stream: Output stream, stderr by default.

    Returns:
        The configured package logger.
    """
    global _handler

    if format not in _FORMATTERS:
        raise ValueError(f"Unknown log format {format!r}; expected one of {sorted(_FORMATTERS)}")

    package_logger = logging.getLogger(ROOT_LOGGER)
    with _lock:
        if _handler is not None:
            package_logger.removeHandler(_handler)
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(_FORMATTERS[format]())
        package_logger.addHandler(_handler)
        package_logger.setLevel(LogLevel.from_string(level))
        package_logger.propagate = False
    return package_logger


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`."""
    global _handler

    package_logger = logging.getLogger(ROOT_LOGGER)
    with _lock:
        if _handler is not None:
            package_logger.removeHandler(_handler)
            _handler = None
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True
