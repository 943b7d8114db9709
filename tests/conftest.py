"""Shared fixtures for numberformat tests."""

import pytest

from numberformat.formatter import NumberFormatter, reset_formatter
from numberformat.infrastructure.config import FormatterSettings, reset_settings
from numberformat.infrastructure.logging import reset_logging


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep NUMBERFORMAT_* variables from the environment out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("NUMBERFORMAT_"):
            monkeypatch.delenv(key)
    reset_settings()
    reset_formatter()
    yield
    reset_settings()
    reset_formatter()
    reset_logging()


@pytest.fixture
def formatter():
    """Formatter with default settings (locale en, half-even rounding)."""
    return NumberFormatter(FormatterSettings())
