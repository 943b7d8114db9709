"""Infrastructure module for numberformat.

This module provides configuration and logging setup:
- Layered configuration (file, environment variables) with validation
- Typed formatter settings
- Console and JSON log formatting

Usage:
    >>> from numberformat.infrastructure import configure_logging, load_settings
    >>>
    >>> settings = load_settings("config/")
    >>> configure_logging(level=settings.log_level, format=settings.log_format)
"""

# Configuration
from numberformat.infrastructure.config import (
    # Sources
    ConfigSource,
    DictConfigSource,
    EnvConfigSource,
    FileConfigSource,
    # Manager
    ConfigManager,
    ConfigProfile,
    ConfigSchema,
    ConfigValidator,
    # Settings
    FormatterSettings,
    build_manager,
    get_settings,
    load_settings,
    reset_settings,
)

# Logging
from numberformat.infrastructure.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogLevel,
    configure_logging,
    reset_logging,
)

__all__ = [
    # Configuration
    "ConfigSource",
    "DictConfigSource",
    "EnvConfigSource",
    "FileConfigSource",
    "ConfigManager",
    "ConfigProfile",
    "ConfigSchema",
    "ConfigValidator",
    "FormatterSettings",
    "build_manager",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Logging
    "ConsoleFormatter",
    "JsonFormatter",
    "LogLevel",
    "configure_logging",
    "reset_logging",
]
