"""Configuration management for numberformat.

Formatter defaults (locale, number system, rounding mode, style) and
logging settings are read from layered sources and exposed as a typed
:class:`FormatterSettings`.

Architecture:
    ConfigSource[] (ordered by priority)
         |
         +---> FileConfigSource (YAML, JSON, TOML)
         +---> EnvConfigSource (NUMBERFORMAT_* environment variables)
         |
         v
    ConfigManager
         |
         +---> Merge & Validate
         |
         v
    ConfigProfile (typed access) ---> FormatterSettings

Usage:
    >>> from numberformat.infrastructure.config import get_settings, load_settings
    >>>
    >>> settings = load_settings("numberformat.yaml")
    >>> settings.default_locale
    'de'
    >>>
    >>> # Environment variables override files
    >>> # NUMBERFORMAT_ROUNDING_MODE=half_up
    >>> get_settings().rounding_mode
    <RoundingMode.HALF_UP: 'half_up'>
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from numberformat.exceptions import ConfigError, ConfigSourceError, ConfigValidationError
from numberformat.options import FormatOptions, FormatStyle, RoundingMode

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = tuple(f"numberformat{ext}" for ext in (".yaml", ".yml", ".json", ".toml"))


# =============================================================================
# Configuration Sources
# =============================================================================


class ConfigSource(ABC):
    """Abstract base class for configuration sources.

    Sources are merged in priority order; a higher priority source is merged
    later and overrides earlier ones.
    """

    def __init__(self, priority: int = 0) -> None:
        self._priority = priority

    @property
    def priority(self) -> int:
        """Get source priority."""
        return self._priority

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from source.

        Returns:
            Dictionary of configuration values.
        """


class EnvConfigSource(ConfigSource):
    """Environment variable configuration source.

    Reads variables starting with ``<prefix>_``. A double underscore nests
    keys, so single underscores stay part of the key name.

    Example:
        NUMBERFORMAT_DEFAULT_LOCALE=de
        NUMBERFORMAT_LOGGING__LEVEL=debug

        Will produce:
        {"default_locale": "de", "logging": {"level": "debug"}}
    """

    def __init__(
        self,
        prefix: str = "NUMBERFORMAT",
        separator: str = "__",
        priority: int = 100,
    ) -> None:
        super().__init__(priority)
        self._prefix = prefix
        self._separator = separator

    def load(self) -> dict[str, Any]:
        """Load configuration from environment."""
        result: dict[str, Any] = {}
        prefix = f"{self._prefix}_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            parts = key[len(prefix) :].lower().split(self._separator)

            current = result
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._parse_value(value)

        return result

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        lowered = value.lower()
        if lowered in ("true", "yes", "on"):
            return True
        if lowered in ("false", "no", "off"):
            return False
        if lowered in ("null", "none", ""):
            return None

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("[", "{")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value


class FileConfigSource(ConfigSource):
    """File-based configuration source.

    Supports YAML, JSON, and TOML formats, detected from the file extension.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        required: bool = False,
        priority: int = 50,
    ) -> None:
        """Initialize file source.

        Args:
            path: Path to configuration file.
            required: Raise error if the file is missing or unreadable.
            priority: Source priority.
        """
        super().__init__(priority)
        self._path = Path(path)
        self._required = required

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Load configuration from file."""
        if not self._path.exists():
            if self._required:
                raise ConfigSourceError(f"Configuration file not found: {self._path}")
            return {}

        try:
            content = self._path.read_text(encoding="utf-8")
            data = self._parse(content)
        except (OSError, ValueError, yaml.YAMLError) as e:
            if self._required:
                raise ConfigSourceError(f"Failed to load config {self._path}: {e}") from e
            logger.warning("Ignoring unreadable config file %s: %s", self._path, e)
            return {}

        if not isinstance(data, dict):
            raise ConfigSourceError(f"Configuration file {self._path} must contain a mapping")
        return data

    def _parse(self, content: str) -> Any:
        suffix = self._path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(content) or {}
        if suffix == ".json":
            return json.loads(content)
        if suffix == ".toml":
            return tomllib.loads(content)
        raise ConfigSourceError(f"Unsupported file format: {suffix}")


class DictConfigSource(ConfigSource):
    """In-memory configuration, mainly for tests and embedding applications."""

    def __init__(self, values: dict[str, Any], priority: int = 200) -> None:
        super().__init__(priority)
        self._values = values

    def load(self) -> dict[str, Any]:
        return dict(self._values)


# =============================================================================
# Configuration Schema & Validation
# =============================================================================


@dataclass
class ConfigField:
    """Configuration field definition for validation."""

    name: str
    type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    pattern: str | None = None
    choices: list[Any] | None = None
    description: str = ""


@dataclass
class ConfigSchema:
    """Configuration schema for validation.

    Example:
        >>> schema = ConfigSchema().add_field(
        ...     "rounding_mode", str, choices=["half_even", "half_up"],
        ... )
    """

    fields: list[ConfigField] = field(default_factory=list)

    def add_field(self, name: str, type: type | tuple[type, ...] = str, **kwargs: Any) -> "ConfigSchema":
        """Add a field to the schema."""
        self.fields.append(ConfigField(name=name, type=type, **kwargs))
        return self


class ConfigValidator:
    """Validates configuration dictionaries against a schema."""

    def __init__(self, schema: ConfigSchema) -> None:
        self._schema = schema

    def validate(self, config: dict[str, Any]) -> list[str]:
        """Validate configuration.

        Returns:
            List of validation errors (empty if valid).
        """
        errors: list[str] = []

        for field_def in self._schema.fields:
            value = _get_nested(config, field_def.name)

            if value is None:
                if field_def.required:
                    errors.append(f"Required field '{field_def.name}' is missing")
                continue

            if not isinstance(value, field_def.type):
                expected = (
                    field_def.type.__name__
                    if isinstance(field_def.type, type)
                    else " or ".join(t.__name__ for t in field_def.type)
                )
                errors.append(
                    f"Field '{field_def.name}' should be {expected}, got {type(value).__name__}"
                )
                continue

            if isinstance(value, str) and field_def.pattern:
                if not re.match(field_def.pattern, value):
                    errors.append(f"Field '{field_def.name}' must match pattern '{field_def.pattern}'")

            if field_def.choices:
                normalized = value.lower().replace("-", "_") if isinstance(value, str) else value
                if normalized not in field_def.choices:
                    errors.append(f"Field '{field_def.name}' must be one of {field_def.choices}")

        return errors


def _get_nested(config: dict[str, Any], key: str) -> Any:
    """Get nested configuration value by dot-separated key."""
    current: Any = config
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


# =============================================================================
# Configuration Profile
# =============================================================================


class ConfigProfile:
    """Typed access to merged configuration values.

    Example:
        >>> profile = ConfigProfile({"default_locale": "fr", "logging": {"level": "debug"}})
        >>> profile.get_str("default_locale", "en")
        'fr'
        >>> profile.get("logging.level")
        'debug'
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config = config

    def get(self, key: str, default: Any = None, *, required: bool = False) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (dot-separated for nesting).
            default: Default value if not found.
            required: Raise error if not found.
        """
        value = _get_nested(self._config, key)
        if value is None:
            if required:
                raise ConfigError(f"Required configuration '{key}' not found")
            return default
        return value

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key, default)
        return str(value) if value is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1", "on")
        return bool(value)

    def to_dict(self) -> dict[str, Any]:
        return self._config.copy()

    def __contains__(self, key: str) -> bool:
        return _get_nested(self._config, key) is not None


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Merges configuration sources and validates the result.

    Example:
        >>> manager = ConfigManager()
        >>> manager.add_source(FileConfigSource("numberformat.yaml"))
        >>> manager.add_source(EnvConfigSource())
        >>> profile = manager.load()
    """

    def __init__(self) -> None:
        self._sources: list[ConfigSource] = []
        self._config: dict[str, Any] = {}
        self._profile: ConfigProfile | None = None
        self._schema: ConfigSchema | None = None
        self._lock = threading.RLock()

    @property
    def sources(self) -> list[ConfigSource]:
        return list(self._sources)

    def add_source(self, source: ConfigSource) -> "ConfigManager":
        """Add a configuration source. Returns self for chaining."""
        with self._lock:
            self._sources.append(source)
            self._sources.sort(key=lambda s: s.priority)
        return self

    def set_schema(self, schema: ConfigSchema) -> "ConfigManager":
        self._schema = schema
        return self

    def load(self, validate: bool = True) -> ConfigProfile:
        """Load and merge configuration from all sources.

        Raises:
            ConfigSourceError: A required source failed to load.
            ConfigValidationError: The merged configuration is invalid.
        """
        with self._lock:
            self._config = {}
            for source in self._sources:
                self._merge_config(self._config, source.load())

            if validate and self._schema:
                errors = ConfigValidator(self._schema).validate(self._config)
                if errors:
                    raise ConfigValidationError(errors)

            self._profile = ConfigProfile(self._config)
            return self._profile

    def _merge_config(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    @property
    def config(self) -> ConfigProfile:
        if self._profile is None:
            return self.load()
        return self._profile


def create_default_schema() -> ConfigSchema:
    """Create the schema of :class:`FormatterSettings` keys."""
    schema = ConfigSchema()
    schema.add_field("default_locale", str, pattern=r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$")
    schema.add_field("default_number_system", str)
    schema.add_field("rounding_mode", str, choices=[mode.value for mode in RoundingMode])
    schema.add_field("default_style", str, choices=[style.value for style in FormatStyle])
    schema.add_field("preload_catalogue", bool)
    schema.add_field("logging.level", str, choices=["debug", "info", "warning", "error", "critical"])
    schema.add_field("logging.format", str, choices=["console", "json"])
    return schema


# =============================================================================
# Formatter Settings
# =============================================================================


@dataclass(frozen=True)
class FormatterSettings:
    """Process-wide formatter defaults.

    Attributes:
        default_locale: Locale used when a call does not pass ``locale``.
        default_number_system: ``"default"``, ``"native"`` or a system id.
        rounding_mode: Default rounding mode.
        default_style: Default named format.
        log_level: Level for the ``numberformat`` logger when the CLI configures logging.
        log_format: ``"console"`` or ``"json"``.
        preload_catalogue: Compile the standard pattern catalogue at startup.
    """

    default_locale: str = "en"
    default_number_system: str = "default"
    rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    default_style: FormatStyle = FormatStyle.STANDARD
    log_level: str = "warning"
    log_format: str = "console"
    preload_catalogue: bool = True

    @classmethod
    def from_profile(cls, profile: ConfigProfile) -> "FormatterSettings":
        """Build settings from a configuration profile, defaulting missing keys."""
        defaults = cls()
        return cls(
            default_locale=profile.get_str("default_locale", defaults.default_locale),
            default_number_system=profile.get_str("default_number_system", defaults.default_number_system),
            rounding_mode=RoundingMode.parse(profile.get("rounding_mode", defaults.rounding_mode)),
            default_style=FormatStyle.parse(profile.get("default_style", defaults.default_style)),
            log_level=profile.get_str("logging.level", defaults.log_level).lower(),
            log_format=profile.get_str("logging.format", defaults.log_format).lower(),
            preload_catalogue=profile.get_bool("preload_catalogue", defaults.preload_catalogue),
        )

    def default_options(self) -> FormatOptions:
        """Per-call options before caller overrides are applied."""
        return FormatOptions(
            style=self.default_style,
            rounding_mode=self.rounding_mode,
            number_system=self.default_number_system,
            locale=self.default_locale,
        )


# =============================================================================
# Global Settings
# =============================================================================

_settings: FormatterSettings | None = None
_lock = threading.Lock()


def _find_config_file(path: Path) -> Path | None:
    if path.is_file():
        return path
    for name in CONFIG_FILE_NAMES:
        candidate = path / name
        if candidate.exists():
            return candidate
    return None


def build_manager(
    config_path: str | Path | None = None,
    *,
    env_prefix: str = "NUMBERFORMAT",
    overrides: dict[str, Any] | None = None,
) -> ConfigManager:
    """Create a manager with the standard source layering.

    Order, lowest priority first: configuration file, environment variables,
    explicit ``overrides``. Without ``config_path`` the file named by
    ``NUMBERFORMAT_CONFIG`` is used, if set.
    """
    manager = ConfigManager()
    config_path = config_path or os.getenv(f"{env_prefix}_CONFIG")

    if config_path:
        path = Path(config_path)
        found = _find_config_file(path)
        if found is None:
            raise ConfigSourceError(f"Configuration file not found: {path}")
        manager.add_source(FileConfigSource(found, required=True, priority=50))

    manager.add_source(EnvConfigSource(prefix=env_prefix, priority=100))
    if overrides:
        manager.add_source(DictConfigSource(overrides, priority=200))

    manager.set_schema(create_default_schema())
    return manager


def load_settings(
    config_path: str | Path | None = None,
    *,
    env_prefix: str = "NUMBERFORMAT",
    overrides: dict[str, Any] | None = None,
    validate: bool = True,
) -> FormatterSettings:
    """Load settings and install them as the global settings.

    Args:
        config_path: Configuration file, or a directory containing
            ``numberformat.{yaml,yml,json,toml}``.
        env_prefix: Environment variable prefix.
        overrides: Values that win over files and environment.
        validate: Validate configuration.

    Raises:
        ConfigSourceError: The configuration file is missing or unreadable.
        ConfigValidationError: A value is not accepted.
    """
    global _settings

    manager = build_manager(config_path, env_prefix=env_prefix, overrides=overrides)
    settings = FormatterSettings.from_profile(manager.load(validate=validate))
    with _lock:
        _settings = settings
    logger.debug("Loaded settings: %s", settings)
    return settings


def get_settings() -> FormatterSettings:
    """Get the global settings, loading them on first use."""
    with _lock:
        settings = _settings
    if settings is None:
        settings = load_settings()
    return settings


def reset_settings() -> None:
    """Forget the global settings so the next access reloads them."""
    global _settings

    with _lock:
        _settings = None
