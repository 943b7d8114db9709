"""Exception hierarchy for numberformat.

All errors raised by the formatting pipeline derive from
:class:`NumberFormatError`, so callers can catch a single type. Each error
keeps the context needed to diagnose it (the offending pattern fragment,
the missing field, the unknown identifier) as attributes.
"""

from __future__ import annotations

from typing import Any


class NumberFormatError(Exception):
    """Base exception for all numberformat errors."""


# =============================================================================
# Pattern Errors
# =============================================================================


class PatternCompileError(NumberFormatError):
    """A decimal format pattern could not be compiled."""

    def __init__(self, pattern: str, fragment: str, reason: str) -> None:
        self.pattern = pattern
        self.fragment = fragment
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason} (at {fragment!r})")


# =============================================================================
# Currency Errors
# =============================================================================


class MissingCurrencyError(NumberFormatError):
    """Pattern has a currency placeholder but no currency code was given."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.field = "currency_code"
        super().__init__(
            f"Pattern {pattern!r} contains a currency placeholder "
            "but the 'currency_code' option is not set"
        )


class UnknownCurrencyError(NumberFormatError):
    """Currency code is not known to the currency provider."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown currency code: {code!r}")


# =============================================================================
# Locale Errors
# =============================================================================


class UnknownLocaleError(NumberFormatError):
    """Locale is not known to a locale data provider."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"Unknown locale: {locale!r}")


class UnknownNumberSystemError(NumberFormatError):
    """Number system is not available for the locale."""

    def __init__(self, number_system: str, locale: str | None = None) -> None:
        self.number_system = number_system
        self.locale = locale
        suffix = f" for locale {locale!r}" if locale else ""
        super().__init__(f"Unknown number system {number_system!r}{suffix}")


# =============================================================================
# Option Errors
# =============================================================================


class InvalidRoundingModeError(NumberFormatError):
    """Rounding mode option is not recognized."""

    def __init__(self, mode: Any) -> None:
        self.mode = mode
        super().__init__(f"Invalid rounding mode: {mode!r}")


class InvalidFormatStyleError(NumberFormatError):
    """Style option is not recognized or not defined for the locale."""

    def __init__(self, style: Any, locale: str | None = None) -> None:
        self.style = style
        self.locale = locale
        suffix = f" for locale {locale!r}" if locale else ""
        super().__init__(f"Invalid format style {style!r}{suffix}")


class InvalidOptionError(NumberFormatError):
    """An option name or value is not accepted."""

    def __init__(self, name: str, reason: str = "unknown option") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid option {name!r}: {reason}")


class InvalidNumberError(NumberFormatError, TypeError):
    """Value passed for formatting is not a supported number type."""

    def __init__(self, value: Any, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason
        if reason:
            message = f"Cannot format value {value!r}: {reason}"
        else:
            message = (
                f"Cannot format value of type {type(value).__name__}: "
                "expected int, float or Decimal"
            )
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(NumberFormatError):
    """Base configuration error."""


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


class ConfigSourceError(ConfigError):
    """Configuration source error."""
