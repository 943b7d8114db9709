"""Per-call formatting options.

Options are plain immutable values. Defaults come from
:class:`~numberformat.infrastructure.config.FormatterSettings` and are merged
with caller overrides by :func:`normalize_options`; the caller always wins.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from numberformat.exceptions import (
    InvalidFormatStyleError,
    InvalidOptionError,
    InvalidRoundingModeError,
)


class RoundingMode(str, Enum):
    """Rounding modes accepted by the ``rounding_mode`` option."""

    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    HALF_DOWN = "half_down"
    UP = "up"
    DOWN = "down"
    CEILING = "ceiling"
    FLOOR = "floor"

    @property
    def decimal_rounding(self) -> str:
        """The matching :mod:`decimal` rounding constant."""
        return _DECIMAL_ROUNDING[self]

    @classmethod
    def parse(cls, value: "str | RoundingMode") -> "RoundingMode":
        """Convert a string such as ``"half-even"`` or ``"HALF_EVEN"``.

        Raises:
            InvalidRoundingModeError: If the mode is not recognized.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidRoundingModeError(value)
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            raise InvalidRoundingModeError(value) from None


_DECIMAL_ROUNDING = {
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingMode.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingMode.UP: decimal.ROUND_UP,
    RoundingMode.DOWN: decimal.ROUND_DOWN,
    RoundingMode.CEILING: decimal.ROUND_CEILING,
    RoundingMode.FLOOR: decimal.ROUND_FLOOR,
}


class FormatStyle(str, Enum):
    """Named locale formats selectable through the ``style`` option."""

    STANDARD = "standard"
    SHORT = "short"
    LONG = "long"
    PERCENT = "percent"
    CURRENCY = "currency"
    ACCOUNTING = "accounting"
    SCIENTIFIC = "scientific"

    @property
    def is_compact(self) -> bool:
        return self in (FormatStyle.SHORT, FormatStyle.LONG)

    @classmethod
    def parse(cls, value: "str | FormatStyle") -> "FormatStyle":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidFormatStyleError(value) from None


@dataclass(frozen=True)
class FormatOptions:
    """Options for a single format call.

    Attributes:
        style: Named locale format. Ignored when ``format`` is set.
        format: Explicit decimal format pattern.
        currency_code: ISO 4217 code used by currency placeholders.
        cash: Use the currency's cash digits and rounding.
        rounding_mode: Rounding mode for increments and fraction digits.
        number_system: ``"default"``, ``"native"`` or a system id such as ``"arab"``.
        locale: Locale identifier.
        minimum_integer_digits: Overrides the pattern's minimum integer digits.
        maximum_integer_digits: Truncates integer digits from the left.
        minimum_fraction_digits: Overrides the pattern's minimum fraction digits.
        maximum_fraction_digits: Overrides the pattern's maximum fraction digits.
    """

    style: FormatStyle = FormatStyle.STANDARD
    format: str | None = None
    currency_code: str | None = None
    cash: bool = False
    rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    number_system: str = "default"
    locale: str = "en"
    minimum_integer_digits: int | None = None
    maximum_integer_digits: int | None = None
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None

    @property
    def has_digit_overrides(self) -> bool:
        return any(
            value is not None
            for value in (
                self.minimum_integer_digits,
                self.maximum_integer_digits,
                self.minimum_fraction_digits,
                self.maximum_fraction_digits,
            )
        )

    def merge(self, **overrides: Any) -> "FormatOptions":
        """Return new options with ``overrides`` applied field by field."""
        return normalize_options(overrides, self)


OPTION_NAMES = frozenset(f.name for f in fields(FormatOptions))

# Aliases accepted from callers.
_ALIASES = {
    "currency": "currency_code",
    "pattern": "format",
    "as": "style",
}

_DIGIT_OPTIONS = (
    "minimum_integer_digits",
    "maximum_integer_digits",
    "minimum_fraction_digits",
    "maximum_fraction_digits",
)


def normalize_options(
    overrides: dict[str, Any] | FormatOptions | None,
    defaults: FormatOptions,
) -> FormatOptions:
    """Merge caller options over defaults.

    ``None`` values in ``overrides`` leave the default in place. String values
    for ``style`` and ``rounding_mode`` are parsed into their enums.

    Raises:
        InvalidOptionError: Unknown option name or bad digit count.
        InvalidRoundingModeError: Unrecognized rounding mode.
        InvalidFormatStyleError: Unrecognized style.
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, FormatOptions):
        return overrides

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name not in OPTION_NAMES:
            raise InvalidOptionError(key)
        if value is None:
            continue
        changes[name] = value

    if "style" in changes:
        changes["style"] = FormatStyle.parse(changes["style"])
    if "rounding_mode" in changes:
        changes["rounding_mode"] = RoundingMode.parse(changes["rounding_mode"])
    if "currency_code" in changes:
        changes["currency_code"] = str(changes["currency_code"]).upper()
    if "cash" in changes:
        changes["cash"] = bool(changes["cash"])

    for name in _DIGIT_OPTIONS:
        if name in changes:
            value = changes[name]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidOptionError(name, "must be a non-negative integer")

    options = replace(defaults, **changes)
    _check_digit_bounds(options)
    return options


def _check_digit_bounds(options: FormatOptions) -> None:
    pairs = (
        ("minimum_integer_digits", "maximum_integer_digits"),
        ("minimum_fraction_digits", "maximum_fraction_digits"),
    )
    for low_name, high_name in pairs:
        low = getattr(options, low_name)
        high = getattr(options, high_name)
        if low is not None and high is not None and low > high:
            raise InvalidOptionError(low_name, f"greater than {high_name}")
