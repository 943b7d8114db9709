"""Exact decimal arithmetic for the formatting pipeline.

Every value is converted to :class:`decimal.Decimal` before any arithmetic,
and all operations run in a local context sized to the operands, so results
never depend on the thread's current decimal context or on binary floating
point representation.
"""

from __future__ import annotations

import decimal
from dataclasses import replace
from decimal import Decimal
from enum import Enum

from numberformat.exceptions import InvalidNumberError
from numberformat.options import RoundingMode
from numberformat.patterns.compiler import DigitRange, PatternMetadata
from numberformat.protocols import Currency

# Guard digits above the digits a value actually needs.
_GUARD_DIGITS = 4
_MIN_PRECISION = 28

ZERO = Decimal(0)
ONE = Decimal(1)


class Sign(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @property
    def is_negative(self) -> bool:
        return self is Sign.NEGATIVE


def context_for(*values: Decimal, extra: int = 0) -> decimal.Context:
    """Build a context whose precision holds ``values`` exactly plus ``extra`` digits."""
    digits = _MIN_PRECISION
    for value in values:
        if value.is_finite() and value:
            sign, coefficient, exponent = value.as_tuple()
            digits = max(digits, len(coefficient) + abs(exponent), value.adjusted() + 1)
    return decimal.Context(prec=digits + extra + _GUARD_DIGITS, rounding=decimal.ROUND_HALF_EVEN)


# =============================================================================
# Numeric Normalizer
# =============================================================================


def to_decimal(number: int | float | Decimal) -> Decimal:
    """Convert a supported number to Decimal.

    Floats go through their shortest round-trip ``repr``, so ``0.1``
    becomes ``Decimal("0.1")`` rather than its binary expansion.

    Raises:
        InvalidNumberError: For bool and non-numeric types, and signalling NaN.
    """
    if isinstance(number, bool):
        raise InvalidNumberError(number)
    if isinstance(number, Decimal):
        if number.is_snan():
            raise InvalidNumberError(number, "signalling NaN")
        return number
    if isinstance(number, int):
        return Decimal(number)
    if isinstance(number, float):
        return Decimal(repr(number))
    raise InvalidNumberError(number)


def normalize(number: int | float | Decimal) -> tuple[Decimal, Sign]:
    """Split a number into its non-negative magnitude and sign.

    Integers and floats are negative when ``number < 0``; Decimals are
    negative when their sign bit is set, so ``Decimal("-0")`` is negative
    while ``-0.0`` is not.
    """
    value = to_decimal(number)
    if isinstance(number, Decimal):
        negative = number.is_signed()
    else:
        negative = number < 0
    return abs(value), Sign.NEGATIVE if negative else Sign.POSITIVE


# =============================================================================
# Rounding & Scaling
# =============================================================================


def adjust_for_currency(meta: PatternMetadata, currency: Currency, cash: bool = False) -> PatternMetadata:
    """Use the currency's digits and rounding increment instead of the pattern's."""
    digits, rounding = currency.digits_for(cash)
    increment = Decimal(rounding).scaleb(-digits) if rounding else ZERO
    return replace(
        meta,
        fractional_digits=DigitRange(digits, digits),
        rounding_increment=increment,
    )


def scale(value: Decimal, multiplier: Decimal) -> Decimal:
    """Multiply by the percent/per mille multiplier, skipping a multiplier of 1."""
    if multiplier == ONE:
        return value
    return context_for(value, multiplier, extra=len(str(multiplier))).multiply(value, multiplier)


def round_to_increment(value: Decimal, increment: Decimal, mode: RoundingMode) -> Decimal:
    """Round to the nearest multiple of ``increment`` using ``mode``.

    A zero increment leaves the value unchanged.
    """
    if not increment or not value.is_finite():
        return value
    ctx = context_for(value, increment, extra=abs(increment.as_tuple().exponent))
    quotient = ctx.divide(value, increment)
    rounded = quotient.to_integral_value(rounding=mode.decimal_rounding, context=ctx)
    return ctx.multiply(rounded, increment)


def round_fraction(value: Decimal, digits: int, mode: RoundingMode) -> Decimal:
    """Round to ``digits`` fraction digits."""
    exponent = Decimal(1).scaleb(-digits)
    return value.quantize(exponent, rounding=mode.decimal_rounding, context=context_for(value, extra=digits))


def round_significant(value: Decimal, digits: int, mode: RoundingMode) -> Decimal:
    """Round to ``digits`` significant digits. Zero is returned unchanged."""
    if not value or not value.is_finite():
        return value
    exponent = value.adjusted() - digits + 1
    ctx = context_for(value, extra=digits)
    return value.quantize(Decimal(1).scaleb(exponent), rounding=mode.decimal_rounding, context=ctx)


def mode_for_sign(mode: RoundingMode, sign: Sign) -> RoundingMode:
    """Rounding mode to apply to the magnitude of a number with ``sign``.

    Rounding works on absolute values, so the directional modes swap for
    negative numbers: flooring -1.5 means rounding its magnitude up.
    """
    if sign.is_negative:
        if mode is RoundingMode.CEILING:
            return RoundingMode.FLOOR
        if mode is RoundingMode.FLOOR:
            return RoundingMode.CEILING
    return mode
