"""Digit rendering and grouping.

Turns a rounded, non-negative Decimal into integer and fraction digit
strings, then inserts group separators. All splitting is done on the plain
``format(value, "f")`` string of the Decimal, never on a float.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from numberformat.arithmetic import Sign, round_fraction, round_significant
from numberformat.options import RoundingMode
from numberformat.patterns.compiler import DigitRange, GroupSize, Grouping, PatternMetadata


@dataclass
class DigitRecord:
    """Digits of one number as they move through the pipeline.

    Attributes:
        integer: Integer digits, later with group separators.
        fraction: Fraction digits, later with group separators.
        sign: Selects the positive or negative template.
        exponent: Power of ten for scientific patterns.
    """

    integer: str
    fraction: str
    sign: Sign = Sign.POSITIVE
    exponent: int | None = None


def _split(value: Decimal) -> tuple[str, str]:
    integer, _, fraction = format(value, "f").partition(".")
    return integer, fraction


def adjust_integer(digits: str, bounds: DigitRange) -> str:
    """Trim leading zeros, pad to ``bounds.min`` and keep at most ``bounds.max`` digits.

    >>> adjust_integer("1997", DigitRange(5, None))
    '01997'
    >>> adjust_integer("1997", DigitRange(1, 2))
    '97'
    """
    digits = digits.lstrip("0").rjust(bounds.min, "0")
    if bounds.max is not None and len(digits) > bounds.max:
        digits = digits[len(digits) - bounds.max :]
    return digits


def adjust_fraction(digits: str, minimum: int) -> str:
    """Trim trailing zeros, then pad back to ``minimum`` digits."""
    return digits.rstrip("0").ljust(minimum, "0")


# =============================================================================
# Digit Renderers
# =============================================================================


def render_digits(value: Decimal, meta: PatternMetadata, mode: RoundingMode, sign: Sign = Sign.POSITIVE) -> DigitRecord:
    """Render using integer and fraction digit bounds."""
    maximum = meta.fractional_digits.max
    if maximum is not None:
        value = round_fraction(value, maximum, mode)
    integer, fraction = _split(value)

    integer = adjust_integer(integer, meta.integer_digits)
    fraction = adjust_fraction(fraction, meta.fractional_digits.min)
    if not integer and not fraction:
        integer = "0"
    return DigitRecord(integer, fraction, sign)


def render_significant(value: Decimal, bounds: DigitRange, mode: RoundingMode, sign: Sign = Sign.POSITIVE) -> DigitRecord:
    """Render with at most ``bounds.max`` and at least ``bounds.min`` significant digits.

    >>> render_significant(Decimal("1.2"), DigitRange(3, 3), RoundingMode.HALF_EVEN).fraction
    '20'
    """
    maximum = bounds.max if bounds.max is not None else bounds.min
    rounded = round_significant(value, maximum, mode)
    integer, fraction = _split(rounded)
    integer = integer.lstrip("0")
    fraction = fraction.rstrip("0")
    fraction = fraction.ljust(_significant_fraction_length(integer, fraction, bounds.min, rounded), "0")
    return DigitRecord(integer or "0", fraction, sign)


def _significant_fraction_length(integer: str, fraction: str, minimum: int, value: Decimal) -> int:
    if integer:
        return max(0, minimum - len(integer))
    if not value:
        return max(0, minimum - 1)
    leading_zeros = len(fraction) - len(fraction.lstrip("0"))
    return leading_zeros + minimum


def render_scientific(value: Decimal, meta: PatternMetadata, mode: RoundingMode, sign: Sign = Sign.POSITIVE) -> DigitRecord:
    """Render a mantissa and exponent.

    The mantissa shows ``min integer + max fraction`` significant digits
    (or the ``@`` bounds). When the maximum integer digits exceed the
    minimum and are greater than one, the exponent is a multiple of the
    maximum (engineering notation); otherwise the exponent is chosen so
    the mantissa has exactly the minimum number of integer digits.

    >>> meta = compile_pattern("##0.####E0")
    >>> record = render_scientific(Decimal(12345), meta, RoundingMode.HALF_EVEN)
    >>> (record.integer, record.fraction, record.exponent)
    ('12', '345', 3)
    """
    integer_bounds = meta.integer_digits
    max_integer = integer_bounds.max or 1
    significant = meta.significant_digits

    if significant is not None:
        max_significant = significant.max if significant.max is not None else significant.min
        engineering = False
    else:
        max_significant = integer_bounds.min + (meta.fractional_digits.max or 0)
        engineering = max_integer > integer_bounds.min and max_integer > 1
    max_significant = max(max_significant, 1)

    rounded = round_significant(value, max_significant, mode)
    if rounded:
        magnitude = rounded.adjusted()
        if engineering:
            exponent = (magnitude // max_integer) * max_integer
        else:
            exponent = magnitude - (max(integer_bounds.min, 1) - 1)
    else:
        exponent = 0

    mantissa = rounded.scaleb(-exponent)
    integer, fraction = _split(mantissa)
    integer = integer.lstrip("0").rjust(max(integer_bounds.min, 1), "0")

    if significant is not None:
        fraction = fraction.rstrip("0")
        fraction = fraction.ljust(max(0, significant.min - len(integer.lstrip("0") or "0")), "0")
    else:
        fraction = adjust_fraction(fraction, meta.fractional_digits.min)
    return DigitRecord(integer, fraction, sign, exponent)


def render(value: Decimal, meta: PatternMetadata, mode: RoundingMode, sign: Sign = Sign.POSITIVE) -> DigitRecord:
    """Dispatch to the renderer matching the pattern kind."""
    if meta.is_scientific:
        return render_scientific(value, meta, mode, sign)
    if meta.significant_digits is not None:
        return render_significant(value, meta.significant_digits, mode, sign)
    return render_digits(value, meta, mode, sign)


# =============================================================================
# Grouping Engine
# =============================================================================


def _chunk_from_right(digits: str, size: int) -> list[str]:
    head = len(digits) % size or size
    return [digits[:head]] + [digits[i : i + size] for i in range(head, len(digits), size)]


def _chunk_from_left(digits: str, size: int) -> list[str]:
    return [digits[i : i + size] for i in range(0, len(digits), size)]


def group_integer(digits: str, size: GroupSize | None, min_grouping: int, separator: str) -> str:
    """Insert separators from the least significant digit outwards.

    >>> group_integer("1234567", GroupSize(3, 2), 1, ",")
    '12,34,567'
    """
    if size is None or not digits or len(digits) < min_grouping + size.first:
        return digits
    if size.first == size.rest:
        return separator.join(_chunk_from_right(digits, size.first))
    head, tail = digits[: -size.first], digits[-size.first :]
    return separator.join(_chunk_from_right(head, size.rest) + [tail])


def group_fraction(digits: str, size: GroupSize | None, min_grouping: int, separator: str) -> str:
    """Insert separators from the decimal point outwards; the short group is last."""
    if size is None or not digits or len(digits) < min_grouping + size.first:
        return digits
    if size.first == size.rest:
        return separator.join(_chunk_from_left(digits, size.first))
    head, tail = digits[: size.first], digits[size.first :]
    return separator.join([head] + _chunk_from_left(tail, size.rest))


def apply_grouping(record: DigitRecord, grouping: Grouping, min_grouping: int, separator: str) -> DigitRecord:
    record.integer = group_integer(record.integer, grouping.integer, min_grouping, separator)
    record.fraction = group_fraction(record.fraction, grouping.fraction, min_grouping, separator)
    return record
