"""Tests for digit rendering and the grouping engine."""

from decimal import Decimal

import pytest

from numberformat.options import RoundingMode
from numberformat.patterns import DigitRange, GroupSize, Grouping, compile_pattern
from numberformat.render import (
    DigitRecord,
    adjust_integer,
    apply_grouping,
    group_fraction,
    group_integer,
    render_digits,
    render_scientific,
    render_significant,
)

HALF_EVEN = RoundingMode.HALF_EVEN


class TestRenderDigits:
    """Test integer/fraction rendering."""

    def test_basic(self):
        """Test splitting into integer and fraction digits."""
        record = render_digits(Decimal("1234.5"), compile_pattern("#,##0.###"), HALF_EVEN)
        assert (record.integer, record.fraction) == ("1234", "5")

    def test_fraction_padding(self):
        """Test required fraction digits are padded."""
        record = render_digits(Decimal("0.125"), compile_pattern("0.0000"), HALF_EVEN)
        assert (record.integer, record.fraction) == ("0", "1250")

    def test_fraction_rounding(self):
        """Test the fraction rounds to its maximum digits."""
        record = render_digits(Decimal("0.125"), compile_pattern("0.00"), HALF_EVEN)
        assert record.fraction == "12"

    def test_trailing_zeros_trimmed(self):
        """Test optional fraction digits drop trailing zeros."""
        record = render_digits(Decimal("1.500"), compile_pattern("0.###"), HALF_EVEN)
        assert record.fraction == "5"

    def test_integer_padding(self):
        """Test required integer digits are zero padded."""
        record = render_digits(Decimal(1997), compile_pattern("00000"), HALF_EVEN)
        assert record.integer == "01997"

    def test_integer_truncation(self):
        """Test a maximum integer digit count keeps the low digits."""
        meta = compile_pattern("#,##0").with_digit_bounds(maximum_integer_digits=2)
        assert render_digits(Decimal(1997), meta, HALF_EVEN).integer == "97"

    def test_optional_integer_zero(self):
        """Test '#' renders zero as an empty integer part with fraction."""
        record = render_digits(Decimal("0.5"), compile_pattern("#.##"), HALF_EVEN)
        assert (record.integer, record.fraction) == ("", "5")

    def test_all_empty_renders_zero(self):
        """Test an empty integer and fraction render '0'."""
        record = render_digits(Decimal(0), compile_pattern("#.##"), HALF_EVEN)
        assert (record.integer, record.fraction) == ("0", "")

    def test_adjust_integer(self):
        """Test leading zeros are trimmed before padding."""
        assert adjust_integer("0012", DigitRange(3, None)) == "012"
        assert adjust_integer("0", DigitRange(0, None)) == ""


class TestRenderSignificant:
    """Test @ pattern rendering."""

    @pytest.mark.parametrize("value,bounds,expected", [
        ("1.2", DigitRange(3, 3), ("1", "20")),
        ("12345", DigitRange(3, 3), ("12300", "")),
        ("0.012345", DigitRange(2, 2), ("0", "012")),
        ("1.23456", DigitRange(2, 4), ("1", "235")),
        ("1", DigitRange(2, 4), ("1", "0")),
        ("0", DigitRange(3, 3), ("0", "00")),
    ])
    def test_significant(self, value, bounds, expected):
        """Test rounding to max and padding to min significant digits."""
        record = render_significant(Decimal(value), bounds, HALF_EVEN)
        assert (record.integer, record.fraction) == expected


class TestRenderScientific:
    """Test mantissa and exponent computation."""

    @pytest.mark.parametrize("pattern,value,expected", [
        ("##0.####E0", "12345", ("12", "345", 3)),
        ("##0.##E0", "12345", ("12", "3", 3)),
        ("##0.##E0", "0.00012345", ("123", "", -6)),
        ("00.###E0", "0.00123", ("12", "3", -4)),
        ("0.###E0", "1234", ("1", "234", 3)),
        ("0.00E+00", "12345", ("1", "23", 4)),
        ("#E0", "1234", ("1", "", 3)),
        ("0.0E0", "0", ("0", "0", 0)),
    ])
    def test_scientific(self, pattern, value, expected):
        """Test engineering and fixed integer digit exponents."""
        record = render_scientific(Decimal(value), compile_pattern(pattern), HALF_EVEN)
        assert (record.integer, record.fraction, record.exponent) == expected

    def test_rounding_carries_into_exponent(self):
        """Test 9.9996 rounds to 1.000E1, not 10.000E0."""
        record = render_scientific(Decimal("9.9996"), compile_pattern("0.000E0"), HALF_EVEN)
        assert (record.integer, record.fraction, record.exponent) == ("1", "000", 1)


class TestGrouping:
    """Test group separator insertion."""

    def test_thousands(self):
        """Test uniform grouping."""
        assert group_integer("1234567", GroupSize(3, 3), 1, ",") == "1,234,567"

    def test_indian(self):
        """Test a different first group."""
        assert group_integer("1234567", GroupSize(3, 2), 1, ",") == "12,34,567"

    def test_indian_short(self):
        """Test Indian grouping with fewer digits."""
        assert group_integer("12345", GroupSize(3, 2), 1, ",") == "12,345"

    def test_exact_multiple(self):
        """Test no empty leading group."""
        assert group_integer("123456", GroupSize(3, 3), 1, ".") == "123.456"

    def test_min_grouping_suppresses(self):
        """Test minimum grouping digits suppress short numbers."""
        assert group_integer("1234", GroupSize(3, 3), 2, ".") == "1234"
        assert group_integer("12345", GroupSize(3, 3), 2, ".") == "12.345"

    def test_below_first_group(self):
        """Test numbers shorter than a group stay ungrouped."""
        assert group_integer("123", GroupSize(3, 3), 1, ",") == "123"

    def test_no_grouping(self):
        """Test a None size leaves digits unchanged."""
        assert group_integer("1234567", None, 1, ",") == "1234567"

    def test_fraction_dangling_group_last(self):
        """Test fraction grouping runs from the decimal point."""
        assert group_fraction("1234567", GroupSize(3, 3), 1, " ") == "123 456 7"

    def test_fraction_mixed_sizes(self):
        """Test fraction grouping with a different first group."""
        assert group_fraction("1234567", GroupSize(3, 2), 1, " ") == "123 45 67"

    def test_apply_grouping(self):
        """Test grouping is applied to both parts of a record."""
        record = DigitRecord("1234567", "1234")
        grouping = Grouping(integer=GroupSize(3, 3), fraction=GroupSize(2, 2))
        apply_grouping(record, grouping, 1, ",")
        assert (record.integer, record.fraction) == ("1,234,567", "12,34")
