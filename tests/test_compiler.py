"""Tests for the decimal format pattern compiler.

This test suite covers:
- Digit counts and grouping sizes
- Rounding increments and multipliers
- Positive and negative templates
- Scientific, significant-digit and padded patterns
- Malformed pattern errors
"""

from decimal import Decimal

import pytest

from numberformat.exceptions import PatternCompileError
from numberformat.patterns.compiler import (
    DigitRange,
    ExponentSpec,
    GroupSize,
    Padding,
    Token,
    TokenKind,
    compile_pattern,
)


class TestDigitCounts:
    """Test integer and fraction digit bounds."""

    def test_standard_decimal(self):
        """Test the common #,##0.### pattern."""
        meta = compile_pattern("#,##0.###")
        assert meta.integer_digits == DigitRange(1, None)
        assert meta.fractional_digits == DigitRange(0, 3)

    def test_required_fraction_digits(self):
        """Test required fraction digits set the minimum."""
        meta = compile_pattern("0.00##")
        assert meta.fractional_digits == DigitRange(2, 4)

    def test_required_integer_digits(self):
        """Test leading zeros set the minimum integer digits."""
        meta = compile_pattern("00000")
        assert meta.integer_digits == DigitRange(5, None)
        assert meta.fractional_digits == DigitRange(0, 0)

    def test_optional_integer_only(self):
        """Test a pattern without required digits."""
        meta = compile_pattern("#.##")
        assert meta.integer_digits.min == 0

    def test_invalid_range_rejected(self):
        """Test DigitRange enforces min <= max."""
        with pytest.raises(ValueError):
            DigitRange(3, 2)


class TestGrouping:
    """Test group size extraction."""

    def test_thousands(self):
        """Test uniform three-digit grouping."""
        assert compile_pattern("#,##0").grouping.integer == GroupSize(3, 3)

    def test_indian(self):
        """Test primary 3, secondary 2 grouping."""
        assert compile_pattern("#,##,##0.###").grouping.integer == GroupSize(3, 2)

    def test_no_grouping(self):
        """Test patterns without separators have no grouping."""
        meta = compile_pattern("0.00")
        assert meta.grouping.integer is None
        assert meta.grouping.fraction is None

    def test_fraction_grouping(self):
        """Test grouping separators in the fraction part."""
        assert compile_pattern("0.000,000").grouping.fraction == GroupSize(3, 3)


class TestMultiplierAndIncrement:
    """Test percent, per mille and rounding increments."""

    def test_plain_multiplier(self):
        """Test the multiplier defaults to 1."""
        assert compile_pattern("#,##0").multiplier == Decimal(1)

    def test_percent(self):
        """Test percent multiplies by 100."""
        meta = compile_pattern("#,##0%")
        assert meta.multiplier == Decimal(100)
        assert meta.templates.positive[-1] == Token(TokenKind.PERCENT)

    def test_permille(self):
        """Test per mille multiplies by 1000."""
        assert compile_pattern("#,##0‰").multiplier == Decimal(1000)

    def test_increment_from_fraction(self):
        """Test non-zero digits set a rounding increment."""
        assert compile_pattern("#,##0.05").rounding_increment == Decimal("0.05")

    def test_increment_from_integer(self):
        """Test an integer increment."""
        assert compile_pattern("#,##5").rounding_increment == Decimal(5)

    def test_no_increment(self):
        """Test zeros alone do not set an increment."""
        assert compile_pattern("#,##0.00").rounding_increment == 0

    def test_percent_and_permille_rejected(self):
        """Test mixing percent and per mille is an error."""
        with pytest.raises(PatternCompileError):
            compile_pattern("#%‰")


class TestTemplates:
    """Test positive and negative token templates."""

    def test_default_negative_prefixes_minus(self):
        """Test the implicit negative template is minus + positive."""
        meta = compile_pattern("#,##0.00")
        assert meta.templates.negative[0] == Token(TokenKind.MINUS)
        assert meta.templates.negative[1:] == meta.templates.positive

    def test_explicit_negative(self):
        """Test an accounting negative sub-pattern."""
        meta = compile_pattern("#,##0.00;(#,##0.00)")
        kinds = [token.kind for token in meta.templates.negative]
        assert kinds == [TokenKind.LITERAL, TokenKind.NUMBER, TokenKind.LITERAL]
        assert meta.templates.negative[0].value == "("

    def test_negative_uses_positive_number(self):
        """Test the negative sub-pattern only contributes affixes."""
        meta = compile_pattern("0.00;(#)")
        number = [t for t in meta.templates.negative if t.kind is TokenKind.NUMBER][0]
        assert number.value == "0.00"
        assert meta.fractional_digits == DigitRange(2, 2)

    def test_exactly_one_number_token(self):
        """Test each template has exactly one number token."""
        meta = compile_pattern("¤#,##0.00;(¤#,##0.00)")
        for template in (meta.templates.positive, meta.templates.negative):
            assert sum(1 for t in template if t.kind is TokenKind.NUMBER) == 1

    @pytest.mark.parametrize("pattern,width", [
        ("¤#,##0.00", 1),
        ("¤¤ #,##0.00", 2),
        ("#,##0.00 ¤¤¤", 3),
        ("¤¤¤¤¤#,##0.00", 5),
    ])
    def test_currency_widths(self, pattern, width):
        """Test currency placeholder widths."""
        meta = compile_pattern(pattern)
        currency = [t for t in meta.templates.positive if t.kind is TokenKind.CURRENCY]
        assert currency[0].width == width
        assert meta.has_currency

    def test_quoted_literal(self):
        """Test quoted text becomes a quoted token."""
        meta = compile_pattern("0 'Tsd.'")
        assert meta.templates.positive[-1] == Token(TokenKind.QUOTED, "Tsd.")

    def test_escaped_quote(self):
        """Test '' produces a single quote."""
        meta = compile_pattern("0''")
        assert meta.templates.positive[-1] == Token(TokenKind.QUOTED, "'")

    def test_quote_inside_quoted_text(self):
        """Test '' inside a quoted run."""
        meta = compile_pattern("'o''clock' 0")
        assert meta.templates.positive[0] == Token(TokenKind.QUOTED, "o'clock")

    def test_special_characters_quoted(self):
        """Test quoting allows number characters as literal text."""
        meta = compile_pattern("'#'0")
        assert meta.templates.positive[0] == Token(TokenKind.QUOTED, "#")
        assert meta.integer_digits.min == 1

    def test_plus_sign_placeholder(self):
        """Test + is a plus sign token."""
        meta = compile_pattern("+0;-0")
        assert meta.templates.positive[0] == Token(TokenKind.PLUS)
        assert meta.templates.negative[0] == Token(TokenKind.MINUS)


class TestScientificAndSignificant:
    """Test exponent and @ patterns."""

    def test_scientific(self):
        """Test a basic scientific pattern."""
        meta = compile_pattern("0.###E0")
        assert meta.is_scientific
        assert meta.exponent == ExponentSpec(min_digits=1, show_plus=False)
        assert meta.integer_digits == DigitRange(1, 1)

    def test_engineering(self):
        """Test maximum integer digits are kept for engineering notation."""
        meta = compile_pattern("##0.####E0")
        assert meta.integer_digits == DigitRange(1, 3)
        assert meta.fractional_digits == DigitRange(0, 4)

    def test_exponent_plus_and_digits(self):
        """Test E+00 sets the plus flag and minimum exponent digits."""
        meta = compile_pattern("0.00E+00")
        assert meta.exponent == ExponentSpec(min_digits=2, show_plus=True)

    def test_exponent_without_digits_rejected(self):
        """Test E must be followed by at least one 0."""
        with pytest.raises(PatternCompileError):
            compile_pattern("0.0E")

    def test_grouping_in_mantissa_rejected(self):
        """Test grouping separators are not allowed in scientific patterns."""
        with pytest.raises(PatternCompileError) as exc_info:
            compile_pattern("#,##0.0E0")
        assert exc_info.value.fragment == "#,##0.0"

    def test_significant_digits(self):
        """Test @ sets significant digit bounds."""
        meta = compile_pattern("@@##")
        assert meta.significant_digits == DigitRange(2, 4)

    def test_significant_digits_exact(self):
        """Test @@@ sets min = max = 3."""
        assert compile_pattern("@@@").significant_digits == DigitRange(3, 3)

    @pytest.mark.parametrize("pattern", ["@0", "@.@", "@#@"])
    def test_bad_significant_patterns(self, pattern):
        """Test invalid @ patterns."""
        with pytest.raises(PatternCompileError):
            compile_pattern(pattern)


class TestPadding:
    """Test pad specifications."""

    def test_padding(self):
        """Test pad length excludes the two pad characters."""
        meta = compile_pattern("*x#,##0.00")
        assert meta.padding == Padding(length=8, char="x")
        assert meta.templates.positive[0] == Token(TokenKind.PAD, "x")

    def test_no_padding(self):
        """Test patterns without * have no padding."""
        assert compile_pattern("0").padding.length == 0

    def test_two_pads_rejected(self):
        """Test at most one pad marker per sub-pattern."""
        with pytest.raises(PatternCompileError):
            compile_pattern("*x0*y")

    def test_dangling_pad_rejected(self):
        """Test * needs a pad character."""
        with pytest.raises(PatternCompileError):
            compile_pattern("0*")


class TestErrors:
    """Test malformed pattern errors."""

    @pytest.mark.parametrize("pattern,fragment", [
        ("'abc", "'abc"),
        ("0.0.0", "0.0.0"),
        ("#,##0,.00", "#,##0,"),
        ("0;0;0", "0"),
        ("¤¤¤¤0", "¤¤¤¤"),
        ("0#.##", "0#"),
        ("0.#0", "#0"),
    ])
    def test_error_carries_fragment(self, pattern, fragment):
        """Test errors carry the pattern and the offending substring."""
        with pytest.raises(PatternCompileError) as exc_info:
            compile_pattern(pattern)
        assert exc_info.value.pattern == pattern
        assert exc_info.value.fragment == fragment

    def test_no_number(self):
        """Test a pattern without digits."""
        with pytest.raises(PatternCompileError):
            compile_pattern("abc")

    def test_two_numbers(self):
        """Test two number parts in one sub-pattern."""
        with pytest.raises(PatternCompileError):
            compile_pattern("0 abc 0")

    def test_empty(self):
        """Test the empty pattern."""
        with pytest.raises(PatternCompileError):
            compile_pattern("")

    def test_negative_without_number(self):
        """Test the negative sub-pattern must have a number."""
        with pytest.raises(PatternCompileError):
            compile_pattern("0;abc")

    def test_deterministic(self):
        """Test compilation is a pure function of the pattern."""
        assert compile_pattern("#,##0.00;(#,##0.00)") == compile_pattern("#,##0.00;(#,##0.00)")
