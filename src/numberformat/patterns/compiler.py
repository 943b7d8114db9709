"""Decimal Format Pattern Compiler.

Compiles a CLDR decimal format pattern (Unicode TR35, "Number Patterns")
into immutable :class:`PatternMetadata`. Compilation is a pure function of
the pattern string, so compiled metadata can be shared freely and cached.

Pattern syntax:

    ====== ==================================================
    0      Required digit
    1-9    Required digit, also sets a rounding increment
    #      Optional digit
    @      Significant digit
    ,      Grouping separator
    .      Decimal separator
    E, E+  Exponent marker (scientific notation)
    %      Percent (multiplies by 100)
    ‰      Per mille (multiplies by 1000)
    ¤      Currency placeholder, repeated 1, 2, 3 or 5 times
    -, +   Localized minus and plus signs
    *x     Pad to the pattern width with character ``x``
    ' '    Quoted literal text, ``''`` for a single quote
    ;      Separates the positive and negative sub-patterns
    ====== ==================================================

Example:
    >>> meta = compile_pattern("#,##0.00;(#,##0.00)")
    >>> meta.fractional_digits
    DigitRange(min=2, max=2)
    >>> meta.grouping.integer
    GroupSize(first=3, rest=3)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum

from numberformat.exceptions import PatternCompileError

logger = logging.getLogger(__name__)


CURRENCY_SIGN = "¤"
PERMILLE_SIGN = "‰"
QUOTE = "'"
PAD_ESCAPE = "*"
SUBPATTERN_SEPARATOR = ";"

NUMBER_CHARS = frozenset("0123456789#,.@")
CURRENCY_WIDTHS = frozenset({1, 2, 3, 5})

_INTEGER_DIGITS = re.compile(r"^#*[0-9]*$")
_FRACTION_DIGITS = re.compile(r"^[0-9]*#*$")
_SIGNIFICANT_DIGITS = re.compile(r"^#*@+#*$")


# =============================================================================
# Metadata Types
# =============================================================================


class TokenKind(str, Enum):
    """Kinds of template token."""

    LITERAL = "literal"
    QUOTED = "quoted"
    PLUS = "plus"
    MINUS = "minus"
    CURRENCY = "currency"
    PERCENT = "percent"
    PERMILLE = "permille"
    NUMBER = "number"
    PAD = "pad"


@dataclass(frozen=True)
class Token:
    """One element of a positive or negative template.

    Attributes:
        kind: Token kind.
        value: Literal text, quoted text, pad character or the number pattern.
        width: Number of ``¤`` characters for currency tokens.
    """

    kind: TokenKind
    value: str = ""
    width: int = 0


@dataclass(frozen=True)
class DigitRange:
    """Minimum and maximum digit counts. ``max`` of None means unbounded."""

    min: int = 0
    max: int | None = None

    def __post_init__(self) -> None:
        if self.min < 0 or (self.max is not None and self.min > self.max):
            raise ValueError(f"Invalid digit range: min={self.min}, max={self.max}")


@dataclass(frozen=True)
class GroupSize:
    """Primary (``first``) and secondary (``rest``) group sizes."""

    first: int
    rest: int


@dataclass(frozen=True)
class Grouping:
    integer: GroupSize | None = None
    fraction: GroupSize | None = None


@dataclass(frozen=True)
class Padding:
    """Pad the formatted string to ``length`` characters with ``char``."""

    length: int = 0
    char: str = " "


@dataclass(frozen=True)
class ExponentSpec:
    min_digits: int = 1
    show_plus: bool = False


@dataclass(frozen=True)
class Templates:
    positive: tuple[Token, ...]
    negative: tuple[Token, ...]

    def for_sign(self, negative: bool) -> tuple[Token, ...]:
        return self.negative if negative else self.positive


@dataclass(frozen=True)
class PatternMetadata:
    """Compiled form of a decimal format pattern.

    Attributes:
        pattern: The source pattern.
        multiplier: 1, 100 for percent or 1000 for per mille.
        rounding_increment: Zero unless the pattern has digits 1-9.
        integer_digits: Integer digit bounds. ``max`` is only set for
            scientific patterns (or by an option override).
        fractional_digits: Fraction digit bounds.
        significant_digits: Significant digit bounds for ``@`` patterns.
        exponent: Exponent settings for scientific patterns.
        grouping: Group sizes for the integer and fraction parts.
        padding: Pad width and character.
        templates: Positive and negative token templates.
    """

    pattern: str
    multiplier: Decimal
    rounding_increment: Decimal
    integer_digits: DigitRange
    fractional_digits: DigitRange
    grouping: Grouping
    padding: Padding
    templates: Templates
    significant_digits: DigitRange | None = None
    exponent: ExponentSpec | None = None

    @property
    def is_scientific(self) -> bool:
        return self.exponent is not None

    @property
    def has_currency(self) -> bool:
        return any(
            token.kind is TokenKind.CURRENCY
            for token in self.templates.positive + self.templates.negative
        )

    def with_digit_bounds(
        self,
        *,
        minimum_integer_digits: int | None = None,
        maximum_integer_digits: int | None = None,
        minimum_fraction_digits: int | None = None,
        maximum_fraction_digits: int | None = None,
    ) -> "PatternMetadata":
        """Return a copy with digit bounds overridden.

        Setting only one side of a range moves the other side when needed
        to keep ``min <= max``.
        """
        integer = _override_range(
            self.integer_digits, minimum_integer_digits, maximum_integer_digits
        )
        fraction = _override_range(
            self.fractional_digits, minimum_fraction_digits, maximum_fraction_digits
        )
        return replace(self, integer_digits=integer, fractional_digits=fraction)


def _override_range(current: DigitRange, low: int | None, high: int | None) -> DigitRange:
    new_min = current.min if low is None else low
    new_max = current.max if high is None else high
    if new_max is not None and new_min > new_max:
        if low is not None and high is None:
            new_max = new_min
        else:
            new_min = new_max
    return DigitRange(new_min, new_max)


# =============================================================================
# Scanner
# =============================================================================


@dataclass
class _SubPattern:
    start: int
    text: str = ""
    tokens: list[Token] = field(default_factory=list)
    number: str | None = None
    pad_count: int = 0


class _Scanner:
    """Splits a pattern into sub-patterns of tokens in one left-to-right pass."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.pos = 0
        self.subpatterns: list[_SubPattern] = []
        self._current = _SubPattern(start=0)
        self._literal: list[str] = []

    def scan(self) -> list[_SubPattern]:
        pattern = self.pattern
        while self.pos < len(pattern):
            char = pattern[self.pos]
            if char == QUOTE:
                self._scan_quote()
            elif char == SUBPATTERN_SEPARATOR:
                self._end_subpattern()
                self.pos += 1
                self._current = _SubPattern(start=self.pos)
            elif char == PAD_ESCAPE:
                self._scan_pad()
            elif char == CURRENCY_SIGN:
                self._scan_currency()
            elif char in _SYMBOL_TOKENS:
                self._emit(Token(_SYMBOL_TOKENS[char]))
                self.pos += 1
            elif char in NUMBER_CHARS:
                self._scan_number()
            else:
                self._literal.append(char)
                self.pos += 1
        self._end_subpattern()
        return self.subpatterns

    def _error(self, fragment: str, reason: str) -> PatternCompileError:
        return PatternCompileError(self.pattern, fragment, reason)

    def _emit(self, token: Token) -> None:
        self._flush_literal()
        self._current.tokens.append(token)

    def _flush_literal(self) -> None:
        if self._literal:
            self._current.tokens.append(Token(TokenKind.LITERAL, "".join(self._literal)))
            self._literal.clear()

    def _end_subpattern(self) -> None:
        self._flush_literal()
        self._current.text = self.pattern[self._current.start : self.pos]
        self.subpatterns.append(self._current)

    def _scan_quote(self) -> None:
        pattern = self.pattern
        start = self.pos
        if pattern.startswith(QUOTE * 2, start):
            self._emit(Token(TokenKind.QUOTED, QUOTE))
            self.pos += 2
            return

        chars: list[str] = []
        index = start + 1
        while True:
            if index >= len(pattern):
                raise self._error(pattern[start:], "unterminated quote")
            if pattern[index] == QUOTE:
                if pattern.startswith(QUOTE * 2, index):
                    chars.append(QUOTE)
                    index += 2
                    continue
                break
            chars.append(pattern[index])
            index += 1
        self._emit(Token(TokenKind.QUOTED, "".join(chars)))
        self.pos = index + 1

    def _scan_pad(self) -> None:
        if self.pos + 1 >= len(self.pattern):
            raise self._error(PAD_ESCAPE, "pad marker without a pad character")
        if self._current.pad_count:
            raise self._error(self.pattern[self.pos : self.pos + 2], "more than one pad marker")
        self._current.pad_count += 1
        self._emit(Token(TokenKind.PAD, self.pattern[self.pos + 1]))
        self.pos += 2

    def _scan_currency(self) -> None:
        start = self.pos
        while self.pos < len(self.pattern) and self.pattern[self.pos] == CURRENCY_SIGN:
            self.pos += 1
        width = self.pos - start
        if width not in CURRENCY_WIDTHS:
            raise self._error(self.pattern[start : self.pos], "currency placeholder must repeat 1, 2, 3 or 5 times")
        self._emit(Token(TokenKind.CURRENCY, CURRENCY_SIGN * width, width))

    def _scan_number(self) -> None:
        pattern = self.pattern
        start = self.pos
        while self.pos < len(pattern) and pattern[self.pos] in NUMBER_CHARS:
            self.pos += 1

        if self.pos < len(pattern) and pattern[self.pos] == "E":
            self.pos += 1
            if self.pos < len(pattern) and pattern[self.pos] == "+":
                self.pos += 1
            digits_start = self.pos
            while self.pos < len(pattern) and pattern[self.pos] == "0":
                self.pos += 1
            if self.pos == digits_start:
                raise self._error(pattern[start : self.pos + 1], "exponent requires at least one '0'")

        text = pattern[start : self.pos]
        if self._current.number is not None:
            raise self._error(text, "more than one number in a sub-pattern")
        self._current.number = text
        self._emit(Token(TokenKind.NUMBER, text))


_SYMBOL_TOKENS = {
    "%": TokenKind.PERCENT,
    PERMILLE_SIGN: TokenKind.PERMILLE,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
}


# =============================================================================
# Number Part Analysis
# =============================================================================


@dataclass(frozen=True)
class _NumberSpec:
    integer_digits: DigitRange
    fractional_digits: DigitRange
    significant_digits: DigitRange | None
    exponent: ExponentSpec | None
    grouping: Grouping
    rounding_increment: Decimal


def _analyze_number(pattern: str, number: str) -> _NumberSpec:
    def error(fragment: str, reason: str) -> PatternCompileError:
        return PatternCompileError(pattern, fragment, reason)

    mantissa, _, exponent_text = number.partition("E")
    exponent = None
    if "E" in number:
        exponent = ExponentSpec(
            min_digits=len(exponent_text.lstrip("+")),
            show_plus=exponent_text.startswith("+"),
        )
        if "," in mantissa:
            raise error(mantissa, "grouping separators are not allowed in a scientific mantissa")

    if not any(char in "0123456789#@" for char in mantissa):
        raise error(number, "number part has no digits")

    if "@" in mantissa:
        return _analyze_significant(pattern, mantissa, exponent)

    if mantissa.count(".") > 1:
        raise error(mantissa, "more than one decimal separator")
    integer_part, dot, fraction_part = mantissa.partition(".")

    if integer_part.startswith(",") or integer_part.endswith(","):
        raise error(integer_part, "grouping separator must be between digits")
    if ",," in mantissa:
        raise error(mantissa, "empty group between grouping separators")
    if fraction_part.startswith(",") or fraction_part.endswith(","):
        raise error(fraction_part, "grouping separator must be between digits")

    integer_digits = integer_part.replace(",", "")
    fraction_digits = fraction_part.replace(",", "")
    if not _INTEGER_DIGITS.match(integer_digits):
        raise error(integer_part, "'#' may not follow a required digit in the integer part")
    if not _FRACTION_DIGITS.match(fraction_digits):
        raise error(fraction_part, "'#' may not precede a required digit in the fraction part")

    min_integer = len(integer_digits.lstrip("#"))
    max_integer = len(integer_digits) if exponent is not None else None
    min_fraction = len(fraction_digits.rstrip("#"))
    max_fraction = len(fraction_digits)

    return _NumberSpec(
        integer_digits=DigitRange(min_integer, max_integer),
        fractional_digits=DigitRange(min_fraction, max_fraction),
        significant_digits=None,
        exponent=exponent,
        grouping=Grouping(
            integer=_integer_grouping(integer_part),
            fraction=_fraction_grouping(fraction_part),
        ),
        rounding_increment=_rounding_increment(integer_digits, fraction_digits if dot else ""),
    )


def _analyze_significant(pattern: str, mantissa: str, exponent: ExponentSpec | None) -> _NumberSpec:
    if "." in mantissa or "0" in mantissa:
        raise PatternCompileError(pattern, mantissa, "'@' cannot be combined with '0' or '.'")
    digits = mantissa.replace(",", "")
    if not _SIGNIFICANT_DIGITS.match(digits):
        raise PatternCompileError(pattern, mantissa, "'#' may not appear between '@' characters")
    if mantissa.startswith(",") or mantissa.endswith(","):
        raise PatternCompileError(pattern, mantissa, "grouping separator must be between digits")

    significant = digits.lstrip("#")
    minimum = significant.count("@")
    return _NumberSpec(
        integer_digits=DigitRange(1, 1 if exponent is not None else None),
        fractional_digits=DigitRange(0, None),
        significant_digits=DigitRange(minimum, len(significant)),
        exponent=exponent,
        grouping=Grouping(integer=_integer_grouping(mantissa)),
        rounding_increment=Decimal(0),
    )


def _integer_grouping(integer_part: str) -> GroupSize | None:
    groups = integer_part.split(",")
    if len(groups) < 2:
        return None
    first = len(groups[-1])
    rest = len(groups[-2]) if len(groups) > 2 else first
    return GroupSize(first, rest)


def _fraction_grouping(fraction_part: str) -> GroupSize | None:
    groups = fraction_part.split(",")
    if len(groups) < 2:
        return None
    first = len(groups[0])
    rest = len(groups[1]) if len(groups) > 2 else first
    return GroupSize(first, rest)


def _rounding_increment(integer_digits: str, fraction_digits: str) -> Decimal:
    if not any(char in "123456789" for char in integer_digits + fraction_digits):
        return Decimal(0)
    integer = integer_digits.replace("#", "") or "0"
    fraction = fraction_digits.replace("#", "")
    return Decimal(f"{integer}.{fraction}" if fraction else integer)


# =============================================================================
# Compiler
# =============================================================================


def compile_pattern(pattern: str) -> PatternMetadata:
    """Compile a decimal format pattern into metadata.

    Args:
        pattern: CLDR decimal format pattern such as ``"#,##0.###"``.

    Returns:
        Immutable pattern metadata.

    Raises:
        PatternCompileError: If the pattern is malformed.
    """
    if not isinstance(pattern, str) or not pattern:
        raise PatternCompileError(str(pattern), "", "pattern must be a non-empty string")

    subpatterns = _Scanner(pattern).scan()
    if len(subpatterns) > 2:
        raise PatternCompileError(pattern, subpatterns[2].text, "more than two sub-patterns")

    positive = subpatterns[0]
    if positive.number is None:
        raise PatternCompileError(pattern, positive.text, "positive sub-pattern has no number")
    analysis = _analyze_number(pattern, positive.number)

    positive_tokens = tuple(positive.tokens)
    if len(subpatterns) == 2:
        negative = subpatterns[1]
        if negative.number is None:
            raise PatternCompileError(pattern, negative.text, "negative sub-pattern has no number")
        # The negative sub-pattern only contributes its prefix and suffix.
        negative_tokens = tuple(
            Token(TokenKind.NUMBER, positive.number) if token.kind is TokenKind.NUMBER else token
            for token in negative.tokens
        )
    else:
        negative_tokens = (Token(TokenKind.MINUS),) + positive_tokens

    metadata = PatternMetadata(
        pattern=pattern,
        multiplier=_multiplier(pattern, positive_tokens + negative_tokens),
        rounding_increment=analysis.rounding_increment,
        integer_digits=analysis.integer_digits,
        fractional_digits=analysis.fractional_digits,
        significant_digits=analysis.significant_digits,
        exponent=analysis.exponent,
        grouping=analysis.grouping,
        padding=_padding(positive),
        templates=Templates(positive=positive_tokens, negative=negative_tokens),
    )
    logger.debug("Compiled pattern %r", pattern)
    return metadata


def _multiplier(pattern: str, tokens: tuple[Token, ...]) -> Decimal:
    kinds = {token.kind for token in tokens}
    if TokenKind.PERCENT in kinds and TokenKind.PERMILLE in kinds:
        raise PatternCompileError(pattern, "%" + PERMILLE_SIGN, "pattern mixes percent and per mille")
    if TokenKind.PERCENT in kinds:
        return Decimal(100)
    if TokenKind.PERMILLE in kinds:
        return Decimal(1000)
    return Decimal(1)


def _padding(subpattern: _SubPattern) -> Padding:
    for token in subpattern.tokens:
        if token.kind is TokenKind.PAD:
            # Width counts the pattern characters, minus the two-character pad escape.
            return Padding(length=len(subpattern.text) - 2, char=token.value)
    return Padding()
