"""CLDR Cardinal Plural Rules.

Default :class:`~numberformat.protocols.PluralRuleSelector` used to choose
currency display names (``¤¤¤``) and long compact patterns.

Operands are computed from the exact decimal value of the number, so
``Decimal("1.50")`` keeps its visible trailing zero (``v = 2``).

Usage:
    rules = CLDRPluralRules()
    rules.category_for(1, LocaleInfo.parse("en"))    # ONE
    rules.category_for(5, LocaleInfo.parse("ru"))    # MANY
    rules.category_for(1.5, LocaleInfo.parse("fr"))  # ONE
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from numberformat.protocols import LocaleInfo, PluralCategory


# Type for plural rule function
PluralRuleFunc = Callable[["PluralOperands"], PluralCategory]


@dataclass(frozen=True)
class PluralOperands:
    """CLDR plural operands for a number.

    See: https://unicode.org/reports/tr35/tr35-numbers.html#Operands

    Attributes:
        n: Absolute value of the source number
        i: Integer digits of n
        v: Number of visible fraction digits with trailing zeros
        w: Number of visible fraction digits without trailing zeros
        f: Visible fraction digits with trailing zeros
        t: Visible fraction digits without trailing zeros
    """
    n: Decimal
    i: int
    v: int
    w: int
    f: int
    t: int

    @classmethod
    def from_number(cls, number: int | float | Decimal) -> "PluralOperands":
        """Create operands from a number."""
        if isinstance(number, float):
            number = Decimal(repr(number))
        n = abs(Decimal(number))
        if not n.is_finite():
            return cls(n=n, i=0, v=0, w=0, f=0, t=0)

        text = format(n, "f")
        integer, _, fraction = text.partition(".")
        trimmed = fraction.rstrip("0")
        return cls(
            n=n,
            i=int(integer),
            v=len(fraction),
            w=len(trimmed),
            f=int(fraction) if fraction else 0,
            t=int(trimmed) if trimmed else 0,
        )

    @property
    def is_integer(self) -> bool:
        return self.n == self.n.to_integral_value()


# =============================================================================
# Rule Functions
# =============================================================================


def english_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def french_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 0,1
    # Many: e = 0 and i != 0 and i % 1000000 = 0 and v = 0
    if op.i in (0, 1):
        return PluralCategory.ONE
    if op.v == 0 and op.i % 1_000_000 == 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def portuguese_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 0..1
    if op.i in (0, 1):
        return PluralCategory.ONE
    return PluralCategory.OTHER


def hindi_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 0 or n = 1
    if op.i == 0 or op.n == 1:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def slavic_cardinal(op: PluralOperands) -> PluralCategory:
    # One: v = 0 and i % 10 = 1 and i % 100 != 11
    # Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
    # Many: v = 0 and (i % 10 = 0 or i % 10 = 5..9 or i % 100 = 11..14)
    i10 = op.i % 10
    i100 = op.i % 100
    if op.v == 0 and i10 == 1 and i100 != 11:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not 12 <= i100 <= 14:
        return PluralCategory.FEW
    if op.v == 0 and (i10 == 0 or 5 <= i10 <= 9 or 11 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def polish_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0
    # Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
    # Many: v = 0 and (i != 1 and i % 10 = 0..1 or i % 10 = 5..9 or i % 100 = 12..14)
    i10 = op.i % 10
    i100 = op.i % 100
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not 12 <= i100 <= 14:
        return PluralCategory.FEW
    if op.v == 0 and (op.i != 1 and i10 in (0, 1) or 5 <= i10 <= 9 or 12 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def czech_cardinal(op: PluralOperands) -> PluralCategory:
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if 2 <= op.i <= 4 and op.v == 0:
        return PluralCategory.FEW
    if op.v != 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def arabic_cardinal(op: PluralOperands) -> PluralCategory:
    # Zero: n = 0, One: n = 1, Two: n = 2
    # Few: n % 100 = 3..10, Many: n % 100 = 11..99
    if op.n == 0:
        return PluralCategory.ZERO
    if op.n == 1:
        return PluralCategory.ONE
    if op.n == 2:
        return PluralCategory.TWO
    if op.is_integer:
        n100 = op.i % 100
        if 3 <= n100 <= 10:
            return PluralCategory.FEW
        if 11 <= n100 <= 99:
            return PluralCategory.MANY
    return PluralCategory.OTHER


def hebrew_cardinal(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0 or i = 0 and v != 0
    # Two: i = 2 and v = 0
    if (op.i == 1 and op.v == 0) or (op.i == 0 and op.v != 0):
        return PluralCategory.ONE
    if op.i == 2 and op.v == 0:
        return PluralCategory.TWO
    return PluralCategory.OTHER


def no_plural(op: PluralOperands) -> PluralCategory:
    return PluralCategory.OTHER


_DEFAULT_RULES: dict[str, PluralRuleFunc] = {
    **{
        lang: english_cardinal
        for lang in ("en", "de", "nl", "it", "es", "ca", "da", "nb", "sv", "fi", "et", "hu", "tr", "el")
    },
    "fr": french_cardinal,
    "pt": portuguese_cardinal,
    "pt_PT": english_cardinal,
    "hi": hindi_cardinal,
    "bn": hindi_cardinal,
    **{lang: slavic_cardinal for lang in ("ru", "uk", "be", "sr", "hr", "bs")},
    "pl": polish_cardinal,
    "cs": czech_cardinal,
    "sk": czech_cardinal,
    "ar": arabic_cardinal,
    "he": hebrew_cardinal,
    **{lang: no_plural for lang in ("ja", "ko", "zh", "th", "vi", "id", "ms")},
}


class CLDRPluralRules:
    """CLDR-compliant cardinal plural rule selector.

    Example:
        rules = CLDRPluralRules()
        rules.category_for(1, LocaleInfo.parse("en"))  # ONE
        rules.category_for(2, LocaleInfo.parse("ru"))  # FEW
        rules.category_for(0, LocaleInfo.parse("ar"))  # ZERO
    """

    def __init__(self) -> None:
        self._rules: dict[str, PluralRuleFunc] = dict(_DEFAULT_RULES)

    def register_rule(self, language: str, rule: PluralRuleFunc) -> None:
        """Register a custom cardinal rule for a language or ``lang_REGION`` key."""
        self._rules[language] = rule

    def category_for(self, number: int | float | Decimal, locale: LocaleInfo) -> PluralCategory:
        """Get the plural category for a number.

        Languages without a registered rule get ``OTHER``.
        """
        operands = PluralOperands.from_number(number)
        for key in locale.lookup_keys:
            rule = self._rules.get(key)
            if rule is not None:
                return rule(operands)
        return PluralCategory.OTHER

    def get_supported_languages(self) -> list[str]:
        return sorted(self._rules)
