"""Collaborator Protocols and Shared Value Types.

The formatting core consults locale data only through the protocols defined
here, so any backend (the built-in tables in :mod:`numberformat.locales`, a
CLDR JSON loader, a database) can be plugged into
:class:`~numberformat.formatter.NumberFormatter`.

Protocols:
- SymbolProvider: decimal/group separators, signs, percent symbols
- CurrencyProvider: currency symbols, digits and rounding
- PluralRuleSelector: CLDR plural category for a number
- Transliterator: ASCII digits to number-system digits
- GroupingProvider: minimum grouping digits
- FormatProvider: standard and compact patterns per style
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping, Protocol, runtime_checkable


# ==============================================================================
# Enums
# ==============================================================================

class PluralCategory(str, Enum):
    """CLDR plural categories.

    Based on Unicode CLDR plural rules:
    https://cldr.unicode.org/index/cldr-spec/plural-rules
    """
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass(frozen=True)
class LocaleInfo:
    """Parsed locale identifier.

    Attributes:
        language: ISO 639 language code (e.g., "en", "ko")
        region: ISO 3166-1 region code (e.g., "US", "IN")
        script: ISO 15924 script code (e.g., "Latn", "Hans")
    """
    language: str
    region: str | None = None
    script: str | None = None

    @property
    def tag(self) -> str:
        """Get BCP 47 style tag (``zh-Hans-CN``)."""
        return "-".join(p for p in (self.language, self.script, self.region) if p)

    @property
    def lookup_keys(self) -> tuple[str, ...]:
        """Keys to try in locale tables, most specific first."""
        keys = []
        if self.region:
            keys.append(f"{self.language}_{self.region}")
        keys.append(self.language)
        return tuple(keys)

    @classmethod
    def parse(cls, tag: "str | LocaleInfo") -> "LocaleInfo":
        """Parse a locale tag.

        Supports formats:
        - Simple: "en", "ko"
        - With region: "en-US", "en_IN"
        - With script: "zh-Hans", "sr-Latn-RS"

        Args:
            tag: Locale tag string (or an already parsed LocaleInfo)

        Returns:
            Parsed LocaleInfo
        """
        if isinstance(tag, LocaleInfo):
            return tag

        parts = tag.strip().replace("_", "-").split("-")
        language = parts[0].lower()
        region = None
        script = None

        for part in parts[1:]:
            if len(part) == 4 and part.isalpha():
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha():
                region = part.upper()
            elif len(part) == 3 and part.isdigit():
                # UN M.49 region code
                region = part

        return cls(language=language, region=region, script=script)

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True)
class NumberSymbols:
    """Locale-specific number symbols for one number system.

    Based on CLDR number symbols data.
    """
    decimal: str = "."
    group: str = ","
    minus_sign: str = "-"
    plus_sign: str = "+"
    percent_sign: str = "%"
    permille: str = "‰"
    exponential: str = "E"
    infinity: str = "∞"
    nan: str = "NaN"


@dataclass(frozen=True)
class Currency:
    """Currency formatting information.

    ``rounding`` and ``cash_rounding`` are expressed in units of the last
    digit, as in CLDR supplemental data: CHF cash rounding is ``5`` with
    ``cash_digits`` 2, meaning increments of 0.05.
    """
    code: str
    symbol: str
    narrow_symbol: str | None = None
    digits: int = 2
    rounding: int = 0
    cash_digits: int | None = None
    cash_rounding: int | None = None
    display_names: Mapping[PluralCategory, str] = field(default_factory=dict)

    @property
    def iso_code(self) -> str:
        return self.code

    def digits_for(self, cash: bool) -> tuple[int, int]:
        """Return ``(digits, rounding)`` for standard or cash usage."""
        if cash:
            digits = self.digits if self.cash_digits is None else self.cash_digits
            rounding = self.rounding if self.cash_rounding is None else self.cash_rounding
            return digits, rounding
        return self.digits, self.rounding

    def display_name(self, category: PluralCategory) -> str:
        """Display name for a plural category, falling back to ``other``."""
        name = self.display_names.get(category)
        if name is None:
            name = self.display_names.get(PluralCategory.OTHER, self.code)
        return name


# ==============================================================================
# Protocols (Interfaces)
# ==============================================================================

@runtime_checkable
class SymbolProvider(Protocol):
    """Number symbols for a locale and number system."""

    def symbols_for(self, locale: LocaleInfo, number_system: str) -> NumberSymbols: ...


@runtime_checkable
class CurrencyProvider(Protocol):
    """Currency metadata lookup.

    Implementations raise :class:`~numberformat.exceptions.UnknownCurrencyError`
    for codes they do not know.
    """

    def currency_for(self, code: str, locale: LocaleInfo | None = None) -> Currency: ...


@runtime_checkable
class PluralRuleSelector(Protocol):
    """CLDR cardinal plural rule selection."""

    def category_for(self, number: int | float | Decimal, locale: LocaleInfo) -> PluralCategory: ...


@runtime_checkable
class Transliterator(Protocol):
    """Maps ASCII digits 0-9 to the digits of a number system."""

    def transliterate(self, text: str, locale: LocaleInfo, number_system: str) -> str: ...


@runtime_checkable
class GroupingProvider(Protocol):
    """Minimum grouping digits for a locale."""

    def min_grouping_digits_for(self, locale: LocaleInfo) -> int: ...


@runtime_checkable
class FormatProvider(Protocol):
    """Decimal format patterns for a locale."""

    def default_number_system(self, locale: LocaleInfo) -> str: ...

    def native_number_system(self, locale: LocaleInfo) -> str: ...

    def pattern_for(self, locale: LocaleInfo, number_system: str, style: str) -> str: ...

    def compact_patterns_for(
        self, locale: LocaleInfo, style: str
    ) -> Mapping[int, Mapping[PluralCategory, str]]: ...
