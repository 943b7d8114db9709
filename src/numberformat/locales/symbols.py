"""Default symbol, format and grouping providers backed by the locale table."""

from __future__ import annotations

from typing import Mapping

from numberformat.exceptions import InvalidFormatStyleError, UnknownNumberSystemError
from numberformat.locales.data import get_locale_data
from numberformat.locales.transliterate import NUMBER_SYSTEM_DIGITS
from numberformat.protocols import LocaleInfo, NumberSymbols, PluralCategory


class LocaleSymbols:
    """Default :class:`~numberformat.protocols.SymbolProvider`.

    Numeric systems the locale has no dedicated symbols for (``deva`` in
    ``en``, for example) borrow the symbols of the locale's default system.
    """

    def symbols_for(self, locale: LocaleInfo, number_system: str) -> NumberSymbols:
        data = get_locale_data(locale)
        symbols = data.symbols.get(number_system)
        if symbols is not None:
            return symbols
        if number_system not in NUMBER_SYSTEM_DIGITS:
            raise UnknownNumberSystemError(number_system, locale.tag)
        return data.symbols[data.default_number_system]


class LocaleFormats:
    """Default format and grouping provider.

    Implements both :class:`~numberformat.protocols.FormatProvider` and
    :class:`~numberformat.protocols.GroupingProvider`.
    """

    def default_number_system(self, locale: LocaleInfo) -> str:
        return get_locale_data(locale).default_number_system

    def native_number_system(self, locale: LocaleInfo) -> str:
        return get_locale_data(locale).native_number_system

    def pattern_for(self, locale: LocaleInfo, number_system: str, style: str) -> str:
        data = get_locale_data(locale)
        overrides = data.system_formats.get(number_system, {})
        pattern = overrides.get(style) or data.formats.get(style)
        if pattern is None:
            raise InvalidFormatStyleError(style, locale.tag)
        return pattern

    def compact_patterns_for(
        self, locale: LocaleInfo, style: str
    ) -> Mapping[int, Mapping[PluralCategory, str]]:
        data = get_locale_data(locale)
        if style == "short":
            return data.short
        if style == "long":
            # Locales without long names fall back to their short forms, as CLDR does.
            return data.long or data.short
        raise InvalidFormatStyleError(style, locale.tag)

    def min_grouping_digits_for(self, locale: LocaleInfo) -> int:
        return get_locale_data(locale).min_grouping_digits
