"""Built-in locale data providers.

Each class implements one of the collaborator protocols in
:mod:`numberformat.protocols` over a small static subset of CLDR data.
"""

from numberformat.locales.currencies import CurrencyRegistry
from numberformat.locales.data import LOCALE_DATA, LocaleData, available_locales, get_locale_data
from numberformat.locales.plural import CLDRPluralRules, PluralOperands
from numberformat.locales.symbols import LocaleFormats, LocaleSymbols
from numberformat.locales.transliterate import NUMBER_SYSTEM_DIGITS, DigitTransliterator

__all__ = [
    "CLDRPluralRules",
    "CurrencyRegistry",
    "DigitTransliterator",
    "LOCALE_DATA",
    "LocaleData",
    "LocaleFormats",
    "LocaleSymbols",
    "NUMBER_SYSTEM_DIGITS",
    "PluralOperands",
    "available_locales",
    "get_locale_data",
]
