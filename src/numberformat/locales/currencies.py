"""Currency Metadata.

Digits and rounding follow CLDR ``supplementalData`` currency data; symbols
and display names cover the locales in :mod:`numberformat.locales.data`.

Usage:
    registry = CurrencyRegistry()
    chf = registry.currency_for("CHF")
    chf.digits_for(cash=True)  # (2, 5): round cash amounts to 0.05
"""

from __future__ import annotations

import logging
from dataclasses import replace

from numberformat.exceptions import UnknownCurrencyError
from numberformat.protocols import Currency, LocaleInfo, PluralCategory

logger = logging.getLogger(__name__)


def _names(one: str, other: str | None = None, **extra: str) -> dict[PluralCategory, str]:
    names = {PluralCategory.ONE: one, PluralCategory.OTHER: other or one}
    names.update({PluralCategory(category): name for category, name in extra.items()})
    return names


# Root data: international symbol, narrow symbol, digits and rounding.
_CURRENCIES: dict[str, Currency] = {
    c.code: c
    for c in [
        Currency("USD", "US$", "$", display_names=_names("US dollar", "US dollars")),
        Currency("EUR", "€", "€", display_names=_names("euro", "euros")),
        Currency("GBP", "£", "£", display_names=_names("British pound", "British pounds")),
        Currency("JPY", "JP¥", "¥", digits=0, display_names=_names("Japanese yen")),
        Currency("CNY", "CN¥", "¥", display_names=_names("Chinese yuan")),
        Currency("KRW", "₩", "₩", digits=0, display_names=_names("South Korean won")),
        Currency("INR", "₹", "₹", display_names=_names("Indian rupee", "Indian rupees")),
        Currency(
            "CHF", "CHF", None, cash_digits=2, cash_rounding=5,
            display_names=_names("Swiss franc", "Swiss francs"),
        ),
        Currency("CAD", "CA$", "$", cash_rounding=5, display_names=_names("Canadian dollar", "Canadian dollars")),
        Currency("AUD", "A$", "$", display_names=_names("Australian dollar", "Australian dollars")),
        Currency("BRL", "R$", "R$", display_names=_names("Brazilian real", "Brazilian reals")),
        Currency("RUB", "RUB", "₽", display_names=_names("Russian ruble", "Russian rubles")),
        Currency("PLN", "PLN", "zł", display_names=_names("Polish zloty", "Polish zlotys")),
        Currency("SEK", "SEK", "kr", cash_digits=0, cash_rounding=0, display_names=_names("Swedish krona", "Swedish kronor")),
        Currency("NOK", "NOK", "kr", cash_digits=0, cash_rounding=0, display_names=_names("Norwegian krone", "Norwegian kroner")),
        Currency("DKK", "DKK", "kr", cash_rounding=50, display_names=_names("Danish krone", "Danish kroner")),
        Currency("CZK", "CZK", "Kč", cash_digits=0, cash_rounding=0, display_names=_names("Czech koruna", "Czech korunas")),
        Currency("HUF", "HUF", "Ft", cash_digits=0, cash_rounding=0, display_names=_names("Hungarian forint", "Hungarian forints")),
        Currency("TRY", "TRY", "₺", display_names=_names("Turkish lira", "Turkish Lira")),
        Currency("THB", "THB", "฿", display_names=_names("Thai baht")),
        Currency("ILS", "₪", "₪", display_names=_names("Israeli new shekel", "Israeli new shekels")),
        Currency("SAR", "SAR", None, display_names=_names("Saudi riyal", "Saudi riyals")),
        Currency("AED", "AED", None, display_names=_names("UAE dirham", "UAE dirhams")),
        Currency("MXN", "MX$", "$", display_names=_names("Mexican peso", "Mexican pesos")),
        Currency("ZAR", "ZAR", "R", display_names=_names("South African rand")),
        Currency("SGD", "SGD", "$", display_names=_names("Singapore dollar", "Singapore dollars")),
        Currency("HKD", "HK$", "$", display_names=_names("Hong Kong dollar", "Hong Kong dollars")),
        Currency("NZD", "NZ$", "$", display_names=_names("New Zealand dollar", "New Zealand dollars")),
        Currency("TWD", "NT$", "$", cash_digits=0, cash_rounding=0, display_names=_names("New Taiwan dollar", "New Taiwan dollars")),
        Currency("IDR", "IDR", "Rp", cash_digits=0, cash_rounding=0, display_names=_names("Indonesian rupiah")),
        Currency("CLP", "CLP", "$", digits=0, display_names=_names("Chilean peso", "Chilean pesos")),
        Currency("ISK", "ISK", "kr", digits=0, display_names=_names("Icelandic króna", "Icelandic krónur")),
        Currency("KWD", "KWD", None, digits=3, display_names=_names("Kuwaiti dinar", "Kuwaiti dinars")),
        Currency("BHD", "BHD", None, digits=3, display_names=_names("Bahraini dinar", "Bahraini dinars")),
    ]
}

# Locale-specific symbols: {locale key: {code: (symbol, narrow or None)}}.
_LOCALE_SYMBOLS: dict[str, dict[str, tuple[str, str | None]]] = {
    "en": {"USD": ("$", "$"), "JPY": ("¥", "¥")},
    "en_IN": {"USD": ("$", "$"), "JPY": ("JP¥", "¥")},
    "fr": {"USD": ("$US", "$"), "CAD": ("$CA", "$"), "AUD": ("$AU", "$")},
    "de_CH": {"EUR": ("€", "€")},
    "ja": {"JPY": ("￥", "￥"), "CNY": ("元", "￥"), "USD": ("$", "$")},
    "zh": {"CNY": ("¥", "¥"), "USD": ("US$", "$")},
    "ko": {"USD": ("US$", "$")},
    "ru": {"RUB": ("₽", "₽"), "USD": ("$", "$")},
    "pl": {"PLN": ("zł", "zł")},
    "sv": {"SEK": ("kr", "kr")},
    "tr": {"TRY": ("₺", "₺")},
    "th": {"THB": ("฿", "฿"), "USD": ("US$", "$")},
    "hi": {"USD": ("$", "$")},
    "pt": {"BRL": ("R$", "R$"), "USD": ("US$", "$")},
    "ar": {"SAR": ("ر.س.‏", None), "AED": ("د.إ.‏", None)},
    "he": {"USD": ("‏$", "$")},
}

# Locale-specific plural display names.
_LOCALE_NAMES: dict[str, dict[str, dict[PluralCategory, str]]] = {
    "de": {
        "EUR": _names("Euro"),
        "USD": _names("US-Dollar"),
        "CHF": _names("Schweizer Franken"),
        "GBP": _names("Britisches Pfund", "Britische Pfund"),
    },
    "fr": {
        "EUR": _names("euro", "euros"),
        "USD": _names("dollar des États-Unis", "dollars des États-Unis"),
        "CHF": _names("franc suisse", "francs suisses"),
    },
    "es": {
        "EUR": _names("euro", "euros"),
        "USD": _names("dólar estadounidense", "dólares estadounidenses"),
    },
    "ru": {
        "RUB": _names("российский рубль", "российского рубля", few="российских рубля", many="российских рублей"),
        "USD": _names("доллар США", "доллара США", few="доллара США", many="долларов США"),
        "EUR": _names("евро"),
    },
    "pl": {
        "PLN": _names("złoty polski", "złotego polskiego", few="złote polskie", many="złotych polskich"),
        "EUR": _names("euro"),
    },
    "ja": {"JPY": _names("円"), "USD": _names("米ドル")},
    "zh": {"CNY": _names("人民币"), "USD": _names("美元")},
    "ko": {"KRW": _names("대한민국 원"), "USD": _names("미국 달러")},
}


class CurrencyRegistry:
    """Default :class:`~numberformat.protocols.CurrencyProvider`.

    Example:
        registry = CurrencyRegistry()
        registry.currency_for("USD", LocaleInfo.parse("en")).symbol  # "$"
        registry.currency_for("USD").symbol                          # "US$"
    """

    def __init__(self) -> None:
        self._currencies: dict[str, Currency] = dict(_CURRENCIES)

    def register(self, currency: Currency) -> None:
        """Add or replace a currency definition."""
        self._currencies[currency.code.upper()] = currency
        logger.debug("Registered currency %s", currency.code)

    def known_codes(self) -> list[str]:
        return sorted(self._currencies)

    def currency_for(self, code: str, locale: LocaleInfo | None = None) -> Currency:
        """Get currency data, localized for ``locale`` when given.

        Raises:
            UnknownCurrencyError: If the code is not registered.
        """
        key = code.upper()
        currency = self._currencies.get(key)
        if currency is None:
            raise UnknownCurrencyError(code)
        if locale is None:
            return currency
        return self._localize(currency, locale)

    def _localize(self, currency: Currency, locale: LocaleInfo) -> Currency:
        changes: dict = {}
        for key in locale.lookup_keys:
            symbols = _LOCALE_SYMBOLS.get(key, {})
            if currency.code in symbols:
                symbol, narrow = symbols[currency.code]
                changes["symbol"] = symbol
                changes["narrow_symbol"] = narrow or currency.narrow_symbol
                break
        for key in locale.lookup_keys:
            names = _LOCALE_NAMES.get(key, {})
            if currency.code in names:
                changes["display_names"] = names[currency.code]
                break
        return replace(currency, **changes) if changes else currency
