"""Built-in Locale Data.

A small static subset of CLDR number data: symbols per number system,
standard decimal formats per style, compact (short/long) formats and
minimum grouping digits. The tables back the default providers in
:mod:`numberformat.locales`; larger deployments plug in their own providers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from numberformat.exceptions import UnknownLocaleError
from numberformat.protocols import LocaleInfo, NumberSymbols, PluralCategory

NBSP = "\u00a0"
NNBSP = "\u202f"
LRM = "\u200e"
RLM = "\u200f"
ALM = "\u061c"

CompactPatterns = Mapping[int, Mapping[PluralCategory, str]]


@dataclass(frozen=True)
class LocaleData:
    """Number data for one locale.

    Attributes:
        symbols: Number symbols keyed by number system id.
        formats: Decimal format pattern per style name.
        default_number_system: System used for ``number_system="default"``.
        native_number_system: System used for ``number_system="native"``.
        min_grouping_digits: Minimum grouping digits (CLDR ``minimumGroupingDigits``).
        system_formats: Per number system overrides of ``formats``.
        short: Compact short patterns keyed by power of ten.
        long: Compact long patterns keyed by power of ten.
    """
    symbols: Mapping[str, NumberSymbols]
    formats: Mapping[str, str]
    default_number_system: str = "latn"
    native_number_system: str = "latn"
    min_grouping_digits: int = 1
    system_formats: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    short: CompactPatterns = field(default_factory=dict)
    long: CompactPatterns = field(default_factory=dict)


def _formats(
    decimal: str = "#,##0.###",
    percent: str = "#,##0%",
    currency: str = "¤#,##0.00",
    accounting: str | None = None,
    scientific: str = "#E0",
) -> dict[str, str]:
    return {
        "standard": decimal,
        "percent": percent,
        "currency": currency,
        "accounting": accounting or currency,
        "scientific": scientific,
    }


def _compact(entries: dict[int, str | dict[str, str]]) -> dict[int, dict[PluralCategory, str]]:
    """Build compact tables from ``{power: pattern}`` or ``{power: {category: pattern}}``."""
    table: dict[int, dict[PluralCategory, str]] = {}
    for power, value in entries.items():
        if isinstance(value, str):
            value = {"other": value}
        table[power] = {PluralCategory(category): pattern for category, pattern in value.items()}
    return table


def _scaled(suffixes: dict[int, str], separator: str = "") -> dict[int, str]:
    """Expand ``{10**3: "K"}`` into the three patterns ``0K``, ``00K``, ``000K``."""
    entries = {}
    for power, suffix in suffixes.items():
        for zeros in range(3):
            entries[power * 10**zeros] = "0" * (zeros + 1) + separator + suffix
    return entries


# =============================================================================
# Shared Tables
# =============================================================================

_LATN = NumberSymbols()

_EN_SHORT = _compact(_scaled({10**3: "K", 10**6: "M", 10**9: "B", 10**12: "T"}))
_EN_LONG = _compact(
    _scaled({10**3: "thousand", 10**6: "million", 10**9: "billion", 10**12: "trillion"}, " ")
)

_EAST_ASIAN_SHORT = {
    "ja": _compact({10**4: "0万", 10**5: "00万", 10**6: "000万", 10**7: "0000万",
                    10**8: "0億", 10**9: "00億", 10**10: "000億", 10**11: "0000億",
                    10**12: "0兆", 10**13: "00兆", 10**14: "000兆"}),
    "zh": _compact({10**4: "0万", 10**5: "00万", 10**6: "000万", 10**7: "0000万",
                    10**8: "0亿", 10**9: "00亿", 10**10: "000亿", 10**11: "0000亿",
                    10**12: "0万亿", 10**13: "00万亿", 10**14: "000万亿"}),
    "ko": _compact({10**3: "0천", 10**4: "0만", 10**5: "00만", 10**6: "000만",
                    10**7: "0000만", 10**8: "0억", 10**9: "00억", 10**10: "000억",
                    10**11: "0000억", 10**12: "0조", 10**13: "00조", 10**14: "000조"}),
}

_DE_SHORT = _compact(_scaled({10**3: "Tsd'.'", 10**6: "Mio'.'", 10**9: "Mrd'.'", 10**12: "Bio'.'"}, NBSP))
_DE_LONG = _compact({
    10**3: "0 Tausend", 10**4: "00 Tausend", 10**5: "000 Tausend",
    10**6: {"one": "0 Million", "other": "0 Millionen"},
    10**7: "00 Millionen", 10**8: "000 Millionen",
    10**9: {"one": "0 Milliarde", "other": "0 Milliarden"},
    10**10: "00 Milliarden", 10**11: "000 Milliarden",
    10**12: {"one": "0 Billion", "other": "0 Billionen"},
    10**13: "00 Billionen", 10**14: "000 Billionen",
})

_FR_SHORT = _compact(_scaled({10**3: "k", 10**6: "M", 10**9: "Md", 10**12: "Bn"}, NBSP))
_FR_LONG = _compact({
    10**3: {"one": "0 millier", "other": "0 mille"},
    10**4: "00 mille", 10**5: "000 mille",
    10**6: {"one": "0 million", "other": "0 millions"},
    10**7: "00 millions", 10**8: "000 millions",
    10**9: {"one": "0 milliard", "other": "0 milliards"},
    10**10: "00 milliards", 10**11: "000 milliards",
    10**12: {"one": "0 billion", "other": "0 billions"},
    10**13: "00 billions", 10**14: "000 billions",
})

_ES_SHORT = _compact({
    10**3: "0" + NBSP + "mil", 10**4: "00" + NBSP + "mil", 10**5: "000" + NBSP + "mil",
    10**6: "0" + NBSP + "M", 10**7: "00" + NBSP + "M", 10**8: "000" + NBSP + "M",
    10**9: "0000" + NBSP + "M", 10**10: "00" + NBSP + "mil" + NBSP + "M",
    10**11: "000" + NBSP + "mil" + NBSP + "M",
    10**12: "0" + NBSP + "B", 10**13: "00" + NBSP + "B", 10**14: "000" + NBSP + "B",
})

_RU_SHORT = _compact(_scaled({10**3: "тыс'.'", 10**6: "млн", 10**9: "млрд", 10**12: "трлн"}, NBSP))

_HI_SHORT = _compact({
    10**3: "0 हज़ार", 10**4: "00 हज़ार", 10**5: "0 लाख", 10**6: "00 लाख",
    10**7: "0 क॰", 10**8: "00 क॰", 10**9: "0 अ॰", 10**10: "00 अ॰",
    10**11: "0 ख॰", 10**12: "00 ख॰",
})

_ARAB = NumberSymbols(
    decimal="٫",
    group="٬",
    minus_sign=ALM + "-",
    plus_sign=ALM + "+",
    percent_sign="٪" + ALM,
    permille="؉",
    exponential="اس",
    nan="ليس رقمًا",
)


# =============================================================================
# Locale Table
# =============================================================================

_LOCALE_DATA: dict[str, LocaleData] = {
    "en": LocaleData(
        symbols={"latn": _LATN},
        formats=_formats(accounting="¤#,##0.00;(¤#,##0.00)"),
        short=_EN_SHORT,
        long=_EN_LONG,
    ),
    "en_IN": LocaleData(
        symbols={"latn": _LATN},
        formats=_formats(
            decimal="#,##,##0.###",
            percent="#,##,##0%",
            currency="¤#,##,##0.00",
            accounting="¤#,##0.00;(¤#,##0.00)",
        ),
        short=_EN_SHORT,
        long=_EN_LONG,
    ),
    "de": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=".")},
        formats=_formats(percent="#,##0" + NBSP + "%", currency="#,##0.00" + NBSP + "¤"),
        short=_DE_SHORT,
        long=_DE_LONG,
    ),
    "de_CH": LocaleData(
        symbols={"latn": NumberSymbols(decimal=".", group="’")},
        formats=_formats(currency="¤" + NBSP + "#,##0.00;¤-#,##0.00"),
        short=_DE_SHORT,
        long=_DE_LONG,
    ),
    "fr": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=NNBSP)},
        formats=_formats(
            percent="#,##0" + NNBSP + "%",
            currency="#,##0.00" + NBSP + "¤",
            accounting="#,##0.00" + NBSP + "¤;(#,##0.00" + NBSP + "¤)",
        ),
        short=_FR_SHORT,
        long=_FR_LONG,
    ),
    "es": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=".")},
        formats=_formats(percent="#,##0" + NBSP + "%", currency="#,##0.00" + NBSP + "¤"),
        min_grouping_digits=2,
        short=_ES_SHORT,
    ),
    "it": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=".")},
        formats=_formats(currency="#,##0.00" + NBSP + "¤"),
    ),
    "pt": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=".")},
        formats=_formats(currency="¤" + NBSP + "#,##0.00"),
    ),
    "pt_PT": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=NBSP)},
        formats=_formats(
            currency="#,##0.00" + NBSP + "¤",
            accounting="#,##0.00" + NBSP + "¤;(#,##0.00" + NBSP + "¤)",
        ),
        min_grouping_digits=2,
    ),
    "ru": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=NBSP, nan="не" + NBSP + "число")},
        formats=_formats(percent="#,##0" + NBSP + "%", currency="#,##0.00" + NBSP + "¤"),
        short=_RU_SHORT,
    ),
    "pl": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=NBSP)},
        formats=_formats(currency="#,##0.00" + NBSP + "¤"),
        min_grouping_digits=2,
    ),
    "sv": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=NBSP, minus_sign="−", exponential="×10^")},
        formats=_formats(percent="#,##0" + NBSP + "%", currency="#,##0.00" + NBSP + "¤"),
    ),
    "tr": LocaleData(
        symbols={"latn": NumberSymbols(decimal=",", group=".")},
        formats=_formats(percent="%#,##0", accounting="¤#,##0.00;(¤#,##0.00)"),
    ),
    "ja": LocaleData(
        symbols={"latn": _LATN},
        formats=_formats(accounting="¤#,##0.00;(¤#,##0.00)"),
        short=_EAST_ASIAN_SHORT["ja"],
    ),
    "zh": LocaleData(
        symbols={"latn": _LATN, "hanidec": _LATN},
        formats=_formats(accounting="¤#,##0.00;(¤#,##0.00)"),
        native_number_system="hanidec",
        short=_EAST_ASIAN_SHORT["zh"],
    ),
    "ko": LocaleData(
        symbols={"latn": _LATN},
        formats=_formats(accounting="¤#,##0.00;(¤#,##0.00)"),
        short=_EAST_ASIAN_SHORT["ko"],
    ),
    "hi": LocaleData(
        symbols={"latn": _LATN, "deva": _LATN},
        formats=_formats(
            decimal="#,##,##0.###",
            percent="#,##,##0%",
            currency="¤#,##,##0.00",
        ),
        native_number_system="deva",
        short=_HI_SHORT,
    ),
    "th": LocaleData(
        symbols={"latn": _LATN, "thai": _LATN},
        formats=_formats(accounting="¤#,##0.00;(¤#,##0.00)"),
        native_number_system="thai",
    ),
    "ar": LocaleData(
        symbols={
            "arab": _ARAB,
            "latn": NumberSymbols(minus_sign=LRM + "-", plus_sign=LRM + "+", percent_sign=LRM + "%" + LRM),
        },
        formats=_formats(currency=RLM + "#,##0.00" + NBSP + "¤;" + RLM + "-#,##0.00" + NBSP + "¤"),
        system_formats={
            "latn": _formats(currency=RLM + "¤" + NBSP + "#,##0.00;" + RLM + "¤" + NBSP + "-#,##0.00"),
        },
        default_number_system="arab",
        native_number_system="arab",
    ),
    "he": LocaleData(
        symbols={"latn": NumberSymbols(minus_sign=LRM + "-", plus_sign=LRM + "+")},
        formats=_formats(currency=RLM + "#,##0.00" + NBSP + "¤;" + RLM + "-#,##0.00" + NBSP + "¤"),
    ),
}

LOCALE_DATA: Mapping[str, LocaleData] = MappingProxyType(_LOCALE_DATA)


def get_locale_data(locale: LocaleInfo) -> LocaleData:
    """Find the data for a locale, trying ``lang_REGION`` then ``lang``.

    Raises:
        UnknownLocaleError: If neither key is present.
    """
    for key in locale.lookup_keys:
        data = LOCALE_DATA.get(key)
        if data is not None:
            return data
    raise UnknownLocaleError(locale.tag)


def available_locales() -> list[str]:
    return sorted(LOCALE_DATA)
