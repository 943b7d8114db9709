"""Digit transliteration between number systems.

CLDR numeric number systems only differ from ``latn`` in their ten digit
glyphs, so transliteration is a single ``str.translate`` per call.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from numberformat.exceptions import UnknownNumberSystemError
from numberformat.protocols import LocaleInfo

ASCII_DIGITS = "0123456789"

# Numeric number systems keyed by CLDR id.
NUMBER_SYSTEM_DIGITS: Mapping[str, str] = MappingProxyType({
    "latn": ASCII_DIGITS,
    "arab": "٠١٢٣٤٥٦٧٨٩",
    "arabext": "۰۱۲۳۴۵۶۷۸۹",
    "beng": "০১২৩৪৫৬৭৮৯",
    "deva": "०१२३४५६७८९",
    "fullwide": "０１２３４５６７８９",
    "hanidec": "〇一二三四五六七八九",
    "khmr": "០១២៣៤៥៦៧៨៩",
    "mymr": "၀၁၂၃၄၅၆၇၈၉",
    "thai": "๐๑๒๓๔๕๖๗๘๙",
    "tibt": "༠༡༢༣༤༥༦༧༨༩",
})


class DigitTransliterator:
    """Default :class:`~numberformat.protocols.Transliterator`.

    The ``locale`` argument is accepted for protocol compatibility; digit
    glyphs depend only on the number system.
    """

    def __init__(self, digits: Mapping[str, str] | None = None) -> None:
        self._tables = {
            system: str.maketrans(ASCII_DIGITS, glyphs)
            for system, glyphs in (digits or NUMBER_SYSTEM_DIGITS).items()
        }

    def supports(self, number_system: str) -> bool:
        return number_system in self._tables

    def transliterate(self, text: str, locale: LocaleInfo, number_system: str) -> str:
        if number_system == "latn":
            return text
        table = self._tables.get(number_system)
        if table is None:
            raise UnknownNumberSystemError(number_system, locale.tag)
        return text.translate(table)
