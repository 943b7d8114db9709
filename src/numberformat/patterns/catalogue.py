"""Catalogue of standard decimal format patterns.

The catalogue is every pattern referenced by the built-in locale data. It is
compiled eagerly when a :class:`~numberformat.patterns.cache.PatternCache`
is created, so formatting with a locale's standard styles never compiles.
"""

from __future__ import annotations

from typing import Iterator, Mapping

from numberformat.locales.data import LOCALE_DATA, LocaleData


def _locale_patterns(data: LocaleData) -> Iterator[str]:
    yield from data.formats.values()
    for formats in data.system_formats.values():
        yield from formats.values()
    for table in (data.short, data.long):
        for forms in table.values():
            yield from forms.values()


def standard_patterns(locale_data: Mapping[str, LocaleData] | None = None) -> tuple[str, ...]:
    """Distinct patterns used by ``locale_data`` (default: the built-in table), sorted."""
    data = LOCALE_DATA if locale_data is None else locale_data
    patterns = {pattern for entry in data.values() for pattern in _locale_patterns(entry)}
    return tuple(sorted(patterns))
