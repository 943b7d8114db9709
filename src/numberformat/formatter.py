"""Number formatting entry point.

:class:`NumberFormatter` wires the collaborators together and runs the
formatting pipeline:

    pattern (style or explicit) --> PatternCache --> PatternMetadata
    number --> normalize --> currency digits --> scale --> increment rounding
           --> render digits --> grouping --> assemble --> transliterate

Usage:
    >>> formatter = NumberFormatter()
    >>> formatter.format(1234567.891)
    '1,234,567.891'
    >>> formatter.format(1234.5, locale="de", currency="EUR", style="currency")
    '1.234,50\\xa0€'
    >>> format_number(0.125, format="0.00")
    '0.12'
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Any, Mapping

from numberformat.arithmetic import (
    Sign,
    adjust_for_currency,
    mode_for_sign,
    normalize,
    round_fraction,
    round_to_increment,
    scale,
)
from numberformat.assemble import Assembler, AssemblyContext
from numberformat.exceptions import MissingCurrencyError
from numberformat.infrastructure.config import FormatterSettings, get_settings
from numberformat.locales import (
    CLDRPluralRules,
    CurrencyRegistry,
    DigitTransliterator,
    LocaleFormats,
    LocaleSymbols,
)
from numberformat.options import FormatOptions, FormatStyle, RoundingMode, normalize_options
from numberformat.patterns import PatternCache, PatternMetadata, get_pattern_cache
from numberformat.protocols import (
    Currency,
    CurrencyProvider,
    FormatProvider,
    GroupingProvider,
    LocaleInfo,
    NumberSymbols,
    PluralCategory,
    PluralRuleSelector,
    SymbolProvider,
    Transliterator,
)
from numberformat.render import DigitRecord, apply_grouping, render

logger = logging.getLogger(__name__)

Number = int | float | Decimal

# Significant digits shown by compact patterns that have a single integer digit ("1.2K").
COMPACT_SIGNIFICANT_DIGITS = 2


class NumberFormatter:
    """Formats numbers with CLDR decimal patterns.

    Collaborators default to the built-in locale tables; any of them can be
    replaced by an object implementing the matching protocol from
    :mod:`numberformat.protocols`.

    Example:
        formatter = NumberFormatter(FormatterSettings(default_locale="fr"))
        formatter.format(1234.5)                     # '1 234,5'
        formatter.format(0.256, style="percent")     # '26 %'
        formatter.format(-5, format="#,##0;(#,##0)") # '(5)'
    """

    def __init__(
        self,
        settings: FormatterSettings | None = None,
        *,
        symbols: SymbolProvider | None = None,
        currencies: CurrencyProvider | None = None,
        plural_rules: PluralRuleSelector | None = None,
        transliterator: Transliterator | None = None,
        grouping: GroupingProvider | None = None,
        formats: FormatProvider | None = None,
        cache: PatternCache | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._symbols = symbols or LocaleSymbols()
        self._currencies = currencies or CurrencyRegistry()
        self._plural_rules = plural_rules or CLDRPluralRules()
        self._transliterator = transliterator or DigitTransliterator()
        self._formats = formats or LocaleFormats()
        if grouping is None:
            grouping = self._formats if isinstance(self._formats, GroupingProvider) else LocaleFormats()
        self._grouping = grouping

        if cache is None:
            cache = get_pattern_cache() if self.settings.preload_catalogue else PatternCache(preload=())
        self.cache = cache
        self.defaults = self.settings.default_options()
        self._assembler = Assembler(self._transliterator, self._plural_rules)

    def options(self, options: FormatOptions | Mapping[str, Any] | None = None, **overrides: Any) -> FormatOptions:
        """Resolve per-call options over the formatter defaults."""
        if isinstance(options, Mapping):
            options = normalize_options(dict(options), self.defaults)
        resolved = options or self.defaults
        return normalize_options(overrides, resolved) if overrides else resolved

    def format(
        self,
        number: Number,
        options: FormatOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> str:
        """Format ``number``.

        Args:
            number: int, float or Decimal.
            options: Options record or mapping; keyword overrides win over it.
            **overrides: Option fields such as ``locale``, ``style``,
                ``format``, ``currency`` or ``rounding_mode``.

        Raises:
            InvalidNumberError: ``number`` is not an int, float or Decimal.
            PatternCompileError: The explicit pattern is malformed.
            MissingCurrencyError: The pattern needs a currency but none was given.
            UnknownCurrencyError, UnknownLocaleError, UnknownNumberSystemError:
                Raised by the collaborators.
        """
        opts = self.options(options, **overrides)
        value, sign = normalize(number)
        locale = LocaleInfo.parse(opts.locale)
        number_system = self.resolve_number_system(locale, opts.number_system)
        symbols = self._symbols.symbols_for(locale, number_system)

        if value.is_nan():
            return symbols.nan

        mode = mode_for_sign(opts.rounding_mode, sign)
        if opts.style.is_compact and opts.format is None and value.is_finite():
            meta, value = self._compact_metadata(value, locale, number_system, opts, mode)
        else:
            meta = self.metadata(opts, locale, number_system)

        currency = self._currency(meta, opts, locale)
        if currency is not None:
            meta = adjust_for_currency(meta, currency, opts.cash)
        if opts.has_digit_overrides:
            meta = meta.with_digit_bounds(
                minimum_integer_digits=opts.minimum_integer_digits,
                maximum_integer_digits=opts.maximum_integer_digits,
                minimum_fraction_digits=opts.minimum_fraction_digits,
                maximum_fraction_digits=opts.maximum_fraction_digits,
            )

        record = self._digits(value, sign, meta, mode, locale, symbols)
        context = AssemblyContext(
            symbols=symbols,
            locale=locale,
            number_system=number_system,
            currency=currency,
            number=number,
        )
        return self._assembler.assemble(record, meta, context)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve_number_system(self, locale: LocaleInfo, requested: str) -> str:
        """Map ``"default"`` and ``"native"`` to the locale's system ids."""
        if requested == "default":
            return self._formats.default_number_system(locale)
        if requested == "native":
            return self._formats.native_number_system(locale)
        return requested

    def metadata(self, opts: FormatOptions, locale: LocaleInfo, number_system: str) -> PatternMetadata:
        """Compiled metadata for the explicit pattern or the locale's style pattern."""
        if opts.format is not None:
            pattern = opts.format
        else:
            style = FormatStyle.STANDARD if opts.style.is_compact else opts.style
            pattern = self._formats.pattern_for(locale, number_system, style.value)
        return self.cache.get_or_compile(pattern)

    def _currency(self, meta: PatternMetadata, opts: FormatOptions, locale: LocaleInfo) -> Currency | None:
        if opts.currency_code is None:
            if meta.has_currency:
                raise MissingCurrencyError(meta.pattern)
            return None
        return self._currencies.currency_for(opts.currency_code, locale)

    def _digits(
        self,
        value: Decimal,
        sign: Sign,
        meta: PatternMetadata,
        mode: RoundingMode,
        locale: LocaleInfo,
        symbols: NumberSymbols,
    ) -> DigitRecord:
        if value.is_infinite():
            return DigitRecord(symbols.infinity, "", sign)

        value = scale(value, meta.multiplier)
        value = round_to_increment(value, meta.rounding_increment, mode)
        record = render(value, meta, mode, sign)
        min_grouping = self._grouping.min_grouping_digits_for(locale)
        return apply_grouping(record, meta.grouping, min_grouping, symbols.group)

    # -------------------------------------------------------------------------
    # Compact styles
    # -------------------------------------------------------------------------

    def _compact_metadata(
        self,
        value: Decimal,
        locale: LocaleInfo,
        number_system: str,
        opts: FormatOptions,
        mode: RoundingMode,
    ) -> tuple[PatternMetadata, Decimal]:
        """Pick the compact pattern for ``value`` and scale ``value`` to it.

        Returns the standard pattern and the unchanged value when ``value``
        is below the smallest compact magnitude.
        """
        table = self._formats.compact_patterns_for(locale, opts.style.value)
        powers = sorted(table)

        magnitude = value
        while True:
            power = _largest_power(powers, magnitude)
            if power is None:
                return self.metadata(opts, locale, number_system), value

            patterns = table[power]
            sample = self.cache.get_or_compile(_other_pattern(patterns))
            zeros = sample.integer_digits.min
            shift = len(str(power)) - zeros
            scaled = value.scaleb(-shift)

            if opts.maximum_fraction_digits is not None:
                fraction_digits = opts.maximum_fraction_digits
            else:
                fraction_digits = max(0, COMPACT_SIGNIFICANT_DIGITS - zeros)
            rounded = round_fraction(scaled, fraction_digits, mode)

            # Rounding can carry into the next magnitude (999,950 -> "1000K").
            if rounded < 10**zeros or power == powers[-1]:
                break
            magnitude = rounded.scaleb(shift)

        category = self._plural_rules.category_for(_visible(rounded), locale)
        pattern = patterns.get(category) or _other_pattern(patterns)
        meta = self.cache.get_or_compile(pattern).with_digit_bounds(maximum_fraction_digits=fraction_digits)
        logger.debug("Compact pattern %r for %s (shift %d)", pattern, value, shift)
        return meta, scaled


def _largest_power(powers: list[int], value: Decimal) -> int | None:
    candidates = [power for power in powers if power <= value]
    return candidates[-1] if candidates else None


def _other_pattern(patterns: Mapping[PluralCategory, str]) -> str:
    return patterns.get(PluralCategory.OTHER) or next(iter(patterns.values()))


def _visible(value: Decimal) -> Decimal:
    """The value as displayed, without trailing fraction zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return Decimal(text)


# =============================================================================
# Module-level convenience
# =============================================================================

_default_formatter: NumberFormatter | None = None
_lock = threading.Lock()


def get_formatter() -> NumberFormatter:
    """Get the shared formatter built from the global settings."""
    global _default_formatter

    if _default_formatter is None:
        with _lock:
            if _default_formatter is None:
                _default_formatter = NumberFormatter(get_settings())
    return _default_formatter


def reset_formatter() -> None:
    """Drop the shared formatter, e.g. after :func:`load_settings`."""
    global _default_formatter

    with _lock:
        _default_formatter = None


def format_number(number: Number, **options: Any) -> str:
    """Format ``number`` with the shared formatter.

    Example:
        >>> format_number(1234.5, locale="en_IN", format="#,##,##0.00")
        '1,234.50'
    """
    return get_formatter().format(number, **options)
