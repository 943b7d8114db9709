"""numberformat - locale-aware CLDR decimal number formatting.

Decimal format patterns such as ``#,##0.00;(#,##0.00)`` are compiled once
into immutable metadata and applied to ints, floats and Decimals with exact
decimal arithmetic.

Example:
    >>> import numberformat as nf
    >>> nf.format_number(1234567.891)
    '1,234,567.891'
    >>> nf.format_number(1234.5, locale="de", style="currency", currency="EUR")
    '1.234,50\\xa0€'
    >>> nf.format_number(12345, format="##0.####E0")
    '12.345E3'
"""

from numberformat.assemble import Assembler, AssemblyContext
from numberformat.exceptions import (
    ConfigError,
    ConfigSourceError,
    ConfigValidationError,
    InvalidFormatStyleError,
    InvalidNumberError,
    InvalidOptionError,
    InvalidRoundingModeError,
    MissingCurrencyError,
    NumberFormatError,
    PatternCompileError,
    UnknownCurrencyError,
    UnknownLocaleError,
    UnknownNumberSystemError,
)
from numberformat.formatter import NumberFormatter, format_number, get_formatter, reset_formatter
from numberformat.infrastructure.config import FormatterSettings, get_settings, load_settings, reset_settings
from numberformat.options import FormatOptions, FormatStyle, RoundingMode, normalize_options
from numberformat.patterns import PatternCache, PatternMetadata, compile_pattern, get_pattern_cache

__version__ = "0.1.0"

__all__ = [
    # Formatting
    "NumberFormatter",
    "format_number",
    "get_formatter",
    "reset_formatter",
    "Assembler",
    "AssemblyContext",
    # Options
    "FormatOptions",
    "FormatStyle",
    "RoundingMode",
    "normalize_options",
    # Patterns
    "PatternCache",
    "PatternMetadata",
    "compile_pattern",
    "get_pattern_cache",
    # Settings
    "FormatterSettings",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Errors
    "NumberFormatError",
    "PatternCompileError",
    "MissingCurrencyError",
    "UnknownCurrencyError",
    "UnknownLocaleError",
    "UnknownNumberSystemError",
    "InvalidRoundingModeError",
    "InvalidFormatStyleError",
    "InvalidOptionError",
    "InvalidNumberError",
    "ConfigError",
    "ConfigSourceError",
    "ConfigValidationError",
]
