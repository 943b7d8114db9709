"""Decimal format patterns: compiler, metadata types and cache."""

from numberformat.patterns.cache import PatternCache, get_pattern_cache
from numberformat.patterns.catalogue import standard_patterns
from numberformat.patterns.compiler import (
    DigitRange,
    ExponentSpec,
    GroupSize,
    Grouping,
    Padding,
    PatternMetadata,
    Templates,
    Token,
    TokenKind,
    compile_pattern,
)

__all__ = [
    "DigitRange",
    "ExponentSpec",
    "GroupSize",
    "Grouping",
    "Padding",
    "PatternCache",
    "PatternMetadata",
    "Templates",
    "Token",
    "TokenKind",
    "compile_pattern",
    "get_pattern_cache",
    "standard_patterns",
]
