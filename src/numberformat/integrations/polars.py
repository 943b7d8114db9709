"""Polars integration.

Formats numeric Series and DataFrame columns into String columns for
display and export. Nulls stay null; every other value goes through
:meth:`NumberFormatter.format`, so Decimal columns keep their exact value.

Usage:
    >>> import polars as pl
    >>> from numberformat.integrations.polars import format_columns
    >>>
    >>> df = pl.DataFrame({"item": ["a", "b"], "price": [1234.5, None]})
    >>> format_columns(df, ["price"], locale="de", style="currency", currency="EUR")
    shape: (2, 2)
    ...
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import polars as pl

from numberformat.formatter import NumberFormatter, get_formatter

logger = logging.getLogger(__name__)


def format_series(
    series: pl.Series,
    formatter: NumberFormatter | None = None,
    **options: Any,
) -> pl.Series:
    """Format every non-null value of ``series``.

    Args:
        series: Integer, float or Decimal series.
        formatter: Formatter to use; the shared formatter by default.
        **options: Format options, resolved once for the whole series.

    Returns:
        A String series with the same name and length.

    Raises:
        InvalidNumberError: If the series holds non-numeric values.
    """
    formatter = formatter or get_formatter()
    resolved = formatter.options(**options)
    values = [
        None if value is None else formatter.format(value, resolved)
        for value in series.to_list()
    ]
    logger.debug("Formatted series %r (%d values)", series.name, len(values))
    return pl.Series(series.name, values, dtype=pl.String)


def format_columns(
    df: pl.DataFrame,
    columns: Iterable[str],
    formatter: NumberFormatter | None = None,
    *,
    suffix: str = "",
    **options: Any,
) -> pl.DataFrame:
    """Replace (or, with ``suffix``, add) formatted versions of ``columns``.

    Example:
        >>> format_columns(df, ["price"], suffix="_text", style="currency", currency="USD")
    """
    formatter = formatter or get_formatter()
    formatted = [
        format_series(df[name], formatter, **options).alias(f"{name}{suffix}")
        for name in columns
    ]
    return df.with_columns(formatted)
