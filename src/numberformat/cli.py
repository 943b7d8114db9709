"""Command-line interface for numberformat."""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from numberformat.exceptions import NumberFormatError
from numberformat.formatter import NumberFormatter
from numberformat.infrastructure.config import get_settings, load_settings
from numberformat.infrastructure.logging import configure_logging
from numberformat.locales import LOCALE_DATA, LocaleFormats, LocaleSymbols
from numberformat.patterns import compile_pattern
from numberformat.protocols import LocaleInfo

app = typer.Typer(
    name="numberformat",
    help="Locale-aware CLDR decimal number formatting",
    add_completion=False,
)


@app.callback()
def main_callback(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", help="Configuration file or directory"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level (debug, info, warning, error)"),
    ] = None,
) -> None:
    """Load settings and configure logging before any command runs."""
    try:
        settings = load_settings(config) if config else get_settings()
    except NumberFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    configure_logging(level=log_level or settings.log_level, format=settings.log_format)


def _parse_number(text: str) -> Decimal:
    try:
        return Decimal(text.replace("_", ""))
    except InvalidOperation:
        typer.echo(f"Error: Not a number: {text!r}", err=True)
        raise typer.Exit(1)


@app.command(name="format")
def format_cmd(
    number: Annotated[str, typer.Argument(help="Number to format (use -- before negative numbers)")],
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", "-l", help="Locale identifier, e.g. en, de_CH, hi"),
    ] = None,
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="standard, short, long, percent, currency, accounting, scientific"),
    ] = None,
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Explicit decimal format pattern"),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", "-c", help="ISO 4217 currency code"),
    ] = None,
    cash: Annotated[
        bool,
        typer.Option("--cash", help="Use cash digits and rounding"),
    ] = False,
    rounding_mode: Annotated[
        Optional[str],
        typer.Option("--rounding-mode", "-r", help="half_even, half_up, half_down, up, down, ceiling, floor"),
    ] = None,
    number_system: Annotated[
        Optional[str],
        typer.Option("--number-system", "-n", help="default, native or a system id such as arab"),
    ] = None,
) -> None:
    """Format a number."""
    value = _parse_number(number)
    try:
        formatter = NumberFormatter(get_settings())
        result = formatter.format(
            value,
            locale=locale,
            style=style,
            format=pattern,
            currency_code=currency,
            cash=cash,
            rounding_mode=rounding_mode,
            number_system=number_system,
        )
    except NumberFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(result)


@app.command(name="compile")
def compile_cmd(
    pattern: Annotated[str, typer.Argument(help="Decimal format pattern")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the compiled metadata of a pattern."""
    try:
        meta = compile_pattern(pattern)
    except NumberFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    def digits(bounds) -> str:
        if bounds is None:
            return "-"
        return f"{bounds.min}..{'∞' if bounds.max is None else bounds.max}"

    def group(size) -> str:
        return "-" if size is None else f"{size.first}/{size.rest}"

    rows = {
        "pattern": meta.pattern,
        "multiplier": str(meta.multiplier),
        "rounding_increment": str(meta.rounding_increment),
        "integer_digits": digits(meta.integer_digits),
        "fractional_digits": digits(meta.fractional_digits),
        "significant_digits": digits(meta.significant_digits),
        "exponent": (
            "-" if meta.exponent is None
            else f"min {meta.exponent.min_digits}{', plus' if meta.exponent.show_plus else ''}"
        ),
        "integer_grouping": group(meta.grouping.integer),
        "fraction_grouping": group(meta.grouping.fraction),
        "padding": f"{meta.padding.length} {meta.padding.char!r}" if meta.padding.length else "-",
        "positive": " ".join(token.kind.value for token in meta.templates.positive),
        "negative": " ".join(token.kind.value for token in meta.templates.negative),
    }

    if json_output:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    console = Console()
    table = Table(title=f"Pattern {pattern}", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in rows.items():
        table.add_row(name, value)
    console.print(table)


@app.command(name="locales")
def locales_cmd(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the built-in locales."""
    symbols = LocaleSymbols()
    formats = LocaleFormats()
    rows = []
    for key in sorted(LOCALE_DATA):
        locale = LocaleInfo.parse(key)
        system = formats.default_number_system(locale)
        locale_symbols = symbols.symbols_for(locale, system)
        rows.append({
            "locale": key,
            "default_system": system,
            "native_system": formats.native_number_system(locale),
            "decimal": locale_symbols.decimal,
            "group": locale_symbols.group,
            "min_grouping": formats.min_grouping_digits_for(locale),
            "standard": formats.pattern_for(locale, system, "standard"),
        })

    if json_output:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    console = Console()
    table = Table(title="Built-in Locales")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("System", style="green")
    table.add_column("Native", style="green")
    table.add_column("Decimal", justify="center")
    table.add_column("Group", justify="center")
    table.add_column("Min grouping", justify="right")
    table.add_column("Standard", style="yellow")
    for row in rows:
        table.add_row(
            row["locale"],
            row["default_system"],
            row["native_system"],
            repr(row["decimal"]),
            repr(row["group"]),
            str(row["min_grouping"]),
            row["standard"],
        )
    console.print(table)


@app.command(name="format-csv")
def format_csv_cmd(
    file: Annotated[Path, typer.Argument(help="CSV file to read")],
    columns: Annotated[
        list[str],
        typer.Option("--column", "-C", help="Column to format (repeatable)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output CSV path (stdout if omitted)"),
    ] = None,
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", "-l", help="Locale identifier"),
    ] = None,
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="Named locale format"),
    ] = None,
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Explicit decimal format pattern"),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", "-c", help="ISO 4217 currency code"),
    ] = None,
) -> None:
    """Format numeric columns of a CSV file."""
    import polars as pl

    from numberformat.integrations.polars import format_columns

    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    df = pl.read_csv(file)
    missing = [name for name in columns if name not in df.columns]
    if missing:
        typer.echo(f"Error: Unknown columns: {', '.join(missing)}", err=True)
        raise typer.Exit(1)

    try:
        result = format_columns(
            df,
            columns,
            NumberFormatter(get_settings()),
            locale=locale,
            style=style,
            format=pattern,
            currency_code=currency,
        )
    except NumberFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output:
        result.write_csv(output)
        typer.echo(f"Formatted {len(columns)} column(s) written to {output}")
    else:
        typer.echo(result.write_csv(), nl=False)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
