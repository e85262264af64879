"""Expression commands: parse, validate, render and constants."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from datemath.configuration.settings import DEFAULT_CONFIG_PATH, Settings, bootstrap_settings
from datemath.constants import AT_0AD, AT_EPOCH, AT_Y2K, AT_Y2K38, AT_Y10K
from datemath.errors import DateMathError, format_error_for_cli
from datemath.expressions import DateMathParser
from datemath.formatting import (
    format_iso_date,
    format_iso_date_no_ms,
    format_simple_iso_timestamp,
    render_month_year,
    render_week_year,
)

logger = logging.getLogger(__name__)

console = Console()


class OutputFormat(str, Enum):
    ISO = "iso"
    NO_MS = "no-ms"
    SIMPLE = "simple"
    MILLIS = "millis"


_FORMATTERS = {
    OutputFormat.ISO: format_iso_date,
    OutputFormat.NO_MS: format_iso_date_no_ms,
    OutputFormat.SIMPLE: format_simple_iso_timestamp,
    OutputFormat.MILLIS: lambda instant: str(instant.epoch_millis),
}


def _load_settings(config_path: Path) -> Settings:
    try:
        return bootstrap_settings(path=config_path, persist=False)
    except DateMathError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)


def _build_parser(settings: Settings, zone: Optional[str]) -> DateMathParser:
    parser = settings.build_parser()
    if zone:
        parser = DateMathParser(zone, parser.clock)
    return parser


def parse_expression(
    expression: str = typer.Argument(..., help="Expression, e.g. 'yesterday - 100y'"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="Zone for relative parts"),
    output_format: OutputFormat = typer.Option(OutputFormat.ISO, "--format", "-f", help="Output format"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Evaluate an expression and print the instant.

    Examples:
        datemath parse now-1d
        datemath parse "16:30" --zone EST --format no-ms
    """
    settings = _load_settings(config_path)
    try:
        parser = _build_parser(settings, zone)
        instant = parser.parse(expression)
    except DateMathError as exc:
        logger.debug(f"Failed to evaluate {expression!r}: {exc}")
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)

    rendered = _FORMATTERS[output_format](instant)
    if output_json:
        typer.echo(json.dumps({
            "expression": expression,
            "zone": str(parser.zone),
            "instant": format_iso_date(instant),
            "epochMillis": instant.epoch_millis,
            "formatted": rendered,
        }))
    else:
        typer.echo(rendered)


def validate_expression(
    expression: str = typer.Argument(..., help="Expression to check"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="Zone for relative parts"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Exit with status 0 when the expression parses, 1 otherwise."""
    settings = _load_settings(config_path)
    try:
        parser = _build_parser(settings, zone)
    except DateMathError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    if parser.is_valid(expression):
        typer.echo("✅ valid")
        return
    typer.echo("❌ invalid")
    raise typer.Exit(code=1)


def render_expression(
    expression: str = typer.Argument(..., help="Expression to render"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="Zone for rendering"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale for month names"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Print the month-year and week-year an expression falls in."""
    settings = _load_settings(config_path)
    try:
        parser = _build_parser(settings, zone)
        instant = parser.parse(expression)
    except DateMathError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)

    locale = locale or settings.datemath.locale
    typer.echo(f"Month: {render_month_year(instant, parser.zone, locale)}")
    typer.echo(f"Week:  {render_week_year(instant, parser.zone, locale)}")


def show_constants() -> None:
    """List the well-known instants."""
    table = Table(title="Well-known instants")
    table.add_column("Name", style="cyan")
    table.add_column("Instant")
    table.add_column("Epoch millis", justify="right")
    for name, instant in (
        ("AT_EPOCH", AT_EPOCH),
        ("AT_0AD", AT_0AD),
        ("AT_Y2K", AT_Y2K),
        ("AT_Y2K38", AT_Y2K38),
        ("AT_Y10K", AT_Y10K),
    ):
        table.add_row(name, format_iso_date(instant), str(instant.epoch_millis))
    console.print(table)
