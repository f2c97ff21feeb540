"""`tabfit show` — render a result file in one of the display modes."""

from __future__ import annotations

import sys
from typing import TextIO

import click

from tabfit.config import DisplayMode, load_config
from tabfit.exceptions import ConfigError, ResultLoadError, TooManyColumnsError
from tabfit.formatting import click_echo
from tabfit.renderer import TableRenderer
from tabfit.results import ResultSet, load_result

_MODE_CHOICES = [m.value for m in DisplayMode]


@click.command("show")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--mode", type=click.Choice(_MODE_CHOICES, case_sensitive=False), default=None,
              help="Display mode (default from config).")
@click.option("--width", type=click.IntRange(min=1), default=None,
              help="Surface width in characters (default: terminal width).")
@click.option("--null", "null_value", default=None, help="Placeholder printed for null values.")
@click.option("--skip", type=click.IntRange(min=0), default=0,
              help="Hide the first N columns as row-id columns.")
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), default=None,
              help="Input format (default: from file extension).")
def show(
    source: TextIO,
    mode: str | None,
    width: int | None,
    null_value: str | None,
    skip: int,
    fmt: str | None,
) -> None:
    """Render a query result from SOURCE (JSON or CSV; '-' reads stdin).

    \b
    Examples:
      tabfit show result.json --mode columns
      tabfit show people.csv --mode row
      cat result.json | tabfit show - --mode fixed --width 60
    """
    try:
        cfg = load_config(mode=mode, null_value=null_value, width=width)
    except ConfigError as e:
        raise click.UsageError(str(e))

    try:
        result = load_result(source, fmt)
    except ResultLoadError as e:
        raise click.ClickException(f"Query execution error: {e}")

    if skip:
        result = ResultSet(result.columns[skip:], result, result.row_id_columns + skip)

    try:
        TableRenderer(cfg, sys.stdout).render(result)
    except TooManyColumnsError as e:
        click_echo(str(e), err=True)
