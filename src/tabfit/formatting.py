"""Output helpers — fitted tables, JSON, key-value pairs."""

import io
import json
from typing import Any

from tabfit.config import DisplayMode, RenderConfig
from tabfit.renderer import TableRenderer
from tabfit.results import ResultColumn, ResultSet


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """Print rows as a COLUMNS-mode table fitted to the terminal."""
    buf = io.StringIO()
    result = ResultSet([ResultColumn(h) for h in headers], rows)
    TableRenderer(RenderConfig(mode=DisplayMode.COLUMNS), buf).render(result)
    click_echo(buf.getvalue().rstrip("\n"))


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout."""
    click_echo(json.dumps(data, indent=2, default=str))


def print_kv(pairs: list[tuple[str, str]]) -> None:
    """Print key-value pairs with aligned colons."""
    if not pairs:
        return
    max_key = max(len(k) for k, _ in pairs)
    for key, value in pairs:
        click_echo(f"  {key.ljust(max_key)} : {value}")


def click_echo(msg: str = "", err: bool = False) -> None:
    """Wrapper around click.echo for testability."""
    import click

    click.echo(msg, err=err)
