"""Informational commands — version, config, modes."""

import sys
from importlib.metadata import version as dist_version

import click

from tabfit import config as _config
from tabfit.config import DisplayMode, load_config
from tabfit.exceptions import ConfigError
from tabfit.formatting import print_json, print_kv, print_table

_MODE_HELP = {
    DisplayMode.FIXED: "Even split of the width; cells are cut to fit.",
    DisplayMode.COLUMNS: "Widths fitted to headers and data; shrinks to fit.",
    DisplayMode.ROW: "One field per line with a banner per row.",
    DisplayMode.CLASSIC: "Unformatted values joined by '|'.",
}


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def version(as_json: bool) -> None:
    """Show version information."""
    import tabfit

    data = {
        "tabfit": tabfit.__version__,
        "click": dist_version("click"),
        "python": sys.version.split()[0],
    }
    if as_json:
        print_json(data)
    else:
        print_kv([(k, v) for k, v in data.items()])


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def config(as_json: bool) -> None:
    """Show the resolved display configuration."""
    try:
        cfg = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e))

    data = cfg.to_dict()
    data["surface_width"] = cfg.surface_width()
    data["config_file"] = str(_config.CONFIG_PATH)
    if as_json:
        print_json(data)
    else:
        print_kv([(k, "auto" if v is None else str(v)) for k, v in data.items()])


@click.command()
def modes() -> None:
    """List the display modes."""
    print_table(
        ["Mode", "Description"],
        [[m.value, _MODE_HELP[m]] for m in DisplayMode],
    )
