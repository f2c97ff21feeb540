"""Root CLI group — `tabfit` command."""

import logging

import click

from tabfit.info import config, modes, version
from tabfit.show import show


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """tabfit — render query results into the terminal width."""
    # Without a handler, warnings still reach stderr via logging.lastResort.
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


cli.add_command(show)
cli.add_command(config)
cli.add_command(modes)
cli.add_command(version)
