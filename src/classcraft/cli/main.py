"""classcraft CLI entry point: Click group with subcommands."""

import click

from classcraft import __version__


@click.group()
@click.version_option(version=__version__, prog_name="classcraft")
def cli() -> None:
    """classcraft - compile utility class tokens into CSS."""


# Import and register subcommands
from classcraft.cli.parse import expand, parse  # noqa: E402
from classcraft.cli.match import match  # noqa: E402
from classcraft.cli.compile import compile_  # noqa: E402

cli.add_command(expand)
cli.add_command(parse)
cli.add_command(match)
cli.add_command(compile_)
