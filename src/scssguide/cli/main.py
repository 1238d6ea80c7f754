"""scssguide CLI entry point: Click group with subcommands."""

import click

from scssguide import __version__


@click.group()
@click.version_option(version=__version__, prog_name="scssguide")
def cli() -> None:
    """scssguide - check SCSS files against the component style guide."""


# Import and register subcommands
from scssguide.cli.validate import validate  # noqa: E402
from scssguide.cli.inspect import inspect  # noqa: E402
from scssguide.cli.rules import rules  # noqa: E402

cli.add_command(validate)
cli.add_command(inspect)
cli.add_command(rules)
