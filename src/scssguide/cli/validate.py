"""CLI command: scssguide validate -- check SCSS files and report findings."""

from __future__ import annotations

import logging
import sys

import click

from scssguide.config import ConfigError, RuleConfiguration, load_config
from scssguide.report import render_json, render_text
from scssguide.runner import validate_paths
from scssguide.validation import RULES


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with rule settings and options.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format.",
)
@click.option("--max-line-length", type=int, default=None, help="Override maxLineLength.")
@click.option("--jobs", "-j", type=int, default=None, help="Number of files checked in parallel.")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
def validate(
    paths: tuple[str, ...],
    config_file: str | None,
    output_format: str,
    max_line_length: int | None,
    jobs: int | None,
    verbose: bool,
) -> None:
    """Check SCSS files (or directories of them) against the style guide.

    Exits with code 0 if there are no Fatal or Error findings (warnings are
    allowed), or code 1 otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_file, known_rules=RULES) if config_file else RuleConfiguration()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    if max_line_length is not None and max_line_length <= 0:
        raise click.BadParameter("must be a positive integer", param_hint="--max-line-length")
    config = config.with_options(max_line_length=max_line_length)

    report = validate_paths(paths, config, jobs=jobs)

    if output_format == "json":
        click.echo(render_json(report))
    else:
        click.echo(render_text(report))

    sys.exit(report.exit_code)
