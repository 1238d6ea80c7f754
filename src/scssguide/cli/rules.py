"""CLI command: scssguide rules -- list rule ids and default severities."""

from __future__ import annotations

import click

from scssguide.validation import RULES


@click.command()
def rules() -> None:
    """List every rule id with its group and default severity."""
    width = max(len(rule_id) for rule_id in RULES)
    for info in RULES.values():
        click.echo(
            f"{info.rule_id:<{width}}  {info.group.value:<14}  "
            f"{info.severity.value:<7}  {info.summary}"
        )
