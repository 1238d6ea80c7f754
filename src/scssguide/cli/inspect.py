"""CLI command: scssguide inspect -- display how a file's selectors classify."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from scssguide.classify import build_component_file
from scssguide.parser import ParseError, parse_scss


@click.command()
@click.argument("scssfile", type=click.Path(exists=True, dir_okay=False))
def inspect(scssfile: str) -> None:
    """Parse an SCSS file and display its classified selectors.

    Shows each selector's kind, base component, nesting depth and section,
    the section boundaries, and any classification errors.
    """
    path = Path(scssfile)

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Cannot read {path}: {exc}", err=True)
        sys.exit(1)

    try:
        stylesheet = parse_scss(source)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    cf = build_component_file(str(path), source, stylesheet)

    click.echo(f"File:      {cf.path}")
    click.echo(f"Base file: {'yes' if cf.is_base else 'no'}")
    click.echo(f"Lines:     {len(cf.lines)}")
    click.echo()

    click.echo("Selectors:")
    for sel in cf.selectors:
        parts = [f"  {sel.line}:{sel.column}", sel.written]
        parts.append(f"kind={sel.kind.value}")
        parts.append(f"base={sel.base_name}")
        parts.append(f"depth={sel.depth}")
        parts.append(f"section={sel.section.label}")
        if sel.properties:
            parts.append(f"properties={','.join(sel.properties)}")
        click.echo("  ".join(parts))
    click.echo()

    click.echo("Sections:")
    for boundary in cf.boundaries:
        source_kind = "marker" if boundary.from_marker else "inferred"
        click.echo(f"  {boundary.section.label:<14} line {boundary.line} ({source_kind})")

    if cf.errors:
        click.echo()
        click.echo("Classification errors:")
        for err in cf.errors:
            click.echo(f"  {err.line}:{err.column}  {err.rule_id}: {err}")
