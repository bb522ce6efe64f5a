"""CLI command: ecss inspect -- display the rules of a style sheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ecss.errors import StyleSheetLoaderError
from ecss.stylesheet.loader import StyleSheetLoader
from ecss.stylesheet.tokens import format_token


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def inspect(cssfile: str) -> None:
    """Parse a style sheet and display its rules.

    Shows the content hash, each rule's selector and the classified tokens
    of every declaration.
    """
    css_path = Path(cssfile)

    try:
        document = StyleSheetLoader().load(css_path)
    except StyleSheetLoaderError as exc:
        click.echo(f"Load error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Sheet:     {css_path.name}")
    click.echo(f"Hash:      {document.hash:016x}")
    click.echo(f"Rules:     {len(document.rules)}")
    click.echo(f"Selectors: {len(document.selectors())}")
    if document.diagnostics:
        click.echo(f"Dropped:   {len(document.diagnostics)}")
    click.echo()

    for rule in document:
        atoms = ", ".join(rule.selector.capabilities()) or "*"
        line = f" (line {rule.line})" if rule.line is not None else ""
        click.echo(f"{rule.selector}{line}  atoms=[{atoms}]")
        for name, values in rule.properties.items():
            tokens = "  ".join(f"{type(t).__name__}({format_token(t)})" for t in values)
            click.echo(f"  {name}: {tokens}")
