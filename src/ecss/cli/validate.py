"""CLI command: ecss validate -- parse and validate a style sheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ecss.errors import StyleSheetLoaderError
from ecss.model.diagnostic import Severity
from ecss.stylesheet.loader import StyleSheetLoader
from ecss.validation import validate as run_validate


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def validate(cssfile: str) -> None:
    """Parse and validate a style sheet against the built-in properties.

    Prints diagnostics (errors, warnings, info) and exits with code 0 if
    no errors are found, or code 1 if there are errors.
    """
    css_path = Path(cssfile)

    try:
        document = StyleSheetLoader().load(css_path)
    except StyleSheetLoaderError as exc:
        click.echo(f"Load error: {exc}", err=True)
        sys.exit(1)

    diagnostics = run_validate(document)

    if not diagnostics:
        click.echo(f"OK: {css_path.name} is valid (0 diagnostics)")
        sys.exit(0)

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    infos = [d for d in diagnostics if d.severity is Severity.INFO]

    for diag in diagnostics:
        click.echo(str(diag))

    click.echo()
    click.echo(
        f"Summary: {len(errors)} error(s), {len(warnings)} warning(s), {len(infos)} info"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)
