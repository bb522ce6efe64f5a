"""ecss CLI entry point: Click group with subcommands."""

import click

from ecss import __version__
from ecss.config import EcssConfig, configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="ecss")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level")
def cli(verbose: bool) -> None:
    """ecss - CSS-like style sheets for entity scenes."""
    configure_logging(EcssConfig(log_level="DEBUG" if verbose else "WARNING"))


# Import and register subcommands
from ecss.cli.apply import apply  # noqa: E402
from ecss.cli.inspect import inspect  # noqa: E402
from ecss.cli.validate import validate  # noqa: E402

cli.add_command(apply)
cli.add_command(validate)
cli.add_command(inspect)
