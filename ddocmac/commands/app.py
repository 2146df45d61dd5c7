"""
Defines the main Click command group for ddocmac.

This module provides:
- The root `cli` command group for the application.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of subcommands from other modules.

Usage:
Import `cli` to initialize and run the command-line interface.
"""

from typing import Any
import click
from ddocmac.commands.base import RichGroup
from ddocmac.commands.expand import expand
from ddocmac.commands.macros import macros
from ddocmac.config.settings import appsettings


def version_print(ctx: click.Context, param: click.Parameter, value: Any) -> None:
    """Print the version and exit; eager callback for --version."""
    if not value or ctx.resilient_parsing:
        return
    from ddocmac.ddocmac import __version__

    click.echo(f"ddocmac {__version__}")
    ctx.exit()


@click.group(
    cls=RichGroup,
    help="""
    ddocmac

    Expand documentation macros and manage macro definitions.
    """,
)
@click.option(
    "-V",
    "--version",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=version_print,
    help="Show the version and exit.",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress debug logging.")
def cli(quiet: bool) -> None:
    """
    The root Click command group for ddocmac.
    """
    if quiet:
        appsettings.beQuiet = True


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

# Register subcommands
cli.add_command(expand)
cli.add_command(macros)
