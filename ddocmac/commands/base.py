"""
Base classes for Rich-enhanced Click commands and groups.

This module defines:
- `rich_help`: builds the marked-up help text of a command.
- `RichGroup`: a Click group whose help lists its subcommands with Rich.
- `RichCommand`: a Click command whose help is shown in a Rich panel.
- `macros_load`: the shared option handling that turns macro files and
  ``-D NAME=VALUE`` definitions into one override table.
"""

from pathlib import Path
from typing import Iterable
from rich.console import Console
from rich.panel import Panel
import click
from ddocmac.config.settings import macroFiles_resolve
from ddocmac.lib.log import LOG
from ddocmac.lib.macros import macroFiles_parse

console: Console = Console()


def rich_help(command: str, description: str, usage: str, args: dict) -> str:
    """
    Generate Rich-enhanced help text for commands.

    :param command: The command name.
    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of arguments and their descriptions.
    :return: Formatted Rich help string.
    """
    help_text = f"[bold cyan]{description}[/bold cyan]\n\n"
    help_text += f"[bold yellow]Usage:[/bold yellow]\n    [green]{usage}[/green]\n\n"
    help_text += "[bold yellow]Arguments:[/bold yellow]\n"
    for arg, desc in args.items():
        help_text += f"    [green]{arg}[/green]: {desc}\n"
    return help_text


def define_split(value: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` command line definition.

    :param value: Definition text; the value may itself contain ``=``.
    :return: (name, value)
    :raises click.BadParameter: If there is no ``=`` or the name is empty.
    """
    name, sep, template = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}")
    return name.strip(), template


def macros_load(files: Iterable[Path], defines: Iterable[str]) -> dict[str, str]:
    """
    Build the override table for one run.

    Configured and explicit macro files come first, in order, then
    command line definitions, so a later source overrides an earlier one.

    :param files: Macro files given on the command line.
    :param defines: ``NAME=VALUE`` definitions given on the command line.
    :return: Override table.
    """
    macros: dict[str, str] = macroFiles_parse(macroFiles_resolve(files))
    for define in defines:
        name, template = define_split(define)
        macros[name] = template
    LOG(f"{len(macros)} macro overrides loaded")
    return macros


class RichGroup(click.Group):
    """
    A Click Group that uses Rich for rendering help messages.

    Methods:
        format_help(ctx, formatter): Renders the group-level help message with Rich formatting.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the group using Rich.

        :param ctx: The Click context for the command group.
        :param formatter: The Click help formatter.
        """
        usage: str = (
            f"[bold yellow]Usage:[/bold yellow] [cyan]{ctx.command_path}[/cyan] "
            f"[magenta][OPTIONS] COMMAND [ARGS]...[/magenta]\n"
        )
        console.print(usage)

        if self.help:
            console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

        if self.commands:
            console.print("[bold green]Available Commands:[/bold green]")
            for name, command in self.commands.items():
                console.print(
                    f"- [cyan]{name}[/cyan]: [white]{command.short_help or 'No description available.'}[/white]"
                )
            console.print()

        params = self.get_params(ctx)
        if params:
            console.print("[bold yellow]Options:[/bold yellow]")
            for param in params:
                console.print(
                    f"- [cyan]{param.opts[0]}[/cyan]: {getattr(param, 'help', None) or 'No description'}"
                )


class RichCommand(click.Command):
    """
    A Click Command that uses Rich for rendering help messages.

    Methods:
        format_help(ctx, formatter): Renders the command-level help message in a Rich panel.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the command using Rich.

        :param ctx: The Click context for the command.
        :param formatter: The Click help formatter.
        """
        help_text = self.help or "No help text available."
        panel_width = max(len(line) for line in help_text.splitlines()) + 10
        panel_width = min(panel_width, 80)
        console.print(Panel(help_text, expand=False, width=panel_width, border_style="cyan"))

        options = [p for p in self.get_params(ctx) if isinstance(p, click.Option)]
        if options:
            console.print("[bold yellow]Options:[/bold yellow]")
            for option in options:
                console.print(
                    f"- [cyan]{', '.join(option.opts)}[/cyan]: {option.help or 'No description'}"
                )
