"""
Macro Definition Commands

This module provides CLI commands for inspecting the macro table and
validating macro definition files.

Commands:
- ddocmac macros list: List built-in and overriding macros.
- ddocmac macros show <name>: Print the template a name resolves to.
- ddocmac macros check <files>: Parse definition files and report each.
"""

import sys
from pathlib import Path
from rich.console import Console
from rich.markup import escape
import click
from ddocmac.commands.base import RichCommand, RichGroup, macros_load, rich_help
from ddocmac.lib.log import LOG
from ddocmac.lib.macros import DEFAULT_MACROS, MacroFileError, macroFiles_parse, macro_lookup

console: Console = Console()

# Template characters shown by the list command
PREVIEW_WIDTH: int = 40

macro_files_option = click.option(
    "-m",
    "--macros",
    "macroFiles",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Macro definition file (.ddoc); repeatable, later files win.",
)
define_option = click.option(
    "-D", "--define", "defines", multiple=True, help="Define a macro as NAME=VALUE."
)


def template_preview(template: str) -> str:
    """One-line, shortened rendering of a template."""
    flat: str = template.replace("\n", "\\n")
    if len(flat) > PREVIEW_WIDTH:
        flat = flat[: PREVIEW_WIDTH - 3] + "..."
    return flat


def macro_origin(name: str, overrides: dict[str, str]) -> str:
    """Where a name's template comes from: built-in, override or disabled."""
    if name in overrides:
        return "disabled" if overrides[name] == "" else "override"
    return "built-in"


@click.group(
    cls=RichGroup,
    short_help="Inspect macro definitions",
    help="""
    Macro Definitions

    Commands to inspect the macro table and check definition files.
    """,
)
def macros() -> None:
    """
    Root group for macro-related commands.
    """
    pass


macros: click.Group = macros


@macros.command(
    "list",
    cls=RichCommand,
    short_help="List macro names",
    help=rich_help(
        command="list",
        description="List every defined macro with its origin.",
        usage="ddocmac macros list [-m FILE]... [-D NAME=VALUE]...",
        args={"<None>": "no arguments"},
    ),
)
@macro_files_option
@define_option
def macros_list(macroFiles: tuple[Path, ...], defines: tuple[str, ...]) -> None:
    """
    Prints macro names with their origin and a template preview.
    """
    try:
        overrides: dict[str, str] = macros_load(macroFiles, defines)
    except (MacroFileError, OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error loading macros:[/bold red] {escape(str(e))}")
        sys.exit(1)

    names: list[str] = sorted(set(DEFAULT_MACROS) | set(overrides))
    console.print(f"[bold yellow]Macros:[/bold yellow] {len(names)} defined")
    for name in names:
        template: str = macro_lookup(name, overrides) or ""
        console.print(
            f"- [bold cyan]{escape(name)}[/bold cyan] ({macro_origin(name, overrides)}): "
            f"[green]{escape(template_preview(template))}[/green]"
        )


@macros.command(
    "show",
    cls=RichCommand,
    short_help="Show a macro template",
    help=rich_help(
        command="show",
        description="Print the template a macro name resolves to.",
        usage="ddocmac macros show <name> [-m FILE]... [-D NAME=VALUE]...",
        args={"<name>": "The macro name, case-sensitive."},
    ),
)
@click.argument("name", type=str)
@macro_files_option
@define_option
def macros_show(name: str, macroFiles: tuple[Path, ...], defines: tuple[str, ...]) -> None:
    """
    Prints the raw template of a macro.

    :param name: The macro name.
    """
    try:
        overrides: dict[str, str] = macros_load(macroFiles, defines)
    except (MacroFileError, OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error loading macros:[/bold red] {escape(str(e))}")
        sys.exit(1)

    template = macro_lookup(name, overrides)
    if template is None:
        console.print(f"[bold red]Macro '{escape(name)}' is not defined.[/bold red]")
        sys.exit(1)
    click.echo(template)


@macros.command(
    "check",
    cls=RichCommand,
    short_help="Check definition files",
    help=rich_help(
        command="check",
        description="Parse macro definition files and report each one.",
        usage="ddocmac macros check <files>...",
        args={"<files>": "Definition files to check."},
    ),
)
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def macros_check(files: tuple[Path, ...]) -> None:
    """
    Parses each file on its own; a bad file does not stop the others.

    :param files: Definition files.
    """
    failures: int = 0
    for path in files:
        try:
            defined: dict[str, str] = macroFiles_parse([path])
        except (MacroFileError, OSError, UnicodeDecodeError) as e:
            failures += 1
            LOG(f"Check failed for {path}: {e}")
            reason: str = str(e) if isinstance(e, MacroFileError) else f"{path}: {e}"
            console.print(f"[bold red]FAIL[/bold red] {escape(reason)}")
            continue
        console.print(f"[bold green]OK[/bold green]   {escape(str(path))}: {len(defined)} macros")

    if failures:
        sys.exit(1)
