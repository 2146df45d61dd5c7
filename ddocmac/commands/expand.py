"""
Expand Command

This module provides the CLI command that expands macros in documentation
text read from files or stdin.

Command:
- ddocmac expand [FILES]...: Expand macros and write the result.

Code fences are converted to ``D_CODE`` invocations first. With
``--document`` the expanded text becomes the ``BODY`` of the ``DDOC`` page
skeleton.
"""

import sys
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.markup import escape
import click
from ddocmac.commands.base import RichCommand, macros_load, rich_help
from ddocmac.config.settings import appsettings
from ddocmac.lib.log import LOG
from ddocmac.lib.macros import MacroExpander, MacroFileError, embedded_parse
from ddocmac.models.dataModel import ParseResult

console: Console = Console(stderr=True)

DOCUMENT_TEMPLATE: str = "$(DDOC)"


def source_read(files: tuple[Path, ...]) -> str:
    """
    Read the input text: the files concatenated in order, or stdin.

    :param files: Input files; empty to read stdin.
    :return: Input text.
    """
    if not files:
        return click.get_text_stream("stdin").read()
    return "".join(f.read_text(encoding=appsettings.encoding) for f in files)


def source_expand(
    text: str,
    macros: dict[str, str],
    max_depth: Optional[int] = None,
    document: bool = False,
) -> ParseResult:
    """
    Expand documentation text, optionally as a full page.

    :param text: Documentation text, possibly with code fences.
    :param macros: Override table.
    :param max_depth: Macro nesting limit, None for none.
    :param document: Wrap the result in the DDOC skeleton.
    :return: ParseResult with the expansion or error details.
    """
    result: ParseResult = MacroExpander(macros, max_depth).parse(embedded_parse(text))
    if not result.success or not document:
        return result
    page: MacroExpander = MacroExpander({**macros, "BODY": result.text}, max_depth)
    return page.parse(DOCUMENT_TEMPLATE)


@click.command(
    cls=RichCommand,
    short_help="Expand macros in documentation text",
    help=rich_help(
        command="expand",
        description="Expand $(NAME args) macros in documentation text.",
        usage="ddocmac expand [OPTIONS] [FILES]...",
        args={
            "[FILES]": "Input files, concatenated in order. Reads stdin if omitted.",
        },
    ),
)
@click.argument(
    "files", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-m",
    "--macros",
    "macroFiles",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Macro definition file (.ddoc); repeatable, later files win.",
)
@click.option(
    "-D", "--define", "defines", multiple=True, help="Define a macro as NAME=VALUE."
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.option(
    "--document", is_flag=True, help="Wrap the result in the DDOC page skeleton."
)
@click.option("--title", default=None, help="Value of the TITLE macro.")
@click.option(
    "--max-depth",
    "maxDepth",
    type=click.IntRange(min=1),
    default=None,
    help="Abort when macros nest deeper than this.",
)
def expand(
    files: tuple[Path, ...],
    macroFiles: tuple[Path, ...],
    defines: tuple[str, ...],
    output: Optional[Path],
    document: bool,
    title: Optional[str],
    maxDepth: Optional[int],
) -> None:
    """
    Expand macros in the input and write the result.
    """
    try:
        macros: dict[str, str] = macros_load(macroFiles, defines)
    except (MacroFileError, OSError, UnicodeDecodeError) as e:
        LOG(f"Macro loading failed: {e}")
        console.print(f"[bold red]Error loading macros:[/bold red] {escape(str(e))}")
        sys.exit(1)
    if title is not None:
        macros["TITLE"] = title

    try:
        text: str = source_read(files)
    except (OSError, UnicodeDecodeError) as e:
        LOG(f"Input reading failed: {e}")
        console.print(f"[bold red]Error reading input:[/bold red] {escape(str(e))}")
        sys.exit(1)

    result: ParseResult = source_expand(
        text,
        macros,
        maxDepth if maxDepth is not None else appsettings.maxDepth,
        document,
    )
    if not result.success:
        console.print(f"[bold red]Expansion failed:[/bold red] {escape(str(result.error))}")
        sys.exit(1)

    if output is None:
        click.echo(result.text, nl=False)
    else:
        output.write_text(result.text, encoding=appsettings.encoding)
        LOG(f"Wrote {len(result.text)} characters to {output}")
