"""
ddocmac Main Module.

This module serves as the main entry point for ddocmac, a documentation
macro expander compatible with the DDOC macro language.

Features:
- Expands $(NAME args) invocations against built-in and user macros
- Reads macro definition files (.ddoc) from the command line, from
  settings and from the user config directory
- Converts fenced code blocks before expansion
- Handles graceful termination on user interruption

Examples:
    Expand a document to stdout:
        $ ddocmac expand page.dd

    Use extra macros and build a full HTML page:
        $ ddocmac expand -m html.ddoc --document --title Home page.dd -o page.html

    Pipe text through:
        $ echo '$(B bold)' | ddocmac expand

    Inspect the macro table:
        $ ddocmac macros show DDOC_PARAMS
"""

import signal
import sys
from types import FrameType
from typing import Final, Optional
from rich.console import Console
from ddocmac.commands.app import cli

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console(stderr=True)


def signal_handle(sig: int, frame: Optional[FrameType]) -> None:
    """Signal handler for graceful interruption.

    Args:
        sig: Signal number
        frame: Current stack frame
    """
    console.print("\n[bold cyan]Interrupted by user. Exiting.[/bold cyan]")
    sys.exit(130)


def main() -> None:
    """Console entry point.

    Note:
        Registers the SIGINT handler, then hands over to the Click group
    """
    signal.signal(signal.SIGINT, signal_handle)
    cli(prog_name="ddocmac")


if __name__ == "__main__":
    main()
