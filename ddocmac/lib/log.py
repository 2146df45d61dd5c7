"""
Debug trace of macro expansion, through Loguru.

Degraded input is never an error for the expander, so the trace is where it
shows up. Records written through `LOG`:
- undefined macro names, which expand to nothing
- missing ``$N`` arguments, which collapse an invocation
- unterminated parentheses, scanned to the end of the text
- expansions aborted by runaway recursion
- definition lists whose first line is not ``NAME = VALUE``
- macro files read, with the number of definitions in each, and the size
  of the merged override table
- macro loading, input reading and ``macros check`` failures in the CLI
- the size of the output file written by ``expand -o``

Records go to stderr, so expanded text on stdout stays clean. They are
dropped while `appsettings.beQuiet` is set (``ddocmac -q`` or
``DDOCMAC_BEQUIET=true``).

Example:
    from ddocmac.lib.log import LOG
    LOG(f"Undefined macro {name}")
"""

from loguru import logger
from typing import Any
import sys

# Distinct logger instance for the expander
app_logger = logger.bind(app="DDOCMAC")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs at debug level unless `appsettings.beQuiet` is set. Settings are
    imported on each call so that environment changes made after import
    (as the tests do) are honoured.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from ddocmac.config.settings import appsettings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)
