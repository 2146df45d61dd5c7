"""
Macro package for ddocmac.

Provides macro expansion over the built-in table and caller overrides,
parsing of macro definition files, and conversion of embedded code.
"""

from .table import DEFAULT_MACROS, macro_lookup
from .scanner import parenthesis_match
from .arguments import arguments_collect, arguments_replace
from .expand import MacroExpander, expand, invocation_expand, macro_expand
from .definitions import keyValuePairs_parse, macroFiles_parse
from .embedded import embedded_parse
from .errors import EmbeddedCodeError, MacroFileError, MacroRecursionError

__all__ = [
    "DEFAULT_MACROS",
    "macro_lookup",
    "parenthesis_match",
    "arguments_collect",
    "arguments_replace",
    "MacroExpander",
    "expand",
    "invocation_expand",
    "macro_expand",
    "keyValuePairs_parse",
    "macroFiles_parse",
    "embedded_parse",
    "EmbeddedCodeError",
    "MacroFileError",
    "MacroRecursionError",
]
