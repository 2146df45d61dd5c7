"""
Embedded code conversion.

Documentation may show code between fence lines of three or more dashes.
Such code must not be scanned for macros, so it is wrapped in a ``D_CODE``
invocation before expansion; the expander refuses raw embedded code.
"""

from typing import Final
from ddocmac.lib.lexer import Lexer
from ddocmac.models.dataModel import TokenType

CODE_MACRO: Final[str] = "D_CODE"


def embedded_parse(text: str) -> str:
    """Wrap every fenced code block of a text in ``$(D_CODE ...)``.

    Args:
        text: Documentation text, possibly with code fences

    Returns:
        The text with fences replaced; text outside code is unchanged
    """
    output: list[str] = []
    for token in Lexer(text):
        if token.type == TokenType.EMBEDDED:
            output.append(f"$({CODE_MACRO} {token.text})")
        else:
            output.append(token.text)
    return "".join(output)
