"""
Balanced-parenthesis scanner.

Delimits the text between an opening parenthesis and its match, taking
nesting into account. Unbalanced input is tolerated: the scan then runs to
the end of the stream and says so, letting callers decide whether to re-emit
a closing parenthesis that was never there.
"""

from ddocmac.lib.lexer import Lexer
from ddocmac.lib.log import LOG
from ddocmac.lib.macros.errors import EmbeddedCodeError
from ddocmac.models.dataModel import ParenMatch, TokenType


def parenthesis_match(lexer: Lexer) -> ParenMatch:
    """Consume a parenthesised span from the lexer.

    Args:
        lexer: Stream positioned on an opening parenthesis. On return it is
            positioned just past the matching closer, or exhausted.

    Returns:
        ParenMatch with the text strictly inside the parentheses and whether
        the matching closer was found

    Raises:
        ValueError: If the lexer is not positioned on an opening parenthesis
        EmbeddedCodeError: If the span holds unconverted embedded code
    """
    if lexer.empty or lexer.front.type != TokenType.LPAREN:
        raise ValueError(f"Opening parenthesis expected, not {lexer.front!r}")

    start: int = lexer.offset + 1
    depth: int = 0
    while True:
        if lexer.front.type == TokenType.RPAREN:
            depth -= 1
        elif lexer.front.type == TokenType.LPAREN:
            depth += 1
        elif lexer.front.type == TokenType.EMBEDDED:
            raise EmbeddedCodeError(lexer.front.offset)
        lexer.pop_front()
        if depth == 0 or lexer.empty:
            break

    if depth == 0:
        # lexer.offset is just past the closer
        return ParenMatch(text=lexer.text[start : lexer.offset - 1], terminated=True)

    LOG(f"Unterminated parenthesis at offset {start - 1}")
    return ParenMatch(text=lexer.text[start:], terminated=False)
