"""
Argument binding and substitution (pass 1 of macro expansion).

For ``$(NAME arg1, arg2)`` the binder receives ``arg1, arg2`` and splits it at
top-level commas; commas nested in parentheses do not split. The substituter
then splices ``$0``..``$9`` and ``$+`` into the macro template. A template that
references an argument the call did not supply makes the whole substitution
fail, so that the invocation expands to nothing.
"""

import string
from typing import Optional
from ddocmac.lib.lexer import Lexer, whitespace_strip
from ddocmac.lib.log import LOG
from ddocmac.lib.macros.errors import EmbeddedCodeError
from ddocmac.lib.macros.scanner import parenthesis_match
from ddocmac.models.dataModel import (
    ARGUMENT_SLOTS,
    MAX_POSITIONAL,
    REST_SLOT,
    ArgumentVector,
    ParenMatch,
    ParseResult,
    TokenType,
)


def arguments_collect(source: Lexer | str) -> ArgumentVector:
    """Split invocation arguments into the eleven argument slots.

    Slot 0 receives the text verbatim. Each top-level comma closes the current
    positional argument; whitespace after it is skipped. Once the ninth
    argument is reached commas stop splitting and the ninth slot takes the
    rest of the text. Slot 10 holds everything after the first comma, or ""
    when there is none.

    Args:
        source: Argument text, or a lexer positioned on it. A lexer is not
            advanced; the scan works on a copy.

    Returns:
        ArgumentVector; every slot is absent when the text is empty
    """
    lexer: Lexer = (
        Lexer(source, blocks=False) if isinstance(source, str) else source.copy()
    )
    if lexer.empty:
        return ArgumentVector()

    text: str = lexer.text
    slots: list[Optional[str]] = [None] * ARGUMENT_SLOTS
    slots[0] = text[lexer.offset :]
    slots[REST_SLOT] = ""
    position: int = 1
    argStart: int = lexer.offset

    while not lexer.empty:
        token = lexer.front
        if token.type == TokenType.EMBEDDED:
            raise EmbeddedCodeError(token.offset)
        if token.type == TokenType.COMMA and position < MAX_POSITIONAL:
            slots[position] = text[argStart : token.offset]
            position += 1
            lexer.pop_front()
            whitespace_strip(lexer)
            argStart = lexer.offset
            if position == 2:
                slots[REST_SLOT] = text[argStart:]
        elif token.type == TokenType.LPAREN:
            parenthesis_match(lexer)
        else:
            lexer.pop_front()

    slots[position] = text[argStart:]
    return ArgumentVector(slots=tuple(slots), count=position)


def arguments_replace(template: str, args: ArgumentVector) -> ParseResult:
    """Splice invocation arguments into a macro template.

    ``$N`` takes the single digit N only, so ``$12`` is ``$1`` followed by
    ``2``. ``$+`` never fails. Any other ``$`` is copied literally, which
    leaves nested ``$(...)`` invocations for the second pass.

    Args:
        template: Macro template text
        args: Arguments of the invocation

    Returns:
        ParseResult with the substituted text, or an unsuccessful result
        naming the first missing argument
    """
    output: list[str] = []
    missing: Optional[int] = _arguments_replaceInto(
        Lexer(template, blocks=False), args, output
    )
    if missing is not None:
        msg: str = f"Missing argument ${missing}"
        LOG(msg)
        return ParseResult(text="", error=msg, success=False)
    return ParseResult(text="".join(output), error=None, success=True)


def _arguments_replaceInto(
    lexer: Lexer, args: ArgumentVector, output: list[str]
) -> Optional[int]:
    """Substitute into `output`; return the index of a missing argument, if any."""
    while not lexer.empty:
        token = lexer.front
        if token.type == TokenType.EMBEDDED:
            raise EmbeddedCodeError(token.offset)

        if token.type == TokenType.DOLLAR:
            lexer.pop_front()
            if lexer.empty:
                output.append("$")
                break
            reference: str = lexer.front.text
            if reference[0] in string.digits:
                index: int = int(reference[0])
                value: Optional[str] = args[index]
                if value is None:
                    return index
                output.append(value)
                output.append(reference[1:])
                lexer.pop_front()
            elif reference == "+":
                lexer.pop_front()
                output.append(args.rest or "")
            else:
                output.append("$")

        elif token.type == TokenType.LPAREN:
            output.append("(")
            match: ParenMatch = parenthesis_match(lexer)
            missing: Optional[int] = _arguments_replaceInto(
                Lexer(match.text, blocks=False), args, output
            )
            if missing is not None:
                return missing
            if match.terminated:
                output.append(")")

        else:
            output.append(token.text)
            lexer.pop_front()

    return None
