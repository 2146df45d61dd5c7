"""
Macro expansion driver.

Scans documentation text for ``$(NAME args)`` invocations and replaces each
with its expanded template. Expansion of one invocation runs in two passes:

1. the arguments are bound and spliced into the template (``$0``..``$9``, ``$+``)
2. the result is scanned again, expanding any invocation the template (or an
   argument) introduced

Templates are only expanded at their call site, which allows forward
references and recursive macros. Text emitted by an expansion is never
re-scanned by the enclosing level, so ``$(DOLLAR)(B x)`` yields ``$(B x)``.

Example:
    expander = MacroExpander({"GREET": "Hello $(B $0)"})
    expander.expand("$(GREET world)")   # 'Hello <b>world</b>'
"""

from typing import Final, Mapping, Optional, Self
from ddocmac.lib.lexer import Lexer, whitespace_strip
from ddocmac.lib.log import LOG
from ddocmac.lib.macros.arguments import arguments_collect, arguments_replace
from ddocmac.lib.macros.errors import EmbeddedCodeError, MacroRecursionError
from ddocmac.lib.macros.scanner import parenthesis_match
from ddocmac.lib.macros.table import macro_lookup
from ddocmac.models.dataModel import (
    ArgumentVector,
    ParenMatch,
    ParseResult,
    TokenType,
)

# Placeholder that the document skeleton fills with the page body
BODY_MACRO: Final[str] = "BODY"


class MacroExpander:
    """Expands macro invocations against built-ins plus caller overrides.

    Attributes:
        macros: Overrides consulted before the built-in table
        max_depth: Maximum invocation nesting, or None for no limit
    """

    def __init__(
        self: Self,
        macros: Optional[Mapping[str, str]] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """Initialize the expander.

        Args:
            macros: Override table; a value of "" disables a built-in
            max_depth: Nesting limit for self-referential templates

        Raises:
            ValueError: If max_depth is given and smaller than 1
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.macros: Mapping[str, str] = macros if macros is not None else {}
        self.max_depth: Optional[int] = max_depth

    def expand(self: Self, tokens: Lexer | str) -> str:
        """Expand every invocation in a text, consuming the token stream.

        Args:
            tokens: Text, or a lexer over it

        Returns:
            The expanded text

        Raises:
            EmbeddedCodeError: If the stream holds unconverted embedded code
            MacroRecursionError: If max_depth is exceeded
        """
        lexer: Lexer = Lexer(tokens) if isinstance(tokens, str) else tokens
        output: list[str] = []
        self._text_expand(lexer, output, 0)
        return "".join(output)

    def invocation_expand(self: Self, body: str) -> str:
        """Expand one invocation given the text inside its ``$( )``."""
        output: list[str] = []
        self._invocation_expand(Lexer(body, blocks=False), output, 0)
        return "".join(output)

    def macro_expand(self: Self, lexer: Lexer) -> str:
        """Expand the invocation at the front of a lexer and consume it.

        The lexer must be positioned on ``$`` followed by ``(``, or on ``(``.

        Raises:
            ValueError: If the lexer is not positioned on an invocation
        """
        if not lexer.empty and lexer.front.type == TokenType.DOLLAR:
            lexer.pop_front()
        if lexer.empty or lexer.front.type != TokenType.LPAREN:
            raise ValueError(f"$ or ( expected, not {lexer.front!r}")
        match: ParenMatch = parenthesis_match(lexer)
        output: list[str] = []
        self._invocation_expand(Lexer(match.text, blocks=False), output, 0)
        return "".join(output)

    def parse(self: Self, input_text: str) -> ParseResult:
        """Expand a text, reporting runaway recursion as a failed result.

        Args:
            input_text: Text to expand

        Returns:
            ParseResult with the expansion or error details
        """
        if not input_text:
            return ParseResult(text="", error=None, success=True)
        try:
            return ParseResult(text=self.expand(input_text), error=None, success=True)
        except RecursionError as e:
            LOG(f"Expansion aborted: {e}")
            return ParseResult(text="", error=str(e), success=False)

    def _text_expand(self: Self, lexer: Lexer, output: list[str], depth: int) -> None:
        """Copy text through, expanding each ``$( )`` span found."""
        while not lexer.empty:
            token = lexer.front
            if token.type == TokenType.EMBEDDED:
                raise EmbeddedCodeError(token.offset)
            if token.type == TokenType.DOLLAR:
                lexer.pop_front()
                if not lexer.empty and lexer.front.type == TokenType.LPAREN:
                    body: Lexer = Lexer(parenthesis_match(lexer).text, blocks=False)
                    if not body.empty:
                        self._invocation_expand(body, output, depth)
                else:
                    output.append("$")
            else:
                output.append(token.text)
                lexer.pop_front()

    def _invocation_expand(
        self: Self, body: Lexer, output: list[str], depth: int
    ) -> None:
        """Expand ``NAME args`` into `output`; undefined or failed calls add nothing."""
        if body.empty or not body.front.isIdentifier:
            return
        name: str = body.front.text
        template: Optional[str] = macro_lookup(name, self.macros)
        if template is None:
            LOG(f"Undefined macro {name}")
            return
        body.pop_front()

        if body.empty and name == BODY_MACRO:
            output.append(template)
            return

        if self.max_depth is not None and depth >= self.max_depth:
            raise MacroRecursionError(name, self.max_depth)

        # One separator token after the name, whatever it is, then blanks
        if not body.empty:
            body.pop_front()
        whitespace_strip(body)

        args: ArgumentVector = arguments_collect(body)
        substituted: ParseResult = arguments_replace(template, args)
        if not substituted.success:
            return
        self._text_expand(Lexer(substituted.text, blocks=False), output, depth + 1)


def expand(
    tokens: Lexer | str,
    macros: Optional[Mapping[str, str]] = None,
    max_depth: Optional[int] = None,
) -> str:
    """Expand every macro invocation in a text. See `MacroExpander.expand`."""
    return MacroExpander(macros, max_depth).expand(tokens)


def invocation_expand(
    body: str,
    macros: Optional[Mapping[str, str]] = None,
    max_depth: Optional[int] = None,
) -> str:
    """Expand the body of a single ``$( )`` invocation."""
    return MacroExpander(macros, max_depth).invocation_expand(body)


def macro_expand(
    lexer: Lexer,
    macros: Optional[Mapping[str, str]] = None,
    max_depth: Optional[int] = None,
) -> str:
    """Expand and consume the invocation at the front of a lexer."""
    return MacroExpander(macros, max_depth).macro_expand(lexer)
