r"""
Token stream over documentation text.

The expansion engine never looks at raw characters: it consumes typed tokens
through a small contract (``empty``, ``front``, ``pop_front``, ``offset``)
and slices the original text by token offsets when it needs verbatim spans.

Token rules:
- ``$ ( ) , =`` are single-character tokens of their own type
- ``\n`` and ``\r\n`` are newlines; other blank runs are whitespace
- ``\w+`` runs are words; any other character is a one-character word,
  so ``$+</i>`` scans as ``$``, ``+``, ``<`` ...
- ``Identifier:`` first on a line is a section header
- a line of three or more dashes opens an embedded code block that runs
  to the next such line

Headers and code blocks are line-level structure of a whole document or
macro file. Lexers over invocation bodies, templates and substituted text
are built with ``blocks=False`` and never produce them.

Example:
    lexer = Lexer("$(B bold)")
    while not lexer.empty:
        print(lexer.front)
        lexer.pop_front()
"""

import copy
import re
from typing import Final, Iterator, Optional, Self
from ddocmac.models.dataModel import Token, TokenType

_SINGLE: Final[dict[str, TokenType]] = {
    "$": TokenType.DOLLAR,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    "=": TokenType.EQUALS,
}

_NEWLINE_RE: Final[re.Pattern] = re.compile(r"\r?\n")
_BLANK_RE: Final[re.Pattern] = re.compile(r"(?:[^\S\r\n]|\r(?!\n))+")
_WORD_RE: Final[re.Pattern] = re.compile(r"\w+")
_HEADER_RE: Final[re.Pattern] = re.compile(r"\w+:(?=\s|\Z)")
_FENCE_RE: Final[re.Pattern] = re.compile(r"[ \t]*-{3,}[ \t]*(?:\r?\n|\Z)")
_FENCE_LINE_RE: Final[re.Pattern] = re.compile(
    r"^[ \t]*-{3,}[ \t]*(?:\r?\n|\Z)", re.MULTILINE
)


class Lexer:
    """Lazy scanner producing `Token` objects from a string.

    Attributes:
        text: The text being scanned
        blocks: Whether headers and embedded code blocks are recognised
        front: The current token, or None once the stream is exhausted
    """

    def __init__(self: Self, text: str, blocks: bool = True) -> None:
        self.text: str = text
        self.blocks: bool = blocks
        self.front: Optional[Token] = None
        self._pos: int = 0
        self._lineStart: bool = blocks
        self._scan()

    @property
    def empty(self: Self) -> bool:
        return self.front is None

    @property
    def offset(self: Self) -> int:
        """Start offset of the current token, or the text length when exhausted."""
        return self.front.offset if self.front is not None else len(self.text)

    def pop_front(self: Self) -> None:
        """Advance to the next token.

        Raises:
            IndexError: If the stream is already exhausted
        """
        if self.front is None:
            raise IndexError("pop_front on an exhausted lexer")
        self._scan()

    def copy(self: Self) -> "Lexer":
        """Independent cursor over the same text, for lookahead."""
        return copy.copy(self)

    def seek(self: Self, other: "Lexer") -> None:
        """Move to the position of a cursor obtained from `copy`."""
        if other.text is not self.text:
            raise ValueError("Cannot seek to a cursor over a different text")
        self.front = other.front
        self._pos = other._pos
        self._lineStart = other._lineStart

    def __iter__(self: Self) -> Iterator[Token]:
        while self.front is not None:
            token: Token = self.front
            self._scan()
            yield token

    def __repr__(self: Self) -> str:
        return f"Lexer(offset={self.offset}, front={self.front!r})"

    def _scan(self: Self) -> None:
        """Scan the token starting at the current position into `front`."""
        text: str = self.text
        pos: int = self._pos
        if pos >= len(text):
            self.front = None
            return

        lineStart: bool = self._lineStart
        self._lineStart = False
        char: str = text[pos]

        if lineStart:
            fence: Optional[re.Match] = _FENCE_RE.match(text, pos)
            if fence:
                self._embedded_scan(fence.end())
                return

        if char in _SINGLE:
            self._emit(_SINGLE[char], char, pos, pos + 1)
            return

        match: Optional[re.Match] = _NEWLINE_RE.match(text, pos)
        if match:
            self._lineStart = self.blocks
            self._emit(TokenType.NEWLINE, match.group(), pos, match.end())
            return

        match = _BLANK_RE.match(text, pos)
        if match:
            # Leading blanks keep the line open for a header
            self._lineStart = lineStart
            self._emit(TokenType.WHITESPACE, match.group(), pos, match.end())
            return

        if lineStart:
            match = _HEADER_RE.match(text, pos)
            if match:
                self._emit(TokenType.HEADER, match.group(), pos, match.end())
                return

        match = _WORD_RE.match(text, pos)
        if match:
            self._emit(TokenType.WORD, match.group(), pos, match.end())
            return

        self._emit(TokenType.WORD, char, pos, pos + 1)

    def _embedded_scan(self: Self, codeStart: int) -> None:
        """Emit the code between an opening fence and the next fence line."""
        start: int = self._pos
        closing: Optional[re.Match] = _FENCE_LINE_RE.search(self.text, codeStart)
        if closing:
            code: str = self.text[codeStart : closing.start()]
            end: int = closing.end()
        else:
            code = self.text[codeStart:]
            end = len(self.text)
        self._lineStart = True
        self._emit(TokenType.EMBEDDED, code, start, end)

    def _emit(self: Self, kind: TokenType, text: str, start: int, end: int) -> None:
        self.front = Token(type=kind, text=text, offset=start)
        self._pos = end


def whitespace_strip(lexer: Lexer, newlines: bool = True) -> None:
    """Skip blank tokens; newlines too unless `newlines` is False."""
    blanks: tuple[TokenType, ...] = (
        (TokenType.WHITESPACE, TokenType.NEWLINE) if newlines else (TokenType.WHITESPACE,)
    )
    while not lexer.empty and lexer.front.type in blanks:
        lexer.pop_front()
