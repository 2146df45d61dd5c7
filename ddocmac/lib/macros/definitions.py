"""
Macro definition parsing.

Definitions are ``NAME = VALUE`` lines, as found in ``.ddoc`` macro files and
in the ``Macros:`` section of documentation comments. Blanks around ``=`` are
ignored. A line that is not a definition continues the previous value, so
values may span several lines; the newlines between them are kept. A section
header line ends the list.

Macros are not expanded here: values are kept verbatim and only expanded at
their final call site.

Example:
    pairs = keyValuePairs_parse(Lexer("GREETINGS = Hello $(B $0)\\nIDENTITY = $0"))
    # pairs.pairs == [("GREETINGS", "Hello $(B $0)"), ("IDENTITY", "$0")]
"""

from pathlib import Path
from typing import Final, Iterable, Optional
from ddocmac.config.settings import appsettings
from ddocmac.lib.lexer import Lexer, whitespace_strip
from ddocmac.lib.log import LOG
from ddocmac.lib.macros.errors import MacroFileError
from ddocmac.models.dataModel import KeyValuePair, PairsResult, TokenType

# Characters of unparsed text quoted in MacroFileError
ERROR_CONTEXT: Final[int] = 60


def keyValuePair_match(lexer: Lexer) -> Optional[tuple[str, int, int]]:
    """Try to read one ``NAME = VALUE`` line.

    On success the lexer is left on the newline ending the line (or
    exhausted); on failure it is not moved.

    Args:
        lexer: Stream positioned at the start of a line

    Returns:
        (name, value start offset, value end offset), or None
    """
    cursor: Lexer = lexer.copy()
    whitespace_strip(cursor, newlines=False)
    if cursor.empty or not cursor.front.isIdentifier:
        return None
    name: str = cursor.front.text
    cursor.pop_front()

    whitespace_strip(cursor, newlines=False)
    if cursor.empty or cursor.front.type != TokenType.EQUALS:
        return None
    cursor.pop_front()
    whitespace_strip(cursor, newlines=False)

    start: int = cursor.offset
    line_skip(cursor)
    lexer.seek(cursor)
    return name, start, cursor.offset


def line_skip(lexer: Lexer) -> None:
    """Advance to the newline ending the current line, or to the end."""
    while not lexer.empty and lexer.front.type != TokenType.NEWLINE:
        lexer.pop_front()


def line_isHeader(lexer: Lexer) -> bool:
    """Whether the current line opens a new section."""
    cursor: Lexer = lexer.copy()
    whitespace_strip(cursor, newlines=False)
    return not cursor.empty and cursor.front.type == TokenType.HEADER


def keyValuePairs_parse(lexer: Lexer) -> PairsResult:
    """Parse a list of macro definitions.

    Parsing stops at the end of input or at a section header, which is left
    in the lexer for the caller. Blank lines before the first definition are
    skipped; after it they belong to the value being built.

    Args:
        lexer: Stream positioned at the start of a line

    Returns:
        PairsResult; unsuccessful only when the first line is not a definition,
        in which case the lexer is left on that line
    """
    text: str = lexer.text
    pairs: list[KeyValuePair] = []
    pending: Optional[str] = None
    valueStart: int = 0
    valueEnd: int = 0

    while not lexer.empty:
        if pending is None:
            whitespace_strip(lexer)
            if lexer.empty:
                break

        match: Optional[tuple[str, int, int]] = keyValuePair_match(lexer)
        if match is None:
            if pending is None:
                msg: str = f"Expected NAME = VALUE at offset {lexer.offset}"
                LOG(msg)
                return PairsResult(success=False, pairs=pairs, error=msg)
            if line_isHeader(lexer):
                break
            line_skip(lexer)
            valueEnd = lexer.offset
        else:
            if pending is not None:
                pairs.append(KeyValuePair(pending, text[valueStart:valueEnd]))
            pending, valueStart, valueEnd = match

        if not lexer.empty:
            lexer.pop_front()

    if pending is not None:
        pairs.append(KeyValuePair(pending, text[valueStart:valueEnd]))

    return PairsResult(success=True, pairs=pairs)


def macroFiles_parse(
    paths: Iterable[Path | str], encoding: Optional[str] = None
) -> dict[str, str]:
    """Read macro definition files into one override table.

    A blank line between two definitions gives the first one a trailing
    newline; end a block with a dummy definition (e.g. ``_ =``) to avoid it.

    Args:
        paths: Files to read, in order; later definitions win
        encoding: Text encoding, defaulting to the configured one

    Returns:
        dict mapping macro names to templates

    Raises:
        MacroFileError: If a file holds anything that is not a definition
        OSError: If a file cannot be read
    """
    macros: dict[str, str] = {}
    for path in paths:
        text: str = Path(path).read_text(encoding=encoding or appsettings.encoding)
        lexer: Lexer = Lexer(text)
        result: PairsResult = keyValuePairs_parse(lexer)
        if not lexer.empty:
            offset: int = lexer.offset
            raise MacroFileError(
                str(path), offset, text[offset : offset + ERROR_CONTEXT]
            )
        for pair in result.pairs:
            macros[pair.name] = pair.value
        LOG(f"Read {len(result.pairs)} macro definitions from {path}")
    return macros
