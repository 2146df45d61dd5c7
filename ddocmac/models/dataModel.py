"""
dataModel.py

This module defines the data models and schemas used throughout ddocmac.
The result models leverage Pydantic for validation and type safety; the
small value types that the scanner produces in bulk are plain dataclasses
and NamedTuples.

Features:
- Token types and tokens produced by the lexer
- Parenthesis matching results
- The fixed-width argument vector used by macro substitution
- Parsing results for substitution and macro definition files

Usage:
Import these models to exchange structured data between engine stages.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Final, NamedTuple, Optional
from enum import Enum
from dataclasses import dataclass
import re

_IDENTIFIER_RE: Final[re.Pattern] = re.compile(r"\w+")

# $0 .. $9 plus the $+ rest slot
ARGUMENT_SLOTS: Final[int] = 11
REST_SLOT: Final[int] = 10
MAX_POSITIONAL: Final[int] = 9


class TokenType(Enum):
    """
    Enum for the kinds of token the lexer emits.
    """

    WORD = 1
    WHITESPACE = 2
    NEWLINE = 3
    DOLLAR = 4
    LPAREN = 5
    RPAREN = 6
    COMMA = 7
    EQUALS = 8
    HEADER = 9
    EMBEDDED = 10


@dataclass(frozen=True)
class Token:
    """One lexical token.

    Attributes:
        type: Kind of token
        text: Token text; for embedded code, the code between the fences
        offset: Absolute start offset in the lexed text
    """

    type: TokenType
    text: str
    offset: int

    @property
    def isIdentifier(self) -> bool:
        """True for a word made of letters, digits and underscores."""
        return self.type == TokenType.WORD and _IDENTIFIER_RE.fullmatch(self.text) is not None


class ParenMatch(NamedTuple):
    """Text between a pair of parentheses.

    Attributes:
        text: Everything strictly between the opening parenthesis and its match
        terminated: Whether the matching closing parenthesis was found
    """

    text: str
    terminated: bool


class KeyValuePair(NamedTuple):
    """A single ``NAME = VALUE`` macro definition."""

    name: str
    value: str


class ArgumentVector(BaseModel):
    """Arguments of one macro invocation.

    Slot 0 holds the whole argument text, slots 1-9 the positional arguments
    and slot 10 the rest (everything after the first top-level comma). A slot
    is ``None`` when the argument was not supplied, which is distinct from an
    argument supplied empty.

    Attributes:
        slots: Exactly eleven optional strings
        count: Number of positional arguments collected
    """

    model_config = ConfigDict(frozen=True)

    slots: tuple[Optional[str], ...] = Field(
        default=(None,) * ARGUMENT_SLOTS,
        description="$0..$9 and $+ values; None marks an absent argument.",
    )
    count: int = Field(default=0, ge=0, le=MAX_POSITIONAL)

    @field_validator("slots")
    @classmethod
    def slots_checkWidth(cls, value: tuple[Optional[str], ...]) -> tuple:
        if len(value) != ARGUMENT_SLOTS:
            raise ValueError(
                f"Argument vector needs {ARGUMENT_SLOTS} slots, got {len(value)}"
            )
        return value

    def __getitem__(self, index: int) -> Optional[str]:
        return self.slots[index]

    @property
    def rest(self) -> Optional[str]:
        return self.slots[REST_SLOT]


class ParseResult(BaseModel):
    """Result of a substitution or expansion.

    Attributes:
        text: The processed text after substitutions
        error: Optional error message if processing failed
        success: Whether processing succeeded
    """

    text: str
    error: str | None
    success: bool


class PairsResult(BaseModel):
    """Result of parsing a macro definition list.

    Attributes:
        success: False only if the very first line was not a definition
        pairs: Definitions in source order
        error: Optional description of the failure
    """

    success: bool
    pairs: list[KeyValuePair] = Field(default_factory=list)
    error: str | None = None
