"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol


class TokenType(Enum):
    INTEGER = auto()  # [0-9]+

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    MUL = auto()  # *
    DIV = auto()  # /

    # Grouping
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    EOF = auto()


# Single-character tokens, keyed by source character
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


_NO_SPAN = Span(Position(1, 1, 0), Position(1, 1, 0))


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    Equality is structural over type and value only, so ``INTEGER 3`` read at
    two different places compares equal.
    """

    type: TokenType
    value: int | None = None
    raw: str = field(default="", compare=False)
    span: Span = field(default=_NO_SPAN, compare=False)

    def describe(self) -> str:
        """Human-readable name used in diagnostics."""
        if self.type == TokenType.INTEGER:
            return f"integer {self.value}"
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.raw or _TOKEN_CHARS[self.type]}'"


_TOKEN_CHARS = {tt: ch for ch, tt in SINGLE_CHAR_TOKENS.items()}


class TokenSource(Protocol):
    """Anything the parser can pull tokens from, one at a time."""

    def next_token(self) -> Token: ...


def is_ascii_digit(ch: str) -> bool:
    """Return True if ch is one of 0-9 (Unicode digits are not accepted)."""
    return len(ch) == 1 and "0" <= ch <= "9"


def token_name(tt: TokenType) -> str:
    """Quoted source form of a token type, for 'expected ...' messages."""
    if tt == TokenType.INTEGER:
        return "integer"
    if tt == TokenType.EOF:
        return "end of input"
    return f"'{_TOKEN_CHARS[tt]}'"
