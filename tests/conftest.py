"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from intcalc.errors import LexError
from intcalc.lexer import tokenize
from intcalc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


class ListTokenSource:
    """Token source backed by a list, for driving the parser without a lexer.

    Returns EOF once the list is exhausted. A LexError in the list is raised
    instead of returned when its turn comes.
    """

    def __init__(self, tokens: list[Token | LexError]) -> None:
        self._tokens = list(tokens)
        self.calls = 0

    def next_token(self) -> Token:
        self.calls += 1
        if not self._tokens:
            return Token(TokenType.EOF)
        item = self._tokens.pop(0)
        if isinstance(item, LexError):
            raise item
        return item


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[int | None]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
