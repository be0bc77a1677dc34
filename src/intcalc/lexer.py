"""Lexer for intcalc: turns one line of source text into tokens, one per call."""

from __future__ import annotations

from intcalc.errors import IntegerOverflowError, LexError
from intcalc.tokens import (
    INT64_MAX,
    SINGLE_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenType,
    is_ascii_digit,
)

_MAX_DIGITS = len(str(INT64_MAX))


class Lexer:
    """Pull-based tokenizer with a single-character lookahead cursor.

    ``current_char`` is always ``text[pos]``, or ``None`` once ``pos`` has run
    past the end of the text. The cursor never moves backwards.
    """

    def __init__(self, text: str, line: int = 1) -> None:
        self._text = text
        self._line = line
        self._pos = 0
        self._current_char: str | None = text[0] if text else None

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def current_char(self) -> str | None:
        return self._current_char

    def next_token(self) -> Token:
        """Return the next token; EOF forever once the text is exhausted."""
        while self._current_char is not None:
            ch = self._current_char

            if ch.isspace():
                self._skip_whitespace()
                continue

            if is_ascii_digit(ch):
                return self._integer()

            tt = SINGLE_CHAR_TOKENS.get(ch)
            if tt is None:
                raise LexError(ch, self._current_pos(), self._text)

            start = self._current_pos()
            self._advance()
            return Token(tt, None, ch, Span(start, self._current_pos()))

        pos = self._current_pos()
        return Token(TokenType.EOF, None, "", Span(pos, pos))

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._pos + 1, self._pos)

    def _advance(self) -> None:
        self._pos += 1
        if self._pos >= len(self._text):
            self._current_char = None
        else:
            self._current_char = self._text[self._pos]

    def _skip_whitespace(self) -> None:
        while self._current_char is not None and self._current_char.isspace():
            self._advance()

    def _integer(self) -> Token:
        start = self._current_pos()
        digits = []
        while self._current_char is not None and is_ascii_digit(self._current_char):
            digits.append(self._current_char)
            self._advance()
        raw = "".join(digits)
        span = Span(start, self._current_pos())
        # Check the digit count first: int() refuses very long digit strings
        if len(raw.lstrip("0")) > _MAX_DIGITS or int(raw) > INT64_MAX:
            raise IntegerOverflowError(raw, span, self._text)
        return Token(TokenType.INTEGER, int(raw), raw, span)


def tokenize(text: str, line: int = 1) -> list[Token]:
    """Tokenize the full text and return the token list, ending with EOF."""
    lexer = Lexer(text, line)
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
