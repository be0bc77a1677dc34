"""Recursive descent parser for intcalc that evaluates as it parses.

Grammar, precedence low to high, all operators left-associative::

    expr   = term { ("+" | "-") term }
    term   = factor { ("*" | "/") factor }
    factor = INTEGER | "(" expr ")"

Each rule returns the value of the sub-expression it recognised; no tree
is built.
"""

from __future__ import annotations

from intcalc.errors import DivisionByZeroError, IntegerOverflowError, ParseError
from intcalc.lexer import Lexer
from intcalc.tokens import (
    INT64_MAX,
    INT64_MIN,
    Position,
    Span,
    Token,
    TokenSource,
    TokenType,
    token_name,
)


class Parser:
    """Recursive descent evaluator driven by a single-token lookahead."""

    def __init__(
        self,
        tokens: TokenSource,
        source: str = "",
        *,
        allow_trailing: bool = False,
    ) -> None:
        self._tokens = tokens
        self._source = source
        self._allow_trailing = allow_trailing
        self._current_token = tokens.next_token()
        self._prev_end = self._current_token.span.start

    @property
    def current_token(self) -> Token:
        return self._current_token

    def evaluate(self) -> int:
        """Evaluate one complete expression and apply the trailing-token policy."""
        try:
            result = self.expr()
        except RecursionError:
            raise self._error("expression nested too deeply", expected="") from None

        if not self._allow_trailing and self._current_token.type != TokenType.EOF:
            raise self._error(
                f"expected end of input, found {self._current_token.describe()}",
                expected=token_name(TokenType.EOF),
            )
        return result

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def eat(self) -> Token:
        """Consume the lookahead and pull the next token from the source."""
        tok = self._current_token
        self._prev_end = tok.span.end
        self._current_token = self._tokens.next_token()
        return tok

    def _expect(self, tt: TokenType) -> Token:
        if self._current_token.type != tt:
            raise self._error(
                f"expected {token_name(tt)}, found {self._current_token.describe()}",
                expected=token_name(tt),
            )
        return self.eat()

    def _error(self, message: str, expected: str) -> ParseError:
        tok = self._current_token
        return ParseError(
            message, tok.span, self._source, expected=expected, found=tok.describe()
        )

    def _checked(self, value: int, start: Position) -> int:
        if not INT64_MIN <= value <= INT64_MAX:
            raise IntegerOverflowError(value, Span(start, self._prev_end), self._source)
        return value

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def expr(self) -> int:
        start = self._current_token.span.start
        result = self.term()

        while self._current_token.type in (TokenType.PLUS, TokenType.MINUS):
            op = self.eat()
            right = self.term()
            if op.type == TokenType.PLUS:
                result = self._checked(result + right, start)
            else:
                result = self._checked(result - right, start)

        return result

    def term(self) -> int:
        start = self._current_token.span.start
        result = self.factor()

        while self._current_token.type in (TokenType.MUL, TokenType.DIV):
            op = self.eat()
            right_start = self._current_token.span.start
            right = self.factor()
            if op.type == TokenType.MUL:
                result = self._checked(result * right, start)
            else:
                if right == 0:
                    raise DivisionByZeroError(Span(right_start, self._prev_end), self._source)
                result = self._checked(_div_trunc(result, right), start)

        return result

    def factor(self) -> int:
        tok = self._current_token

        if tok.type == TokenType.INTEGER:
            self.eat()
            return tok.value

        if tok.type == TokenType.LPAREN:
            self.eat()
            result = self.expr()
            self._expect(TokenType.RPAREN)
            return result

        raise self._error(
            f"expected integer or '(', found {tok.describe()}",
            expected="integer or '('",
        )


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def evaluate(source: str, *, allow_trailing: bool = False, line: int = 1) -> int:
    """Convenience: lex, parse and evaluate one line of source text."""
    return Parser(Lexer(source, line), source, allow_trailing=allow_trailing).evaluate()
