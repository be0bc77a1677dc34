"""Error types with formatted source context."""

from __future__ import annotations

import re

from intcalc.tokens import Position, Span

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split on \\n, \\r\\n and \\r only; a final line break adds no empty line."""
    lines = _LINE_BREAK.split(source)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class CalcError(Exception):
    """Base for every failure raised while lexing, parsing or evaluating a line."""

    kind = "error"

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<stdin>") -> str:
        lines = split_lines(self.source)
        # The source may be a single line evaluated on its own, so index by
        # line only when the source actually holds that many lines.
        line_idx = self.span.start.line - 1 if len(lines) > 1 else 0
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx]
        else:
            source_line = ""

        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"{self.kind}: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(CalcError):
    """Raised when the lexer meets a character outside the token set."""

    kind = "invalid character"

    def __init__(self, char: str, position: Position, source: str) -> None:
        self.char = char
        self.position = position
        end = Position(position.line, position.column + 1, position.offset + 1)
        super().__init__(f"unexpected character {char!r}", Span(position, end), source)


class ParseError(CalcError):
    """Raised when the lookahead token matches no grammar alternative."""

    kind = "syntax error"

    def __init__(
        self,
        message: str,
        span: Span,
        source: str,
        expected: str = "",
        found: str = "",
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message, span, source)


class EvalError(CalcError):
    """Raised when a well-formed expression has no integer value."""

    kind = "evaluation error"


class DivisionByZeroError(EvalError):
    kind = "division by zero"

    def __init__(self, span: Span, source: str) -> None:
        super().__init__("right operand of '/' is zero", span, source)


class IntegerOverflowError(EvalError):
    kind = "integer overflow"

    def __init__(self, value: int | str, span: Span, source: str) -> None:
        self.value = value
        super().__init__(f"{value} does not fit in a signed 64-bit integer", span, source)
