"""--debug token stream dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from intcalc.lexer import Lexer
from intcalc.tokens import Token, TokenType


def dump_tokens(source: str, *, line: int = 1, file: TextIO = sys.stderr) -> None:
    """Print each token of *source* to *file*, one per line.

    Lexing errors propagate after the tokens read so far have been written.
    """
    lexer = Lexer(source, line)
    while True:
        tok = lexer.next_token()
        file.write(_format_token(tok))
        if tok.type == TokenType.EOF:
            return


def _format_token(tok: Token) -> str:
    start = tok.span.start
    value = f" {tok.value}" if tok.type == TokenType.INTEGER else ""
    return f"  {start.line}:{start.column} {tok.type.name}{value}\n"
