"""Interactive integer calculator: + - * / and parentheses."""

from __future__ import annotations

__version__ = "0.1.0"


def calculate(source: str, *, allow_trailing: bool = False) -> int:
    """Lex, parse, and evaluate one line of source to its integer value."""
    from intcalc.parser import evaluate

    return evaluate(source, allow_trailing=allow_trailing)
