"""Test error messages, position accuracy, and context snippets."""

import pytest

from intcalc.errors import (
    CalcError,
    DivisionByZeroError,
    EvalError,
    LexError,
    ParseError,
    split_lines,
)
from intcalc.lexer import Lexer, tokenize
from intcalc.parser import evaluate


class TestInvalidCharacter:
    def test_ampersand(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("2 & 3")
        err = exc_info.value
        assert err.char == "&"
        assert err.position.column == 3
        assert err.position.offset == 2

    def test_letter(self):
        with pytest.raises(LexError, match="'x'"):
            tokenize("1 + x")

    def test_unicode_digit_rejected(self):
        with pytest.raises(LexError):
            tokenize("٣")

    def test_decimal_point_rejected(self):
        with pytest.raises(LexError, match="'.'"):
            tokenize("1.5")

    def test_error_raised_lazily(self):
        lexer = Lexer("1 $")
        assert lexer.next_token().value == 1
        with pytest.raises(LexError):
            lexer.next_token()

    def test_line_number(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("1 + ?", line=7)
        assert exc_info.value.position.line == 7


class TestHierarchy:
    def test_all_are_calc_errors(self):
        for source in ("2 & 3", "(1", "1 / 0"):
            with pytest.raises(CalcError):
                evaluate(source)

    def test_division_by_zero_is_eval_error(self):
        with pytest.raises(EvalError):
            evaluate("1 / 0")

    def test_kinds(self):
        assert LexError.kind == "invalid character"
        assert ParseError.kind == "syntax error"
        assert DivisionByZeroError.kind == "division by zero"


class TestErrorFormatting:
    def test_format_names_kind(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("2 & 3")
        assert exc_info.value.format().startswith("invalid character:")

    def test_format_contains_line(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            evaluate("10 / (4 - 4)")
        assert "10 / (4 - 4)" in exc_info.value.format()

    def test_format_contains_carets(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            evaluate("10 / (4 - 4)")
        formatted = exc_info.value.format()
        assert formatted.splitlines()[-1].endswith("     ^^^^^^^")

    def test_format_contains_position(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("2 & 3")
        assert "<stdin>:1:3" in exc_info.value.format()

    def test_format_with_custom_filename(self):
        with pytest.raises(ParseError) as exc_info:
            evaluate("(1")
        assert "calc.txt:1:3" in exc_info.value.format("calc.txt")

    def test_format_uses_line_number(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("1 @ 2\n", line=12)
        formatted = exc_info.value.format()
        assert "<stdin>:12:3" in formatted
        assert "12 | 1 @ 2" in formatted

    def test_str_is_format(self):
        with pytest.raises(ParseError) as exc_info:
            evaluate("2 +")
        assert str(exc_info.value) == exc_info.value.format()

    def test_format_keeps_form_feed_line_whole(self):
        with pytest.raises(LexError) as exc_info:
            evaluate("1 \x0c @ 2")
        assert "1 | 1 \x0c @ 2" in exc_info.value.format()


class TestSplitLines:
    def test_lsp_line_breaks_only(self):
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_other_separators_stay_in_line(self):
        assert split_lines("a\x0cb\x85c d") == ["a\x0cb\x85c d"]

    def test_final_newline_adds_no_line(self):
        assert split_lines("a\n") == ["a"]
        assert split_lines("") == []
