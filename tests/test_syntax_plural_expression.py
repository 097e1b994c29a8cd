"""Tests for the plural expression tokenizer, parser and evaluator.

Covers:
- Tokenizing numbers, names and multi-character operators
- Operator precedence and ternary associativity
- C semantics: truncating modulo, boolean results as 0/1
- Grammar rejection: unknown identifiers, bad characters, unbalanced
  parentheses, trailing tokens, modulo by zero or by a non-literal
- Immutable Cursor behavior

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from translexengine.diagnostics import DiagnosticCode, PluralExpressionError
from translexengine.syntax import (
    BinaryOp,
    Conditional,
    Cursor,
    Number,
    Variable,
    evaluate,
    parse_plural_expression,
    tokenize,
)

# ============================================================================
# Cursor
# ============================================================================


class TestCursor:
    """Immutable cursor used by the tokenizer."""

    def test_advance_returns_new_cursor(self) -> None:
        cursor = Cursor("n%10")
        moved = cursor.advance()

        assert cursor.current == "n"
        assert moved.current == "%"

    def test_advance_is_clamped_at_eof(self) -> None:
        cursor = Cursor("n").advance(5)
        assert cursor.is_eof
        assert cursor.pos == 1

    def test_current_at_eof_raises(self) -> None:
        with pytest.raises(EOFError):
            _ = Cursor("", 0).current

    def test_skip_spaces(self) -> None:
        cursor = Cursor("  \tn").skip_spaces()
        assert cursor.current == "n"

    def test_startswith(self) -> None:
        assert Cursor("n <= 4", 2).startswith("<=")


# ============================================================================
# Tokenizer
# ============================================================================


class TestTokenize:
    """Lexical analysis."""

    def test_operators_prefer_longest_match(self) -> None:
        kinds = [(t.kind, t.text) for t in tokenize("n<=4")]
        assert kinds == [("name", "n"), ("op", "<="), ("number", "4"), ("eof", "")]

    def test_positions_are_recorded(self) -> None:
        tokens = tokenize("n != 10")
        assert [t.pos for t in tokens] == [0, 2, 5, 7]

    def test_multi_digit_number(self) -> None:
        assert tokenize("100")[0].text == "100"

    def test_unknown_character_raises(self) -> None:
        with pytest.raises(PluralExpressionError) as exc_info:
            tokenize("n + 1")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.PLURAL_UNEXPECTED_TOKEN

    def test_non_ascii_digit_is_rejected(self) -> None:
        with pytest.raises(PluralExpressionError):
            tokenize("n == ²")


# ============================================================================
# Parser
# ============================================================================


class TestParse:
    """AST construction and grammar enforcement."""

    def test_simple_comparison(self) -> None:
        assert parse_plural_expression("n != 1") == BinaryOp("!=", Variable(), Number(1))

    def test_modulo_binds_tighter_than_comparison(self) -> None:
        node = parse_plural_expression("n%10==1")
        assert node == BinaryOp("==", BinaryOp("%", Variable(), Number(10)), Number(1))

    def test_and_binds_tighter_than_or(self) -> None:
        node = parse_plural_expression("n==1 || n==2 && n==3")
        assert isinstance(node, BinaryOp)
        assert node.op == "||"
        assert isinstance(node.right, BinaryOp)
        assert node.right.op == "&&"

    def test_ternary_is_right_associative(self) -> None:
        node = parse_plural_expression("n==1 ? 0 : n==2 ? 1 : 2")
        assert isinstance(node, Conditional)
        assert isinstance(node.alternate, Conditional)

    def test_parenthesized_expression(self) -> None:
        node = parse_plural_expression("(n)")
        assert node == Variable()

    def test_constant_expression(self) -> None:
        assert parse_plural_expression("0") == Number(0)

    @pytest.mark.parametrize(
        ("source", "code"),
        [
            ("x == 1", DiagnosticCode.PLURAL_UNKNOWN_IDENTIFIER),
            ("__import__", DiagnosticCode.PLURAL_UNKNOWN_IDENTIFIER),
            ("(n == 1", DiagnosticCode.PLURAL_UNEXPECTED_EOF),
            ("n == 1)", DiagnosticCode.PLURAL_UNEXPECTED_TOKEN),
            ("n == 1 ? 0", DiagnosticCode.PLURAL_UNEXPECTED_EOF),
            ("n 1", DiagnosticCode.PLURAL_UNEXPECTED_TOKEN),
            ("", DiagnosticCode.PLURAL_UNEXPECTED_EOF),
            ("n % 0", DiagnosticCode.PLURAL_UNEXPECTED_TOKEN),
            ("n % n", DiagnosticCode.PLURAL_UNEXPECTED_TOKEN),
        ],
    )
    def test_invalid_expressions_rejected(self, source: str, code: DiagnosticCode) -> None:
        with pytest.raises(PluralExpressionError) as exc_info:
            parse_plural_expression(source)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == code


# ============================================================================
# Evaluation
# ============================================================================


class TestEvaluate:
    """C-compatible evaluation."""

    def test_comparison_yields_int(self) -> None:
        node = parse_plural_expression("n != 1")
        assert evaluate(node, 1) == 0
        assert evaluate(node, 2) == 1

    def test_modulo_truncates_toward_zero(self) -> None:
        node = parse_plural_expression("n % 10")
        assert evaluate(node, 21) == 1
        assert evaluate(node, -21) == -1

    def test_ternary_selects_branch(self) -> None:
        node = parse_plural_expression("n==1 ? 0 : (n>=2 && n<=4 ? 1 : 2)")
        assert [evaluate(node, n) for n in (0, 1, 2, 4, 5)] == [2, 0, 1, 1, 2]

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_modulo_matches_c_semantics(self, n: int) -> None:
        """Property: remainder magnitude below divisor, sign follows dividend."""
        result = evaluate(parse_plural_expression("n % 100"), n)

        assert abs(result) < 100
        assert result == 0 or (result > 0) == (n > 0)
        assert (n - result) % 100 == 0

    @given(st.integers(min_value=-1_000, max_value=1_000))
    def test_logical_results_are_boolean_ints(self, n: int) -> None:
        """Property: logical and comparison operators only yield 0 or 1."""
        for source in ("n > 3 && n < 9", "n == 0 || n >= 5", "n <= 2"):
            assert evaluate(parse_plural_expression(source), n) in (0, 1)
