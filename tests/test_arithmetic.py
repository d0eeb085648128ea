"""Tests for the arithmetic expression evaluator."""

import pytest

from form_engine.derived.arithmetic import evaluate_expression, tokenize
from form_engine.errors import DivisionByZeroError, EvaluationError, ExpressionSyntaxError


class TestTokenize:
    """Tests for tokenization."""

    def test_tokens(self):
        """Test numbers, operators and whitespace."""
        assert tokenize(" 3 +4.5*(2 - .5) ") == ["3", "+", "4.5", "*", "(", "2", "-", ".5", ")"]

    def test_rejects_other_characters(self):
        """Test anything outside digits and operators is refused."""
        with pytest.raises(ExpressionSyntaxError):
            tokenize("3 ; 4")


class TestEvaluate:
    """Tests for expression evaluation."""

    @pytest.mark.parametrize("expression, expected", [
        ("3 + 4", 7),
        ("2 + 3 * 4", 14),
        ("(2 + 3) * 4", 20),
        ("10 - 4 - 3", 3),
        ("24 / 4 / 2", 3),
        ("-3 + 5", 2),
        ("3 - -4", 7),
        ("5--3", 8),
        ("5+-3", 2),
        ("-(2 + 3)", -5),
        ("+7", 7),
        ("1.5 * 2", 3),
        ("((((1))))", 1),
        ("7 / 2", 3.5),
    ])
    def test_precedence_and_grouping(self, expression, expected):
        """Test operator precedence, associativity and parentheses."""
        assert evaluate_expression(expression) == pytest.approx(expected)

    def test_division_by_zero(self):
        """Test division by zero raises a dedicated error."""
        with pytest.raises(DivisionByZeroError):
            evaluate_expression("1 / (2 - 2)")

    @pytest.mark.parametrize("expression", [
        "",
        "   ",
        "3 +",
        "* 3",
        "(3 + 4",
        "3 + 4)",
        "3 4",
        "1.2.3",
        "()",
    ])
    def test_syntax_errors(self, expression):
        """Test malformed expressions are rejected."""
        with pytest.raises(ExpressionSyntaxError):
            evaluate_expression(expression)

    def test_depth_limit(self):
        """Test nesting beyond the limit is rejected."""
        assert evaluate_expression("(" * 5 + "1" + ")" * 5, max_depth=5) == 1
        with pytest.raises(ExpressionSyntaxError):
            evaluate_expression("(" * 6 + "1" + ")" * 6, max_depth=5)
        with pytest.raises(ExpressionSyntaxError):
            evaluate_expression("-" * 10 + "1", max_depth=5)

    def test_non_finite_result(self):
        """Test overflowing results are rejected."""
        with pytest.raises(ExpressionSyntaxError):
            evaluate_expression("9" * 400 + " * 10")

    def test_errors_are_evaluation_errors(self):
        """Test both failure kinds share the evaluation base class."""
        assert issubclass(ExpressionSyntaxError, EvaluationError)
        assert issubclass(DivisionByZeroError, EvaluationError)
