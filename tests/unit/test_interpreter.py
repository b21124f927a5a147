"""Tests for the pylox tree-walking evaluator.

Covers:
- Arithmetic, comparison, concatenation
- Truthiness and equality without coercion
- Display conversion (stringify)
- Runtime type errors and where they are reported
- Statement execution and output
"""

from __future__ import annotations

import math

import pytest

from pylox.core.errors import ErrorReporter, LoxRuntimeError
from pylox.core.interpreter import Interpreter, is_equal, is_truthy
from pylox.core.ir import (
    Binary,
    ExpressionStatement,
    Grouping,
    Literal,
    PrintStatement,
    Unary,
    stringify,
)
from pylox.core.parser import parse, parse_expression
from pylox.core.tokens import Token, TokenKind


@pytest.fixture
def printed() -> list[str]:
    return []


@pytest.fixture
def interpreter(printed: list[str]) -> Interpreter:
    return Interpreter(output=printed.append)


@pytest.fixture
def evaluate(tokens, interpreter):
    """Parse shorthand tokens as one expression and evaluate it."""

    def run(*items: object):
        expr = parse_expression(tokens(*items))
        assert expr is not None
        return interpreter.evaluate(expr)

    return run


# ============================================================================
# Arithmetic and comparison
# ============================================================================


class TestArithmetic:
    """Number operators."""

    def test_precedence_is_respected(self, evaluate) -> None:
        assert evaluate(1, "+", 2, "*", 3) == 7.0

    def test_grouping(self, evaluate) -> None:
        result = evaluate("(", 1, "+", 2, ")", "*", 3)
        assert result == 9.0
        assert isinstance(result, float)

    def test_subtraction_is_left_associative(self, evaluate) -> None:
        assert evaluate(10, "-", 4, "-", 3) == 3.0

    def test_division(self, evaluate) -> None:
        assert evaluate(7, "/", 2) == 3.5

    def test_division_by_zero_follows_ieee(self, evaluate) -> None:
        assert evaluate(1, "/", 0) == math.inf
        assert evaluate("-", 1, "/", 0) == -math.inf
        assert math.isnan(evaluate(0, "/", 0))

    def test_negation(self, evaluate) -> None:
        assert evaluate("-", 3) == -3.0
        assert evaluate("-", "-", 3) == 3.0

    @pytest.mark.parametrize(
        ("op", "expected"),
        [(">", False), (">=", True), ("<", False), ("<=", True)],
    )
    def test_comparisons(self, evaluate, op: str, expected: bool) -> None:
        assert evaluate(2, op, 2) is expected

    def test_string_concatenation(self, evaluate) -> None:
        assert evaluate('"one"', "+", '"two"') == "onetwo"

    def test_left_operand_evaluated_before_right(self, interpreter) -> None:
        # Both operands fail; the left one's error must win
        minus = Token(kind=TokenKind.MINUS, lexeme="-", line=1)
        other_minus = Token(kind=TokenKind.MINUS, lexeme="-", line=2)
        expr = Binary(
            left=Unary(operator=minus, operand=Literal(value="a")),
            operator=Token(kind=TokenKind.PLUS, lexeme="+", line=3),
            right=Unary(operator=other_minus, operand=Literal(value="b")),
        )
        with pytest.raises(LoxRuntimeError) as exc_info:
            interpreter.evaluate(expr)
        assert exc_info.value.token is minus


# ============================================================================
# Truthiness and equality
# ============================================================================


class TestTruthiness:
    """Only nil and false are falsey."""

    @pytest.mark.parametrize(
        ("operand", "expected"),
        [("nil", True), ("false", True), ("true", False), (0, False), ('""', False)],
    )
    def test_bang(self, evaluate, operand: object, expected: bool) -> None:
        assert evaluate("!", operand) is expected

    def test_is_truthy(self) -> None:
        assert is_truthy(None) is False
        assert is_truthy(False) is False
        assert is_truthy(0.0) is True
        assert is_truthy("") is True


class TestEquality:
    """Structural equality with no cross-kind coercion."""

    def test_number_is_never_equal_to_string(self, evaluate) -> None:
        assert evaluate(1, "==", '"1"') is False

    def test_nil_equals_nil(self, evaluate) -> None:
        assert evaluate("nil", "==", "nil") is True

    def test_nil_is_not_false(self, evaluate) -> None:
        assert evaluate("nil", "==", "false") is False
        assert evaluate("nil", "!=", "false") is True

    def test_bool_is_not_number(self) -> None:
        assert is_equal(True, 1.0) is False
        assert is_equal(False, 0.0) is False

    def test_same_kind_values(self) -> None:
        assert is_equal(2.0, 2.0)
        assert is_equal("a", "a")
        assert not is_equal("a", "b")
        assert is_equal(True, True)

    def test_nan_and_signed_zero(self) -> None:
        assert is_equal(math.nan, math.nan)
        assert not is_equal(0.0, -0.0)

    def test_equality_never_raises(self, evaluate) -> None:
        assert evaluate('"a"', "!=", 1) is True


# ============================================================================
# Display conversion
# ============================================================================


class TestStringify:
    """Runtime values to display text."""

    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (3.0, "3"),
            (3.5, "3.5"),
            (-0.0, "-0"),
            (100.0, "100"),
            (None, "nil"),
            (True, "true"),
            (False, "false"),
            ("hi", "hi"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
        ],
    )
    def test_stringify(self, value, text: str) -> None:
        assert stringify(value) == text

    def test_literal_round_trip(self, interpreter) -> None:
        assert stringify(interpreter.evaluate(Literal(value=3.0))) == "3"
        assert stringify(interpreter.evaluate(Literal(value=3.5))) == "3.5"


# ============================================================================
# Runtime errors
# ============================================================================


class TestRuntimeErrors:
    """Type violations raise with the operator token."""

    def test_subtract_string(self, tokens, interpreter) -> None:
        expr = parse_expression(tokens(('"a"', 4), ("-", 4), (1, 4)))
        assert expr is not None
        with pytest.raises(LoxRuntimeError) as exc_info:
            interpreter.evaluate(expr)
        assert exc_info.value.message == "Operands must be numbers."
        assert exc_info.value.token.kind == TokenKind.MINUS
        assert exc_info.value.line == 4

    def test_add_mixed(self, evaluate) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(1, "+", '"a"')
        assert exc_info.value.message == "Operands must be two numbers or two strings."

    def test_negate_non_number(self, evaluate) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate("-", '"a"')
        assert exc_info.value.message == "Operand must be a number."

    @pytest.mark.parametrize("op", [">", ">=", "<", "<=", "*", "/"])
    def test_comparison_needs_numbers(self, evaluate, op: str) -> None:
        with pytest.raises(LoxRuntimeError):
            evaluate("nil", op, 1)

    def test_interpret_reports_and_stops(self, tokens, interpreter, printed, capsys) -> None:
        result = parse(
            tokens(
                ("print", 1), (1, 1), (";", 1),
                ("print", 2), ("-", 2), ('"x"', 2), (";", 2),
                ("print", 3), (3, 3), (";", 3),
            )
        )
        reporter = ErrorReporter()
        assert interpreter.interpret(result.statements, reporter) is False
        assert printed == ["1"]
        assert reporter.had_runtime_error
        assert capsys.readouterr().err == "[line 2] Error: Operand must be a number.\n"

    def test_interpret_expression_reports(self, interpreter, printed) -> None:
        reporter = ErrorReporter()
        expr = Unary(
            operator=Token(kind=TokenKind.MINUS, lexeme="-", line=9),
            operand=Literal(value=True),
        )
        assert interpreter.interpret_expression(expr, reporter) is None
        assert printed == []
        assert reporter.messages == ["[line 9] Error: Operand must be a number."]


# ============================================================================
# Statements
# ============================================================================


class TestStatements:
    """Statement execution."""

    def test_print_statement(self, tokens, interpreter, printed) -> None:
        result = parse(tokens("print", '"one"', "+", '"two"', ";"))
        assert interpreter.interpret(result.statements) is True
        assert printed == ["onetwo"]

    def test_expression_statement_prints_nothing(self, interpreter, printed) -> None:
        plus = Token(kind=TokenKind.PLUS, lexeme="+", line=1)
        star = Token(kind=TokenKind.STAR, lexeme="*", line=1)
        expr = Binary(
            left=Grouping(
                inner=Binary(left=Literal(value=1.0), operator=plus, right=Literal(value=2.0))
            ),
            operator=star,
            right=Literal(value=3.0),
        )
        assert interpreter.evaluate(expr) == 9.0
        interpreter.execute(ExpressionStatement(expr=expr))
        assert printed == []

    def test_prints_in_statement_order(self, interpreter, printed) -> None:
        statements = [
            PrintStatement(expr=Literal(value="a")),
            PrintStatement(expr=Literal(value=None)),
            PrintStatement(expr=Literal(value=2.5)),
        ]
        interpreter.interpret(statements)
        assert printed == ["a", "nil", "2.5"]

    def test_interpret_expression_prints_value(self, interpreter, printed) -> None:
        assert interpreter.interpret_expression(Literal(value=True)) is True
        assert printed == ["true"]
