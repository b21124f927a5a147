"""
Tree-walking evaluator for the Lox expression language.

Evaluates AST nodes bottom-up: operands left to right, then the operator.
Operator type preconditions are checked on every application; a violation
raises LoxRuntimeError naming the operator token, which unwinds the whole
top-level statement and is reported once by ``interpret``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable

from pylox.core.errors import ErrorReporter, LoxRuntimeError
from pylox.core.ir import (
    Binary,
    Expr,
    ExpressionStatement,
    Grouping,
    Literal,
    LoxValue,
    PrintStatement,
    Stmt,
    Unary,
    stringify,
)
from pylox.core.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


def is_truthy(value: LoxValue) -> bool:
    """Only nil and false are falsey; 0 and "" are truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left: LoxValue, right: LoxValue) -> bool:
    """Structural equality with no coercion between value kinds."""
    if left is None or right is None:
        return left is right
    if type(left) is not type(right):
        return False
    if isinstance(left, float):
        return _numbers_equal(left, right)  # type: ignore[arg-type]
    return left == right


def _numbers_equal(left: float, right: float) -> bool:
    # NaN equals itself and 0 differs from -0, as boxed doubles compare
    if math.isnan(left) and math.isnan(right):
        return True
    return left == right and math.copysign(1.0, left) == math.copysign(1.0, right)


def _divide(left: float, right: float) -> float:
    """IEEE-754 division; dividing by zero gives an infinity or NaN."""
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _check_number_operand(operator: Token, operand: LoxValue) -> float:
    match operand:
        case float():
            return operand
    raise LoxRuntimeError(operator, "Operand must be a number.")


def _check_number_operands(
    operator: Token, left: LoxValue, right: LoxValue
) -> tuple[float, float]:
    match (left, right):
        case (float(), float()):
            return left, right  # type: ignore[return-value]
    raise LoxRuntimeError(operator, "Operands must be numbers.")


class Interpreter:
    """Executes statements and evaluates expressions.

    Holds no state between statements beyond where printed lines go.
    """

    def __init__(self, output: Callable[[str], None] | None = None) -> None:
        self.output = output if output is not None else print

    def interpret(self, statements: Iterable[Stmt], reporter: ErrorReporter | None = None) -> bool:
        """Execute statements in order, stopping at the first runtime error.

        Args:
            statements: Parsed program.
            reporter: Receives the runtime error, if any. Defaults to a
                reporter writing to stderr.

        Returns:
            True if every statement ran, False if a runtime error stopped the run.
        """
        if reporter is None:
            reporter = ErrorReporter()
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as e:
            logger.debug("Runtime error on line %d: %s", e.line, e.message)
            reporter.runtime_error(e)
            return False
        return True

    def interpret_expression(
        self, expr: Expr, reporter: ErrorReporter | None = None
    ) -> LoxValue:
        """Evaluate one expression and print its value.

        Returns:
            The value, or None if a runtime error was reported.
        """
        if reporter is None:
            reporter = ErrorReporter()
        try:
            value = self.evaluate(expr)
        except LoxRuntimeError as e:
            reporter.runtime_error(e)
            return None
        self.output(stringify(value))
        return value

    def execute(self, stmt: Stmt) -> None:
        match stmt:
            case ExpressionStatement(expr=expr):
                self.evaluate(expr)
            case PrintStatement(expr=expr):
                self.output(stringify(self.evaluate(expr)))
            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def evaluate(self, expr: Expr) -> LoxValue:
        """Dispatch evaluation to the appropriate handler."""
        match expr:
            case Literal(value=value):
                return value
            case Grouping(inner=inner):
                return self.evaluate(inner)
            case Unary():
                return self._evaluate_unary(expr)
            case Binary():
                return self._evaluate_binary(expr)
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _evaluate_unary(self, expr: Unary) -> LoxValue:
        operand = self.evaluate(expr.operand)
        operator = expr.operator

        match operator.kind:
            case TokenKind.BANG:
                return not is_truthy(operand)
            case TokenKind.MINUS:
                return -_check_number_operand(operator, operand)
        raise LoxRuntimeError(operator, f"Unknown unary operator '{operator.lexeme}'.")

    def _evaluate_binary(self, expr: Binary) -> LoxValue:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        match operator.kind:
            case TokenKind.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenKind.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenKind.PLUS:
                return _add(operator, left, right)

        a, b = _check_number_operands(operator, left, right)
        match operator.kind:
            case TokenKind.MINUS:
                return a - b
            case TokenKind.STAR:
                return a * b
            case TokenKind.SLASH:
                return _divide(a, b)
            case TokenKind.GREATER:
                return a > b
            case TokenKind.GREATER_EQUAL:
                return a >= b
            case TokenKind.LESS:
                return a < b
            case TokenKind.LESS_EQUAL:
                return a <= b
        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")


def _add(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    """Number addition or string concatenation, nothing mixed."""
    match (left, right):
        case (float(), float()):
            return left + right  # type: ignore[operator]
        case (str(), str()):
            return left + right  # type: ignore[operator]
    raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")
