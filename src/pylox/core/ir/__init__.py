"""
pylox intermediate representation: expression and statement nodes.
"""

from pylox.core.ir.expressions import (
    Binary,
    Expr,
    Grouping,
    Literal,
    LoxValue,
    Unary,
    stringify,
)
from pylox.core.ir.statements import ExpressionStatement, PrintStatement, Stmt

__all__ = [
    "Binary",
    "Expr",
    "ExpressionStatement",
    "Grouping",
    "Literal",
    "LoxValue",
    "PrintStatement",
    "Stmt",
    "Unary",
    "stringify",
]
