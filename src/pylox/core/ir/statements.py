"""
Statement types for the pylox AST.

Two statement forms exist: an expression evaluated for its effect and a
print statement that writes the expression's display text.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pylox.core.ir.expressions import Expr


class ExpressionStatement(BaseModel):
    """``expr ;`` evaluated and discarded."""

    expr: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"(; {self.expr})"


class PrintStatement(BaseModel):
    """``print expr ;``"""

    expr: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"(print {self.expr})"


Stmt = ExpressionStatement | PrintStatement
