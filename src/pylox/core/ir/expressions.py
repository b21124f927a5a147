"""
Expression types for the pylox AST.

The expression set is closed and follows the grammar one node per
production:

- Literal: numbers, strings, true/false, nil
- Grouping: parenthesized expression
- Unary: ! and - prefix operators
- Binary: arithmetic, comparison, and equality operators

Nodes are frozen once built. Unary and Binary keep the operator token so
runtime errors can point at its source line.

``str(node)`` gives a fully parenthesized prefix rendering, e.g.
``(* (group (+ 1 2)) 3)``.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pylox.core.tokens import Token

# ---------------------------------------------------------------------------
# Runtime values
# ---------------------------------------------------------------------------

# nil is None; numbers are always floats
LoxValue = bool | float | str | None


def stringify(value: LoxValue) -> str:
    """Convert a runtime value to its display text."""
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float():
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            text = repr(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text
        case str():
            return value
    raise TypeError(f"Not a Lox value: {type(value).__name__}")


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: number, string, boolean, or nil."""

    value: bool | float | str | None = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    @field_validator("value", mode="before")
    @classmethod
    def _ints_are_floats(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        return value

    def __str__(self) -> str:
        return stringify(self.value)


class Grouping(BaseModel):
    """Parenthesized expression."""

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"(group {self.inner})"


class Unary(BaseModel):
    """Prefix operation: operator operand."""

    operator: Token
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.operator.lexeme} {self.operand})"


class Binary(BaseModel):
    """Binary operation: left operator right."""

    left: Expr
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.operator.lexeme} {self.left} {self.right})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Grouping | Unary | Binary

# Rebuild models for recursive forward references
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()
