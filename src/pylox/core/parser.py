"""
Recursive descent parser for the Lox expression language.

Grammar (precedence low to high):
    program     → statement* EOF
    statement   → "print" expression ";" | expression ";"
    expression  → equality
    equality    → comparison (("!=" | "==") comparison)*
    comparison  → term ((">" | ">=" | "<" | "<=") term)*
    term        → factor (("-" | "+") factor)*
    factor      → unary (("/" | "*") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Binary levels fold left, so ``1 - 2 - 3`` parses as ``((1 - 2) - 3)``.

A syntax error abandons the statement it occurs in. The statement loop
records it and skips ahead to the next statement boundary, so one pass
reports every independent error in the input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pylox.core.errors import ErrorReporter, LoxParseError
from pylox.core.ir import (
    Binary,
    Expr,
    ExpressionStatement,
    Grouping,
    Literal,
    PrintStatement,
    Stmt,
    Unary,
)
from pylox.core.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Tokens that begin a statement; synchronization stops in front of them
_STATEMENT_STARTS = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)


@dataclass
class ParseResult:
    """Statements parsed from one token stream and the errors met on the way."""

    statements: list[Stmt] = field(default_factory=list)
    errors: list[LoxParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token], reporter: ErrorReporter | None = None) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self.tokens = tokens
        self.reporter = reporter
        self.pos = 0

    # -- Public entry points --

    def parse(self) -> ParseResult:
        """Parse the whole token stream into statements."""
        result = ParseResult()
        while not self._is_at_end():
            start = self.pos
            try:
                result.statements.append(self._statement())
            except LoxParseError as e:
                result.errors.append(e)
                self._synchronize(start)

        logger.debug(
            "Parsed %d statements with %d errors", len(result.statements), len(result.errors)
        )
        return result

    def parse_expression(self) -> Expr | None:
        """Parse a single expression that must span the whole token stream.

        Returns:
            The expression, or None if a syntax error was reported.
        """
        try:
            expr = self._expression()
            if not self._is_at_end():
                raise self._error(self._peek(), "Expect end of expression.")
        except LoxParseError:
            return None
        return expr

    # -- Statements --

    def _statement(self) -> Stmt:
        if self._match(TokenKind.PRINT):
            return self._print_statement()
        return self._expression_statement()

    def _print_statement(self) -> PrintStatement:
        """'print' expression ';'"""
        value = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return PrintStatement(expr=value)

    def _expression_statement(self) -> ExpressionStatement:
        """expression ';'"""
        expr = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatement(expr=expr)

    # -- Expressions --

    def _expression(self) -> Expr:
        return self._equality()

    def _equality(self) -> Expr:
        return self._left_assoc(self._comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def _comparison(self) -> Expr:
        return self._left_assoc(
            self._term,
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        )

    def _term(self) -> Expr:
        return self._left_assoc(self._factor, TokenKind.MINUS, TokenKind.PLUS)

    def _factor(self) -> Expr:
        return self._left_assoc(self._unary, TokenKind.SLASH, TokenKind.STAR)

    def _left_assoc(self, operand: Callable[[], Expr], *operators: TokenKind) -> Expr:
        """operand (operator operand)*, folded into a left-leaning tree."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = Binary(left=expr, operator=operator, right=right)
        return expr

    def _unary(self) -> Expr:
        """('!' | '-') unary | primary"""
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            operator = self._previous()
            operand = self._unary()
            return Unary(operator=operator, operand=operand)
        return self._primary()

    def _primary(self) -> Expr:
        """literal | '(' expression ')'"""
        if self._match(TokenKind.FALSE):
            return Literal(value=False)
        if self._match(TokenKind.TRUE):
            return Literal(value=True)
        if self._match(TokenKind.NIL):
            return Literal(value=None)

        if self._match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(value=self._previous().literal)

        if self._match(TokenKind.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(inner=expr)

        raise self._error(self._peek(), "Expect expression.")

    # -- Cursor helpers --

    def _match(self, *kinds: TokenKind) -> bool:
        if any(self._check(kind) for kind in kinds):
            self._advance()
            return True
        return False

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, kind: TokenKind) -> bool:
        if self._is_at_end():
            return False
        return self._peek().kind == kind

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.pos += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().kind == TokenKind.EOF

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def _error(self, token: Token, message: str) -> LoxParseError:
        error = LoxParseError(token, message)
        if self.reporter is not None:
            self.reporter.parse_error(error)
        return error

    def _synchronize(self, start: int) -> None:
        """Discard tokens until the start of the next statement.

        Stops after a ';' or in front of a statement keyword. The failed
        statement always gives up at least one token so the loop advances.
        """
        if self.pos == start:
            self._advance()
        while not self._is_at_end():
            if self._previous().kind == TokenKind.SEMICOLON:
                return
            if self._peek().kind in _STATEMENT_STARTS:
                return
            self._advance()


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> ParseResult:
    """Parse a token stream into statements.

    Args:
        tokens: Scanner output, ending with EOF.
        reporter: Receives each syntax error as it is found.

    Returns:
        ParseResult with the statements that parsed and the errors raised
        by the ones that did not.
    """
    return Parser(tokens, reporter).parse()


def parse_expression(tokens: list[Token], reporter: ErrorReporter | None = None) -> Expr | None:
    """Parse a token stream holding exactly one expression."""
    return Parser(tokens, reporter).parse_expression()
