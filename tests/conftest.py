"""Shared pytest fixtures for pylox tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pylox.core.errors import ErrorReporter
from pylox.core.tokens import KEYWORDS, Token, TokenKind

_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
    "!": TokenKind.BANG,
    "!=": TokenKind.BANG_EQUAL,
    "==": TokenKind.EQUAL_EQUAL,
    ">": TokenKind.GREATER,
    ">=": TokenKind.GREATER_EQUAL,
    "<": TokenKind.LESS,
    "<=": TokenKind.LESS_EQUAL,
    "=": TokenKind.EQUAL,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
}


def make_token(item: object, line: int = 1) -> Token:
    """Build one token from a shorthand item.

    Numbers become NUMBER tokens, '"text"' becomes a STRING token, keywords
    and punctuation map to their kinds, anything else is an IDENTIFIER.
    An (item, line) tuple places the token on that line.
    """
    if isinstance(item, tuple):
        item, line = item
    if isinstance(item, Token):
        return item
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        value = float(item)
        lexeme = str(item)
        return Token(kind=TokenKind.NUMBER, lexeme=lexeme, literal=value, line=line)
    assert isinstance(item, str)
    if len(item) >= 2 and item.startswith('"') and item.endswith('"'):
        return Token(kind=TokenKind.STRING, lexeme=item, literal=item[1:-1], line=line)
    if item in _PUNCTUATION:
        return Token(kind=_PUNCTUATION[item], lexeme=item, line=line)
    return Token(kind=KEYWORDS.get(item, TokenKind.IDENTIFIER), lexeme=item, line=line)


@pytest.fixture
def tokens() -> Callable[..., list[Token]]:
    """Return a builder for EOF-terminated token lists.

    ``tokens(1, "+", 2, ";")`` gives NUMBER PLUS NUMBER SEMICOLON EOF, all on
    line 1. Pass ``line=`` to place them on another line.
    """

    def build(*items: object, line: int = 1) -> list[Token]:
        built = [make_token(item, line) for item in items]
        last_line = built[-1].line if built else line
        built.append(Token(kind=TokenKind.EOF, lexeme="", line=last_line))
        return built

    return build


@pytest.fixture
def reporter() -> ErrorReporter:
    """Return an error reporter that writes to stderr (captured by pytest)."""
    return ErrorReporter()
