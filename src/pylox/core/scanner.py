"""
Scanner for the Lox language.

Converts source text into a sequence of typed tokens terminated by EOF.
Lexical errors are reported and scanning continues, so a single pass
reports every bad character in the input.
"""

from __future__ import annotations

import logging
import re

from pylox.core.errors import ErrorReporter
from pylox.core.tokens import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

# Number: digits with an optional fractional part; a trailing "." is not consumed
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

_TWO_CHAR: dict[str, TokenKind] = {
    "!=": TokenKind.BANG_EQUAL,
    "==": TokenKind.EQUAL_EQUAL,
    "<=": TokenKind.LESS_EQUAL,
    ">=": TokenKind.GREATER_EQUAL,
}

_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
    "!": TokenKind.BANG,
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS,
    ">": TokenKind.GREATER,
}


def scan_tokens(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Scan source text into a list of tokens ending with EOF.

    Args:
        source: Lox program text.
        reporter: Receives lexical errors. Without one, bad characters are
            skipped silently.

    Returns:
        Tokens in source order, the last one always EOF.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)
    line = 1

    while i < n:
        c = source[i]

        # Skip whitespace
        if c in " \r\t":
            i += 1
            continue
        if c == "\n":
            line += 1
            i += 1
            continue

        # Line comments
        if source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end == -1 else end
            continue

        # String literals
        if c == '"':
            i, line, tok = _read_string(source, i, line, reporter)
            if tok is not None:
                tokens.append(tok)
            continue

        # Numbers
        m = _NUMBER_RE.match(source, i)
        if m:
            text = m.group(0)
            tokens.append(Token(kind=TokenKind.NUMBER, lexeme=text, literal=float(text), line=line))
            i = m.end()
            continue

        # Identifiers and keywords
        m = _IDENT_RE.match(source, i)
        if m:
            word = m.group(0)
            kind = KEYWORDS.get(word, TokenKind.IDENTIFIER)
            tokens.append(Token(kind=kind, lexeme=word, line=line))
            i = m.end()
            continue

        # Two-character operators
        two = source[i : i + 2]
        if two in _TWO_CHAR:
            tokens.append(Token(kind=_TWO_CHAR[two], lexeme=two, line=line))
            i += 2
            continue

        # Single-character operators and punctuation
        if c in _SINGLE_CHAR:
            tokens.append(Token(kind=_SINGLE_CHAR[c], lexeme=c, line=line))
            i += 1
            continue

        if reporter is not None:
            reporter.error(line, "Unexpected character.")
        i += 1

    tokens.append(Token(kind=TokenKind.EOF, lexeme="", line=line))
    logger.debug("Scanned %d tokens over %d lines", len(tokens), line)
    return tokens


def _read_string(
    source: str, start: int, line: int, reporter: ErrorReporter | None
) -> tuple[int, int, Token | None]:
    """Read a double-quoted string literal; strings may span lines."""
    end = source.find('"', start + 1)
    if end == -1:
        line += source.count("\n", start)
        if reporter is not None:
            reporter.error(line, "Unterminated string.")
        return len(source), line, None

    value = source[start + 1 : end]
    line += value.count("\n")
    tok = Token(kind=TokenKind.STRING, lexeme=source[start : end + 1], literal=value, line=line)
    return end + 1, line, tok
