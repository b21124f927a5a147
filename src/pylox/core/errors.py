"""
Error types and error reporting for pylox scanning, parsing, and evaluation.
"""

from __future__ import annotations

import logging
import sys
from enum import StrEnum
from typing import TextIO

from pylox.core.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class LoxError(Exception):
    """Base exception for all pylox errors."""

    def __init__(self, message: str, line: int):
        self.message = message
        self.line = line
        super().__init__(message)


class LoxParseError(LoxError):
    """
    Raised when a statement cannot be parsed.

    Examples:
    - Missing closing parenthesis
    - Missing terminating semicolon
    - A token that cannot start an expression

    The parser catches this at the statement loop, records it, and
    resynchronizes, so one pass can surface several errors.
    """

    def __init__(self, token: Token, message: str):
        self.token = token
        super().__init__(message, token.line)

    @property
    def where(self) -> str:
        """Location suffix for the report line."""
        if self.token.kind == TokenKind.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"


class LoxRuntimeError(LoxError):
    """
    Raised when an operator's operand types are wrong at evaluation time.

    Examples:
    - Negating a string
    - Comparing a number with nil
    - Adding a number to a string

    Carries the operator token so the report can name its line.
    """

    def __init__(self, token: Token, message: str):
        self.token = token
        super().__init__(message, token.line)


class RunOutcome(StrEnum):
    """Result of one scan-parse-evaluate cycle."""

    OK = "ok"
    SYNTAX_ERROR = "syntax_error"
    RUNTIME_ERROR = "runtime_error"

    @property
    def exit_code(self) -> int:
        """Process exit status (sysexits.h values)."""
        return _EXIT_CODES[self]


_EXIT_CODES = {
    RunOutcome.OK: 0,
    RunOutcome.SYNTAX_ERROR: 65,  # EX_DATAERR
    RunOutcome.RUNTIME_ERROR: 70,  # EX_SOFTWARE
}


def format_report(line: int, where: str, message: str) -> str:
    """
    Format an error as a single user-facing line.

    Returns:
        Formatted string like: "[line 3] Error at ')': Expect expression."
    """
    return f"[line {line}] Error{where}: {message}"


class ErrorReporter:
    """
    Renders errors to an output stream and remembers what went wrong.

    One reporter belongs to one run (a script, or one line of the
    interactive prompt); its ``outcome`` summarises the run.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.messages: list[str] = []
        self.had_error = False
        self.had_runtime_error = False

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected stderr is honoured
        return self._stream if self._stream is not None else sys.stderr

    @property
    def outcome(self) -> RunOutcome:
        if self.had_runtime_error:
            return RunOutcome.RUNTIME_ERROR
        if self.had_error:
            return RunOutcome.SYNTAX_ERROR
        return RunOutcome.OK

    def error(self, line: int, message: str) -> None:
        """Report a syntax error with no token location (scanner errors)."""
        self._report(line, "", message)
        self.had_error = True

    def token_error(self, token: Token, message: str) -> None:
        """Report a syntax error at a token."""
        self.parse_error(LoxParseError(token, message))

    def parse_error(self, error: LoxParseError) -> None:
        self._report(error.line, error.where, error.message)
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError) -> None:
        self._report(error.line, "", error.message)
        self.had_runtime_error = True

    def reset(self) -> None:
        """Forget previous errors; reported messages are kept."""
        self.had_error = False
        self.had_runtime_error = False

    def _report(self, line: int, where: str, message: str) -> None:
        text = format_report(line, where, message)
        logger.debug("Reported: %s", text)
        self.messages.append(text)
        print(text, file=self.stream)
