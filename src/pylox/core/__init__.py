"""
pylox core: scanner, parser, evaluator, and error reporting.

Usage:
    from pylox.core import run_source, scan_tokens, parse, Interpreter

    result = parse(scan_tokens('print "one" + "two";'))
    Interpreter().interpret(result.statements)
    # prints: onetwo
"""

from pylox.core.errors import (
    ErrorReporter,
    LoxError,
    LoxParseError,
    LoxRuntimeError,
    RunOutcome,
)
from pylox.core.interpreter import Interpreter, is_equal, is_truthy
from pylox.core.ir import stringify
from pylox.core.parser import ParseResult, Parser, parse, parse_expression
from pylox.core.runner import run_file, run_prompt, run_source
from pylox.core.scanner import scan_tokens
from pylox.core.tokens import Token, TokenKind

__all__ = [
    "ErrorReporter",
    "Interpreter",
    "LoxError",
    "LoxParseError",
    "LoxRuntimeError",
    "ParseResult",
    "Parser",
    "RunOutcome",
    "Token",
    "TokenKind",
    "is_equal",
    "is_truthy",
    "parse",
    "parse_expression",
    "run_file",
    "run_prompt",
    "run_source",
    "scan_tokens",
    "stringify",
]
