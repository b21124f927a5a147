"""
Run Lox source: scan, parse, and evaluate.

Every run returns a RunOutcome instead of setting process-wide flags; the
interactive prompt gets a fresh outcome per line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from pylox.core.errors import ErrorReporter, RunOutcome
from pylox.core.interpreter import Interpreter
from pylox.core.parser import parse
from pylox.core.scanner import scan_tokens

logger = logging.getLogger(__name__)


def run_source(
    source: str,
    interpreter: Interpreter | None = None,
    reporter: ErrorReporter | None = None,
) -> RunOutcome:
    """Scan, parse, and execute a program.

    Statements are executed only when the whole source scanned and parsed
    cleanly.

    Args:
        source: Lox program text.
        interpreter: Evaluator to use; a fresh one by default.
        reporter: Collects errors; a fresh stderr reporter by default.

    Returns:
        The outcome of this run.
    """
    if reporter is None:
        reporter = ErrorReporter()
    if interpreter is None:
        interpreter = Interpreter()

    tokens = scan_tokens(source, reporter)
    result = parse(tokens, reporter)
    if reporter.had_error:
        logger.debug("Skipping evaluation: %d syntax errors", len(result.errors))
        return reporter.outcome

    interpreter.interpret(result.statements, reporter)
    return reporter.outcome


def run_file(
    path: Path,
    interpreter: Interpreter | None = None,
    reporter: ErrorReporter | None = None,
) -> RunOutcome:
    """Run a script file read as UTF-8."""
    logger.debug("Running %s", path)
    source = path.read_text(encoding="utf-8")
    return run_source(source, interpreter, reporter)


def run_prompt(
    read_line: Callable[[], str | None],
    interpreter: Interpreter | None = None,
    reporter_factory: Callable[[], ErrorReporter] = ErrorReporter,
) -> Iterator[RunOutcome]:
    """Run lines from ``read_line`` until it returns None.

    Each line is an independent run with its own reporter, so an error on
    one line never affects the next. Lines are read lazily, one per
    outcome consumed.

    Yields:
        The outcome of each line as it finishes.
    """
    if interpreter is None:
        interpreter = Interpreter()

    while (line := read_line()) is not None:
        yield run_source(line, interpreter, reporter_factory())
