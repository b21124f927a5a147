"""
pylox CLI commands: run, repl, tokens, ast.
"""

import logging
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from pylox.cli.utils import read_script, require_script, unreadable_script
from pylox.core.config import LoxSettings
from pylox.core.errors import ErrorReporter
from pylox.core.interpreter import Interpreter
from pylox.core.parser import parse, parse_expression
from pylox.core.runner import run_file, run_prompt
from pylox.core.scanner import scan_tokens

logger = logging.getLogger(__name__)


def _settings(ctx: typer.Context) -> LoxSettings:
    if isinstance(ctx.obj, LoxSettings):
        return ctx.obj
    return LoxSettings()


def _console(settings: LoxSettings) -> Console:
    return Console(no_color=not settings.color, highlight=False)


def run_command(
    script: Path = typer.Argument(..., help="Path to a Lox script"),  # noqa: B008
) -> None:
    """
    Run a Lox script.

    Exits 65 on a syntax error and 70 on a runtime error.
    """
    try:
        outcome = run_file(require_script(script))
    except (OSError, UnicodeDecodeError) as e:
        raise unreadable_script(script, e) from e
    logger.debug("Run of %s finished: %s", script, outcome)
    raise typer.Exit(code=outcome.exit_code)


def repl_command(ctx: typer.Context) -> None:
    """
    Start an interactive prompt.

    Each line runs on its own; errors are reported and the prompt continues.
    End the session with Ctrl-D.
    """
    settings = _settings(ctx)
    console = _console(settings)

    def read_line() -> str | None:
        try:
            return console.input(settings.prompt, markup=False)
        except EOFError:
            return None

    try:
        for outcome in run_prompt(read_line, Interpreter(output=typer.echo)):
            logger.debug("Prompt line finished: %s", outcome)
    except KeyboardInterrupt:
        pass
    typer.echo("")


def tokens_command(
    ctx: typer.Context,
    script: Path = typer.Argument(..., help="Path to a Lox script"),  # noqa: B008
    plain: bool = typer.Option(False, "--plain", help="One token per line instead of a table"),
) -> None:
    """
    Print the tokens the scanner produces for a script.
    """
    source = read_script(script)
    reporter = ErrorReporter()
    tokens = scan_tokens(source, reporter)

    if plain:
        for token in tokens:
            typer.echo(str(token))
    else:
        table = Table(title=str(script), box=box.SIMPLE)
        table.add_column("Line", justify="right")
        table.add_column("Kind")
        table.add_column("Lexeme")
        table.add_column("Literal")
        for token in tokens:
            literal = "" if token.literal is None else repr(token.literal)
            table.add_row(str(token.line), token.kind.name, token.lexeme, literal)
        _console(_settings(ctx)).print(table)

    raise typer.Exit(code=reporter.outcome.exit_code)


def ast_command(
    ctx: typer.Context,
    script: Path = typer.Argument(..., help="Path to a Lox script"),  # noqa: B008
    expression: bool = typer.Option(
        False, "--expression", "-e", help="Parse the file as a single expression"
    ),
) -> None:
    """
    Print the syntax tree of a script in parenthesized prefix form.
    """
    source = read_script(script)
    reporter = ErrorReporter()
    tokens = scan_tokens(source, reporter)

    if expression:
        expr = parse_expression(tokens, reporter)
        if expr is not None:
            typer.echo(str(expr))
    else:
        for statement in parse(tokens, reporter).statements:
            typer.echo(str(statement))

    raise typer.Exit(code=reporter.outcome.exit_code)
