"""
pylox CLI application.

Builds the typer app, applies global options, and registers commands.
"""

import typer
from pydantic import ValidationError

from pylox.cli.utils import EX_USAGE, configure_logging, version_callback
from pylox.core.config import ConfigError, LoxSettings, load_settings

app = typer.Typer(
    help="""pylox – interpreter for the Lox expression language

Commands:
  • run SCRIPT     → execute a script
  • repl           → interactive prompt
  • tokens SCRIPT  → show scanner output
  • ast SCRIPT     → show the parsed syntax tree
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (overrides PYLOX_LOG_LEVEL and config files)",
    ),
) -> None:
    """pylox CLI main callback for global options."""
    try:
        settings = load_settings()
        if log_level is not None:
            settings = LoxSettings.model_validate(
                {**settings.model_dump(), "log_level": log_level}
            )
    except (ConfigError, ValidationError) as e:
        typer.echo(f"Error: invalid configuration:\n{e}", err=True)
        raise typer.Exit(code=EX_USAGE) from e

    configure_logging(settings.log_level)
    ctx.obj = settings


from pylox.cli.commands import (  # noqa: E402
    ast_command,
    repl_command,
    run_command,
    tokens_command,
)

app.command(name="run")(run_command)
app.command(name="repl")(repl_command)
app.command(name="tokens")(tokens_command)
app.command(name="ast")(ast_command)


def main() -> None:
    """Console script entry point."""
    app()
