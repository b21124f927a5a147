"""
pylox CLI Utilities.

Shared helpers used by the CLI commands.
"""

import logging
import platform
import sys
from pathlib import Path

import typer

from pylox._version import get_version

# sysexits.h
EX_USAGE = 64
EX_NOINPUT = 66

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"pylox version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Architecture:  {platform.machine()}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send log records to stderr so program output on stdout stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger("pylox").setLevel(level.upper())


def require_script(path: Path) -> Path:
    """Return ``path`` if it is a file, else exit with EX_NOINPUT."""
    if not path.is_file():
        typer.echo(f"Error: cannot open script '{path}'", err=True)
        raise typer.Exit(code=EX_NOINPUT)
    return path


def unreadable_script(path: Path, error: Exception) -> typer.Exit:
    typer.echo(f"Error: cannot read script '{path}': {error}", err=True)
    return typer.Exit(code=EX_NOINPUT)


def read_script(path: Path) -> str:
    """Read a script or exit with EX_NOINPUT."""
    try:
        return require_script(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise unreadable_script(path, e) from e
