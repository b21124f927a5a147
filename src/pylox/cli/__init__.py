"""
pylox CLI Package.

- app.py: typer application and global options
- commands.py: run, repl, tokens, ast
- utils.py: shared helpers
"""

from pylox.cli.app import app, main
from pylox.cli.utils import version_callback

__all__ = ["app", "main", "version_callback"]
