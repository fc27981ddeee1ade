"""CLI package for Vita.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the Vita composition root.
"""

from vita.cli.app import app, console

__all__ = ["app", "console"]
