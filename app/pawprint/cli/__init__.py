"""CLI package for pawprint.

This package contains the Typer application and all subcommands.
"""

from pawprint.cli.main import app

__all__ = ["app"]
