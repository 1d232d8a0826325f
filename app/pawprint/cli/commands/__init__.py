"""CLI commands for pawprint.

This package contains all subcommand implementations.
"""

from pawprint.cli.commands import apply, init, show

__all__ = ["apply", "init", "show"]
