"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer
from rich.markup import escape

from pawprint.core.settings import Settings, SettingsError, load_settings
from pawprint.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for command results."""

    TABLE = "table"
    JSON = "json"


def require_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file is unreadable or invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def resolve_rule_paths(paths: list[Path] | None, settings: Settings) -> list[Path]:
    """Pick the configuration paths for a command.

    Explicit paths are used as given. Otherwise the default rule paths
    from the settings are used, keeping only those that exist.

    Args:
        paths: Paths from the command line.
        settings: Loaded settings.

    Returns:
        Configuration files or directories to read.
    """
    if paths:
        return list(paths)
    return [Path(p) for p in settings.rule_paths if Path(p).exists()]
