"""Init command implementation.

Writes a settings file with the default rule locations.
"""

from typing import Annotated

import typer
from rich.markup import escape

from pawprint.core.paths import ensure_config_dir, get_settings_path
from pawprint.core.settings import Settings, SettingsError, save_settings
from pawprint.utils.formatting import print_error, print_info, print_success


def init_settings(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Initialize the settings file with defaults."""
    settings_path = get_settings_path()
    if settings_path.exists() and not force:
        print_error(escape(f"Settings already exist: {settings_path}"))
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        saved = save_settings(Settings(), settings_path)
    except (RuntimeError, SettingsError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(escape(f"Settings written to {saved}"))
