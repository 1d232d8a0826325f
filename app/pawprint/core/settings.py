"""Settings file I/O.

The optional settings file provides the default rule locations and
prefix filters. It is read with tomllib and validated with Pydantic.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pawprint.core.paths import DEFAULT_RULE_PATHS, get_settings_path


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when settings content is invalid."""


class Settings(BaseModel):
    """User settings for pawprint.

    Attributes:
        rule_paths: Configuration files or directories used when none are given.
        prefixes: Default prefixes rules must lie below.
        exclude_prefixes: Default prefixes whose rules are ignored.
    """

    model_config = ConfigDict(extra="forbid")

    rule_paths: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_RULE_PATHS),
            description="Default configuration files or directories",
        ),
    ]
    prefixes: Annotated[
        list[str],
        Field(default_factory=list, description="Only apply rules below these paths"),
    ]
    exclude_prefixes: Annotated[
        list[str],
        Field(default_factory=list, description="Ignore rules below these paths"),
    ]


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file yields the defaults.

    Args:
        path: Settings file path. If None, uses the default location.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file exists but cannot be read.
    """
    settings_path = path or get_settings_path()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Settings()
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to write.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(tmp_path, settings_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
