"""XDG-compliant path management for pawprint.

User-level files live under the XDG configuration directory:

- Settings: ~/.config/pawprint/settings.toml
- Theme override: ~/.config/pawprint/theme.toml
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pawprint"

# Rule directories read when no configuration path is given.
DEFAULT_RULE_PATHS: tuple[str, ...] = (
    "/etc/pawprint.d",
    "/run/pawprint.d",
    "/usr/lib/pawprint.d",
)


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pawprint/ (or XDG_CONFIG_HOME/pawprint/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/pawprint/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/pawprint/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
