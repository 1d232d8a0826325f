"""Unit tests for settings file I/O."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pawprint.core.paths import DEFAULT_RULE_PATHS
from pawprint.core.settings import (
    Settings,
    SettingsError,
    SettingsParseError,
    SettingsValidationError,
    load_settings,
    save_settings,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.rule_paths == list(DEFAULT_RULE_PATHS)
        assert settings.prefixes == []
        assert settings.exclude_prefixes == []

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings.model_validate({"colour": "blue"})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "absent.toml") == Settings()

    def test_default_location(self, isolated_config_home: Path) -> None:
        settings_file = isolated_config_home / "pawprint" / "settings.toml"
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text('prefixes = ["/var/tmp"]\n')

        assert load_settings().prefixes == ["/var/tmp"]

    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text(
            'rule_paths = ["/srv/rules"]\n'
            'prefixes = ["/tmp"]\n'
            'exclude_prefixes = ["/tmp/keep"]\n'
        )

        settings = load_settings(path)

        assert settings.rule_paths == ["/srv/rules"]
        assert settings.prefixes == ["/tmp"]
        assert settings.exclude_prefixes == ["/tmp/keep"]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("rule_paths = [")

        with pytest.raises(SettingsParseError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("prefixes = 3\n")

        with pytest.raises(SettingsValidationError):
            load_settings(path)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        # A directory in place of the file cannot be opened for reading.
        path = tmp_path / "settings.toml"
        path.mkdir()

        with pytest.raises(SettingsError, match="Failed to read"):
            load_settings(path)


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.toml"
        settings = Settings(prefixes=["/tmp"])

        saved = save_settings(settings, path)

        assert saved == path
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["prefixes"] == ["/tmp"]
        assert data["rule_paths"] == list(DEFAULT_RULE_PATHS)

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        settings = Settings(rule_paths=["/a"], exclude_prefixes=["/b"])

        save_settings(settings, path)

        assert load_settings(path) == settings

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        save_settings(Settings(), tmp_path / "settings.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["settings.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"

        with (
            patch("pawprint.core.settings.os.replace", side_effect=OSError("disk full")),
            pytest.raises(SettingsError, match="Failed to write"),
        ):
            save_settings(Settings(), path)

        assert list(tmp_path.iterdir()) == []
