"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import grp
import os
import pwd
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from pawprint.models.run import RunConfig


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(config_home)}):
        yield config_home


@pytest.fixture
def current_user() -> str:
    """Name of the user running the tests."""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def current_group() -> str:
    """Name of the primary group of the user running the tests."""
    return grp.getgrgid(os.getgid()).gr_name


@pytest.fixture
def create_config() -> RunConfig:
    """Run configuration with only creation enabled."""
    return RunConfig(create=True)


@pytest.fixture
def all_modes() -> RunConfig:
    """Run configuration with create, clean and remove enabled."""
    return RunConfig(create=True, clean=True, remove=True)


@pytest.fixture
def populated_dir(tmp_path: Path) -> Path:
    """Directory tree with files, a subdirectory and a hidden file.

    Layout::

        tree/
            a.txt
            b.log
            .hidden
            sub/
                c.txt
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_text("a")
    (root / "b.log").write_text("b")
    (root / ".hidden").write_text("h")
    (root / "sub").mkdir()
    (root / "sub" / "c.txt").write_text("c")
    return root
