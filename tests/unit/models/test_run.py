"""Unit tests for run configuration and result models."""

import pytest
from pawprint.models.result import ActionResult
from pawprint.models.run import RunConfig, path_has_prefix
from pawprint.rules.attributes import Flag
from pydantic import ValidationError


class TestPathHasPrefix:
    """Tests for path_has_prefix function."""

    @pytest.mark.parametrize(
        ("path", "prefix", "expected"),
        [
            ("/var/tmp", "/var", True),
            ("/var", "/var", True),
            ("/variable", "/var", False),
            ("/var/tmp/x", "/var/", True),
            ("/etc/x", "/", True),
            ("/tmp/*.lock", "/tmp", True),
        ],
    )
    def test_component_matching(self, path: str, prefix: str, expected: bool) -> None:
        assert path_has_prefix(path, prefix) is expected


class TestRunConfig:
    """Tests for RunConfig."""

    def test_defaults(self) -> None:
        config = RunConfig()

        assert config.has_action is False
        assert config.dry_run is False
        assert config.prefixes == ()

    def test_has_action(self) -> None:
        assert RunConfig(clean=True).has_action is True

    def test_frozen(self) -> None:
        config = RunConfig()

        with pytest.raises(ValidationError):
            config.create = True  # type: ignore[misc]

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RunConfig(purge=True)  # type: ignore[call-arg]

    def test_selects_without_filters(self) -> None:
        assert RunConfig().selects("/anything")

    def test_selects_with_prefixes(self) -> None:
        config = RunConfig(prefixes=("/tmp", "/run"), exclude_prefixes=("/tmp/keep",))

        assert config.selects("/tmp/cache")
        assert config.selects("/run/lock")
        assert not config.selects("/var/tmp")
        assert not config.selects("/tmp/keep/file")


class TestActionResult:
    """Tests for ActionResult."""

    def test_action_name(self) -> None:
        result = ActionResult(path="/d", action=Flag.CREATE_DIRECTORY, success=True)

        assert result.action_name == "create-directory"
        assert result.failed is False

    def test_failed(self) -> None:
        result = ActionResult(path="/d", action=Flag.REMOVE, success=False, error="busy")

        assert result.failed is True
        assert result.dry_run is False
