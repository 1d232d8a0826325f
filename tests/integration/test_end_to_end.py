"""Integration tests running rule files through the full pipeline.

These tests drive the CLI against a temporary directory tree and check
the resulting filesystem state.
"""

import os
import stat
from pathlib import Path
from unittest.mock import patch

from pawprint.cli.main import app
from pawprint.core.runner import Runner
from pawprint.models.run import RunConfig
from typer.testing import CliRunner

runner = CliRunner()


class TestEndToEnd:
    """Full create, clean and remove cycles."""

    def test_directory_rule_lifecycle(
        self, tmp_path: Path, current_user: str, current_group: str
    ) -> None:
        """A 'd' rule creates, owns, cleans and finally keeps its directory."""
        target = tmp_path / "spool"
        rules = tmp_path / "spool.conf"
        rules.write_text(f"d {target} 0750 {current_user} {current_group} 1s\n")

        created = runner.invoke(app, ["apply", "--create", str(rules)])

        assert created.exit_code == 0
        assert target.is_dir()
        assert stat.S_IMODE(target.stat().st_mode) == 0o750
        assert target.stat().st_uid == os.getuid()

        (target / "old").write_text("x")
        os.utime(target / "old", (0, 0))
        # Far-future clock so the file's ctime is past the one-second age.
        Runner(RunConfig(clean=True), clock=lambda: 4_000_000_000.0).run([rules])

        assert not (target / "old").exists()
        assert target.is_dir()

    def test_exclusion_then_clean(self, tmp_path: Path) -> None:
        cache = tmp_path / "cache"
        cache.mkdir()
        (cache / "keep.db").write_text("k")
        (cache / "drop.tmp").write_text("d")
        rules = tmp_path / "cache.conf"
        rules.write_text(f"x {cache}/*.db\nd {cache} - - - 0\n")

        result = runner.invoke(app, ["apply", "--clean", "--force", str(rules)])

        assert result.exit_code == 0
        assert (cache / "keep.db").exists()
        assert not (cache / "drop.tmp").exists()

    def test_boot_only_removal(self, tmp_path: Path) -> None:
        run_dir = tmp_path / "run"
        run_dir.mkdir()
        (run_dir / "daemon.pid").write_text("1")
        rules = tmp_path / "boot.conf"
        rules.write_text(f"r! {run_dir}/*.pid\n")

        runner.invoke(app, ["apply", "--remove", str(rules)])
        assert (run_dir / "daemon.pid").exists()

        result = runner.invoke(app, ["apply", "--remove", "--boot", str(rules)])
        assert result.exit_code == 0
        assert not (run_dir / "daemon.pid").exists()

    def test_uppercase_directory_rule_recreates(self, populated_dir: Path, tmp_path: Path) -> None:
        """'D' empties the directory on remove and keeps it in place."""
        rules = tmp_path / "d.conf"
        rules.write_text(f"D {populated_dir} 0755\n")

        result = runner.invoke(app, ["apply", "--create", "--remove", str(rules)])

        assert result.exit_code == 0
        assert populated_dir.is_dir()
        assert list(populated_dir.iterdir()) == []

    def test_write_and_append(self, tmp_path: Path) -> None:
        log = tmp_path / "motd"
        rules = tmp_path / "motd.conf"
        rules.write_text(
            f"f {log} 0644 - - - Welcome\n"
            f"w+ {log} - - - - , friend\n"
        )

        result = runner.invoke(app, ["apply", "--create", str(rules)])

        assert result.exit_code == 0
        assert log.read_text() == "Welcome, friend"

    def test_run_directory_cleaned_by_age(
        self, tmp_path: Path, current_user: str, current_group: str
    ) -> None:
        """Two-day-old entries go, one-hour-old entries stay, the directory keeps its mode."""
        now = 1_700_000_000.0
        run_dir = tmp_path / "run"
        run_dir.mkdir()
        run_dir.chmod(0o755)
        old = run_dir / "old.sock"
        fresh = run_dir / "fresh.sock"
        old.write_text("")
        fresh.write_text("")
        os.utime(old, (now - 2 * 86_400, now - 2 * 86_400))
        os.utime(fresh, (now - 3_600, now - 3_600))

        config_runner = Runner(RunConfig(clean=True), clock=lambda: now)
        with patch(
            "pawprint.filesystem.probe.latest_timestamp",
            side_effect=lambda st: st.st_mtime,
        ):
            report = config_runner.apply_lines(
                [f"d {run_dir} 0755 {current_user} {current_group} 1d\n"]
            )

        assert report.success
        assert not old.exists()
        assert fresh.exists()
        assert stat.S_IMODE(run_dir.stat().st_mode) == 0o755
        assert run_dir.stat().st_uid == os.getuid()
        assert run_dir.stat().st_gid == os.getgid()
