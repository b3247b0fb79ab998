"""Unit tests for utility functions (blueprint.utils).

Tests cover:
- run_command (success, failure, cwd, missing executable, timeout)
- write_text / make_executable (use tmp_path)
- format_duration
- Rich output helpers (print_step_header, print_summary_table, etc.)
"""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from blueprint.utils import (
    EXECUTABLE_MODE,
    create_progress,
    format_duration,
    make_executable,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    write_text,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _stdout, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "bad"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _stderr = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable(self):
        returncode, _stdout, stderr = await run_command(["definitely-not-a-real-binary-xyz"])
        assert returncode == 127
        assert "Command not found" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _stdout, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2
        )
        assert returncode == -1
        assert "timed out" in stderr


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestWriteText:
    @pytest.mark.unit
    def test_creates_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "file.txt"
        assert write_text(target, "content") == target
        assert target.read_text() == "content"

    @pytest.mark.unit
    def test_overwrites(self, tmp_path: Path):
        target = tmp_path / "file.txt"
        target.write_text("old")
        write_text(target, "new")
        assert target.read_text() == "new"


class TestMakeExecutable:
    @pytest.mark.unit
    def test_sets_rwxr_xr_x(self, tmp_path: Path):
        script = tmp_path / "hook"
        script.write_text("#!/bin/sh\n")
        make_executable(script)
        assert stat.S_IMODE(script.stat().st_mode) == 0o755

    @pytest.mark.unit
    def test_replaces_restrictive_mode(self, tmp_path: Path):
        script = tmp_path / "run.sh"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o600)
        make_executable(script)
        assert stat.S_IMODE(script.stat().st_mode) == EXECUTABLE_MODE

    @pytest.mark.unit
    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            make_executable(tmp_path / "missing")


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    """Smoke tests: helpers must not raise, even on markup-like text."""

    @pytest.mark.unit
    def test_print_step_header(self):
        print_step_header("Setup Complete", color="green")

    @pytest.mark.unit
    def test_print_summary_table(self):
        print_summary_table({"Project": "demo", "Files written": "12"}, title="Setup Summary")

    @pytest.mark.unit
    def test_print_messages(self):
        print_success("Environment check passed")
        print_error("Setup failed: [type=value_error]")
        print_warning("[/bold] not markup")

    @pytest.mark.unit
    def test_create_progress(self):
        with create_progress() as progress:
            task = progress.add_task("Working...", total=None)
            progress.remove_task(task)
