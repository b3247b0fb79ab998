"""Unit tests for git integration (blueprint.hooks).

``run_command`` is patched so no real git process is started.
"""

from __future__ import annotations

import stat
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from blueprint.hooks import (
    COMMIT_TEMPLATE,
    PRE_COMMIT_HOOK,
    install_commit_template,
    install_pre_commit_hook,
)


class TestPreCommitHook:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_writes_executable_hook(self, git_project_dir: Path):
        touched = await install_pre_commit_hook(git_project_dir)

        hook = git_project_dir / ".git" / "hooks" / "pre-commit"
        assert touched[0] == hook
        assert hook.read_text() == PRE_COMMIT_HOOK
        assert stat.S_IMODE(hook.stat().st_mode) == 0o755

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_guardrails_made_executable(self, git_project_dir: Path):
        script = git_project_dir / "scripts" / "agent-guardrails.sh"
        script.parent.mkdir()
        script.write_text("#!/bin/bash\n")
        script.chmod(0o644)

        touched = await install_pre_commit_hook(git_project_dir)

        assert script in touched
        assert stat.S_IMODE(script.stat().st_mode) == 0o755

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_guardrails_only_warns(self, git_project_dir: Path):
        touched = await install_pre_commit_hook(git_project_dir)
        assert len(touched) == 1
        assert not (git_project_dir / "scripts").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_creates_hooks_directory(self, tmp_project_dir: Path):
        (tmp_project_dir / ".git").mkdir()
        await install_pre_commit_hook(tmp_project_dir)
        assert (tmp_project_dir / ".git" / "hooks" / "pre-commit").is_file()


class TestCommitTemplate:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_writes_template_and_configures_git(self, git_project_dir: Path):
        with patch("blueprint.hooks.run_command", new=AsyncMock(return_value=(0, "", ""))) as run:
            path = await install_commit_template(git_project_dir)

        assert path == git_project_dir / ".gitmessage"
        assert path.read_text() == COMMIT_TEMPLATE
        run.assert_awaited_once_with(
            ["git", "config", "commit.template", ".gitmessage"], cwd=git_project_dir
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_git_failure_only_warns(self, git_project_dir: Path):
        failing = AsyncMock(return_value=(128, "", "fatal: not a git repository"))
        with patch("blueprint.hooks.run_command", new=failing):
            path = await install_commit_template(git_project_dir)

        assert path.is_file()
