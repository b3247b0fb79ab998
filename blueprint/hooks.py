"""Git integration: pre-commit hook and commit message template."""

from __future__ import annotations

import asyncio
from pathlib import Path

from blueprint.utils import make_executable, print_warning, run_command, write_text


PRE_COMMIT_HOOK = """#!/bin/bash
# Pre-commit hook for AI code validation
exec ./scripts/agent-guardrails.sh
"""

COMMIT_TEMPLATE = """# [type](scope): brief description
#
# Detailed explanation of the change and why it was made.
# Include context about the problem being solved.
#
# - Key change 1
# - Key change 2
# - Key change 3
#
# AI-Generated: [Yes/No]
# Reviewed-by: [Human reviewer name]
# Refs: #[issue number]
"""

GUARDRAILS_SCRIPT = Path("scripts") / "agent-guardrails.sh"
COMMIT_TEMPLATE_NAME = ".gitmessage"


async def install_pre_commit_hook(project_root: Path) -> list[Path]:
    """Write ``.git/hooks/pre-commit`` and make the guardrails script executable.

    Returns the files whose permissions were changed.
    """
    hook_path = project_root / ".git" / "hooks" / "pre-commit"
    await asyncio.to_thread(write_text, hook_path, PRE_COMMIT_HOOK)
    await asyncio.to_thread(make_executable, hook_path)
    touched = [hook_path]

    guardrails = project_root / GUARDRAILS_SCRIPT
    if guardrails.is_file():
        await asyncio.to_thread(make_executable, guardrails)
        touched.append(guardrails)
    else:
        print_warning(f"{GUARDRAILS_SCRIPT} not found; the pre-commit hook will fail until it exists")
    return touched


async def install_commit_template(project_root: Path) -> Path:
    """Write ``.gitmessage`` and point ``commit.template`` at it.

    A failing ``git config`` only produces a warning; the template file is
    still written.
    """
    template_path = project_root / COMMIT_TEMPLATE_NAME
    await asyncio.to_thread(write_text, template_path, COMMIT_TEMPLATE)

    returncode, _stdout, stderr = await run_command(
        ["git", "config", "commit.template", COMMIT_TEMPLATE_NAME],
        cwd=project_root,
    )
    if returncode != 0:
        print_warning(f"Could not configure git commit template: {stderr or 'git config failed'}")
    return template_path
