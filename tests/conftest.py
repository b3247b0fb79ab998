"""Shared pytest fixtures for the blueprint test suite.

Provides reusable fixtures for:
- Temporary project directories (plain and git-initialised)
- Small on-disk template trees
- Preset and JavaScript-only configurations
"""

from __future__ import annotations

from pathlib import Path

import pytest

from blueprint.config import SetupConfig


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty temporary directory for generated projects."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def git_project_dir(tmp_project_dir: Path) -> Path:
    """Project directory that looks like a git checkout (``.git/`` exists)."""
    (tmp_project_dir / ".git" / "hooks").mkdir(parents=True)
    return tmp_project_dir


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

SAMPLE_TEMPLATES: dict[str, str] = {
    "README.md.j2": "# {{ project_name }}\n\n{{ description }}\n",
    "tsconfig.json.j2": '{ "compilerOptions": { "strict": true } }\n',
    "config/tsconfig.build.json": "{}\n",
    ".github/workflows/ci.yml.j2": "name: CI for {{ project_name }}\n",
    ".github/CODEOWNERS": "* @{{ author|kebabCase }}\n",
    ".gitignore": "node_modules/\n",
    "src/index.js.j2": "export const name = '{{ project_name|camelCase }}';\n",
    "notes/plain.txt": "year={{ current_year }}\n",
    "docs/archive.j2.md": "{{ project_name }} docs\n",
}


def write_template_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A small template tree with suffixed, plain, hidden, gated and binary files."""
    root = write_template_tree(tmp_path / "templates", SAMPLE_TEMPLATES)
    (root / "assets").mkdir()
    (root / "assets" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff\xfe")
    (root / "docs" / "manual.PDF").write_bytes(b"%PDF-1.4\n\xe2\xe3\xcf\xd3")
    return root


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def preset_config() -> SetupConfig:
    """The built-in non-interactive configuration."""
    return SetupConfig.preset()


@pytest.fixture
def js_config() -> SetupConfig:
    """JavaScript, single package, no CI."""
    return SetupConfig(
        project_name="plain-js",
        description="A plain JavaScript project.",
        author="Jane Doe",
        use_typescript=False,
        use_monorepo=False,
        package_manager="npm",
        setup_git_hooks=False,
        setup_github_actions=False,
    )
