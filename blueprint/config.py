"""Blueprint setup configuration.

The ``SetupConfig`` model is the single object every part of the generator
consumes.  It is frozen: derived values (scoped package name, workspace
flag, current year) are computed once at construction and never change
during a run.  Instances can come from the interactive prompts, from the
built-in preset, from a JSON file or from environment variables; all of
them are validated the same way.
"""

from __future__ import annotations

import os
import re
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class PackageId(str, Enum):
    """Sub-packages that can be created in workspace mode."""

    CORE = "core"
    API = "api"
    WEB = "web"
    SHARED_TYPES = "shared-types"
    CLI = "cli"

    @property
    def label(self) -> str:
        labels: dict[PackageId, str] = {
            PackageId.CORE: "Core business logic",
            PackageId.API: "REST/GraphQL API",
            PackageId.WEB: "Frontend application",
            PackageId.SHARED_TYPES: "Shared TypeScript types",
            PackageId.CLI: "Command line interface",
        }
        return labels[self]


class PackageManager(str, Enum):
    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"


DEFAULT_PACKAGES: tuple[PackageId, ...] = (
    PackageId.CORE,
    PackageId.API,
    PackageId.WEB,
    PackageId.SHARED_TYPES,
)

DEFAULT_DESCRIPTION = "AI-assisted collaborative development project"
DEFAULT_AUTHOR = "Your Name"


# ---------------------------------------------------------------------------
# Project name validation (npm package-name rules for new packages)
# ---------------------------------------------------------------------------

MAX_PACKAGE_NAME_LENGTH = 214

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")

_BLACKLISTED_NAMES = frozenset({"node_modules", "favicon.ico"})

NODE_BUILTINS = frozenset(
    {
        "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
        "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
        "events", "fs", "http", "http2", "https", "inspector", "module", "net",
        "os", "path", "perf_hooks", "process", "punycode", "querystring",
        "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
        "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
        "worker_threads", "zlib",
    }
)


def _url_safe(value: str) -> bool:
    return quote(value, safe="!*'()") == value


def validate_package_name(name: str) -> list[str]:
    """Return the reasons *name* is not a valid new npm package name.

    An empty list means the name is acceptable.
    """
    if name is None:
        return ["name cannot be null"]
    if not name:
        return ["name length must be greater than zero"]

    problems: list[str] = []
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.strip() != name:
        problems.append("name cannot contain leading or trailing spaces")
    if name.lower() in _BLACKLISTED_NAMES:
        problems.append(f"{name.lower()} is a blacklisted name")
    if name in NODE_BUILTINS:
        problems.append(f"{name} is a core module name")
    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        problems.append(f"name can no longer contain more than {MAX_PACKAGE_NAME_LENGTH} characters")
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if re.search(r"[~'!()*]", name.split("/")[-1]):
        problems.append('name can no longer contain special characters ("~\'!()*")')

    if not _url_safe(name):
        match = _SCOPED_NAME.match(name)
        scope, package = (match.group(1), match.group(2)) if match else (None, None)
        if not (scope and package and _url_safe(scope) and _url_safe(package)):
            problems.append("name can only contain URL-friendly characters")

    return problems


_TRUE_STRINGS = frozenset({"1", "true", "yes", "on", "y", "t"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", "n", "f"})


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ValueError(f"Cannot interpret {raw!r} as a boolean")


# ---------------------------------------------------------------------------
# SetupConfig
# ---------------------------------------------------------------------------


class SetupConfig(BaseModel):
    """Choices driving project generation.

    ``packages`` is a tuple, always empty unless ``use_monorepo`` is
    set.  The derived fields ``package_name_scoped`` and ``use_workspaces``
    are computed from the others; ``current_year`` is captured when the
    instance is created.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="npm-compatible project name")
    description: str = Field(default=DEFAULT_DESCRIPTION)
    author: str = Field(default=DEFAULT_AUTHOR)
    use_typescript: bool = Field(default=True, description="Generate TypeScript configuration")
    use_monorepo: bool = Field(default=True, description="Set up a workspace with sub-packages")
    packages: tuple[PackageId, ...] = Field(
        default=DEFAULT_PACKAGES,
        description="Sub-packages created in workspace mode",
    )
    package_manager: PackageManager = Field(default=PackageManager.PNPM)
    setup_git_hooks: bool = Field(default=True)
    setup_github_actions: bool = Field(default=True)
    current_year: int = Field(default_factory=lambda: date.today().year)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @field_validator("project_name")
    @classmethod
    def check_project_name(cls, value: str) -> str:
        problems = validate_package_name(value)
        if problems:
            raise ValueError(problems[0])
        return value

    @field_validator("packages")
    @classmethod
    def dedupe_packages(cls, value: tuple[PackageId, ...]) -> tuple[PackageId, ...]:
        return tuple(dict.fromkeys(value))

    @model_validator(mode="before")
    @classmethod
    def packages_require_monorepo(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        monorepo = data.get("use_monorepo", True)
        if isinstance(monorepo, str):
            monorepo = monorepo.strip().lower() not in _FALSE_STRINGS
        if not monorepo:
            data = {**data, "packages": ()}
        return data

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @computed_field  # type: ignore[prop-decorator]
    @property
    def package_name_scoped(self) -> str:
        return f"@{self.project_name}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def use_workspaces(self) -> bool:
        return self.use_monorepo

    def context(self) -> dict[str, Any]:
        """Return the template context (enums flattened to plain strings)."""
        return self.model_dump(mode="json")

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    @classmethod
    def preset(cls, **overrides: Any) -> "SetupConfig":
        """The fixed configuration used for non-interactive runs."""
        values: dict[str, Any] = {
            "project_name": "test-vibecode-project",
            "description": "Test AI-assisted collaborative development project",
            "author": "Test User",
            "use_typescript": True,
            "use_monorepo": True,
            "packages": DEFAULT_PACKAGES,
            "package_manager": PackageManager.PNPM,
            "setup_git_hooks": True,
            "setup_github_actions": True,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_env(cls, **overrides: Any) -> "SetupConfig":
        """Build a ``SetupConfig`` from environment variables.

        Recognised variables (all optional except the project name, which
        may also be passed as an override):
            BLUEPRINT_PROJECT_NAME, BLUEPRINT_DESCRIPTION, BLUEPRINT_AUTHOR,
            BLUEPRINT_TYPESCRIPT, BLUEPRINT_MONOREPO, BLUEPRINT_PACKAGES,
            BLUEPRINT_PACKAGE_MANAGER, BLUEPRINT_GIT_HOOKS,
            BLUEPRINT_GITHUB_ACTIONS.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BLUEPRINT_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["BLUEPRINT_PROJECT_NAME"]
        if os.environ.get("BLUEPRINT_DESCRIPTION"):
            kwargs["description"] = os.environ["BLUEPRINT_DESCRIPTION"]
        if os.environ.get("BLUEPRINT_AUTHOR"):
            kwargs["author"] = os.environ["BLUEPRINT_AUTHOR"]
        if os.environ.get("BLUEPRINT_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["BLUEPRINT_PACKAGE_MANAGER"]
        if "BLUEPRINT_PACKAGES" in os.environ:
            raw = os.environ["BLUEPRINT_PACKAGES"]
            kwargs["packages"] = [p.strip() for p in raw.split(",") if p.strip()]

        flags = {
            "BLUEPRINT_TYPESCRIPT": "use_typescript",
            "BLUEPRINT_MONOREPO": "use_monorepo",
            "BLUEPRINT_GIT_HOOKS": "setup_git_hooks",
            "BLUEPRINT_GITHUB_ACTIONS": "setup_github_actions",
        }
        for variable, field_name in flags.items():
            if os.environ.get(variable):
                kwargs[field_name] = _parse_bool(os.environ[variable])

        kwargs.update(overrides)
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration as JSON and return the written path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            self.model_dump_json(indent=2, exclude={"package_name_scoped", "use_workspaces"}),
            encoding="utf-8",
        )
        return target

    @classmethod
    def load(cls, path: Path, **overrides: Any) -> "SetupConfig":
        """Load a configuration previously written by :meth:`save`."""
        raw = Path(path).read_text(encoding="utf-8")
        if not overrides:
            return cls.model_validate_json(raw)
        data = cls.model_validate_json(raw).model_dump(
            exclude={"package_name_scoped", "use_workspaces"}
        )
        data.update(overrides)
        return cls(**data)
