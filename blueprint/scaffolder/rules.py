"""Skip rules deciding which template entries end up in the generated project.

Two kinds of rule exist:

* the binary-extension rule, applied to the template path before the file
  is read, which drops image/PDF assets unconditionally;
* conditional-inclusion rules, applied to the output path after the
  ``.j2`` suffix has been stripped, which drop feature-gated files.

Conditional rules are plain ``(output_path, config) -> bool`` predicates kept
in an ordered tuple.  Adding a rule means appending a ``SkipRule``; neither
discovery nor rendering needs to change.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blueprint.config import SetupConfig


BINARY_EXTENSIONS: frozenset[str] = frozenset({".png", ".jpg", ".jpeg", ".gif", ".ico", ".pdf"})

TYPESCRIPT_MARKER = "tsconfig"
WORKFLOWS_MARKER = ".github/workflows"


def is_binary(relative_path: str) -> bool:
    """Return ``True`` for paths whose extension is on the binary denylist."""
    return PurePosixPath(relative_path).suffix.lower() in BINARY_EXTENSIONS


@dataclass(frozen=True)
class SkipRule:
    """A named predicate; ``applies`` returning ``True`` means "skip"."""

    name: str
    applies: Callable[[str, "SetupConfig"], bool]


def _skip_typescript_config(output_path: str, config: SetupConfig) -> bool:
    return not config.use_typescript and TYPESCRIPT_MARKER in output_path


def _skip_github_workflows(output_path: str, config: SetupConfig) -> bool:
    return not config.setup_github_actions and WORKFLOWS_MARKER in output_path


CONDITIONAL_RULES: tuple[SkipRule, ...] = (
    SkipRule("typescript", _skip_typescript_config),
    SkipRule("github-actions", _skip_github_workflows),
)


def matching_rule(
    output_path: str,
    config: SetupConfig,
    rules: Iterable[SkipRule] = CONDITIONAL_RULES,
) -> SkipRule | None:
    """Return the first rule excluding *output_path*, or ``None``."""
    for rule in rules:
        if rule.applies(output_path, config):
            return rule
    return None


def should_skip(
    output_path: str,
    config: SetupConfig,
    rules: Iterable[SkipRule] = CONDITIONAL_RULES,
) -> bool:
    return matching_rule(output_path, config, rules) is not None
