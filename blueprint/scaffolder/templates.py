"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class, which compiles template text against a
configuration context with the helper registry installed, and
``discover_templates`` which lists every file of a template tree.  Templates
may carry the ``.j2`` suffix to mark them as templates; the suffix is
stripped from the output file name.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import ChainableUndefined, Environment, TemplateError, nodes
from jinja2.ext import Extension
from jinja2.parser import Parser

from . import helpers


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

TEMPLATE_SUFFIX = ".j2"


class TemplateRenderError(Exception):
    """Raised when a template cannot be compiled or evaluated."""

    def __init__(self, template_name: str, message: str, lineno: int | None = None) -> None:
        self.template_name = template_name
        self.lineno = lineno
        location = f"{template_name}:{lineno}" if lineno else template_name
        super().__init__(f"{location}: {message}")


def _raise_walk_error(error: OSError) -> None:
    raise error


def discover_templates(root: str | Path) -> list[str]:
    """Return every file below *root* as a sorted, ``/``-separated relative path.

    Hidden files and directories are included; directories themselves are
    not listed.  Filesystem errors propagate.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Template directory not found: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Template root is not a directory: {root_path}")

    found: list[str] = []
    for dirpath, _dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        base = Path(dirpath)
        for filename in filenames:
            candidate = base / filename
            if candidate.is_file():
                found.append(candidate.relative_to(root_path).as_posix())
    return sorted(found)


def strip_template_suffix(relative_path: str) -> str:
    """``"src/index.ts.j2"`` -> ``"src/index.ts"``; other paths are unchanged."""
    if relative_path.endswith(TEMPLATE_SUFFIX):
        return relative_path[: -len(TEMPLATE_SUFFIX)]
    return relative_path


# ---------------------------------------------------------------------------
# {% ifCond %} block tag
# ---------------------------------------------------------------------------


class IfCondExtension(Extension):
    """Adds ``{% ifCond v1, "op", v2 %}...{% else %}...{% endifCond %}``.

    The comparison is delegated to the ``ifCond`` entry of the helper
    registry, so an unrecognised operator selects the ``else`` branch.
    """

    tags = {"ifCond"}

    def parse(self, parser: Parser) -> nodes.Node:
        lineno = next(parser.stream).lineno

        left = parser.parse_expression()
        parser.stream.skip_if("comma")
        operator = parser.parse_expression()
        parser.stream.skip_if("comma")
        right = parser.parse_expression()

        body = parser.parse_statements(("name:else", "name:endifCond"))
        if next(parser.stream).value == "endifCond":
            else_: list[nodes.Node] = []
        else:
            else_ = parser.parse_statements(("name:endifCond",), drop_needle=True)

        test = self.call_method("_evaluate", [left, operator, right], lineno=lineno)
        return nodes.If(test, body, [], else_, lineno=lineno)

    def _evaluate(self, left: Any, operator: Any, right: Any) -> bool:
        return bool(helpers.call_helper("ifCond", left, operator, right, True, False))


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template text with the helper registry installed.

    The environment has no loader: templates are always handed over as
    text, so rendering never touches the filesystem.  References to
    missing context values (including attribute access on them) render as
    the empty string.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=ChainableUndefined,
            extensions=[IfCondExtension],
        )
        self.install_helpers()

    def install_helpers(self) -> None:
        """Expose every registered helper as a global (and string filters)."""
        for name, func in helpers.HELPERS.items():
            self.env.globals[name] = func
            alias = helpers.KEYWORD_ALIASES.get(name)
            if alias:
                self.env.globals[alias] = func
            if name in helpers.FILTER_HELPERS:
                self.env.filters[name] = func
        self.env.globals["helper"] = helpers.call_helper

    def render_string(
        self,
        template_string: str,
        context: Mapping[str, Any],
        *,
        name: str = "<string>",
    ) -> str:
        """Render *template_string* with *context*.

        Args:
            template_string: Raw template text.
            context: Values visible inside the template.
            name: Label used in error messages (usually the relative
                template path).

        Raises:
            TemplateRenderError: On Jinja syntax or runtime errors.
        """
        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(name, exc.message or str(exc), getattr(exc, "lineno", None)) from exc
