"""Project materialisation.

Takes a ``SetupConfig`` and a template tree and writes the generated project
into a target directory:

1. every file of the template tree is discovered (dotfiles included);
2. binary assets are dropped before they are read;
3. the remaining files are rendered with the configuration context;
4. the ``.j2`` suffix is stripped from the output path;
5. feature-gated paths (TypeScript config, CI workflows) are dropped;
6. the rendered text is written, overwriting existing files.

In workspace mode a ``packages/<id>/`` directory with a ``src/`` folder and a
synthesized ``package.json`` is then created for each selected package.

Files are processed strictly one after another.  Any filesystem error aborts
the run; files already written stay on disk.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from blueprint.config import PackageId, SetupConfig

from .manifest import PackageManifest
from .rules import CONDITIONAL_RULES, SkipRule, is_binary, matching_rule
from .templates import (
    DEFAULT_TEMPLATE_DIR,
    TemplateRenderer,
    discover_templates,
    strip_template_suffix,
)


class ProjectGenerator:
    """Renders a template tree into a project directory.

    Attributes:
        config: The frozen configuration shared by every step.
        template_dir: Root of the template tree.
        rules: Ordered conditional-inclusion rules applied to output paths.
        skipped: Relative template paths dropped during the last run, with
            the reason (``"binary"`` or the rule name).
    """

    def __init__(
        self,
        config: SetupConfig,
        template_dir: str | Path | None = None,
        *,
        rules: Iterable[SkipRule] = CONDITIONAL_RULES,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.rules: tuple[SkipRule, ...] = tuple(rules)
        self.renderer = renderer or TemplateRenderer()
        self.skipped: dict[str, str] = {}

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path) -> list[Path]:
        """Generate the project into *output_dir*.

        Returns:
            Every written file, template outputs first, then package
            manifests.
        """
        target = Path(output_dir)
        context = self.config.context()
        self.skipped = {}

        template_files = await asyncio.to_thread(discover_templates, self.template_dir)

        written: list[Path] = []
        for template_file in template_files:
            path = await self.process_template(template_file, target, context)
            if path is not None:
                written.append(path)

        written.extend(await self.generate_packages(target))
        return written

    async def process_template(
        self,
        template_file: str,
        output_dir: Path,
        context: dict[str, Any] | None = None,
    ) -> Path | None:
        """Render one template entry; returns the written path or ``None`` if skipped."""
        if is_binary(template_file):
            self.skipped[template_file] = "binary"
            return None

        source = self.template_dir / template_file
        raw = await asyncio.to_thread(source.read_text, encoding="utf-8")

        if context is None:
            context = self.config.context()
        output = self.renderer.render_string(raw, context, name=template_file)

        output_name = strip_template_suffix(template_file)
        rule = matching_rule(output_name, self.config, self.rules)
        if rule is not None:
            self.skipped[template_file] = rule.name
            return None

        destination = output_dir / output_name
        await asyncio.to_thread(_write_file, destination, output)
        return destination

    async def generate_packages(self, output_dir: str | Path) -> list[Path]:
        """Create package directories and manifests (workspace mode only)."""
        if not self.config.use_monorepo:
            return []

        written: list[Path] = []
        for package in self.config.packages:
            manifest_path = await self.generate_package_json(package, output_dir)
            written.append(manifest_path)
        return written

    async def generate_package_json(self, package: PackageId | str, output_dir: str | Path) -> Path:
        """Write ``packages/<id>/package.json`` and create ``packages/<id>/src``."""
        package_id = PackageId(package).value
        package_root = Path(output_dir) / "packages" / package_id

        await asyncio.to_thread((package_root / "src").mkdir, parents=True, exist_ok=True)

        manifest = PackageManifest.for_package(package_id, self.config)
        manifest_path = package_root / "package.json"
        await asyncio.to_thread(_write_file, manifest_path, manifest.to_json())
        return manifest_path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
