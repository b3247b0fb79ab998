"""Blueprint setup pipeline.

Runs the setup steps in order:

1. ENVIRONMENT -- target must be a git repository, interpreter recent enough.
2. CONFIGURE   -- gather choices interactively (or use a supplied config).
3. GENERATE    -- render the template tree and package manifests.
4. GIT HOOKS   -- install the pre-commit hook (when requested).
5. FINALIZE    -- write the commit message template.

Usage::

    python -m blueprint                      # interactive
    python -m blueprint --defaults           # preset configuration
    python -m blueprint --config setup.json --target ./my-project
"""

from __future__ import annotations

import asyncio
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError
from rich.progress import Progress

from blueprint.config import SetupConfig
from blueprint.hooks import install_commit_template, install_pre_commit_hook
from blueprint.prompts import gather_configuration
from blueprint.scaffolder import ProjectGenerator, TemplateRenderError
from blueprint.utils import (
    console,
    create_progress,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
)

MIN_PYTHON: tuple[int, int] = (3, 10)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SetupError(Exception):
    """Raised when a setup step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


class EnvironmentCheckError(SetupError):
    """The target directory or interpreter cannot host a new project."""

    def __init__(self, message: str) -> None:
        super().__init__("environment", message)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class SetupResult:
    config: SetupConfig
    target: Path
    written: list[Path] = field(default_factory=list)
    hooks_installed: bool = False
    elapsed: float = 0.0


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class SetupPipeline:
    """Drives a complete project setup.

    Attributes:
        target: Directory the project is generated into (must be a git repo).
        template_dir: Optional override for the bundled template tree.
        config: Pre-built configuration; when ``None`` the user is prompted.
        verbose: Print every written file.
    """

    def __init__(
        self,
        target: str | Path,
        *,
        template_dir: str | Path | None = None,
        config: SetupConfig | None = None,
        verbose: bool = False,
        min_python: tuple[int, int] = MIN_PYTHON,
    ) -> None:
        self.target = Path(target)
        self.template_dir = Path(template_dir) if template_dir else None
        self.config = config
        self.verbose = verbose
        self.min_python = min_python

    async def run(self) -> SetupResult:
        """Execute every step; raises on the first failure."""
        start = time.monotonic()
        console.print("[bold cyan]Vibecode Blueprint Setup[/bold cyan]")
        console.print("[dim]Setting up your collaborative AI development project...[/dim]\n")

        with create_progress() as progress:
            await self._step(progress, "Checking environment...", self.check_environment())

        config = self.gather_configuration()
        result = SetupResult(config=config, target=self.target)

        with create_progress() as progress:
            result.written = await self._step(
                progress, "Generating project files...", self.generate_project(config)
            )
            print_success(f"Project files generated ({len(result.written)} files)")

            if config.setup_git_hooks:
                await self._step(progress, "Setting up git hooks...", self.setup_git_hooks())
                result.hooks_installed = True

            await self._step(progress, "Finalizing setup...", self.finalize_setup())

        result.elapsed = time.monotonic() - start
        self.show_completion_message(result)
        return result

    async def _step(self, progress: Progress, description: str, coro):
        task = progress.add_task(description, total=None)
        try:
            return await coro
        finally:
            progress.remove_task(task)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def check_environment(self) -> None:
        """Fail before anything is written if the target cannot be set up."""
        if not await asyncio.to_thread((self.target / ".git").exists):
            raise EnvironmentCheckError('Not in a git repository. Please run "git init" first.')

        if sys.version_info[:2] < self.min_python:
            required = ".".join(str(part) for part in self.min_python)
            raise EnvironmentCheckError(f"Python {required} or higher is required")

        print_success("Environment check passed")

    def gather_configuration(self) -> SetupConfig:
        if self.config is None:
            self.config = gather_configuration(default_name=self.target.resolve().name)
        return self.config

    async def generate_project(self, config: SetupConfig) -> list[Path]:
        generator = ProjectGenerator(config, self.template_dir)
        written = await generator.generate(self.target)
        if self.verbose:
            for path in written:
                console.print(f"[dim]  {path.relative_to(self.target).as_posix()}[/dim]")
            for template_file, reason in generator.skipped.items():
                console.print(f"[dim]  skipped {template_file} ({reason})[/dim]")
        return written

    async def setup_git_hooks(self) -> list[Path]:
        touched = await install_pre_commit_hook(self.target)
        print_success("Git hooks configured")
        return touched

    async def finalize_setup(self) -> Path:
        template_path = await install_commit_template(self.target)
        print_success("Setup finalized")
        return template_path

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def show_completion_message(self, result: SetupResult) -> None:
        config = result.config
        pm = config.package_manager.value

        print_step_header("Vibecode Blueprint Setup Complete!", color="green")
        print_summary_table(
            {
                "Project": config.project_name,
                "Language": "TypeScript" if config.use_typescript else "JavaScript",
                "Packages": ", ".join(p.value for p in config.packages) or "-",
                "Files written": str(len(result.written)),
                "Duration": format_duration(result.elapsed),
            },
            title="Setup Summary",
        )

        console.print("[yellow]Next Steps:[/yellow]")
        console.print(f"1. Install dependencies: [cyan]{pm} install[/cyan]")
        console.print("2. Customize AGENTS.md with your project specifics")
        console.print("3. Review and update the generated configuration files")
        console.print("4. Set up your preferred AI coding assistant")
        console.print("5. Start coding with AI collaboration!\n")

        console.print("[blue]Quick Commands:[/blue]")
        console.print(f"- Install deps: [cyan]{pm} install[/cyan]")
        console.print(f"- Run guardrails: [cyan]{pm} run guardrails[/cyan]")
        console.print(f"- Build project: [cyan]{pm} run build[/cyan]")
        console.print(f"- Run tests: [cyan]{pm} run test[/cyan]")
        console.print("\n[green]Happy vibecoding![/green]\n")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="blueprint-setup",
        description="Scaffold a collaborative AI development project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  blueprint-setup\n"
            "  blueprint-setup --defaults --project-name my-app\n"
            "  blueprint-setup --config setup.json --target ./my-app\n"
        ),
    )
    parser.add_argument(
        "--target", "-t",
        type=Path,
        default=Path.cwd(),
        help="Project directory, must be a git repository (default: current directory)",
    )
    parser.add_argument(
        "--templates",
        type=Path,
        default=None,
        help="Template directory (default: bundled templates)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--defaults",
        action="store_true",
        help="Skip the prompts and use the preset configuration",
    )
    source.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Load the configuration from a JSON file instead of prompting",
    )
    parser.add_argument(
        "--project-name",
        default=None,
        help="Override the project name of --defaults or --config",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List every generated and skipped file",
    )
    return parser


def _load_config(args) -> SetupConfig | None:
    overrides = {"project_name": args.project_name} if args.project_name else {}
    if args.config is not None:
        return SetupConfig.load(args.config, **overrides)
    if args.defaults:
        return SetupConfig.preset(**overrides)
    return None


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``blueprint-setup`` / ``python -m blueprint``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args)
        pipeline = SetupPipeline(
            args.target,
            template_dir=args.templates,
            config=config,
            verbose=args.verbose,
        )
        asyncio.run(pipeline.run())
    except ValidationError as exc:
        print_error(f"Setup failed: invalid configuration\n{exc}")
        return 1
    except (SetupError, TemplateRenderError, OSError) as exc:
        print_error(f"Setup failed: {exc}")
        return 1
    except KeyboardInterrupt:
        print_error("Setup cancelled")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
