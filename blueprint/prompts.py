"""Interactive configuration prompts using Rich."""

from __future__ import annotations

from rich.prompt import Confirm, Prompt

from blueprint.config import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    DEFAULT_PACKAGES,
    PackageId,
    PackageManager,
    SetupConfig,
    validate_package_name,
)
from blueprint.utils import console, print_error


def prompt_project_name(default: str) -> str:
    """Ask for the project name until it is a valid npm package name."""
    while True:
        name = Prompt.ask("Project name", default=default, console=console)
        problems = validate_package_name(name)
        if not problems:
            return name
        print_error(problems[0])


def parse_packages(raw: str) -> list[PackageId]:
    """Turn ``"core, api"`` into package ids; raises ``ValueError`` on unknown ids."""
    selected: list[PackageId] = []
    for item in raw.split(","):
        value = item.strip().lower()
        if not value:
            continue
        try:
            selected.append(PackageId(value))
        except ValueError:
            valid = ", ".join(p.value for p in PackageId)
            raise ValueError(f"Unknown package '{value}' (choose from: {valid})") from None
    return selected


def prompt_packages() -> list[PackageId]:
    """Ask which workspace packages to create."""
    console.print("[dim]Available packages:[/dim]")
    for package in PackageId:
        console.print(f"[dim]  {package.value:<14}[/dim] {package.label}")

    default = ",".join(p.value for p in DEFAULT_PACKAGES)
    while True:
        raw = Prompt.ask("Select packages to create (comma-separated)", default=default, console=console)
        try:
            return parse_packages(raw)
        except ValueError as exc:
            print_error(str(exc))


def prompt_package_manager() -> PackageManager:
    choice = Prompt.ask(
        "Package manager",
        choices=[m.value for m in PackageManager],
        default=PackageManager.PNPM.value,
        console=console,
    )
    return PackageManager(choice)


def gather_configuration(default_name: str) -> SetupConfig:
    """Collect every setting interactively and return the frozen configuration."""
    console.print("\n[bold yellow]Project Configuration[/bold yellow]")

    project_name = prompt_project_name(default_name)
    description = Prompt.ask("Project description", default=DEFAULT_DESCRIPTION, console=console)
    author = Prompt.ask("Author name", default=DEFAULT_AUTHOR, console=console)
    use_typescript = Confirm.ask("Use TypeScript?", default=True, console=console)
    use_monorepo = Confirm.ask("Set up as monorepo with workspaces?", default=True, console=console)
    packages = prompt_packages() if use_monorepo else []
    package_manager = prompt_package_manager()
    setup_git_hooks = Confirm.ask(
        "Install pre-commit hooks for AI code validation?", default=True, console=console
    )
    setup_github_actions = Confirm.ask("Set up GitHub Actions CI/CD?", default=True, console=console)

    return SetupConfig(
        project_name=project_name,
        description=description,
        author=author,
        use_typescript=use_typescript,
        use_monorepo=use_monorepo,
        packages=packages,
        package_manager=package_manager,
        setup_git_hooks=setup_git_hooks,
        setup_github_actions=setup_github_actions,
    )
