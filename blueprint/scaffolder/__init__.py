"""Blueprint scaffolder -- renders a template tree into a new project.

Quick usage::

    from blueprint.config import SetupConfig
    from blueprint.scaffolder import ProjectGenerator

    config = SetupConfig(project_name="my-project", packages=["core", "api"])
    generator = ProjectGenerator(config)
    written = await generator.generate("/tmp/output")
"""

from blueprint.scaffolder.generator import ProjectGenerator
from blueprint.scaffolder.helpers import HELPERS, register_helper
from blueprint.scaffolder.manifest import PackageManifest
from blueprint.scaffolder.rules import CONDITIONAL_RULES, SkipRule, is_binary, should_skip
from blueprint.scaffolder.templates import (
    TemplateRenderError,
    TemplateRenderer,
    discover_templates,
    strip_template_suffix,
)

__all__ = [
    "CONDITIONAL_RULES",
    "HELPERS",
    "PackageManifest",
    "ProjectGenerator",
    "SkipRule",
    "TemplateRenderError",
    "TemplateRenderer",
    "discover_templates",
    "is_binary",
    "register_helper",
    "should_skip",
    "strip_template_suffix",
]
