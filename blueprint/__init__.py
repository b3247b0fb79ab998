"""Blueprint setup -- scaffolds collaborative AI development projects.

Collects configuration choices, renders the bundled template tree into the
target repository, creates workspace packages and wires the git hooks.

Usage::

    from blueprint import SetupConfig, SetupPipeline

    config = SetupConfig.preset(project_name="my-app")
    result = await SetupPipeline("./my-app", config=config).run()
"""

from importlib.metadata import PackageNotFoundError, version

from blueprint.config import PackageId, PackageManager, SetupConfig
from blueprint.pipeline import SetupPipeline, SetupResult

try:
    __version__ = version("blueprint-setup")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "PackageId",
    "PackageManager",
    "SetupConfig",
    "SetupPipeline",
    "SetupResult",
    "__version__",
]
