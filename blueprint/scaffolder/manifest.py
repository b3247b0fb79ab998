"""Per-package ``package.json`` synthesis for workspace projects."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from blueprint.config import PackageId, SetupConfig


INITIAL_VERSION = "0.1.0"

TYPESCRIPT_DEV_DEPENDENCIES: dict[str, str] = {
    "typescript": "^5.3.0",
    "@types/node": "^20.10.0",
}


class PackageScripts(BaseModel):
    build: str
    dev: str
    test: str


class PackageManifest(BaseModel):
    """The fields written to ``packages/<id>/package.json``.

    ``types`` is left out of the serialised form entirely for JavaScript
    packages rather than written as ``null``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    version: str = INITIAL_VERSION
    description: str
    main: str
    types: str | None = None
    scripts: PackageScripts
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    @classmethod
    def for_package(cls, package: PackageId | str, config: SetupConfig) -> "PackageManifest":
        """Derive the manifest of *package* from the project configuration."""
        package_id = PackageId(package).value

        if config.use_typescript:
            return cls(
                name=f"{config.package_name_scoped}/{package_id}",
                description=f"{package_id} package for {config.project_name}",
                main="dist/index.js",
                types="dist/index.d.ts",
                scripts=PackageScripts(
                    build="tsc",
                    dev="tsc --watch",
                    test="node --test dist/**/*.test.js",
                ),
                dev_dependencies=dict(TYPESCRIPT_DEV_DEPENDENCIES),
            )

        return cls(
            name=f"{config.package_name_scoped}/{package_id}",
            description=f"{package_id} package for {config.project_name}",
            main="src/index.js",
            scripts=PackageScripts(
                build='echo "No build step needed"',
                dev="node --watch src/index.js",
                test="node --test test/**/*.test.js",
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialise with two-space indentation and a trailing newline."""
        return json.dumps(self.as_dict(), indent=2, ensure_ascii=False) + "\n"
