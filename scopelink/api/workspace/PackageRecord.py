"""A package discovered in the workspace."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .package_scope import package_scope
from .read_manifest import DEPENDENCY_SECTIONS, MANIFEST_NAME


@dataclass(frozen=True)
class PackageRecord:
    """Name, location and declared dependencies of one package."""

    name: str
    directory: Path
    dependency_sections: dict[str, dict[str, str]] = field(default_factory=dict)
    version: str | None = None

    @classmethod
    def from_manifest(cls, directory: Path, manifest: dict[str, Any]) -> "PackageRecord":
        """Build a record from a validated manifest. The manifest must carry a name."""
        return cls(
            name=manifest["name"],
            directory=Path(directory),
            dependency_sections={section: dict(manifest.get(section) or {}) for section in DEPENDENCY_SECTIONS},
            version=manifest.get("version"),
        )

    @property
    def manifest_path(self) -> Path:
        return self.directory / MANIFEST_NAME

    @property
    def scope(self) -> str | None:
        return package_scope(self.name)

    def all_dependency_names(self) -> set[str]:
        """Names declared in any of the four dependency sections."""
        names: set[str] = set()
        for deps in self.dependency_sections.values():
            names.update(deps)
        return names

    def depends_on(self, name: str) -> bool:
        return any(name in deps for deps in self.dependency_sections.values())
