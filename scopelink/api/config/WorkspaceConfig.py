"""Workspace configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scopelink.utils.normalize_path import normalize_path


class WorkspaceConfig(BaseModel):
    """Root directories scanned for package manifests."""

    model_config = ConfigDict(extra="forbid")

    directories: list[str] = Field(default_factory=list, description="Workspace roots (default: current directory)")

    @field_validator("directories")
    @classmethod
    def _normalize_directories(cls, v: list[str]) -> list[str]:
        return [str(normalize_path(d)) for d in v]

    def resolve_directories(self, cwd: Path | None = None) -> list[Path]:
        """Return configured roots, or the current directory when none are set."""
        if self.directories:
            return [Path(d) for d in self.directories]
        return [normalize_path(cwd or Path.cwd())]
