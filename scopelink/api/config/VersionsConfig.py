"""Versions command configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scopelink.utils.normalize_path import normalize_path


class VersionsConfig(BaseModel):
    """Settings for ``scopelink versions``."""

    model_config = ConfigDict(extra="forbid")

    directories: list[str] = Field(default_factory=list, description="Directories to scan (default: workspace)")

    @field_validator("directories")
    @classmethod
    def _normalize_directories(cls, v: list[str]) -> list[str]:
        return [str(normalize_path(d)) for d in v]
