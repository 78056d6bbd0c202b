"""Unlink command configuration."""

from pydantic import BaseModel, ConfigDict, Field


class UnlinkConfig(BaseModel):
    """Settings for ``scopelink unlink``."""

    model_config = ConfigDict(extra="forbid")

    dry_run: bool = False
    externals: list[str] = Field(
        default_factory=list,
        description="Dependency names or prefixes whose symlinks are removed before unlinking",
    )
    clean_node_modules: bool = Field(False, description="Remove node_modules and the lock file, then reinstall")
    package_argument: str | None = None
