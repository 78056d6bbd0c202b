"""Top-level scopelink configuration."""

import json
from contextlib import suppress
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scopelink.utils.get_home_dir import get_home_dir

from .LinkConfig import LinkConfig
from .UnlinkConfig import UnlinkConfig
from .UpdatesConfig import UpdatesConfig
from .VersionsConfig import VersionsConfig
from .WorkspaceConfig import WorkspaceConfig


class ScopeLinkConfig(BaseModel):
    """Top-level configuration for scopelink commands."""

    model_config = ConfigDict(extra="forbid")

    dry_run: bool = False
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    link: LinkConfig = Field(default_factory=LinkConfig)
    unlink: UnlinkConfig = Field(default_factory=UnlinkConfig)
    versions: VersionsConfig = Field(default_factory=VersionsConfig)
    updates: UpdatesConfig = Field(default_factory=UpdatesConfig)

    @classmethod
    def get_config_path(cls) -> Path:
        """Get path to config file based on SCOPELINK_HOME or default to ~/.scopelink."""
        return get_home_dir() / "config.json"

    @classmethod
    def load(cls) -> "ScopeLinkConfig":
        """Load and validate config from file.

        A missing file yields the defaults; every section is optional.

        Raises:
            ValueError: If the file holds invalid JSON or fails validation
        """
        path = cls.get_config_path()

        if not path.exists():
            return cls()

        try:
            with path.open() as fh:
                raw = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")

        try:
            return cls(**raw)
        except ValidationError as e:
            error_list = e.errors() or [{"msg": str(e), "loc": ()}]
            first = error_list[0]
            error_msg = first.get("msg", str(e))
            loc = first.get("loc", ())
            field = ".".join(str(x) for x in loc) if isinstance(loc, (list, tuple)) else ""
            detail = f"{field}: {error_msg}" if field else error_msg
            raise ValueError(f"Configuration validation error: {detail}") from e

    def is_link_dry_run(self) -> bool:
        return self.dry_run or self.link.dry_run

    def is_unlink_dry_run(self) -> bool:
        return self.dry_run or self.unlink.dry_run

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary for serialization."""
        return self.model_dump(mode="python")

    def save(self) -> None:
        """Save the current configuration to a JSON file.

        Uses atomic write (write to temp file, then rename) to prevent corruption.
        """
        path = self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w") as fh:
                json.dump(self.to_dict(), fh, indent=4)
            temp_path.replace(path)
        except OSError as e:
            with suppress(OSError):
                if temp_path.exists():
                    temp_path.unlink()
            raise RuntimeError(f"Failed to save config: {e}") from e
