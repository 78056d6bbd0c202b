"""Configuration models for scopelink."""

from .._output_schemas.config import ConfigShowOutput
from .LinkConfig import LinkConfig
from .ScopeLinkConfig import ScopeLinkConfig
from .UnlinkConfig import UnlinkConfig
from .UpdatesConfig import UpdatesConfig
from .VersionsConfig import VersionsConfig
from .WorkspaceConfig import WorkspaceConfig

__all__ = [
    "ConfigShowOutput",
    "LinkConfig",
    "ScopeLinkConfig",
    "UnlinkConfig",
    "UpdatesConfig",
    "VersionsConfig",
    "WorkspaceConfig",
]
