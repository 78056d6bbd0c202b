from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .LinkRecord import LinkRecord


@dataclass(frozen=True)
class PackageLinkStatus:
    """One row of the link status report."""

    name: str
    directory: Path
    links: list[LinkRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "directory": str(self.directory),
            "links": [link.to_dict() for link in self.links],
        }
