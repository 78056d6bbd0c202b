from dataclasses import dataclass


@dataclass(frozen=True)
class LinkRecord:
    """A symlinked dependency found in a package's node_modules."""

    dependency_name: str
    target_path: str
    is_external: bool

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "dependency_name": self.dependency_name,
            "target_path": self.target_path,
            "is_external": self.is_external,
        }
