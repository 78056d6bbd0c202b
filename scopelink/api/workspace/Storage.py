"""File access capability used for reading and writing manifests."""

from pathlib import Path
from typing import Protocol


class Storage(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read_file(self, path: Path) -> str: ...

    def write_file(self, path: Path, content: str) -> None: ...


class FileStorage:
    """Storage backed by the local filesystem."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_file(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_file(self, path: Path, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")
