"""Normalize a path for scopelink.

Expands user home directory (~) and returns an absolute path
WITHOUT resolving symlinks. Package directories are compared as the
user wrote them, so symlinked workspaces keep their own paths.
"""

from pathlib import Path
from typing import overload


@overload
def normalize_path(path: str) -> Path: ...


@overload
def normalize_path(path: Path) -> Path: ...


@overload
def normalize_path(path: None) -> None: ...


def normalize_path(path: str | Path | None) -> Path | None:
    """Expand user and return absolute path (no symlink resolution)."""
    if path is None:
        return None
    return Path(path).expanduser().absolute()
