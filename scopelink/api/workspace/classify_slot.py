import os
from pathlib import Path

from .SymlinkState import SymlinkState


def classify_slot(slot: Path, desired_target: str) -> SymlinkState:
    """Inspect ``slot`` without following symlinks."""
    if slot.is_symlink():
        if os.readlink(slot) == desired_target:
            return SymlinkState.CORRECT_TARGET
        return SymlinkState.STALE_TARGET
    if not slot.exists():
        return SymlinkState.ABSENT
    if slot.is_dir():
        return SymlinkState.OCCUPIED_BY_DIRECTORY
    return SymlinkState.OCCUPIED_BY_FILE
