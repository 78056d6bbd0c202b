from enum import Enum


class SymlinkState(str, Enum):
    """What currently occupies a dependency slot in node_modules."""

    ABSENT = "absent"
    CORRECT_TARGET = "correct_target"
    STALE_TARGET = "stale_target"
    OCCUPIED_BY_DIRECTORY = "occupied_by_directory"
    OCCUPIED_BY_FILE = "occupied_by_file"
