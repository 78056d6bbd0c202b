from pathlib import Path

from .errors import CommandError, LockRegenerationFailed
from .PackageManager import PackageManager
from .run_in_directory import run_in_directory


def regenerate_lock(directory: Path | str, package_manager: PackageManager) -> None:
    """Rewrite package-lock.json in ``directory`` without touching node_modules.

    Raises:
        LockRegenerationFailed: The package manager failed
    """
    with run_in_directory(directory):
        try:
            package_manager.regenerate_lock()
        except CommandError as e:
            raise LockRegenerationFailed(Path(directory), str(e)) from e
