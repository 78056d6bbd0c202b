import logging
from pathlib import Path

from scopelink.utils.logger import get_logger

from .dependency_slot import dependency_slot


def remove_symlink(
    dependency_name: str,
    consumer_dir: Path | str,
    *,
    dry_run: bool = False,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> bool:
    """Delete the symlink for ``dependency_name`` in ``consumer_dir/node_modules``.

    An empty slot counts as success. A real directory or file is left alone and
    reported as failure.
    """
    logger = logger or get_logger("symlink")
    slot = dependency_slot(Path(consumer_dir), dependency_name)

    if dry_run:
        logger.debug(f"Would check and remove symlink: {slot}")
        return True

    try:
        if slot.is_symlink():
            slot.unlink()
            logger.debug(f"Removed symlink: {slot}")
            return True
        if slot.exists():
            logger.debug(f"Target exists but is not a symlink: {slot}")
            return False
    except OSError as e:
        logger.warning(f"UNLINK_SYMLINK_REMOVE_FAILED: Unable to remove symlink | Package: {dependency_name} | Error: {e}")
        return False

    logger.debug(f"No symlink found at: {slot}")
    return True
