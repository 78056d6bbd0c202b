"""Drive one node_modules slot to a symlink pointing at a local source."""

import logging
import os
import shutil
from pathlib import Path

from scopelink.utils.logger import get_logger

from .classify_slot import classify_slot
from .dependency_slot import dependency_slot
from .SymlinkState import SymlinkState


def reconcile_symlink(
    dependency_name: str,
    source_dir: Path | str,
    consumer_dir: Path | str,
    *,
    dry_run: bool = False,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> bool:
    """Make ``consumer_dir/node_modules/<dependency_name>`` a relative symlink to ``source_dir``.

    Whatever occupies the slot is replaced: a symlink with another target is
    re-pointed, and a real directory or file is removed first with a warning.
    A slot that already points at the source is left untouched, so calling this
    twice changes nothing the second time.

    In dry-run mode nothing is inspected or changed; the intended action is logged.

    Returns:
        True when the slot ends up linked (or would be, in dry-run), False on an OS error
    """
    logger = logger or get_logger("symlink")
    slot = dependency_slot(Path(consumer_dir), dependency_name)
    target = os.path.relpath(Path(source_dir), slot.parent)

    if dry_run:
        logger.debug(f"Would create symlink: {slot} -> {source_dir}")
        return True

    try:
        state = classify_slot(slot, target)
        if state is SymlinkState.CORRECT_TARGET:
            logger.debug(f"Symlink already exists and points to correct target: {slot} -> {target}")
            return True

        slot.parent.mkdir(parents=True, exist_ok=True)

        if state is SymlinkState.STALE_TARGET:
            logger.info(
                f"SYMLINK_FIXING: Correcting symlink target | Path: {slot} | Old Target: {os.readlink(slot)} | New Target: {target}"
            )
            slot.unlink()
        elif state is SymlinkState.OCCUPIED_BY_DIRECTORY:
            logger.warning(
                f"SYMLINK_DIRECTORY_CONFLICT: Removing existing directory to create symlink | Path: {slot} | Action: Remove and replace with symlink"
            )
            shutil.rmtree(slot)
        elif state is SymlinkState.OCCUPIED_BY_FILE:
            logger.warning(
                f"SYMLINK_FILE_CONFLICT: Removing existing file to create symlink | Path: {slot} | Action: Remove and replace with symlink"
            )
            slot.unlink()

        slot.symlink_to(target, target_is_directory=True)
    except OSError as e:
        logger.warning(f"SYMLINK_CREATE_FAILED: Unable to create symlink | Package: {dependency_name} | Error: {e} | Status: failed")
        return False

    if state is SymlinkState.ABSENT:
        logger.debug(f"Created symlink: {slot} -> {target}")
    else:
        logger.info(f"SYMLINK_CREATED: Successfully created symlink | Path: {slot} | Target: {target} | Replaced: {state.value}")
    return True
