"""Find every package manifest below a set of workspace roots."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from scopelink.utils.logger import get_logger
from scopelink.utils.normalize_path import normalize_path

from .errors import ScopeLinkError
from .PackageRecord import PackageRecord
from .read_manifest import MANIFEST_NAME, read_manifest
from .Storage import FileStorage, Storage

SKIPPED_DIRECTORIES = frozenset({"node_modules"})


def _iter_manifest_dirs(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never descends into installed or hidden trees
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES and not d.startswith("."))
        if MANIFEST_NAME in filenames:
            yield Path(dirpath)


def discover_packages(
    roots: Iterable[Path | str],
    *,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[PackageRecord]:
    """Return one record per named package reachable from ``roots``.

    A root's own manifest is included and traversal continues below it, so
    monorepo members are found too. Unreadable manifests are logged and skipped,
    nameless ones are skipped silently. Packages reached from overlapping roots
    are reported once. Results are sorted by directory.
    """
    storage = storage or FileStorage()
    logger = logger or get_logger("workspace")

    records: dict[Path, PackageRecord] = {}
    for root in roots:
        root_path = normalize_path(root)
        if not root_path.is_dir():
            logger.warning(f"WORKSPACE_ROOT_MISSING: Workspace directory does not exist | Path: {root_path}")
            continue

        for directory in _iter_manifest_dirs(root_path):
            key = directory.resolve()
            if key in records:
                continue
            try:
                manifest = read_manifest(directory, storage)
            except ScopeLinkError as e:
                logger.warning(
                    f"PACKAGE_JSON_PARSE_FAILED: Unable to parse package.json | Path: {directory / MANIFEST_NAME} | Error: {e}"
                )
                continue
            if not manifest.get("name"):
                logger.debug(f"Skipping package.json without a name: {directory / MANIFEST_NAME}")
                continue
            records[key] = PackageRecord.from_manifest(directory, manifest)

    return sorted(records.values(), key=lambda record: str(record.directory))
