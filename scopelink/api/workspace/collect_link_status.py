import logging
from collections.abc import Iterable
from pathlib import Path

from .discover_packages import discover_packages
from .find_linked_dependencies import find_linked_dependencies
from .PackageLinkStatus import PackageLinkStatus
from .Storage import Storage


def collect_link_status(
    roots: Iterable[Path | str],
    *,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[PackageLinkStatus]:
    """One status row per discovered package that has at least one symlinked dependency."""
    roots = list(roots)
    statuses = []
    for record in discover_packages(roots, storage=storage, logger=logger):
        links = find_linked_dependencies(record, roots, logger)
        if links:
            statuses.append(PackageLinkStatus(name=record.name, directory=record.directory, links=links))
    return statuses
