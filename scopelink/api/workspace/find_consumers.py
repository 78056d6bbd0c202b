"""Direct consumers of a package.

Only packages that declare the target themselves are consumers. A package that
reaches the target through another dependency is not, so relinking never
cascades beyond one hop.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .discover_packages import discover_packages
from .PackageRecord import PackageRecord
from .Storage import Storage


def consumers_of(records: list[PackageRecord], target_name: str) -> list[PackageRecord]:
    """Records declaring ``target_name`` in any dependency section, excluding the target itself."""
    return [record for record in records if record.name != target_name and record.depends_on(target_name)]


def find_consumers(
    roots: Iterable[Path | str],
    target_name: str,
    *,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[PackageRecord]:
    return consumers_of(discover_packages(roots, storage=storage, logger=logger), target_name)
