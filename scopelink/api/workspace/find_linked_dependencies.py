import logging
import os
from collections.abc import Iterable
from pathlib import Path

from scopelink.utils.logger import get_logger

from .dependency_slot import dependency_slot
from .LinkRecord import LinkRecord
from .PackageRecord import PackageRecord


def _is_within(path: str, root: str) -> bool:
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def find_linked_dependencies(
    record: PackageRecord,
    roots: Iterable[Path | str],
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[LinkRecord]:
    """Symlinked dependencies of ``record``, in manifest order.

    A link is internal when its target, resolved against the link's own directory,
    lies inside one of ``roots`` or inside the package's node_modules. Anything
    else is external.
    """
    logger = logger or get_logger("status")
    bases = [os.path.normpath(os.path.abspath(root)) for root in roots]
    bases.append(os.path.normpath(os.path.join(record.directory, "node_modules")))

    links: list[LinkRecord] = []
    seen: set[str] = set()
    try:
        for deps in record.dependency_sections.values():
            for name in deps:
                if name in seen:
                    continue
                seen.add(name)
                slot = dependency_slot(record.directory, name)
                if not slot.is_symlink():
                    continue
                target = os.readlink(slot)
                resolved = os.path.normpath(os.path.join(slot.parent, target))
                is_external = not any(_is_within(resolved, base) for base in bases)
                links.append(LinkRecord(dependency_name=name, target_path=target, is_external=is_external))
    except OSError as e:
        logger.warning(f"LINKED_DEPS_CHECK_FAILED: Unable to check linked dependencies | Package: {record.name} | Error: {e}")
    return links
