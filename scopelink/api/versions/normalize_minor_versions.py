"""Rewrite same-scope dependency specifiers to ``major.minor`` form across a workspace."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from scopelink.utils.logger import get_dry_run_logger

from ..workspace import FileStorage, PackageRecord, ScopeLinkError, Storage, discover_packages, package_scope, read_manifest, write_manifest
from .normalize_to_minor_version import normalize_to_minor_version

VERSION_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


@dataclass
class MinorVersionsResult:
    packages_scanned: int = 0
    packages_changed: int = 0
    changes: list[str] = field(default_factory=list)
    summary: str = ""


def _normalize_package(
    record: PackageRecord,
    *,
    dry_run: bool,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> list[str]:
    scope = record.scope
    manifest = read_manifest(record.directory, storage)
    changes: list[str] = []
    for section in VERSION_SECTIONS:
        deps = manifest.get(section)
        if not deps:
            continue
        for dep_name, current in deps.items():
            if package_scope(dep_name) != scope:
                continue
            normalized = normalize_to_minor_version(current)
            if normalized == current:
                continue
            logger.info(
                f"VERSIONS_NORMALIZING: Normalizing dependency version | Package: {record.name} | Section: {section} | Dependency: {dep_name} | Current: {current} | Normalized: {normalized}"
            )
            deps[dep_name] = normalized
            changes.append(f"{record.name} {section} {dep_name}: {current} -> {normalized}")

    if changes and not dry_run:
        write_manifest(record.directory, manifest, storage)
        logger.info(f"VERSIONS_PACKAGE_UPDATED: Updated dependencies in package | Package: {record.name} | Status: saved")
    return changes


def normalize_minor_versions(
    roots: Iterable[Path | str],
    *,
    dry_run: bool = False,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> MinorVersionsResult:
    """Normalize same-scope dependencies of every scoped package below ``roots``.

    Unscoped packages are skipped. A package whose manifest cannot be rewritten is
    logged and skipped; the others are still processed.
    """
    storage = storage or FileStorage()
    logger = logger or get_dry_run_logger("versions", dry_run)

    logger.info("VERSIONS_NORMALIZE_STARTING: Normalizing same-scope dependencies | Format: major.minor")
    records = discover_packages(roots, storage=storage, logger=logger)
    result = MinorVersionsResult()
    if not records:
        logger.warning("VERSIONS_NO_PACKAGES: No packages found in specified directories | Action: Nothing to normalize")
        result.summary = "No packages found to process."
        return result

    for record in records:
        if record.scope is None:
            logger.debug(f"Skipping {record.name} - not a scoped package")
            continue
        result.packages_scanned += 1
        try:
            changes = _normalize_package(record, dry_run=dry_run, storage=storage, logger=logger)
        except (ScopeLinkError, OSError) as e:
            logger.warning(f"VERSIONS_PACKAGE_UPDATE_FAILED: Failed to update dependencies | Package: {record.name} | Error: {e}")
            continue
        if changes:
            result.packages_changed += 1
            result.changes.extend(changes)

    verb = "Would update" if dry_run else "Updated"
    counts = f"{verb} {result.packages_changed} of {result.packages_scanned} packages with dependency changes."
    result.summary = f"Dry run complete. {counts}" if dry_run else f"Dependencies updated successfully. {counts}"
    logger.info(result.summary)
    return result
