"""Update same-scope dependencies of the current package.

Two strategies:

* scope mode runs npm-check-updates restricted to ``@scope/*`` packages.
* inter-project mode pins every same-scope dependency to ``^<version>`` of the
  sibling checkout (``../<unscoped-name>``), falling back to the published version.
"""

import logging
from pathlib import Path

from scopelink.utils.logger import get_dry_run_logger
from scopelink.utils.normalize_path import normalize_path

from ..workspace import (
    ArgumentInvalid,
    CommandError,
    FileStorage,
    NpmPackageManager,
    PackageManager,
    ScopeLinkError,
    Storage,
    UpdateFailed,
    package_scope,
    read_manifest,
    run_in_directory,
    unscoped_name,
    write_manifest,
)

UPDATE_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

NCU_UP_TO_DATE = "All dependencies match the latest package versions"


def _validate_scope(scope: str | None) -> str:
    if not scope:
        raise ArgumentInvalid("Scope parameter is required. Usage: scopelink updates <scope> [--inter-project]")
    if not scope.startswith("@"):
        raise ArgumentInvalid(f'Invalid scope "{scope}". Scope must start with @ (e.g., "@acme")')
    return scope


def _resolve_version(
    dep_name: str,
    package_dir: Path,
    package_manager: PackageManager,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> str | None:
    sibling = package_dir.parent / unscoped_name(dep_name)
    try:
        manifest = read_manifest(sibling, storage)
    except ScopeLinkError:
        manifest = {}
    if manifest.get("name") == dep_name and manifest.get("version"):
        logger.debug(f"Found {dep_name}@{manifest['version']} in tree")
        return manifest["version"]

    try:
        version = package_manager.view_version(dep_name).strip()
    except CommandError as e:
        logger.warning(f"UPDATES_VERSION_NOT_FOUND: Could not find version for dependency | Dependency: {dep_name} | Error: {e}")
        return None
    if not version:
        logger.warning(f"UPDATES_VERSION_NOT_FOUND: Could not find version for dependency | Dependency: {dep_name}")
        return None
    logger.debug(f"Found {dep_name}@{version} on npm")
    return version


def update_inter_project_dependencies(
    scope: str | None,
    *,
    cwd: Path | str | None = None,
    dry_run: bool = False,
    package_manager: PackageManager | None = None,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[str]:
    """Pin same-scope dependencies of the package in ``cwd`` to their current versions.

    Returns:
        One ``"name: old → new"`` entry per changed dependency

    Raises:
        ArgumentInvalid: ``scope`` is missing or does not start with ``@``
        UpdateFailed: The manifest was rewritten but ``npm install`` failed
    """
    scope = _validate_scope(scope)
    package_dir = normalize_path(cwd or Path.cwd())
    package_manager = package_manager or NpmPackageManager()
    storage = storage or FileStorage()
    logger = logger or get_dry_run_logger("updates", dry_run)

    logger.info(f"UPDATES_INTER_PROJECT_STARTING: Updating inter-project dependencies | Scope: {scope}")
    try:
        manifest = read_manifest(package_dir, storage)
    except ScopeLinkError as e:
        logger.warning(f"UPDATES_INTER_PROJECT_FAILED: Failed to read package.json | Error: {e} | Impact: Dependencies not updated")
        return []

    updated: list[str] = []
    for section in UPDATE_SECTIONS:
        deps = manifest.get(section)
        if not deps:
            continue
        for dep_name, current in deps.items():
            if package_scope(dep_name) != scope:
                continue
            version = _resolve_version(dep_name, package_dir, package_manager, storage, logger)
            if version is None:
                continue
            new_spec = f"^{version}"
            if current == new_spec:
                continue
            logger.info(
                f"UPDATES_UPDATING: Updating dependency version | Section: {section} | Dependency: {dep_name} | Current: {current} | New: {new_spec}"
            )
            deps[dep_name] = new_spec
            updated.append(f"{dep_name}: {current} → {new_spec}")

    if not updated:
        logger.info("UPDATES_INTER_PROJECT_NONE: No inter-project dependency updates needed")
        return updated

    if dry_run:
        return updated

    write_manifest(package_dir, manifest, storage)
    logger.info(f"UPDATES_PACKAGE_COMPLETE: Updated dependencies in package.json | Count: {len(updated)}")

    with run_in_directory(package_dir):
        try:
            package_manager.install()
        except CommandError as e:
            logger.error(f"UPDATES_NPM_INSTALL_FAILED: Failed to run npm install | Error: {e} | Impact: Lock file not updated")
            raise UpdateFailed(f"Failed to update lock file: {e}") from e
    logger.info("UPDATES_LOCK_FILE_UPDATED: Lock file updated successfully | File: package-lock.json")
    return updated


def update_dependencies(
    scope: str | None,
    *,
    cwd: Path | str | None = None,
    dry_run: bool = False,
    package_manager: PackageManager | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> str:
    """Run npm-check-updates for ``scope`` in ``cwd`` and reinstall when anything changed.

    Raises:
        ArgumentInvalid: ``scope`` is missing or does not start with ``@``
        UpdateFailed: npm-check-updates or the following ``npm install`` failed
    """
    scope = _validate_scope(scope)
    package_dir = normalize_path(cwd or Path.cwd())
    package_manager = package_manager or NpmPackageManager()
    logger = logger or get_dry_run_logger("updates", dry_run)

    logger.info(f"UPDATES_NCU_STARTING: Running npm-check-updates for scope | Scope: {scope}")
    if dry_run:
        logger.info(f"Would run: npx npm-check-updates '/^{scope}\\//' -u")
        logger.info("Would run: npm install")
        return f"Would update dependencies matching {scope} scope"

    with run_in_directory(package_dir):
        try:
            output = package_manager.check_updates(scope)
        except CommandError as e:
            logger.error(f"UPDATES_NCU_FAILED: Failed to run npm-check-updates | Scope: {scope} | Error: {e}")
            raise UpdateFailed(f"Failed to update dependencies: {e}") from e

        for line in output.splitlines():
            if line.strip():
                logger.info(f"   {line}")

        if output.strip() and NCU_UP_TO_DATE not in output:
            logger.info("UPDATES_NCU_INSTALL: Running npm install after ncu updates | Command: npm install")
            try:
                package_manager.install()
            except CommandError as e:
                logger.error(f"UPDATES_NCU_INSTALL_FAILED: Failed to run npm install after ncu | Error: {e}")
                raise UpdateFailed(f"Failed to update lock file after dependency updates: {e}") from e

    logger.info(f"UPDATES_NCU_SUCCESS: Successfully updated dependencies | Scope: {scope}")
    return f"Updated dependencies matching {scope} scope"
