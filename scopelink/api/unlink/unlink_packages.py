"""Unlink orchestrator, the mirror of :mod:`scopelink.api.link.link_packages`.

Failures in consumers are warnings here, while linking treats them as fatal.
"""

import json
import logging
import shutil
from pathlib import Path

from scopelink.utils.logger import get_dry_run_logger
from scopelink.utils.normalize_path import normalize_path

from ..workspace import (
    CommandError,
    FileStorage,
    ManifestNotFound,
    NpmPackageManager,
    PackageManager,
    ReinstallFailed,
    ScopeLinkError,
    Storage,
    collect_link_status,
    consumers_of,
    discover_packages,
    find_matching_packages,
    format_link_status,
    matches_pattern,
    package_scope,
    read_manifest,
    remove_symlink,
    resolve_argument,
    run_in_directory,
)

STATUS_ARGUMENT = "status"

# Smart-mode summaries that mean nothing could be unlinked.
SMART_MODE_STOPS = ("No package.json found in current directory", "Failed to parse package.json")


def unlink_packages(
    argument: str | None = None,
    *,
    cwd: Path | str | None = None,
    roots: list[Path | str] | None = None,
    dry_run: bool = False,
    externals: list[str] | None = None,
    clean_node_modules: bool = False,
    package_manager: PackageManager | None = None,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> str:
    """Unlink packages and return a summary message.

    Args:
        argument: ``@scope``, ``@scope/name``, ``"status"`` or None for smart mode
        cwd: Package directory used by smart mode (default: current directory)
        roots: Workspace roots scanned in explicit and status modes (default: ``[cwd]``)
        dry_run: Describe the steps without running them
        externals: Dependency names or prefixes whose symlinks are removed first (smart mode)
        clean_node_modules: Remove node_modules and package-lock.json, then reinstall (smart mode)

    Raises:
        ArgumentInvalid: ``argument`` does not start with ``@``
        ReinstallFailed: ``npm install`` failed after cleaning (smart mode)
    """
    current_dir = normalize_path(cwd or Path.cwd())
    workspace_roots = [normalize_path(root) for root in roots] if roots else [current_dir]
    package_manager = package_manager or NpmPackageManager()
    storage = storage or FileStorage()
    logger = logger or get_dry_run_logger("unlink", dry_run)

    if argument == STATUS_ARGUMENT:
        logger.info(f"UNLINK_STATUS_CHECK: Checking link status | Directories: {', '.join(str(r) for r in workspace_roots)}")
        return format_link_status(collect_link_status(workspace_roots, storage=storage, logger=logger))

    if not argument:
        return _unlink_smart(
            current_dir,
            dry_run=dry_run,
            externals=externals or [],
            clean_node_modules=clean_node_modules,
            package_manager=package_manager,
            storage=storage,
            logger=logger,
        )

    return _unlink_explicit(
        argument,
        workspace_roots,
        dry_run=dry_run,
        package_manager=package_manager,
        storage=storage,
        logger=logger,
    )


def _dry_run_plan(name: str, externals: list[str], clean_node_modules: bool) -> str:
    lines = [f"DRY RUN: Would execute unlink steps for {name}:"]
    if externals:
        lines.append(f"  0. Unlink external dependencies matching patterns: {', '.join(externals)}")
    lines.append("  1. npm unlink -g")
    if clean_node_modules:
        lines.append("  2. rm -rf node_modules package-lock.json")
        lines.append("  3. npm install")
        lines.append("  4. Check for remaining links with npm ls --link")
    else:
        lines.append("  2. Check for remaining links with npm ls --link")
        lines.append("  Note: Use --clean-node-modules flag to also clean and reinstall dependencies")
    return "\n".join(lines)


def _clean(current_dir: Path, logger: logging.Logger | logging.LoggerAdapter) -> None:
    logger.info("UNLINK_CLEANING: Cleaning node_modules and package-lock.json | Purpose: Remove symlinked dependencies")
    try:
        node_modules = current_dir / "node_modules"
        if node_modules.is_symlink() or node_modules.is_file():
            node_modules.unlink()
        elif node_modules.exists():
            shutil.rmtree(node_modules)
        (current_dir / "package-lock.json").unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"UNLINK_CLEAN_FAILED: Failed to clean directories | Error: {e} | Impact: May need manual cleanup")
        return
    logger.info("UNLINK_CLEAN_SUCCESS: Successfully cleaned node_modules and package-lock.json | Next: Fresh install")


def _check_remaining_links(
    name: str,
    package_manager: PackageManager,
    logger: logging.Logger | logging.LoggerAdapter,
) -> None:
    """Warn about links to packages of the same scope that are still present."""
    try:
        output = package_manager.list_links_json()
    except CommandError:
        # npm ls --link exits non-zero when there is nothing linked
        logger.debug("npm ls --link check completed (non-zero exit is expected when no links exist)")
        return

    scope = package_scope(name)
    if not scope or not output.strip():
        logger.info("UNLINK_VERIFY_CLEAN: No problematic links found | Status: clean")
        return

    try:
        data = json.loads(output)
        remaining = [dep for dep in (data.get("dependencies") or {}) if dep.startswith(scope + "/")]
    except (json.JSONDecodeError, AttributeError):
        logger.debug("Failed to parse npm ls --link --json output, using basic check")
        if scope in output:
            logger.warning(f"UNLINK_REMAINING_LINKS_BASIC: Found remaining links to scope | Scope: {scope} | Check: basic | Note: May be expected")
        else:
            logger.info("UNLINK_VERIFY_CLEAN: No problematic links found | Status: clean")
        return

    if remaining:
        logger.warning(
            f"UNLINK_REMAINING_LINKS: Found remaining links to packages in scope | Scope: {scope} | Packages: {', '.join(remaining)} | Note: May be expected if workspace packages linked"
        )
    else:
        logger.info("UNLINK_VERIFY_CLEAN: No problematic links found | Status: clean")


def _unlink_smart(
    current_dir: Path,
    *,
    dry_run: bool,
    externals: list[str],
    clean_node_modules: bool,
    package_manager: PackageManager,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> str:
    logger.info("UNLINK_SMART_MODE: Smart unlinking mode activated for current project | Mode: smart | Target: current directory")

    try:
        manifest = read_manifest(current_dir, storage)
    except ManifestNotFound:
        message = f"No package.json found in current directory: {current_dir}"
        logger.warning(f"UNLINK_NO_PACKAGE_JSON: No package.json found in current directory | Directory: {current_dir}")
        return message
    except ScopeLinkError as e:
        message = f"Failed to parse package.json: {e}"
        logger.error(f"UNLINK_PACKAGE_JSON_INVALID: {message}")
        return message

    name = manifest.get("name")
    if not name:
        message = "Failed to parse package.json: package.json has no name field"
        logger.error("UNLINK_PACKAGE_NAME_MISSING: package.json must have a name field | Field: name")
        return message

    logger.info(f"UNLINK_PACKAGE_PROCESSING: Processing package for unlinking | Package: {name}")

    if externals:
        logger.info(f"UNLINK_EXTERNAL_DEPS: Processing external dependencies | Patterns: {', '.join(externals)}")
        names = list(dict.fromkeys([*(manifest.get("dependencies") or {}), *(manifest.get("devDependencies") or {})]))
        external = [dep for dep in names if matches_pattern(dep, externals)]
        if external:
            logger.info(f"UNLINK_EXTERNAL_FOUND: Found external dependencies to unlink | Count: {len(external)} | Dependencies: {', '.join(external)}")
            for dep_name in external:
                if remove_symlink(dep_name, current_dir, dry_run=dry_run, logger=logger):
                    logger.info(f"UNLINK_EXTERNAL_SUCCESS: External dependency unlinked successfully | Dependency: {dep_name}")
                else:
                    logger.warning(f"UNLINK_EXTERNAL_FAILED: Failed to unlink external dependency | Dependency: {dep_name} | Status: failed")
        else:
            logger.info(f"UNLINK_EXTERNAL_NONE: No external dependencies found matching patterns | Patterns: {', '.join(externals)}")

    if dry_run:
        plan = _dry_run_plan(name, externals, clean_node_modules)
        logger.info(plan)
        return plan

    with run_in_directory(current_dir):
        logger.info("UNLINK_GLOBAL_REMOVING: Removing global npm link | Command: npm unlink -g")
        try:
            package_manager.unlink_global()
            logger.info("UNLINK_GLOBAL_SUCCESS: Global link removed successfully")
        except CommandError as e:
            logger.warning(f"UNLINK_GLOBAL_SKIP: Failed to remove global link | Error: {e} | Impact: OK if package wasn't linked")

        if clean_node_modules:
            _clean(current_dir, logger)
            logger.info("UNLINK_INSTALLING: Installing dependencies from registry | Command: npm install")
            try:
                package_manager.install()
            except CommandError as e:
                logger.error(f"UNLINK_INSTALL_FAILED: Failed to install dependencies | Error: {e} | Impact: Package may be in inconsistent state")
                raise ReinstallFailed(current_dir, str(e)) from e
            logger.info("UNLINK_INSTALL_SUCCESS: Dependencies installed successfully | Source: npm registry")
        else:
            logger.info("Note: Use --clean-node-modules flag to also clean and reinstall dependencies")

        logger.info("UNLINK_CHECK_REMAINING: Checking for remaining symlinks")
        _check_remaining_links(name, package_manager, logger)

    summary = f"Successfully unlinked {name}"
    logger.info(summary)
    return summary


def _unlink_explicit(
    raw_argument: str,
    roots: list[Path],
    *,
    dry_run: bool,
    package_manager: PackageManager,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> str:
    logger.info(f"UNLINK_EXPLICIT_MODE: Unlinking specific scope/package | Target: {raw_argument} | Mode: explicit")
    argument = resolve_argument(raw_argument)
    logger.debug(f"Parsed scope: {argument.scope}, package: {argument.exact_name or 'all packages in scope'}")

    records = discover_packages(roots, storage=storage, logger=logger)
    matches = find_matching_packages(records, argument)
    if not matches:
        if argument.exact_name:
            message = f"No package found matching: {argument.exact_name}"
        else:
            message = f"No packages found in scope: {argument.scope}"
        logger.warning(message)
        return message

    logger.info(f"Found {len(matches)} matching package(s)")

    for source in matches:
        logger.info(f"Processing package: {source.name}")
        consumers = consumers_of(records, source.name)
        if not consumers:
            logger.info(f"No consuming packages found for: {source.name}")
        else:
            logger.info(f"Found {len(consumers)} consuming package(s) for: {source.name}")

        for consumer in consumers:
            if dry_run:
                logger.info(f"Would run 'npm unlink {source.name}' in: {consumer.directory}")
                continue
            try:
                with run_in_directory(consumer.directory):
                    package_manager.unlink(source.name)
            except (CommandError, OSError) as e:
                logger.warning(
                    f"UNLINK_CONSUMER_FAILED: Failed to unlink consumer | Consumer: {consumer.name} | Package: {source.name} | Error: {e}"
                )
                continue
            logger.info(f"UNLINK_CONSUMER_SUCCESS: Consumer unlinked from package | Consumer: {consumer.name} | Package: {source.name}")

        if dry_run:
            logger.info(f"Would run 'npm unlink' in: {source.directory}")
            continue
        try:
            with run_in_directory(source.directory):
                package_manager.unlink()
        except (CommandError, OSError) as e:
            logger.warning(f"UNLINK_SOURCE_FAILED: Failed to unlink source package | Package: {source.name} | Error: {e}")
            continue
        logger.info(f"UNLINK_SOURCE_SUCCESS: Source package unlinked | Package: {source.name}")

    summary = f"Successfully unlinked {len(matches)} package(s): {', '.join(pkg.name for pkg in matches)}"
    logger.info(summary)
    return summary
