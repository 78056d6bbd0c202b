"""Link orchestrator.

Two modes:

* smart (no argument): register the current package globally and symlink every
  same-scope or pattern-matched dependency that is already registered.
* explicit (``@scope`` or ``@scope/name``): register each matching workspace
  package and run ``npm link <name>`` in each of its direct consumers.
"""

import logging
from pathlib import Path
from typing import Any

from scopelink.utils.logger import get_dry_run_logger
from scopelink.utils.normalize_path import normalize_path

from ..workspace import (
    CommandError,
    ConsumerOperationFailed,
    FileStorage,
    GlobalLinkRegistry,
    LockRegenerationFailed,
    NpmPackageManager,
    PackageManager,
    RegistrationFailed,
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
    reconcile_symlink,
    regenerate_lock,
    resolve_argument,
    run_in_directory,
    unscoped_name,
)

STATUS_ARGUMENT = "status"

# Smart-mode summaries that mean nothing could be linked.
SMART_MODE_STOPS = ("PACKAGE_JSON_NOT_FOUND:", "PACKAGE_NAME_MISSING:", "PACKAGE_SCOPE_MISSING:")


def link_packages(
    argument: str | None = None,
    *,
    cwd: Path | str | None = None,
    roots: list[Path | str] | None = None,
    dry_run: bool = False,
    externals: list[str] | None = None,
    scope_roots: dict[str, str] | None = None,
    package_manager: PackageManager | None = None,
    storage: Storage | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> str:
    """Link packages and return a summary message.

    Args:
        argument: ``@scope``, ``@scope/name``, ``"status"`` or None for smart mode
        cwd: Package directory used by smart mode (default: current directory)
        roots: Workspace roots scanned in explicit and status modes (default: ``[cwd]``)
        dry_run: Log intended actions without changing anything
        externals: Extra dependency names or prefixes linked in smart mode
        scope_roots: Scope to directory map used to register external packages in smart mode

    Raises:
        ArgumentInvalid: ``argument`` does not start with ``@``
        RegistrationFailed: A source package could not be registered (explicit mode)
        ConsumerOperationFailed: A consumer could not be relinked (explicit mode)
    """
    current_dir = normalize_path(cwd or Path.cwd())
    workspace_roots = [normalize_path(root) for root in roots] if roots else [current_dir]
    package_manager = package_manager or NpmPackageManager()
    storage = storage or FileStorage()
    logger = logger or get_dry_run_logger("link", dry_run)

    if argument == STATUS_ARGUMENT:
        return format_link_status(collect_link_status(workspace_roots, storage=storage, logger=logger))

    if len(workspace_roots) == 1:
        logger.info(f"WORKSPACE_ANALYSIS: Analyzing single workspace directory | Path: {workspace_roots[0]}")
    else:
        logger.info(
            f"WORKSPACE_ANALYSIS: Analyzing multiple workspace directories | Paths: {', '.join(str(r) for r in workspace_roots)} | Count: {len(workspace_roots)}"
        )

    registry = GlobalLinkRegistry(package_manager, storage, logger)

    if not argument:
        return _link_smart(
            current_dir,
            dry_run=dry_run,
            externals=externals or [],
            scope_roots=scope_roots or {},
            registry=registry,
            package_manager=package_manager,
            storage=storage,
            logger=logger,
        )

    return _link_explicit(
        argument,
        workspace_roots,
        dry_run=dry_run,
        registry=registry,
        package_manager=package_manager,
        storage=storage,
        logger=logger,
    )


def _compute_link_set(manifest: dict[str, Any], scope: str, externals: list[str]) -> tuple[list[str], list[str]]:
    """Same-scope and pattern-matched names from dependencies and devDependencies, in manifest order."""
    same_scope: list[str] = []
    external: list[str] = []
    for section in ("dependencies", "devDependencies"):
        for name in manifest.get(section) or {}:
            if name in same_scope or name in external:
                continue
            if package_scope(name) == scope:
                same_scope.append(name)
            elif matches_pattern(name, externals):
                external.append(name)
    return same_scope, external


def _link_smart(
    current_dir: Path,
    *,
    dry_run: bool,
    externals: list[str],
    scope_roots: dict[str, str],
    registry: GlobalLinkRegistry,
    package_manager: PackageManager,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> str:
    logger.info("LINK_SMART_MODE: Smart linking mode activated for current project | Mode: smart | Target: current directory")

    try:
        manifest = read_manifest(current_dir, storage)
    except ScopeLinkError as e:
        message = f"PACKAGE_JSON_NOT_FOUND: No valid package.json in current directory | Error: {e} | Action: Cannot proceed with smart linking"
        logger.error(message)
        return message

    name = manifest.get("name")
    if not name:
        message = "PACKAGE_NAME_MISSING: package.json must have a name field | Field: name | Action: Add name field to package.json"
        logger.error(message)
        return message

    scope = package_scope(name)
    if not scope:
        message = f"PACKAGE_SCOPE_MISSING: Package must have scoped name for smart linking | Format Required: @scope/package | Current: {name}"
        logger.warning(message)
        return message

    logger.info(f"CURRENT_PACKAGE_IDENTIFIED: Current package identified for smart linking | Package: {name} | Scope: {scope} | Path: {current_dir}")

    if dry_run:
        logger.info(f"SELF_LINK: Would link current package globally | Package: {name} | Command: npm link")
    else:
        registry.register_soft(current_dir, name)

    same_scope, external = _compute_link_set(manifest, scope, externals)
    link_set = same_scope + external

    if not link_set:
        logger.info(f"No same-scope or external dependencies found for {scope}")
        if dry_run:
            return "DRY RUN: Would self-link, no dependencies found to link"
        return f"Self-linked {name}, no dependencies to link"

    logger.info(f"Found {len(same_scope)} same-scope dependencies: {', '.join(same_scope)}")
    if external:
        logger.info(f"Found {len(external)} external dependencies matching patterns: {', '.join(external)}")

    if external and scope_roots:
        _register_scope_roots(current_dir, external, scope_roots, dry_run=dry_run, registry=registry, storage=storage, logger=logger)

    if dry_run:
        logger.info(f"Would attempt to link dependencies: {', '.join(link_set)}")
        return f"DRY RUN: Would self-link and attempt to link {len(link_set)} dependencies"

    global_links = registry.discover()

    linked: list[str] = []
    for dep_name in link_set:
        source_dir = global_links.get(dep_name)
        if source_dir is None:
            logger.debug(f"Skipping {dep_name} (not globally linked)")
            continue
        if reconcile_symlink(dep_name, source_dir, current_dir, logger=logger):
            logger.info(f"LINK_DEPENDENCY_SUCCESS: Linked dependency successfully | Dependency: {dep_name} | Status: symlink-created")
            linked.append(dep_name)
        else:
            logger.warning(f"LINK_DEPENDENCY_FAILED: Failed to link dependency | Dependency: {dep_name} | Status: failed")

    try:
        regenerate_lock(current_dir, package_manager)
        logger.info("LINK_LOCK_REGENERATED: Regenerated package-lock.json successfully | File: package-lock.json")
    except LockRegenerationFailed as e:
        logger.warning(f"LINK_LOCK_REGEN_FAILED: Failed to regenerate package-lock.json | Error: {e.reason} | Impact: Lock file may be out of sync")

    if linked:
        summary = f"Self-linked {name} and linked {len(linked)} dependencies: {', '.join(linked)}"
    else:
        summary = f"Self-linked {name}, no dependencies were available to link"
    logger.info(summary)
    return summary


def _register_scope_roots(
    current_dir: Path,
    external: list[str],
    scope_roots: dict[str, str],
    *,
    dry_run: bool,
    registry: GlobalLinkRegistry,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> None:
    """Register external packages found under their scope's configured root directory."""
    registered: list[str] = []
    for dep_name in external:
        dep_scope = package_scope(dep_name)
        scope_root = scope_roots.get(dep_scope) if dep_scope else None
        if scope_root is None:
            logger.debug(f"No scope root configured for {dep_scope}")
            continue

        root = Path(scope_root).expanduser()
        if not root.is_absolute():
            root = current_dir / root
        package_dir = normalize_path(root.resolve()) / unscoped_name(dep_name)
        logger.debug(f"Checking for package at: {package_dir}")

        try:
            manifest = read_manifest(package_dir, storage)
        except ScopeLinkError as e:
            logger.debug(f"Package not found or invalid: {package_dir} - {e}")
            continue
        if manifest.get("name") != dep_name:
            logger.debug(f"Package name mismatch: expected {dep_name}, found {manifest.get('name')}")
            continue

        logger.info(f"Found matching package: {dep_name} at {package_dir}")
        if dry_run:
            logger.info(f"Would run 'npm link' in: {package_dir}")
            registered.append(dep_name)
        elif registry.register_soft(package_dir, dep_name):
            registered.append(dep_name)

    if registered:
        logger.info(f"Prepared {len(registered)} packages via scope roots: {', '.join(registered)}")


def _link_explicit(
    raw_argument: str,
    roots: list[Path],
    *,
    dry_run: bool,
    registry: GlobalLinkRegistry,
    package_manager: PackageManager,
    storage: Storage,
    logger: logging.Logger | logging.LoggerAdapter,
) -> str:
    logger.info(f"LINK_SCOPE_MODE: Linking scope or specific package | Target: {raw_argument} | Mode: scope-based")
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

    touched: dict[Path, None] = {}
    for source in matches:
        logger.info(f"Processing package: {source.name}")
        if dry_run:
            logger.info(f"Would run 'npm link' in: {source.directory}")
        else:
            try:
                registry.register(source.directory, source.name)
            except RegistrationFailed:
                logger.error(f"LINK_SOURCE_PACKAGE_FAILED: Failed to link source package | Package: {source.name}")
                raise
        touched[source.directory] = None

        consumers = consumers_of(records, source.name)
        if not consumers:
            logger.info(f"No consuming packages found for: {source.name}")
            continue
        logger.info(f"Found {len(consumers)} consuming package(s) for: {source.name}")

        for consumer in consumers:
            touched[consumer.directory] = None
            if dry_run:
                logger.info(f"Would run 'npm link {source.name}' in: {consumer.directory}")
                continue
            with run_in_directory(consumer.directory):
                try:
                    package_manager.link(source.name)
                except CommandError as e:
                    logger.error(
                        f"LINK_CONSUMER_FAILED: Failed to link package in consumer | Package: {source.name} | Consumer: {consumer.name} | Error: {e}"
                    )
                    raise ConsumerOperationFailed("link", source.name, consumer.name, str(e)) from e
            logger.info(f"LINK_CONSUMER_SUCCESS: Consumer linked to package | Consumer: {consumer.name} | Package: {source.name} | Status: linked")

    if dry_run:
        logger.info("Would run 'npm install --package-lock-only --no-audit --no-fund' in all touched packages")
    else:
        logger.info("LINK_LOCK_REGENERATING_ALL: Regenerating package-lock.json files in all packages | Mode: lockfile-only")
        for directory in touched:
            try:
                regenerate_lock(directory, package_manager)
                logger.debug(f"LINK_LOCK_PACKAGE_REGENERATED: Regenerated package-lock.json | Path: {directory}")
            except LockRegenerationFailed as e:
                logger.warning(f"LINK_LOCK_PACKAGE_REGEN_FAILED: Failed to regenerate package-lock.json | Path: {directory} | Error: {e.reason}")
        logger.info(f"LINK_LOCK_ALL_REGENERATED: Regenerated package-lock.json files | Package Count: {len(touched)}")

    summary = f"Successfully linked {len(matches)} package(s): {', '.join(pkg.name for pkg in matches)}"
    logger.info(summary)
    return summary
