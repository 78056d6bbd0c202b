"""Workspace link engine shared by the link and unlink commands."""

from .classify_slot import classify_slot
from .collect_link_status import collect_link_status
from .dependency_slot import dependency_slot
from .discover_packages import discover_packages
from .errors import (
    ArgumentInvalid,
    CommandError,
    ConsumerOperationFailed,
    LockRegenerationFailed,
    ManifestInvalid,
    ManifestNotFound,
    RegistrationFailed,
    RegistryUnavailable,
    ReinstallFailed,
    ScopeLinkError,
    UpdateFailed,
)
from .find_consumers import consumers_of, find_consumers
from .find_linked_dependencies import find_linked_dependencies
from .find_matching_packages import find_matching_packages
from .format_link_status import format_link_status
from .GlobalLinkRegistry import GlobalLinkRegistry
from .LinkArgument import LinkArgument
from .LinkRecord import LinkRecord
from .matches_pattern import matches_pattern
from .NpmPackageManager import NpmPackageManager
from .package_scope import package_scope, unscoped_name
from .PackageLinkStatus import PackageLinkStatus
from .PackageManager import PackageManager
from .PackageRecord import PackageRecord
from .read_manifest import DEPENDENCY_SECTIONS, MANIFEST_NAME, read_manifest
from .reconcile_symlink import reconcile_symlink
from .regenerate_lock import regenerate_lock
from .remove_symlink import remove_symlink
from .resolve_argument import resolve_argument
from .run_command import run_command
from .run_in_directory import run_in_directory
from .Storage import FileStorage, Storage
from .SymlinkState import SymlinkState
from .write_manifest import write_manifest

__all__ = [
    "DEPENDENCY_SECTIONS",
    "MANIFEST_NAME",
    "ArgumentInvalid",
    "CommandError",
    "ConsumerOperationFailed",
    "FileStorage",
    "GlobalLinkRegistry",
    "LinkArgument",
    "LinkRecord",
    "LockRegenerationFailed",
    "ManifestInvalid",
    "ManifestNotFound",
    "NpmPackageManager",
    "PackageLinkStatus",
    "PackageManager",
    "PackageRecord",
    "RegistrationFailed",
    "RegistryUnavailable",
    "ReinstallFailed",
    "ScopeLinkError",
    "Storage",
    "SymlinkState",
    "UpdateFailed",
    "classify_slot",
    "collect_link_status",
    "consumers_of",
    "dependency_slot",
    "discover_packages",
    "find_consumers",
    "find_linked_dependencies",
    "find_matching_packages",
    "format_link_status",
    "matches_pattern",
    "package_scope",
    "read_manifest",
    "reconcile_symlink",
    "regenerate_lock",
    "remove_symlink",
    "resolve_argument",
    "run_command",
    "run_in_directory",
    "unscoped_name",
    "write_manifest",
]
