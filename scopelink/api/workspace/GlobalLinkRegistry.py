"""Packages registered in npm's global link area."""

import logging
from pathlib import Path

from scopelink.utils.logger import get_logger

from .errors import CommandError, RegistrationFailed, RegistryUnavailable, ScopeLinkError
from .NpmPackageManager import NpmPackageManager
from .PackageManager import PackageManager
from .read_manifest import read_manifest
from .run_in_directory import run_in_directory
from .Storage import FileStorage, Storage


class GlobalLinkRegistry:
    """Query and populate the global link registry.

    The registry is rebuilt from the package manager on every query; nothing is cached
    between invocations.
    """

    def __init__(
        self,
        package_manager: PackageManager | None = None,
        storage: Storage | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.package_manager = package_manager or NpmPackageManager()
        self.storage = storage or FileStorage()
        self.logger = logger or get_logger("registry")

    def query(self) -> dict[str, str]:
        """Map package name to source directory for every globally linked package.

        Raises:
            RegistryUnavailable: The listing command failed
        """
        try:
            output = self.package_manager.list_global_links()
        except CommandError as e:
            raise RegistryUnavailable(f"Unable to list globally linked packages: {e}") from e

        links: dict[str, str] = {}
        for line in output.splitlines():
            directory = line.strip()
            if not directory:
                continue
            try:
                manifest = read_manifest(Path(directory), self.storage)
            except ScopeLinkError as e:
                self.logger.debug(f"Could not read package.json from {directory}: {e}")
                continue
            name = manifest.get("name")
            if not name:
                self.logger.debug(f"Skipping globally linked directory without a package name: {directory}")
                continue
            links[name] = directory

        self.logger.debug(f"Found {len(links)} globally linked package(s)")
        return links

    def discover(self) -> dict[str, str]:
        """Like :meth:`query`, but an unavailable registry yields an empty map."""
        try:
            return self.query()
        except RegistryUnavailable as e:
            self.logger.warning(f"GLOBAL_LINKS_UNAVAILABLE: Failed to get globally linked packages (continuing anyway) | Error: {e}")
            return {}

    def register(self, directory: Path | str, name: str) -> None:
        """Run ``npm link`` inside ``directory``.

        Raises:
            RegistrationFailed: The package manager refused to register the package
        """
        with run_in_directory(directory):
            try:
                self.package_manager.link()
            except CommandError as e:
                raise RegistrationFailed(name, Path(directory), str(e)) from e
        self.logger.info(f"LINK_SOURCE_SUCCESS: Source package linked globally | Package: {name} | Status: linked")

    def register_soft(self, directory: Path | str, name: str) -> bool:
        """Register like :meth:`register`, logging a failure instead of raising."""
        try:
            self.register(directory, name)
        except RegistrationFailed as e:
            self.logger.warning(f"LINK_SOURCE_FAILED: Failed to link source package | Package: {name} | Error: {e.reason}")
            return False
        return True
