"""Errors raised by the workspace link engine.

Every error is a :class:`ScopeLinkError` so commands can catch the whole family
in one place and report the message to the user.
"""

from pathlib import Path


class ScopeLinkError(Exception):
    """Base class for scopelink failures."""


class ManifestNotFound(ScopeLinkError):
    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"No package.json found at {self.path}")


class ManifestInvalid(ScopeLinkError):
    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid package.json at {self.path}: {reason}")


class ArgumentInvalid(ScopeLinkError):
    """Package or scope argument that does not start with ``@``."""


class RegistryUnavailable(ScopeLinkError):
    """The global link listing could not be queried."""


class RegistrationFailed(ScopeLinkError):
    def __init__(self, name: str, directory: Path, reason: str):
        self.name = name
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f"Failed to link source package {name}: {reason}")


class ConsumerOperationFailed(ScopeLinkError):
    def __init__(self, operation: str, package: str, consumer: str, reason: str):
        self.operation = operation
        self.package = package
        self.consumer = consumer
        self.reason = reason
        super().__init__(f"Failed to {operation} {package} in consumer {consumer}: {reason}")


class LockRegenerationFailed(ScopeLinkError):
    def __init__(self, directory: Path, reason: str):
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f"Failed to regenerate package-lock.json in {self.directory}: {reason}")


class ReinstallFailed(ScopeLinkError):
    def __init__(self, directory: Path, reason: str):
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f"Failed to install dependencies in {self.directory}: {reason}")


class UpdateFailed(ScopeLinkError):
    """Dependencies were rewritten but could not be installed."""


class CommandError(ScopeLinkError):
    """A package-manager command exited unsuccessfully."""

    def __init__(self, command: list[str], returncode: int, stderr: str):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"Command '{' '.join(self.command)}' failed: {detail}")
