"""Shared pytest configuration and fixtures for all tests."""

import json
import os
from pathlib import Path

import pytest

from scopelink.api.workspace import CommandError

# =============================================================================
# Command Helpers
# =============================================================================


def run_cmd(cmd_func, *args, **kwargs):
    """Execute a cmd function and return the result with progress_callback executed."""
    result = cmd_func(*args, **kwargs)
    list(result.progress_callback(result))
    return result


# =============================================================================
# Workspace Builders
# =============================================================================


def write_package(directory: Path, name: str | None, version: str | None = "1.0.0", **sections) -> Path:
    """Create ``directory`` with a package.json holding ``name``, ``version`` and dependency sections."""
    directory.mkdir(parents=True, exist_ok=True)
    manifest: dict = {}
    if name is not None:
        manifest["name"] = name
    if version is not None:
        manifest["version"] = version
    manifest.update(sections)
    (directory / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    return directory


def read_package(directory: Path) -> dict:
    return json.loads((directory / "package.json").read_text())


def write_config(home: Path, data: dict) -> Path:
    path = home / "config.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture(autouse=True)
def scopelink_home(tmp_path: Path, monkeypatch) -> Path:
    """Point SCOPELINK_HOME at an empty directory so no test reads the user's config."""
    home = tmp_path / ".scopelink"
    home.mkdir()
    monkeypatch.setenv("SCOPELINK_HOME", str(home))
    return home


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    return root


# =============================================================================
# Collaborator Fakes
# =============================================================================


class FakePackageManager:
    """PackageManager that records ``(command, cwd)`` for every call instead of running npm.

    ``fail(command, directory)`` makes that command raise CommandError, optionally only
    when run inside ``directory``.
    """

    def __init__(self, global_links: list[str | Path] | None = None):
        self.calls: list[tuple[str, Path]] = []
        self.global_links = [str(p) for p in (global_links or [])]
        self.links_json = ""
        self.versions: dict[str, str] = {}
        self.ncu_output = ""
        self._failures: list[tuple[str, Path | None]] = []

    def fail(self, command: str, directory: Path | None = None) -> None:
        self._failures.append((command, directory.resolve() if directory else None))

    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def commands_in(self, directory: Path) -> list[str]:
        return [command for command, cwd in self.calls if cwd == directory.resolve()]

    def _record(self, command: str) -> None:
        cwd = Path(os.getcwd()).resolve()
        self.calls.append((command, cwd))
        for failing, where in self._failures:
            if failing == command and (where is None or where == cwd):
                raise CommandError(command.split(), 1, f"simulated failure of {command}")

    def link(self, name: str | None = None) -> str:
        self._record(f"npm link {name}" if name else "npm link")
        return ""

    def unlink(self, name: str | None = None) -> str:
        self._record(f"npm unlink {name}" if name else "npm unlink")
        return ""

    def unlink_global(self) -> str:
        self._record("npm unlink -g")
        return ""

    def list_global_links(self) -> str:
        self._record("npm ls --link -g -p")
        return "\n".join(self.global_links) + "\n"

    def list_links_json(self) -> str:
        self._record("npm ls --link --json")
        return self.links_json

    def regenerate_lock(self) -> str:
        self._record("npm install --package-lock-only --no-audit --no-fund")
        return ""

    def install(self) -> str:
        self._record("npm install")
        return ""

    def view_version(self, name: str) -> str:
        self._record(f"npm view {name} version")
        return self.versions.get(name, "")

    def check_updates(self, scope: str) -> str:
        self._record(f"npx npm-check-updates /^{scope}\\// -u")
        return self.ncu_output


class MemoryStorage:
    """Storage holding files in a dict keyed by path."""

    def __init__(self, files: dict[str | Path, str] | None = None):
        self.files = {Path(k): v for k, v in (files or {}).items()}

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read_file(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError as e:
            raise FileNotFoundError(str(path)) from e

    def write_file(self, path: Path, content: str) -> None:
        self.files[Path(path)] = content


@pytest.fixture
def package_manager() -> FakePackageManager:
    return FakePackageManager()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()
