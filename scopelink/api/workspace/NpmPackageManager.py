from .run_command import run_command


class NpmPackageManager:
    """PackageManager that shells out to npm."""

    def __init__(self, executable: str = "npm"):
        self.executable = executable

    def _npm(self, *args: str) -> str:
        return run_command([self.executable, *args])

    def link(self, name: str | None = None) -> str:
        return self._npm("link", name) if name else self._npm("link")

    def unlink(self, name: str | None = None) -> str:
        return self._npm("unlink", name) if name else self._npm("unlink")

    def unlink_global(self) -> str:
        return self._npm("unlink", "-g")

    def list_global_links(self) -> str:
        return self._npm("ls", "--link", "-g", "-p")

    def list_links_json(self) -> str:
        return self._npm("ls", "--link", "--json")

    def regenerate_lock(self) -> str:
        return self._npm("install", "--package-lock-only", "--no-audit", "--no-fund")

    def install(self) -> str:
        return self._npm("install")

    def view_version(self, name: str) -> str:
        return self._npm("view", name, "version").strip()

    def check_updates(self, scope: str) -> str:
        # The filter regex is a single argv entry, no shell quoting
        return run_command(["npx", "npm-check-updates", f"/^{scope}\\//", "-u"])
