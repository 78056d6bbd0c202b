"""Package-manager capability used by the link engine.

Every method runs in the current working directory; callers wrap calls in
:func:`run_in_directory` and catch :class:`CommandError`.
"""

from typing import Protocol


class PackageManager(Protocol):
    def link(self, name: str | None = None) -> str:
        """Register the current package globally, or link ``name`` into it."""
        ...

    def unlink(self, name: str | None = None) -> str: ...

    def unlink_global(self) -> str: ...

    def list_global_links(self) -> str:
        """Return globally linked package directories, one absolute path per line."""
        ...

    def list_links_json(self) -> str: ...

    def regenerate_lock(self) -> str: ...

    def install(self) -> str: ...

    def view_version(self, name: str) -> str: ...

    def check_updates(self, scope: str) -> str: ...
