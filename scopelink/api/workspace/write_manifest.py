import json
from pathlib import Path
from typing import Any

from .read_manifest import MANIFEST_NAME
from .Storage import FileStorage, Storage


def write_manifest(directory: Path, data: dict[str, Any], storage: Storage | None = None) -> Path:
    """Write ``data`` as the package.json of ``directory`` (2-space indent, trailing newline)."""
    storage = storage or FileStorage()
    path = Path(directory) / MANIFEST_NAME
    storage.write_file(path, json.dumps(data, indent=2) + "\n")
    return path
