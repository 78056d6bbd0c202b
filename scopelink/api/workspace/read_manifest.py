"""Read and validate a package.json manifest."""

import json
from pathlib import Path
from typing import Any

from .errors import ManifestInvalid, ManifestNotFound
from .Storage import FileStorage, Storage

MANIFEST_NAME = "package.json"

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies")


def read_manifest(directory: Path, storage: Storage | None = None) -> dict[str, Any]:
    """Return the parsed manifest of the package in ``directory``.

    Raises:
        ManifestNotFound: There is no package.json in ``directory``
        ManifestInvalid: The file is not JSON or does not have the shape of a manifest
    """
    storage = storage or FileStorage()
    path = Path(directory) / MANIFEST_NAME
    if not storage.exists(path):
        raise ManifestNotFound(path)

    try:
        data = json.loads(storage.read_file(path))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ManifestInvalid(path, str(e)) from e

    validate_manifest(data, path)
    return data


def validate_manifest(data: Any, path: Path) -> None:
    if not isinstance(data, dict):
        raise ManifestInvalid(path, "top-level value must be an object")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ManifestInvalid(path, "'name' must be a string")

    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if deps is None:
            continue
        if not isinstance(deps, dict):
            raise ManifestInvalid(path, f"'{section}' must be an object")
        for dep_name, spec in deps.items():
            if not isinstance(spec, str):
                raise ManifestInvalid(path, f"'{section}.{dep_name}' must be a version string")
