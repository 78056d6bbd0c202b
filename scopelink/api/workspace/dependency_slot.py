from pathlib import Path


def dependency_slot(consumer_dir: Path, dependency_name: str) -> Path:
    """Path under ``consumer_dir/node_modules`` where ``dependency_name`` is installed.

    Scoped names nest one level deeper: ``node_modules/@scope/name``.
    """
    node_modules = Path(consumer_dir) / "node_modules"
    if dependency_name.startswith("@") and "/" in dependency_name:
        scope, name = dependency_name.split("/", 1)
        return node_modules / scope / name
    return node_modules / dependency_name
