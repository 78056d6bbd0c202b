def package_scope(name: str) -> str | None:
    """Return the ``@scope`` part of a package name, or None for unscoped names."""
    if not name.startswith("@") or "/" not in name:
        return None
    return name.split("/", 1)[0]


def unscoped_name(name: str) -> str:
    """Return the package name without its scope (``@acme/widgets`` -> ``widgets``)."""
    return name.split("/", 1)[1] if package_scope(name) else name
