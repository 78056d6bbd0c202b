def _parse_scope_roots(values: list[str]) -> dict[str, str]:
    """Parse repeated ``@scope=DIR`` option values."""
    scope_roots: dict[str, str] = {}
    for value in values:
        scope, sep, directory = value.partition("=")
        if not sep or not scope.startswith("@") or not directory:
            raise ValueError(f"Expected @scope=DIR, got {value!r}")
        scope_roots[scope] = directory
    return scope_roots
