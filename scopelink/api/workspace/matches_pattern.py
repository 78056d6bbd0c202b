def matches_pattern(dependency_name: str, patterns: list[str]) -> bool:
    """True when ``dependency_name`` equals or starts with one of ``patterns``."""
    return any(dependency_name == pattern or dependency_name.startswith(pattern) for pattern in patterns)
