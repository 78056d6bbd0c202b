import re

_VERSION_RE = re.compile(r"^([^0-9]*)([0-9]+\.[0-9]+)(\.[0-9]+)?(.*)$")


def normalize_to_minor_version(spec: str) -> str:
    """Drop the patch component of a version specifier, keeping any prefix and suffix.

    ``^1.2.3`` -> ``^1.2``, ``>=1.2.3-beta`` -> ``>=1.2-beta``. Specifiers that do not
    contain a ``major.minor`` number are returned unchanged.
    """
    match = _VERSION_RE.match(spec)
    if not match:
        return spec
    prefix, major_minor, _patch, suffix = match.groups()
    return f"{prefix}{major_minor}{suffix}"
