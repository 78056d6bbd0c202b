"""Versions domain: normalize same-scope dependency specifiers."""

from .._output_schemas.versions import VersionsMinorOutput
from .normalize_minor_versions import MinorVersionsResult, normalize_minor_versions
from .normalize_to_minor_version import normalize_to_minor_version

__all__ = ["MinorVersionsResult", "VersionsMinorOutput", "normalize_minor_versions", "normalize_to_minor_version"]
