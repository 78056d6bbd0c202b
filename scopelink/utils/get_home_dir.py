"""Utility to discover the scopelink home directory."""

import os
from pathlib import Path

from .normalize_path import normalize_path


def get_home_dir() -> Path:
    """Get scopelink home directory based on SCOPELINK_HOME or default to ~/.scopelink."""
    home_env = os.environ.get("SCOPELINK_HOME")
    if home_env:
        return normalize_path(home_env)
    return Path.home() / ".scopelink"
