"""Test utilities."""

import importlib
import re
from pathlib import Path


def _snake_to_pascal(snake_str: str) -> str:
    """Convert snake_case to PascalCase."""
    return "".join(word.capitalize() for word in snake_str.split("_"))


def verify_domain_init(domain_name: str) -> None:
    """Check that ``scopelink.api.<domain>`` exports an output schema for each ``cmd_*`` module.

    ``cmd_status`` in the ``link`` domain must be exported as ``LinkStatusOutput``.
    """
    domain_dir = Path(__file__).resolve().parents[2] / "scopelink" / "api" / domain_name
    if not domain_dir.exists():
        raise FileNotFoundError(f"Domain {domain_name} does not exist")

    domain_pascal = _snake_to_pascal(domain_name)
    expected_outputs = set()
    for cmd_file in sorted(domain_dir.glob("cmd_*.py")):
        match = re.match(r"cmd_(.+)\.py$", cmd_file.name)
        if match:
            expected_outputs.add(f"{domain_pascal}{_snake_to_pascal(match.group(1))}Output")

    module = importlib.import_module(f"scopelink.api.{domain_name}")
    actual_exports = set(getattr(module, "__all__", ()))

    missing = expected_outputs - actual_exports
    if missing:
        raise AssertionError(
            f"scopelink/api/{domain_name}/__init__.py is missing expected exports: {missing}. "
            f"Found exports: {sorted(actual_exports)}."
        )
