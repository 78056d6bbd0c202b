"""Wrap API commands so CLI callbacks can call them directly."""

import functools
from collections.abc import Callable

import click

from scopelink.api.StageResult import StageResult
from scopelink.utils.display import display_context

from ._run_single_execution import _run_single_execution


def _display_format() -> str:
    """Return the ``--display`` value stored by the root callback, or ``yaml``."""
    current = click.get_current_context(silent=True)
    while current is not None:
        obj = current.obj
        if isinstance(obj, dict) and obj.get("display_format") in ("json", "yaml"):
            return obj["display_format"]
        current = current.parent
    return "yaml"


def _handle_stage_result(func: Callable[..., StageResult]) -> Callable[..., None]:
    """Wrap a command function to render its StageResult and exit with its status.

    1. Announce (stderr)
    2. Progress (stderr)
    3. Result and collected warnings (stderr)
    4. Output (stdout as YAML or JSON)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> None:
        display = display_context.get_display("cli")
        _run_single_execution(func, args, kwargs, display, _display_format())

    return wrapper
