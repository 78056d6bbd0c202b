"""Config Typer app factory."""

import typer

from scopelink.api.config.cmd_show import cmd_show
from scopelink.cli._handle_stage_result import _handle_stage_result


def config() -> typer.Typer:
    """Create and configure the config Typer app."""
    app = typer.Typer(
        name="config",
        help="Show configuration",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(
        section: str = typer.Argument("", help="Configuration section name (omit to list sections)"),
    ) -> None:
        """Show configuration for a section, or list all sections."""
        _handle_stage_result(cmd_show)(section)

    return app
