"""Updates Typer app factory."""

import typer

from scopelink.api.updates.cmd_updates import cmd_updates
from scopelink.cli._handle_stage_result import _handle_stage_result


def updates() -> typer.Typer:
    """Create and configure the updates Typer app."""
    app = typer.Typer(
        name="updates",
        help="Update same-scope dependencies of the current package",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"], "allow_interspersed_args": True},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(
        scope: str | None = typer.Argument(None, help="Scope to update, e.g. @acme"),
        inter_project: bool = typer.Option(
            False, "--inter-project", help="Pin to versions of sibling packages instead of running npm-check-updates"
        ),
        dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be updated"),
    ) -> None:
        _handle_stage_result(cmd_updates)(scope=scope, inter_project=inter_project, dry_run=dry_run)

    return app
