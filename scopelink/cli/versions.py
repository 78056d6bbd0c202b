"""Versions Typer app factory."""

import typer

from scopelink.api.versions.cmd_minor import cmd_minor
from scopelink.cli._handle_stage_result import _handle_stage_result


def versions() -> typer.Typer:
    """Create and configure the versions Typer app."""
    app = typer.Typer(
        name="versions",
        help="Normalize dependency versions across the workspace",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(ctx: typer.Context) -> None:
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help(), err=True)
            raise typer.Exit()

    @app.command(name="minor")
    def minor_cmd(
        dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without writing package.json files"),
        directory: list[str] | None = typer.Option(None, "--directory", "-D", help="Directory to scan (repeatable)"),
    ) -> None:
        """Rewrite same-scope dependency versions to major.minor (^1.2.3 -> ^1.2)."""
        _handle_stage_result(cmd_minor)(dry_run=dry_run, directories=directory or None)

    return app
