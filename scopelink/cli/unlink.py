"""Unlink Typer app factory."""

import typer

from scopelink.api.link.cmd_status import cmd_status
from scopelink.api.unlink.cmd_unlink import cmd_unlink
from scopelink.cli._handle_stage_result import _handle_stage_result

UNLINK_HELP = """Restore registry versions of linked packages.

Without an argument, removes the current package's global link (and symlinks
matching --external), optionally cleaning node_modules and reinstalling.

With @scope or @scope/name, runs 'npm unlink <name>' in each package that depends
on a match directly, then 'npm unlink' in the match itself. Failures in individual
consumers are reported as warnings. Indirect dependents are not touched.

Use 'status' to list symlinked dependencies across the workspace.
"""


def unlink() -> typer.Typer:
    """Create and configure the unlink Typer app."""
    app = typer.Typer(
        name="unlink",
        help=UNLINK_HELP,
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"], "allow_interspersed_args": True},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(
        package: str | None = typer.Argument(None, help="@scope, @scope/name or 'status'"),
        dry_run: bool = typer.Option(False, "--dry-run", help="Show the unlink plan without running it"),
        directory: list[str] | None = typer.Option(None, "--directory", "-D", help="Workspace root to scan (repeatable)"),
        external: list[str] | None = typer.Option(None, "--external", help="Dependency name or prefix whose symlink is removed (repeatable)"),
        clean_node_modules: bool = typer.Option(
            False, "--clean-node-modules", help="Remove node_modules and package-lock.json, then run npm install"
        ),
    ) -> None:
        if package == "status":
            _handle_stage_result(cmd_status)(directories=directory or None)
            return
        _handle_stage_result(cmd_unlink)(
            package_argument=package,
            dry_run=dry_run,
            directories=directory or None,
            externals=external or None,
            clean_node_modules=clean_node_modules,
        )

    return app
