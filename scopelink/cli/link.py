"""Link Typer app factory."""

import typer

from scopelink.api.link.cmd_link import cmd_link
from scopelink.api.link.cmd_status import cmd_status
from scopelink.cli._handle_stage_result import _handle_stage_result
from scopelink.cli._parse_scope_roots import _parse_scope_roots

LINK_HELP = """Link local packages in place of registry versions.

Without an argument, registers the current package with npm link and symlinks its
same-scope dependencies (plus --external matches) that are already registered.

With @scope or @scope/name, registers every matching workspace package and runs
'npm link <name>' in each package that depends on it directly. Packages that only
depend on it through another package are not relinked.

Use 'status' to list symlinked dependencies across the workspace.
"""


def link() -> typer.Typer:
    """Create and configure the link Typer app."""
    app = typer.Typer(
        name="link",
        help=LINK_HELP,
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"], "allow_interspersed_args": True},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(
        package: str | None = typer.Argument(None, help="@scope, @scope/name or 'status'"),
        dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done without changing anything"),
        directory: list[str] | None = typer.Option(None, "--directory", "-D", help="Workspace root to scan (repeatable)"),
        external: list[str] | None = typer.Option(None, "--external", help="Extra dependency name or prefix to link (repeatable)"),
        scope_root: list[str] | None = typer.Option(None, "--scope-root", help="Directory holding a scope's packages, as @scope=DIR"),
    ) -> None:
        if package == "status":
            _handle_stage_result(cmd_status)(directories=directory or None)
            return
        try:
            scope_roots = _parse_scope_roots(scope_root or [])
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--scope-root") from e
        _handle_stage_result(cmd_link)(
            package_argument=package,
            dry_run=dry_run,
            directories=directory or None,
            externals=external or None,
            scope_roots=scope_roots,
        )

    return app
