"""Create the main Typer CLI app."""

import typer

from scopelink.cli.config import config
from scopelink.cli.link import link
from scopelink.cli.unlink import unlink
from scopelink.cli.updates import updates
from scopelink.cli.versions import versions
from scopelink.utils.logger import configure_logging


def _create_app() -> typer.Typer:
    """Create and configure the main CLI Typer app."""
    app = typer.Typer(
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        help="Link and unlink scoped npm packages across local workspaces",
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    # Register all domain apps (call factory functions)
    app.add_typer(link(), name="link")
    app.add_typer(unlink(), name="unlink")
    app.add_typer(versions(), name="versions")
    app.add_typer(updates(), name="updates")
    app.add_typer(config(), name="config")

    @app.callback(invoke_without_command=True)
    def main_callback(
        ctx: typer.Context,
        display: str = typer.Option("yaml", "--display", "-d", help="Output format: json or yaml"),
        verbose: bool = typer.Option(False, "--verbose", help="Show debug logging on stderr"),
    ) -> None:
        # Validate display format
        if display not in ("json", "yaml"):
            typer.echo(f"Error: --display must be 'json' or 'yaml', got '{display}'", err=True)
            raise typer.Exit(1)

        configure_logging(verbose=verbose)

        # Store display format in context for use by commands
        ctx.ensure_object(dict)
        if ctx.obj is None:
            ctx.obj = {}
        ctx.obj["display_format"] = display

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    return app
