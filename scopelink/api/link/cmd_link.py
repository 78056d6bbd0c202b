"""Link API command."""

from collections.abc import Iterator
from pathlib import Path

from scopelink.utils.collect_warnings import collect_warnings

from ..config.ScopeLinkConfig import ScopeLinkConfig
from ..StageResult import StageResult
from ..workspace import PackageManager, ScopeLinkError
from . import LinkLinkOutput
from .link_packages import SMART_MODE_STOPS, link_packages


def cmd_link(
    package_argument: str | None = None,
    dry_run: bool = False,
    directories: list[str] | None = None,
    externals: list[str] | None = None,
    scope_roots: dict[str, str] | None = None,
    package_manager: PackageManager | None = None,
) -> StageResult:
    """Link the current package's scope dependencies, or a scope/package across the workspace.

    Command-line values take precedence over the configuration file.
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.1, "Loading configuration...")
        try:
            config = ScopeLinkConfig.load()
        except ValueError as e:
            result_obj.output = LinkLinkOutput(
                errors=[str(e)],
                mode="smart" if not package_argument else "explicit",
                argument=package_argument,
                dry_run=dry_run,
                summary="",
                success=False,
            ).model_dump(mode="python")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.success = False
            return

        argument = package_argument or config.link.package_argument
        effective_dry_run = dry_run or config.is_link_dry_run()
        roots = [Path(d) for d in directories] if directories else config.workspace.resolve_directories()
        patterns = list(externals) if externals else list(config.link.externals)
        roots_by_scope = {**config.link.scope_roots, **(scope_roots or {})}
        mode = "explicit" if argument else "smart"

        yield (0.3, f"Linking ({mode} mode)...")
        errors: list[str] = []
        with collect_warnings() as warnings:
            try:
                summary = link_packages(
                    argument,
                    roots=roots,
                    dry_run=effective_dry_run,
                    externals=patterns,
                    scope_roots=roots_by_scope,
                    package_manager=package_manager,
                )
                success = not (mode == "smart" and summary.startswith(SMART_MODE_STOPS))
                if not success:
                    errors.append(summary)
            except ScopeLinkError as e:
                summary = f"link failed: {e}"
                errors.append(str(e))
                success = False

        yield (1.0, "Complete")
        result_obj.output = LinkLinkOutput(
            errors=errors,
            warnings=list(warnings),
            mode=mode,
            argument=argument,
            dry_run=effective_dry_run,
            summary=summary,
            success=success,
        ).model_dump(mode="python")
        result_obj.result = summary
        result_obj.success = success

    target = package_argument or "current package"
    return StageResult(announce=f"Linking {target}...", progress_callback=do_work)
