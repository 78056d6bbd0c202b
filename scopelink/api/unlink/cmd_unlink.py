"""Unlink API command."""

from collections.abc import Iterator
from pathlib import Path

from scopelink.utils.collect_warnings import collect_warnings

from ..config.ScopeLinkConfig import ScopeLinkConfig
from ..StageResult import StageResult
from ..workspace import PackageManager, ScopeLinkError
from . import UnlinkUnlinkOutput
from .unlink_packages import SMART_MODE_STOPS, unlink_packages


def cmd_unlink(
    package_argument: str | None = None,
    dry_run: bool = False,
    directories: list[str] | None = None,
    externals: list[str] | None = None,
    clean_node_modules: bool = False,
    package_manager: PackageManager | None = None,
) -> StageResult:
    """Unlink the current package, or a scope/package across the workspace."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.1, "Loading configuration...")
        try:
            config = ScopeLinkConfig.load()
        except ValueError as e:
            result_obj.output = UnlinkUnlinkOutput(
                errors=[str(e)],
                mode="smart" if not package_argument else "explicit",
                argument=package_argument,
                dry_run=dry_run,
                clean_node_modules=clean_node_modules,
                summary="",
                success=False,
            ).model_dump(mode="python")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.success = False
            return

        argument = package_argument or config.unlink.package_argument
        effective_dry_run = dry_run or config.is_unlink_dry_run()
        clean = clean_node_modules or config.unlink.clean_node_modules
        roots = [Path(d) for d in directories] if directories else config.workspace.resolve_directories()
        patterns = list(externals) if externals else list(config.unlink.externals)
        mode = "explicit" if argument else "smart"

        yield (0.3, f"Unlinking ({mode} mode)...")
        errors: list[str] = []
        with collect_warnings() as warnings:
            try:
                summary = unlink_packages(
                    argument,
                    roots=roots,
                    dry_run=effective_dry_run,
                    externals=patterns,
                    clean_node_modules=clean,
                    package_manager=package_manager,
                )
                success = not (mode == "smart" and summary.startswith(SMART_MODE_STOPS))
                if not success:
                    errors.append(summary)
            except ScopeLinkError as e:
                summary = f"unlink failed: {e}"
                errors.append(str(e))
                success = False

        yield (1.0, "Complete")
        result_obj.output = UnlinkUnlinkOutput(
            errors=errors,
            warnings=list(warnings),
            mode=mode,
            argument=argument,
            dry_run=effective_dry_run,
            clean_node_modules=clean,
            summary=summary,
            success=success,
        ).model_dump(mode="python")
        result_obj.result = summary
        result_obj.success = success

    target = package_argument or "current package"
    return StageResult(announce=f"Unlinking {target}...", progress_callback=do_work)
