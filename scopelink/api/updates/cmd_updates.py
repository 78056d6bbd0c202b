"""Updates API command."""

from collections.abc import Iterator

from scopelink.utils.collect_warnings import collect_warnings

from ..config.ScopeLinkConfig import ScopeLinkConfig
from ..StageResult import StageResult
from ..workspace import PackageManager, ScopeLinkError
from . import UpdatesUpdatesOutput
from .update_dependencies import update_dependencies, update_inter_project_dependencies


def cmd_updates(
    scope: str | None = None,
    inter_project: bool = False,
    dry_run: bool = False,
    package_manager: PackageManager | None = None,
) -> StageResult:
    """Update same-scope dependencies of the current package."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.1, "Loading configuration...")
        try:
            config = ScopeLinkConfig.load()
        except ValueError as e:
            result_obj.output = UpdatesUpdatesOutput(
                errors=[str(e)],
                scope=scope,
                inter_project=inter_project,
                updated=[],
                dry_run=dry_run,
                summary="",
                success=False,
            ).model_dump(mode="python")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.success = False
            return

        effective_scope = scope or config.updates.scope
        effective_inter_project = inter_project or config.updates.inter_project
        effective_dry_run = dry_run or config.dry_run

        yield (0.3, "Updating dependencies...")
        errors: list[str] = []
        updated: list[str] = []
        with collect_warnings() as warnings:
            try:
                if effective_inter_project:
                    updated = update_inter_project_dependencies(
                        effective_scope, dry_run=effective_dry_run, package_manager=package_manager
                    )
                    summary = f"Updated {len(updated)} inter-project dependencies"
                else:
                    summary = update_dependencies(effective_scope, dry_run=effective_dry_run, package_manager=package_manager)
                success = True
            except ScopeLinkError as e:
                summary = f"updates failed: {e}"
                errors.append(str(e))
                success = False

        yield (1.0, "Complete")
        result_obj.output = UpdatesUpdatesOutput(
            errors=errors,
            warnings=list(warnings),
            scope=effective_scope,
            inter_project=effective_inter_project,
            updated=updated,
            dry_run=effective_dry_run,
            summary=summary,
            success=success,
        ).model_dump(mode="python")
        result_obj.result = summary
        result_obj.success = success

    return StageResult(announce=f"Updating {scope or 'configured scope'} dependencies...", progress_callback=do_work)
