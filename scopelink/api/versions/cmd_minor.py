"""Versions minor API command."""

from collections.abc import Iterator
from pathlib import Path

from scopelink.utils.collect_warnings import collect_warnings

from ..config.ScopeLinkConfig import ScopeLinkConfig
from ..StageResult import StageResult
from . import VersionsMinorOutput
from .normalize_minor_versions import normalize_minor_versions


def cmd_minor(dry_run: bool = False, directories: list[str] | None = None) -> StageResult:
    """Normalize same-scope dependency versions to major.minor."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.1, "Loading configuration...")
        try:
            config = ScopeLinkConfig.load()
        except ValueError as e:
            result_obj.output = VersionsMinorOutput(
                errors=[str(e)],
                directories=list(directories or []),
                packages_scanned=0,
                packages_changed=0,
                changes=[],
                dry_run=dry_run,
                summary="",
                success=False,
            ).model_dump(mode="python")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.success = False
            return

        effective_dry_run = dry_run or config.dry_run
        if directories:
            roots = [Path(d) for d in directories]
        elif config.versions.directories:
            roots = [Path(d) for d in config.versions.directories]
        else:
            roots = config.workspace.resolve_directories()

        yield (0.3, f"Scanning {len(roots)} director{'y' if len(roots) == 1 else 'ies'}...")
        with collect_warnings() as warnings:
            outcome = normalize_minor_versions(roots, dry_run=effective_dry_run)

        yield (1.0, "Complete")
        result_obj.output = VersionsMinorOutput(
            warnings=list(warnings),
            directories=[str(root) for root in roots],
            packages_scanned=outcome.packages_scanned,
            packages_changed=outcome.packages_changed,
            changes=outcome.changes,
            dry_run=effective_dry_run,
            summary=outcome.summary,
            success=True,
        ).model_dump(mode="python")
        result_obj.result = outcome.summary
        result_obj.success = True

    return StageResult(announce="Normalizing same-scope dependency versions...", progress_callback=do_work)
