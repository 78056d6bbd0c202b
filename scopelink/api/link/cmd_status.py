"""Link status API command."""

from collections.abc import Iterator
from pathlib import Path

from scopelink.utils.collect_warnings import collect_warnings

from ..config.ScopeLinkConfig import ScopeLinkConfig
from ..StageResult import StageResult
from ..workspace import collect_link_status, format_link_status
from . import LinkStatusOutput


def cmd_status(directories: list[str] | None = None) -> StageResult:
    """Report symlinked dependencies of every package in the workspace."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.1, "Loading configuration...")
        try:
            config = ScopeLinkConfig.load()
        except ValueError as e:
            result_obj.output = LinkStatusOutput(
                errors=[str(e)],
                directories=list(directories or []),
                packages=[],
                package_count=0,
                report="",
                success=False,
            ).model_dump(mode="python")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.success = False
            return

        roots = [Path(d) for d in directories] if directories else config.workspace.resolve_directories()

        yield (0.4, "Scanning workspace for symlinked dependencies...")
        with collect_warnings() as warnings:
            statuses = collect_link_status(roots)

        yield (1.0, "Complete")
        report = format_link_status(statuses)
        result_obj.output = LinkStatusOutput(
            warnings=list(warnings),
            directories=[str(root) for root in roots],
            packages=[status.to_dict() for status in statuses],
            package_count=len(statuses),
            report=report,
            success=True,
        ).model_dump(mode="python")
        result_obj.result = f"Found {len(statuses)} package(s) with linked dependencies" if statuses else report
        result_obj.success = True

    return StageResult(announce="Checking link status...", progress_callback=do_work)
