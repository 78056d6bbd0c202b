"""Output schemas for updates commands."""

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class UpdatesUpdatesOutput(BaseOutputSchema):
    """Output schema for updates command."""
    scope: str | None = Field(..., description="Scope whose dependencies were updated")
    inter_project: bool = Field(..., description="Whether versions came from sibling packages")
    updated: list[str] = Field(..., description="One entry per rewritten dependency")
    dry_run: bool = Field(..., description="Whether no changes were made")
    summary: str = Field(..., description="Human-readable summary")
    success: bool = Field(..., description="Whether the update completed")


register_output_schema("updates", "updates", UpdatesUpdatesOutput)
