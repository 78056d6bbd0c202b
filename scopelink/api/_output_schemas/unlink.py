"""Output schemas for unlink commands."""

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class UnlinkUnlinkOutput(BaseOutputSchema):
    """Output schema for unlink command."""
    mode: str = Field(..., description="Unlinking mode: smart or explicit")
    argument: str | None = Field(..., description="Scope or package argument, None in smart mode")
    dry_run: bool = Field(..., description="Whether no changes were made")
    clean_node_modules: bool = Field(..., description="Whether node_modules was removed and reinstalled")
    summary: str = Field(..., description="Human-readable summary of the operation")
    success: bool = Field(..., description="Whether unlinking completed without a fatal error")


register_output_schema("unlink", "unlink", UnlinkUnlinkOutput)
