"""Output schemas for link commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class LinkLinkOutput(BaseOutputSchema):
    """Output schema for link command."""
    mode: str = Field(..., description="Linking mode: smart or explicit")
    argument: str | None = Field(..., description="Scope or package argument, None in smart mode")
    dry_run: bool = Field(..., description="Whether no changes were made")
    summary: str = Field(..., description="Human-readable summary of the operation")
    success: bool = Field(..., description="Whether linking completed without a fatal error")


class LinkStatusOutput(BaseOutputSchema):
    """Output schema for link status command."""
    directories: list[str] = Field(..., description="Workspace roots that were inspected")
    packages: list[dict[str, Any]] = Field(..., description="Packages with at least one symlinked dependency")
    package_count: int = Field(..., description="Number of packages with linked dependencies")
    report: str = Field(..., description="Rendered status report")
    success: bool = Field(..., description="Whether the status scan completed")


register_output_schema("link", "link", LinkLinkOutput)
register_output_schema("link", "status", LinkStatusOutput)
