"""Output schemas for versions commands."""

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class VersionsMinorOutput(BaseOutputSchema):
    """Output schema for versions minor command."""
    directories: list[str] = Field(..., description="Directories that were scanned")
    packages_scanned: int = Field(..., description="Number of scoped packages processed")
    packages_changed: int = Field(..., description="Number of packages with normalized dependencies")
    changes: list[str] = Field(..., description="One entry per rewritten dependency specifier")
    dry_run: bool = Field(..., description="Whether manifests were left untouched")
    summary: str = Field(..., description="Human-readable summary")
    success: bool = Field(..., description="Whether normalization completed")


register_output_schema("versions", "minor", VersionsMinorOutput)
