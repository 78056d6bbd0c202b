"""Output schemas for config commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class ConfigShowOutput(BaseOutputSchema):
    """Output schema for config show command."""
    section: str = Field(..., description="Requested section, empty string when listing sections")
    content: dict[str, Any] = Field(..., description="Section content or list of section names")
    config_path: str = Field(..., description="Path of the configuration file")
    success: bool = Field(..., description="Whether the section was found")


register_output_schema("config", "show", ConfigShowOutput)
