"""Updates command configuration."""

from pydantic import BaseModel, ConfigDict


class UpdatesConfig(BaseModel):
    """Settings for ``scopelink updates``."""

    model_config = ConfigDict(extra="forbid")

    scope: str | None = None
    inter_project: bool = False
