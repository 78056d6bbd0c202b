"""Link command configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkConfig(BaseModel):
    """Settings for ``scopelink link``."""

    model_config = ConfigDict(extra="forbid")

    dry_run: bool = False
    externals: list[str] = Field(
        default_factory=list,
        description="Dependency names or prefixes linked in addition to same-scope dependencies",
    )
    scope_roots: dict[str, str] = Field(
        default_factory=dict,
        description="Scope -> directory holding that scope's packages, relative to the current package",
    )
    package_argument: str | None = None

    @field_validator("scope_roots")
    @classmethod
    def _validate_scope_roots(cls, v: dict[str, str]) -> dict[str, str]:
        for scope in v:
            if not scope.startswith("@") or "/" in scope:
                raise ValueError(f"scope_roots keys must look like '@scope', got {scope!r}")
        return v
