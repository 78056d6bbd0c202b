from dataclasses import dataclass


@dataclass(frozen=True)
class LinkArgument:
    """A parsed ``@scope`` or ``@scope/name`` argument."""

    scope: str
    exact_name: str | None = None

    def __str__(self) -> str:
        return self.exact_name or self.scope
