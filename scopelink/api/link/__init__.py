"""Link domain: substitute local sources for registry versions."""

from .._output_schemas.link import LinkLinkOutput, LinkStatusOutput
from .link_packages import link_packages

__all__ = ["LinkLinkOutput", "LinkStatusOutput", "link_packages"]
