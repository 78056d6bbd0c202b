"""Unlink domain: restore registry versions of linked packages."""

from .._output_schemas.unlink import UnlinkUnlinkOutput
from .unlink_packages import unlink_packages

__all__ = ["UnlinkUnlinkOutput", "unlink_packages"]
