"""Updates domain: bump same-scope dependencies."""

from .._output_schemas.updates import UpdatesUpdatesOutput
from .update_dependencies import update_dependencies, update_inter_project_dependencies

__all__ = ["UpdatesUpdatesOutput", "update_dependencies", "update_inter_project_dependencies"]
