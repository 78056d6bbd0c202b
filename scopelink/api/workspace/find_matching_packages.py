from .LinkArgument import LinkArgument
from .PackageRecord import PackageRecord


def find_matching_packages(records: list[PackageRecord], argument: LinkArgument) -> list[PackageRecord]:
    """Records named exactly by ``argument``, or every record in its scope."""
    if argument.exact_name:
        return [record for record in records if record.name == argument.exact_name]
    return [record for record in records if record.scope == argument.scope]
