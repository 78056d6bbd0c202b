from .errors import ArgumentInvalid
from .LinkArgument import LinkArgument


def resolve_argument(arg: str) -> LinkArgument:
    """Parse ``@scope`` or ``@scope/name``.

    Raises:
        ArgumentInvalid: ``arg`` does not start with ``@``
    """
    if not arg.startswith("@"):
        raise ArgumentInvalid(f"Package argument must start with @ (scope): {arg}")
    if "/" not in arg:
        return LinkArgument(scope=arg)
    return LinkArgument(scope=arg.split("/", 1)[0], exact_name=arg)
