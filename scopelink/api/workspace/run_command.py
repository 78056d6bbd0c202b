"""Run package-manager commands as subprocesses."""

import subprocess

from scopelink.utils.logger import get_logger

from .errors import CommandError


def run_command(command: list[str]) -> str:
    """Run ``command`` in the current directory and return its standard output.

    Raises:
        CommandError: The executable is missing or exits with a non-zero status
    """
    get_logger("npm").debug(f"COMMAND_RUN: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise CommandError(command, 127, str(e)) from e
    except subprocess.CalledProcessError as e:
        raise CommandError(command, e.returncode, e.stderr or e.stdout or "") from e
    return result.stdout
