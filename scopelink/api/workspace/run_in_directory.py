import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def run_in_directory(path: Path | str) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block.

    The previous working directory is restored on every exit path, including errors.
    """
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)
