"""Collect warning records emitted while a command runs."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager


class _ListHandler(logging.Handler):
    def __init__(self, sink: list[str]):
        super().__init__(level=logging.WARNING)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        self.sink.append(record.getMessage())


@contextmanager
def collect_warnings(logger_name: str = "scopelink") -> Iterator[list[str]]:
    """Yield a list that receives every WARNING+ message logged below ``logger_name``."""
    sink: list[str] = []
    handler = _ListHandler(sink)
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    try:
        yield sink
    finally:
        logger.removeHandler(handler)
