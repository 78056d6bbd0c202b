import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .get_home_dir import get_home_dir

# Prevent multiple configurations
_CONFIGURED = False
_STREAM_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(home: Path | None = None, verbose: bool = False) -> None:
    """Configure unified scopelink logging.

    Args:
        home: Path to scopelink home directory. If None, derived from environment.
        verbose: Echo debug-level records to stderr instead of warnings only.
    """
    global _CONFIGURED, _STREAM_HANDLER
    if _CONFIGURED:
        if verbose and _STREAM_HANDLER is not None:
            _STREAM_HANDLER.setLevel(logging.DEBUG)
        return

    if home is None:
        home = get_home_dir()

    # Ensure directory exists
    home.mkdir(parents=True, exist_ok=True)
    log_file = home / "scopelink.log"

    root_logger = logging.getLogger("scopelink")
    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(_FORMAT)

    # File Handler
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,  # 5MB * 3
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Stderr Handler
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    root_logger.addHandler(stream_handler)
    _STREAM_HANDLER = stream_handler

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Ensures logging is configured (lazy init if needed, though explicit config preferred at app entry).
    """
    if not _CONFIGURED:
        configure_logging()

    return logging.getLogger(f"scopelink.{name}")


class DryRunLoggerAdapter(logging.LoggerAdapter):
    """Prefix every message with ``DRY RUN:``."""

    def process(self, msg, kwargs):
        return f"DRY RUN: {msg}", kwargs


def get_dry_run_logger(name: str, dry_run: bool) -> logging.Logger | logging.LoggerAdapter:
    """Get a logger that marks its output when running in dry-run mode."""
    logger = get_logger(name)
    if dry_run:
        return DryRunLoggerAdapter(logger, {})
    return logger
