"""API module for scopelink.

Functions defined here are the single source of truth for CLI commands; the
CLI layer only parses arguments and renders ``StageResult`` objects.
"""

__all__ = []
