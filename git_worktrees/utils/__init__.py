"""Utility functions for git-worktrees."""

from .logging import setup_logging, get_logger, ColoredFormatter

__all__ = [
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
]
