"""Git-related services for git-worktrees."""

from .base import VcsInterface
from .operations import GitOperations
from .worktrees import parse_worktree_porcelain

__all__ = [
    "VcsInterface",
    "GitOperations",
    "parse_worktree_porcelain",
]
