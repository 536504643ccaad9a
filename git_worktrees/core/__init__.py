"""Core worktree lifecycle for git-worktrees"""

from .worktree_manager import WorktreeLifecycleManager

__all__ = ["WorktreeLifecycleManager"]
