"""
git-worktrees - Safe lifecycle management for per-feature git worktrees
"""

from .__version__ import __version__
from .core import WorktreeLifecycleManager
from .cli.main import main

__all__ = ["WorktreeLifecycleManager", "main", "__version__"]
