"""Formatting utilities for git-worktrees.

This package provides the functions that turn worktree data into output,
organized into logical modules:
- status: Status flags and safety messages
- table: Rich tables for terminal output
- export: JSON and CSV
"""

# Status formatters
from .status import (
    format_active,
    format_status_flags,
    format_unsafe,
    format_removal_result,
)

# Table formatters
from .table import (
    format_branch,
    format_worktree_table,
    format_repository_info,
)

# Export formatters
from .export import (
    worktrees_to_json,
    worktrees_to_csv,
)

__all__ = [
    # Status
    "format_active",
    "format_status_flags",
    "format_unsafe",
    "format_removal_result",
    # Table
    "format_branch",
    "format_worktree_table",
    "format_repository_info",
    # Export
    "worktrees_to_json",
    "worktrees_to_csv",
]
