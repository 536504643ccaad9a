"""Data models for git-worktrees."""

from .feature_name import FeatureName
from .list_query import ListPage, ListQuery
from .repository import Remote, Repository
from .worktree import (
    OPERATION_PRIORITY,
    OperationInProgress,
    RemovalResult,
    StatusBundle,
    SwitchResult,
    WorktreeInfo,
    WorktreeRecord,
)

__all__ = [
    "FeatureName",
    "ListPage",
    "ListQuery",
    "Remote",
    "Repository",
    "OPERATION_PRIORITY",
    "OperationInProgress",
    "RemovalResult",
    "StatusBundle",
    "SwitchResult",
    "WorktreeInfo",
    "WorktreeRecord",
]
