"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OperationInProgress(Enum):
    """Multi-step git operation recorded in a worktree's metadata."""
    NONE = "none"
    MERGE = "merge"
    REBASE = "rebase"
    CHERRY_PICK = "cherry-pick"
    BISECT = "bisect"


# Order in which in-progress markers are checked; first match wins
OPERATION_PRIORITY = [
    OperationInProgress.MERGE,
    OperationInProgress.REBASE,
    OperationInProgress.CHERRY_PICK,
    OperationInProgress.BISECT,
]


@dataclass
class WorktreeInfo:
    """One entry of ``git worktree list --porcelain``, before any filtering."""

    path: str
    branch_name: Optional[str]  # None = detached HEAD
    commit_sha: str = ""
    is_main: bool = False  # Is this the main working tree?
    is_bare: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch_name is None

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch_name or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{branch} @ {self.path}{main_marker}"


@dataclass(frozen=True)
class StatusBundle:
    """Derived status of a worktree, computed on demand."""

    is_dirty: bool
    has_untracked: bool
    has_unpushed_commits: bool
    upstream: Optional[str]
    op_in_progress: OperationInProgress
    checked_out: bool

    @classmethod
    def clean(cls, checked_out: bool = True) -> "StatusBundle":
        """Status assumed for a freshly created worktree."""
        return cls(
            is_dirty=False,
            has_untracked=False,
            has_unpushed_commits=False,
            upstream=None,
            op_in_progress=OperationInProgress.NONE,
            checked_out=checked_out,
        )

    @property
    def label(self) -> str:
        """Short summary used by the text formatters."""
        if self.op_in_progress is not OperationInProgress.NONE:
            return self.op_in_progress.value
        if self.is_dirty:
            return "dirty"
        if self.has_untracked:
            return "untracked"
        return "clean"


@dataclass
class WorktreeRecord:
    """A live feature worktree.

    Identity is ``path``. ``status`` stays None until a status resolver fills
    it in; the flag properties below return None in that state.
    """

    name: str
    branch: Optional[str]
    base_ref: str
    path: str
    is_active: bool = False
    status: Optional[StatusBundle] = field(default=None, compare=False)

    @property
    def checked_out(self) -> bool:
        return self.branch is not None

    @property
    def is_resolved(self) -> bool:
        return self.status is not None

    @property
    def is_dirty(self) -> Optional[bool]:
        return self.status.is_dirty if self.status else None

    @property
    def has_untracked(self) -> Optional[bool]:
        return self.status.has_untracked if self.status else None

    @property
    def has_unpushed_commits(self) -> Optional[bool]:
        return self.status.has_unpushed_commits if self.status else None

    @property
    def upstream(self) -> Optional[str]:
        return self.status.upstream if self.status else None

    @property
    def op_in_progress(self) -> Optional[OperationInProgress]:
        return self.status.op_in_progress if self.status else None

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON output."""
        data = {
            "name": self.name,
            "branch": self.branch,
            "base_ref": self.base_ref,
            "path": self.path,
            "active": self.is_active,
            "checked_out": self.checked_out,
        }
        if self.status is not None:
            data.update({
                "status": self.status.label,
                "dirty": self.status.is_dirty,
                "untracked": self.status.has_untracked,
                "unpushed_commits": self.status.has_unpushed_commits,
                "upstream": self.status.upstream,
                "operation_in_progress": self.status.op_in_progress.value,
            })
        return data

    def __str__(self) -> str:
        branch = self.branch or "(detached)"
        return f"{self.name} [{branch}] @ {self.path}"


@dataclass
class SwitchResult:
    """Outcome of switching the current worktree."""

    current: WorktreeRecord
    previous: Optional[WorktreeRecord]
    warnings: list[str] = field(default_factory=list)


@dataclass
class RemovalResult:
    """Outcome of removing a worktree (and optionally its branch)."""

    name: str
    removed: bool
    branch_deleted: bool
    branch: Optional[str] = None
    reasons: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        """True when the worktree went away but the branch was kept for safety."""
        return self.removed and not self.branch_deleted and bool(self.reasons)
