"""Safety checks that gate destructive worktree operations."""

from dataclasses import dataclass, field
from typing import Optional

from git_worktrees.exceptions import RefNotFoundError
from git_worktrees.models.worktree import OperationInProgress, StatusBundle, WorktreeRecord
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)

REASON_ACTIVE = "cannot remove the active worktree"
REASON_DIRTY = "tracked changes present"
REASON_UNPUSHED = "unpushed commits or no upstream"
REASON_UNTRACKED = "untracked files present, use force"


@dataclass(frozen=True)
class GateDecision:
    """Allow/deny verdict with every reason that applied."""
    allowed: bool
    reasons: list[str] = field(default_factory=list)

    @classmethod
    def allow(cls) -> "GateDecision":
        return cls(True, [])

    @classmethod
    def deny(cls, reasons: list[str]) -> "GateDecision":
        return cls(False, list(reasons))

    def __bool__(self) -> bool:
        return self.allowed


class SafetyGate:
    """Decides whether remove and branch-delete may proceed."""

    def __init__(self, vcs: Optional[VcsInterface] = None):
        self.vcs = vcs

    @staticmethod
    def check_removal(record: WorktreeRecord, status: StatusBundle, force: bool = False) -> GateDecision:
        """
        Check whether a worktree may be removed.

        All rules are evaluated so the caller can report every violation at
        once. Only the untracked-files rule is lifted by ``force``.

        Args:
            record: Worktree being removed
            status: Its resolved status
            force: Allow discarding untracked files

        Returns:
            GateDecision listing the violated preconditions
        """
        reasons = []

        if record.is_active:
            reasons.append(REASON_ACTIVE)

        if status.is_dirty:
            reasons.append(REASON_DIRTY)

        if status.op_in_progress is not OperationInProgress.NONE:
            reasons.append(f"{status.op_in_progress.value} in progress")

        # A branch without upstream cannot be proven safe to discard
        if status.has_unpushed_commits or not status.upstream:
            reasons.append(REASON_UNPUSHED)

        if status.has_untracked and not force:
            reasons.append(REASON_UNTRACKED)

        if reasons:
            logger.debug(f"Removal of {record.name} denied: {reasons}")
            return GateDecision.deny(reasons)
        return GateDecision.allow()

    def check_branch_deletion(self, branch: str, base: str) -> GateDecision:
        """
        Check whether a branch is fully merged into ``base``.

        Raises:
            RefNotFoundError: if ``base`` does not exist
        """
        if self.vcs is None:
            raise RuntimeError("SafetyGate needs a VCS to check branch deletion")

        if not self.vcs.ref_exists(base):
            raise RefNotFoundError(base)

        if self.vcs.is_ancestor(branch, base):
            return GateDecision.allow()

        logger.debug(f"Branch {branch} has commits not in {base}")
        return GateDecision.deny([f"branch '{branch}' is not fully merged into '{base}'"])
