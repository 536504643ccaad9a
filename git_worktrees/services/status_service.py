"""Service for computing the derived status of worktrees"""

from typing import Dict

from git_worktrees.models.worktree import (
    OPERATION_PRIORITY,
    OperationInProgress,
    StatusBundle,
    WorktreeRecord,
)
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)

# Porcelain codes that indicate a change to a tracked file:
# modified, added, deleted, renamed, copied, type changed, unmerged
TRACKED_CHANGE_CODES = frozenset("MADRCTU")


def parse_porcelain_status(lines: list[str]) -> tuple[bool, bool]:
    """Parse ``git status --porcelain`` lines.

    Format: ``XY filename`` where X is the index (staged) status and Y the
    working tree status.

    Returns:
        Tuple of (has_tracked_changes, has_untracked)
    """
    is_dirty = False
    has_untracked = False

    for line in lines:
        if len(line) < 2:
            continue

        code = line[:2]
        if code == "??":
            has_untracked = True
            continue
        if code == "!!":
            continue

        index_status, worktree_status = code[0], code[1]
        if index_status in TRACKED_CHANGE_CODES or worktree_status in TRACKED_CHANGE_CODES:
            is_dirty = True

    return is_dirty, has_untracked


def detect_operation(markers: dict[str, bool]) -> OperationInProgress:
    """Pick the in-progress operation from VCS markers; merge > rebase > cherry-pick > bisect."""
    for operation in OPERATION_PRIORITY:
        if markers.get(operation.value):
            return operation
    return OperationInProgress.NONE


class WorktreeStatusResolver:
    """Computes StatusBundles, memoized by worktree name for one command."""

    def __init__(self, vcs: VcsInterface):
        self.vcs = vcs
        self._cache: Dict[str, StatusBundle] = {}

    def clear_cache(self):
        """Forget every memoized status."""
        self._cache.clear()

    def resolve_status(self, record: WorktreeRecord) -> StatusBundle:
        """Compute (or reuse) the status of a worktree and attach it to the record.

        Raises:
            VcsError: if one of the underlying git queries fails
        """
        cached = self._cache.get(record.name)
        if cached is not None:
            record.status = cached
            return cached

        logger.debug(f"Resolving status for {record.name} at {record.path}")
        is_dirty, has_untracked = parse_porcelain_status(self.vcs.porcelain_status(record.path))

        upstream = None
        has_unpushed = False
        checked_out = record.branch is not None
        if checked_out:
            upstream = self.vcs.upstream_of(record.branch)
            if upstream:
                ahead = self.vcs.ahead_count(record.branch, upstream)
                has_unpushed = ahead > 0
                logger.debug(f"{record.branch} is {ahead} commit(s) ahead of {upstream}")

        operation = detect_operation(self.vcs.in_progress_markers(record.path))

        status = StatusBundle(
            is_dirty=is_dirty,
            has_untracked=has_untracked,
            has_unpushed_commits=has_unpushed,
            upstream=upstream,
            op_in_progress=operation,
            checked_out=checked_out,
        )
        self._cache[record.name] = status
        record.status = status
        return status

    def resolve_all(self, records: list[WorktreeRecord]) -> list[WorktreeRecord]:
        """Resolve status for each record in place and return them."""
        for record in records:
            self.resolve_status(record)
        return records
