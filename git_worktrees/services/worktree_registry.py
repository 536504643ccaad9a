"""Registry of the live feature worktrees of a repository"""

import os
from typing import Optional

from git_worktrees.constants import UNKNOWN_BASE
from git_worktrees.models.feature_name import FeatureName
from git_worktrees.models.worktree import WorktreeInfo, WorktreeRecord
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


def is_within(path: str, root: str) -> bool:
    """Check whether ``path`` is ``root`` or lies below it, after resolving symlinks.

    Containment is tested on path-component boundaries, so ``/w/001-a`` does
    not contain ``/w/001-ab``.
    """
    real_path = os.path.realpath(path)
    real_root = os.path.realpath(root)
    if real_path == real_root:
        return True
    return real_path.startswith(real_root.rstrip(os.sep) + os.sep)


class WorktreeRegistry:
    """Snapshot of the repository's feature worktrees for one command.

    The VCS worktree list is queried once; every later lookup (uniqueness,
    active worktree, branch checkouts) reads the same snapshot.
    """

    def __init__(self, vcs: VcsInterface, current_path: str, default_branch: Optional[str] = None):
        """Initialize the registry.

        Args:
            vcs: VCS adapter
            current_path: Working directory of the command, captured once at start
            default_branch: Repository default branch, used for base detection
        """
        self.vcs = vcs
        self.current_path = current_path
        self.default_branch = default_branch
        self._entries: Optional[list[WorktreeInfo]] = None
        self._records: Optional[list[WorktreeRecord]] = None

    def entries(self) -> list[WorktreeInfo]:
        """Unfiltered worktree list, main worktree included."""
        if self._entries is None:
            self._entries = self.vcs.list_worktrees()
        return self._entries

    def list(self) -> list[WorktreeRecord]:
        """Feature worktrees sorted by name.

        Entries whose directory name does not follow the naming convention are
        skipped. The reserved-name rule is not applied here so that worktrees
        created before a policy change stay visible.
        """
        if self._records is not None:
            return self._records

        records = []
        for entry in self.entries():
            if entry.is_bare:
                continue
            segment = os.path.basename(os.path.normpath(entry.path))
            if not FeatureName.is_valid_format(segment):
                logger.debug(f"Skipping non-feature worktree {entry.path}")
                continue
            records.append(
                WorktreeRecord(
                    name=FeatureName.normalize(segment),
                    branch=entry.branch_name,
                    base_ref=self.detect_base_ref(entry),
                    path=entry.path,
                    is_active=is_within(self.current_path, entry.path),
                )
            )

        records.sort(key=lambda record: record.name)
        self._records = records
        logger.debug(f"Registry holds {len(records)} feature worktree(s)")
        return records

    def detect_base_ref(self, entry: WorktreeInfo) -> str:
        """Best-effort base: recorded base, else the default branch if related, else unknown."""
        if entry.branch_name:
            recorded = self.vcs.get_branch_base(entry.branch_name)
            if recorded:
                return recorded

        tip = entry.branch_name or entry.commit_sha
        if self.default_branch and tip and tip != self.default_branch:
            if self.vcs.merge_base(tip, self.default_branch):
                return self.default_branch

        return UNKNOWN_BASE

    def find(self, name: str) -> Optional[WorktreeRecord]:
        """Look a worktree up by name, case-insensitively."""
        normalized = FeatureName.normalize(name)
        return next((record for record in self.list() if record.name == normalized), None)

    def active(self) -> Optional[WorktreeRecord]:
        """The worktree containing the current path, if any."""
        return next((record for record in self.list() if record.is_active), None)

    def branch_checkouts(self) -> dict[str, str]:
        """Map of branch name to the path of the worktree it is checked out in."""
        return {entry.branch_name: entry.path for entry in self.entries() if entry.branch_name}

    def set_current_path(self, path: str) -> None:
        """Move the command's current path and refresh the active flags."""
        self.current_path = path
        for record in self._records or []:
            record.is_active = is_within(path, record.path)

    def add(self, record: WorktreeRecord, info: WorktreeInfo) -> None:
        """Register a worktree this command just created."""
        self.entries().append(info)
        records = self.list()
        records.append(record)
        records.sort(key=lambda item: item.name)

    def discard(self, record: WorktreeRecord) -> None:
        """Drop a worktree this command just removed."""
        self._entries = [entry for entry in self.entries() if entry.path != record.path]
        self._records = [item for item in self.list() if item.path != record.path]
