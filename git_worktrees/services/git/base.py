"""Abstract interface for the version-control operations git-worktrees needs.

Everything above this layer talks to a ``VcsInterface``; only
``GitOperations`` shells out to git. Tests substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import Optional

from git_worktrees.models.repository import Remote
from git_worktrees.models.worktree import WorktreeInfo


class VcsInterface(ABC):
    """Queries and mutations issued by the worktree lifecycle core."""

    # Repository facts

    @abstractmethod
    def repo_root(self) -> str:
        """Absolute path of the repository toplevel.

        Raises:
            NotARepositoryError: if the start path is outside any repository
        """

    @abstractmethod
    def remotes(self) -> list[Remote]:
        """Configured remotes with their fetch URLs (may be empty)."""

    @abstractmethod
    def default_remote_head(self, remote: str) -> Optional[str]:
        """Branch the remote's symbolic HEAD points to, without the remote prefix."""

    @abstractmethod
    def local_branches(self) -> list[str]:
        """Local branch names in git's listing order."""

    # Refs

    @abstractmethod
    def branch_exists(self, name: str) -> bool:
        """Check whether ``refs/heads/<name>`` exists."""

    @abstractmethod
    def ref_exists(self, ref: str) -> bool:
        """Check whether any ref, tag or commit resolves for ``ref``."""

    @abstractmethod
    def remote_has_ref(self, remote: str, ref: str) -> bool:
        """Check whether ``remote`` advertises a branch named ``ref``."""

    @abstractmethod
    def fetch(self, remote: str, ref: str) -> None:
        """Fetch ``ref`` from ``remote`` into its remote-tracking ref."""

    @abstractmethod
    def upstream_of(self, branch: str) -> Optional[str]:
        """Remote-tracking ref configured for ``branch``, or None."""

    @abstractmethod
    def ahead_count(self, local: str, upstream: str) -> int:
        """Number of commits reachable from ``local`` but not from ``upstream``."""

    @abstractmethod
    def is_ancestor(self, branch: str, base: str) -> bool:
        """True when every commit of ``branch`` is reachable from ``base``."""

    @abstractmethod
    def merge_base(self, first: str, second: str) -> Optional[str]:
        """Best common ancestor of two refs, or None when they share no history."""

    @abstractmethod
    def get_branch_base(self, branch: str) -> Optional[str]:
        """Base recorded for ``branch`` when its worktree was created."""

    @abstractmethod
    def set_branch_base(self, branch: str, base: str) -> None:
        """Record the declared base of ``branch``."""

    @abstractmethod
    def delete_branch(self, name: str) -> None:
        """Delete local branch ``name`` (callers check merge state first)."""

    # Worktrees

    @abstractmethod
    def list_worktrees(self) -> list[WorktreeInfo]:
        """All worktrees of the repository, main worktree first."""

    @abstractmethod
    def add_worktree(
        self, path: str, branch: str, base_ref: Optional[str], reuse_existing: bool
    ) -> None:
        """Create a worktree at ``path``.

        Args:
            path: Target directory
            branch: Branch to check out (created from ``base_ref`` unless reused)
            base_ref: Start point for a new branch
            reuse_existing: Attach to the existing ``branch`` instead of creating it
        """

    @abstractmethod
    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove the worktree at ``path``; ``force`` discards untracked files."""

    @abstractmethod
    def porcelain_status(self, path: str) -> list[str]:
        """``git status --porcelain`` lines for the worktree at ``path``."""

    @abstractmethod
    def in_progress_markers(self, path: str) -> dict[str, bool]:
        """Which of merge, rebase, cherry-pick and bisect are in progress at ``path``."""
