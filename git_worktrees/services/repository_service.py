"""Service for resolving repository facts"""

from typing import Optional

from git_worktrees.exceptions import NoDefaultBranchError
from git_worktrees.models.repository import Remote, Repository
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


class RepositoryInspector:
    """Resolves root, default branch and remotes from the VCS."""

    def __init__(self, vcs: VcsInterface):
        self.vcs = vcs

    def resolve_repository(self) -> Repository:
        """Build the Repository for this invocation.

        Raises:
            NotARepositoryError: outside any repository
            NoDefaultBranchError: when no default branch rule applies
        """
        root = self.vcs.repo_root()
        remotes = self.vcs.remotes()
        default_branch = self.detect_default_branch(remotes)
        logger.debug(f"Repository {root}: default branch {default_branch}, {len(remotes)} remote(s)")
        return Repository(root_path=root, default_branch=default_branch, remotes=tuple(remotes))

    def detect_default_branch(self, remotes: Optional[list[Remote]] = None) -> str:
        """Pick the default branch.

        Priority: a remote's symbolic HEAD, local ``main``, local ``master``,
        then (only when no remotes are configured) the first local branch.
        """
        if remotes is None:
            remotes = self.vcs.remotes()

        for remote in remotes:
            head = self.vcs.default_remote_head(remote.name)
            if head:
                logger.debug(f"Default branch from {remote.name}/HEAD: {head}")
                return head

        for candidate in ("main", "master"):
            if self.vcs.branch_exists(candidate):
                return candidate

        if not remotes:
            branches = self.vcs.local_branches()
            if branches:
                logger.debug(f"No remotes; using first local branch {branches[0]}")
                return branches[0]

        raise NoDefaultBranchError()
