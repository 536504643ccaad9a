"""Git operations service"""

import os
from typing import Optional

import git

from git_worktrees.constants import BASE_CONFIG_KEY
from git_worktrees.exceptions import FetchFailedError, NotARepositoryError, VcsError
from git_worktrees.models.repository import Remote
from git_worktrees.models.worktree import WorktreeInfo
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.services.git.worktrees import parse_worktree_porcelain
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)

# Per-worktree metadata files that mark an unfinished operation
IN_PROGRESS_MARKERS = {
    "merge": ["MERGE_HEAD"],
    "rebase": ["rebase-merge", "rebase-apply"],
    "cherry-pick": ["CHERRY_PICK_HEAD"],
    "bisect": ["BISECT_LOG"],
}


def _describe_command_error(e: git.exc.GitCommandError) -> tuple[Optional[int], str]:
    """Extract exit status and stderr from a GitCommandError."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    status = e.status if hasattr(e, "status") else None
    return status, stderr


def _to_vcs_error(operation: str, target: Optional[str], e: git.exc.GitCommandError) -> VcsError:
    status, stderr = _describe_command_error(e)
    if stderr:
        message = f"exit {status}: {stderr}"
    else:
        message = f"exit code {status}"
    return VcsError(operation, target, message, status=status, stderr=stderr)


class GitOperations(VcsInterface):
    """VCS adapter backed by the git binary through GitPython."""

    def __init__(self, start_path: str, remote_name: str = "origin"):
        """Initialize the service.

        Args:
            start_path: Directory the command was started from (any path inside the repo)
            remote_name: Remote preferred when several are configured
        """
        self.start_path = start_path
        self.remote_name = remote_name

    def _get_repo(self) -> git.Repo:
        """Get a git.Repo instance for the start path.

        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Raises:
            NotARepositoryError: if start_path is not inside a repository
        """
        try:
            return git.Repo(self.start_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise NotARepositoryError(self.start_path) from None

    def _git_in(self, path: str, *args: str) -> str:
        """Run a git command with ``path`` as its working directory."""
        repo = self._get_repo()
        return repo.git.execute(["git", "-C", path, *args])

    # Repository facts

    def repo_root(self) -> str:
        repo = self._get_repo()
        try:
            return repo.git.rev_parse("--show-toplevel")
        except git.exc.GitCommandError as e:
            # Bare repositories have no toplevel
            logger.debug(f"Could not resolve toplevel for {self.start_path}: {e}")
            raise NotARepositoryError(self.start_path) from e

    def remotes(self) -> list[Remote]:
        repo = self._get_repo()
        result = []
        for remote in repo.remotes:
            try:
                url = repo.git.remote("get-url", remote.name)
            except git.exc.GitCommandError as e:
                logger.debug(f"Could not read URL for remote {remote.name}: {e}")
                continue
            result.append(Remote(name=remote.name, url=url))
        # Preferred remote first, the rest in configuration order
        result.sort(key=lambda r: r.name != self.remote_name)
        return result

    def default_remote_head(self, remote: str) -> Optional[str]:
        repo = self._get_repo()
        prefix = f"refs/remotes/{remote}/"
        try:
            ref = repo.git.symbolic_ref(f"{prefix}HEAD")
        except git.exc.GitCommandError:
            logger.debug(f"Remote {remote} has no symbolic HEAD")
            return None
        return ref[len(prefix):] if ref.startswith(prefix) else ref

    def local_branches(self) -> list[str]:
        repo = self._get_repo()
        output = repo.git.branch("--format=%(refname:short)")
        return [line.strip() for line in output.split("\n") if line.strip()]

    # Refs

    def branch_exists(self, name: str) -> bool:
        repo = self._get_repo()
        try:
            repo.git.show_ref("--verify", "--quiet", f"refs/heads/{name}")
            return True
        except git.exc.GitCommandError:
            return False

    def ref_exists(self, ref: str) -> bool:
        repo = self._get_repo()
        try:
            repo.git.rev_parse("--verify", "--quiet", f"{ref}^{{commit}}")
            return True
        except git.exc.GitCommandError:
            return False

    def remote_has_ref(self, remote: str, ref: str) -> bool:
        repo = self._get_repo()
        try:
            output = repo.git.ls_remote("--heads", remote, ref)
        except git.exc.GitCommandError as e:
            _, stderr = _describe_command_error(e)
            raise FetchFailedError(remote, ref, stderr) from e
        wanted = f"refs/heads/{ref}"
        return any(line.split("\t")[-1] == wanted for line in output.split("\n") if line)

    def fetch(self, remote: str, ref: str) -> None:
        repo = self._get_repo()
        refspec = f"+refs/heads/{ref}:refs/remotes/{remote}/{ref}"
        logger.info(f"Fetching {ref} from {remote}")
        try:
            repo.git.fetch(remote, refspec)
        except git.exc.GitCommandError as e:
            _, stderr = _describe_command_error(e)
            logger.error(f"Fetch of {ref} from {remote} failed: {stderr}")
            raise FetchFailedError(remote, ref, stderr) from e

    def upstream_of(self, branch: str) -> Optional[str]:
        repo = self._get_repo()
        try:
            return repo.git.rev_parse("--abbrev-ref", f"{branch}@{{upstream}}") or None
        except git.exc.GitCommandError:
            # No upstream configured, or the upstream ref is gone
            return None

    def ahead_count(self, local: str, upstream: str) -> int:
        repo = self._get_repo()
        try:
            return int(repo.git.rev_list("--count", f"{upstream}..{local}"))
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("rev-list", local, e) from e

    def is_ancestor(self, branch: str, base: str) -> bool:
        repo = self._get_repo()
        try:
            return repo.is_ancestor(branch, base)
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("merge-base --is-ancestor", branch, e) from e

    def merge_base(self, first: str, second: str) -> Optional[str]:
        repo = self._get_repo()
        try:
            return repo.git.merge_base(first, second) or None
        except git.exc.GitCommandError:
            return None

    def get_branch_base(self, branch: str) -> Optional[str]:
        repo = self._get_repo()
        try:
            return repo.git.config("--get", f"branch.{branch}.{BASE_CONFIG_KEY}") or None
        except git.exc.GitCommandError:
            return None

    def set_branch_base(self, branch: str, base: str) -> None:
        repo = self._get_repo()
        try:
            repo.git.config(f"branch.{branch}.{BASE_CONFIG_KEY}", base)
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("config", branch, e) from e

    def delete_branch(self, name: str) -> None:
        repo = self._get_repo()
        try:
            repo.delete_head(name, force=True)
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("branch -D", name, e) from e
        logger.info(f"Deleted branch {name}")

    # Worktrees

    def list_worktrees(self) -> list[WorktreeInfo]:
        repo = self._get_repo()
        try:
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("worktree list", None, e) from e
        return parse_worktree_porcelain(output)

    def add_worktree(
        self, path: str, branch: str, base_ref: Optional[str], reuse_existing: bool
    ) -> None:
        repo = self._get_repo()
        if reuse_existing:
            args = ["add", path, branch]
        else:
            args = ["add", "-b", branch, path]
            if base_ref:
                args.append(base_ref)
        try:
            repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("worktree add", path, e) from e
        logger.info(f"Created worktree at {path} on branch {branch}")

    def remove_worktree(self, path: str, force: bool = False) -> None:
        repo = self._get_repo()
        args = ["remove"]
        if force:
            args.append("--force")
        args.append(path)
        try:
            repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            error = _to_vcs_error("worktree remove", path, e)
            logger.error(f"Failed to remove worktree at {path}: {error.message}")
            raise error from e
        logger.info(f"Removed worktree at {path}")

    def porcelain_status(self, path: str) -> list[str]:
        try:
            # Pin untracked and submodule reporting so user config cannot hide files
            output = self._git_in(
                path, "status", "--porcelain", "--untracked-files=normal", "--ignore-submodules=none"
            )
        except git.exc.GitCommandError as e:
            raise _to_vcs_error("status", path, e) from e
        return [line for line in output.split("\n") if line.strip()]

    def in_progress_markers(self, path: str) -> dict[str, bool]:
        markers = {}
        for operation, names in IN_PROGRESS_MARKERS.items():
            found = False
            for name in names:
                try:
                    marker_path = self._git_in(path, "rev-parse", "--git-path", name)
                except git.exc.GitCommandError as e:
                    raise _to_vcs_error("rev-parse --git-path", path, e) from e
                # --git-path answers relative to the worktree directory
                if not os.path.isabs(marker_path):
                    marker_path = os.path.join(path, marker_path)
                if os.path.exists(marker_path):
                    found = True
                    break
            markers[operation] = found
        return markers
