"""Pytest fixtures for git-worktrees tests"""
import itertools
import os
import tempfile
from pathlib import Path
from typing import Optional

import git
import pytest

from git_worktrees.core import WorktreeLifecycleManager
from git_worktrees.exceptions import FetchFailedError, VcsError
from git_worktrees.models.repository import Remote
from git_worktrees.models.worktree import WorktreeInfo
from git_worktrees.services.git.base import VcsInterface


class FakeVcs(VcsInterface):
    """In-memory repository used to drive the core without git.

    Each branch is modeled as the set of commit ids reachable from it, which is
    enough to answer ancestry and merge-base questions.
    """

    def __init__(self, root: str = "/repo", worktrees_root: str = "/worktrees"):
        self.root = root
        self.worktrees_root = worktrees_root
        self._ids = itertools.count(1)

        first = self._commit()
        self.branches: dict[str, set[str]] = {"main": {first}}
        self.remote_list: list[Remote] = []
        self.remote_heads: dict[str, str] = {}
        self.remote_branches: dict[str, set[str]] = {}
        self.fetch_failures: set[str] = set()
        self.upstreams: dict[str, str] = {}
        self.ahead: dict[str, int] = {}
        self.bases: dict[str, str] = {}
        self.worktrees: list[WorktreeInfo] = [WorktreeInfo(path=root, branch_name="main", is_main=True)]
        self.statuses: dict[str, list[str]] = {}
        self.markers: dict[str, dict[str, bool]] = {}
        self.calls: list[tuple] = []

    def _commit(self) -> str:
        return f"c{next(self._ids)}"

    # Scenario helpers

    def add_remote(self, name: str, url: Optional[str] = None, head: Optional[str] = None, branches=()):
        self.remote_list.append(Remote(name, url or f"git@example.com:team/{name}.git"))
        if head:
            self.remote_heads[name] = head
        self.remote_branches[name] = set(branches)

    def add_branch(self, name: str, from_branch: str = "main", commits: int = 0) -> None:
        history = set(self.branches[from_branch])
        for _ in range(commits):
            history.add(self._commit())
        self.branches[name] = history

    def add_feature(
        self,
        name: str,
        branch: Optional[str] = "",
        base: Optional[str] = "main",
        commits: int = 0,
        upstream: bool = True,
        ahead: int = 0,
        status: Optional[list[str]] = None,
        operation: Optional[str] = None,
        path: Optional[str] = None,
    ) -> str:
        """Register a feature worktree; ``branch=None`` makes it detached."""
        path = path or os.path.join(self.worktrees_root, name)
        if branch == "":
            branch = name
        if branch is not None:
            if branch not in self.branches:
                self.add_branch(branch, commits=commits)
            if base:
                self.bases[branch] = base
            if upstream:
                self.upstreams[branch] = f"origin/{branch}"
                self.ahead[branch] = ahead
        self.worktrees.append(WorktreeInfo(path=path, branch_name=branch, commit_sha="abc123"))
        self.statuses[path] = list(status or [])
        if operation:
            self.markers[path] = {operation: True}
        return path

    def call_count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    # VcsInterface

    def repo_root(self) -> str:
        return self.root

    def remotes(self) -> list[Remote]:
        return list(self.remote_list)

    def default_remote_head(self, remote: str) -> Optional[str]:
        return self.remote_heads.get(remote)

    def local_branches(self) -> list[str]:
        return sorted(name for name in self.branches if "/" not in name)

    def branch_exists(self, name: str) -> bool:
        return name in self.branches and "/" not in name

    def ref_exists(self, ref: str) -> bool:
        return ref in self.branches

    def remote_has_ref(self, remote: str, ref: str) -> bool:
        self.calls.append(("remote_has_ref", remote, ref))
        return ref in self.remote_branches.get(remote, set())

    def fetch(self, remote: str, ref: str) -> None:
        self.calls.append(("fetch", remote, ref))
        if remote in self.fetch_failures:
            raise FetchFailedError(remote, ref, "could not read from remote repository")
        self.branches[f"{remote}/{ref}"] = {self._commit()}

    def upstream_of(self, branch: str) -> Optional[str]:
        return self.upstreams.get(branch)

    def ahead_count(self, local: str, upstream: str) -> int:
        return self.ahead.get(local, 0)

    def is_ancestor(self, branch: str, base: str) -> bool:
        return self.branches[branch] <= self.branches[base]

    def merge_base(self, first: str, second: str) -> Optional[str]:
        common = self.branches.get(first, set()) & self.branches.get(second, set())
        return min(common) if common else None

    def get_branch_base(self, branch: str) -> Optional[str]:
        return self.bases.get(branch)

    def set_branch_base(self, branch: str, base: str) -> None:
        self.calls.append(("set_branch_base", branch, base))
        self.bases[branch] = base

    def delete_branch(self, name: str) -> None:
        self.calls.append(("delete_branch", name))
        del self.branches[name]

    def list_worktrees(self) -> list[WorktreeInfo]:
        self.calls.append(("list_worktrees",))
        return list(self.worktrees)

    def add_worktree(self, path: str, branch: str, base_ref: Optional[str] = None, reuse_existing: bool = False) -> None:
        self.calls.append(("add_worktree", path, branch, base_ref, reuse_existing))
        if not reuse_existing:
            if branch in self.branches:
                raise VcsError("worktree add", path, f"a branch named '{branch}' already exists", status=255)
            self.branches[branch] = set(self.branches[base_ref])
        self.worktrees.append(WorktreeInfo(path=path, branch_name=branch))
        self.statuses[path] = []

    def remove_worktree(self, path: str, force: bool = False) -> None:
        self.calls.append(("remove_worktree", path, force))
        self.worktrees = [entry for entry in self.worktrees if entry.path != path]

    def porcelain_status(self, path: str) -> list[str]:
        self.calls.append(("porcelain_status", path))
        return list(self.statuses.get(path, []))

    def in_progress_markers(self, path: str) -> dict[str, bool]:
        markers = {"merge": False, "rebase": False, "cherry-pick": False, "bisect": False}
        markers.update(self.markers.get(path, {}))
        return markers


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def worktrees_root(temp_dir):
    """Directory the manager creates worktrees under (not created up front)."""
    return str(temp_dir / "worktrees")


@pytest.fixture
def fake_vcs(worktrees_root):
    """In-memory VCS with a single main branch and no remotes."""
    return FakeVcs(root="/repo", worktrees_root=worktrees_root)


@pytest.fixture
def make_manager(fake_vcs, worktrees_root):
    """Factory for managers over the fake VCS; ``current_path`` defaults to the main worktree."""
    def _make(current_path: str = "/repo", default_base: Optional[str] = None) -> WorktreeLifecycleManager:
        return WorktreeLifecycleManager(fake_vcs, worktrees_root, current_path, default_base=default_base)
    return _make


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Normalize the initial branch name regardless of init.defaultBranch
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Real repository with a bare ``origin`` that has main pushed and tracked."""
    remote_path = temp_dir / "origin.git"
    git.Repo.init(remote_path, bare=True)
    git_repo.create_remote("origin", str(remote_path))
    git_repo.git.push("-u", "origin", "main")
    git_repo.git.remote("set-head", "origin", "main")

    yield git_repo


def _commit_file(repo_path, filename: str, content: str, message: str) -> None:
    """Write a file in a working tree and commit it there."""
    worktree_repo = git.Repo(repo_path)
    try:
        Path(repo_path, filename).write_text(content)
        worktree_repo.git.add(filename)
        worktree_repo.git.commit("-m", message)
    finally:
        worktree_repo.close()


@pytest.fixture
def commit_file():
    """Helper that commits a file inside any worktree of a real repository."""
    return _commit_file
