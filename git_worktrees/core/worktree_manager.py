"""Lifecycle operations for feature worktrees"""

import os
from contextlib import contextmanager
from typing import Optional

from git_worktrees.constants import SIBLING_START
from git_worktrees.exceptions import (
    ConflictError,
    ErrorKind,
    FileSystemError,
    NotFoundError,
    RefNotFoundError,
    UnsafeError,
    ValidationError,
    VcsError,
    WorktreesError,
)
from git_worktrees.models.feature_name import FeatureName
from git_worktrees.models.list_query import ListPage, ListQuery
from git_worktrees.models.repository import Repository
from git_worktrees.models.worktree import (
    RemovalResult,
    StatusBundle,
    SwitchResult,
    WorktreeInfo,
    WorktreeRecord,
)
from git_worktrees.services.git.base import VcsInterface
from git_worktrees.services.list_query_service import ListQueryEngine
from git_worktrees.services.repository_service import RepositoryInspector
from git_worktrees.services.safety_service import SafetyGate
from git_worktrees.services.status_service import WorktreeStatusResolver
from git_worktrees.services.worktree_registry import WorktreeRegistry, is_within
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


class WorktreeLifecycleManager:
    """Creates, switches between and removes feature worktrees.

    One manager serves one command. Repository facts and the worktree
    snapshot are read once and reused for every decision the command makes.
    """

    def __init__(
        self,
        vcs: VcsInterface,
        worktrees_root: str,
        current_path: str,
        default_base: Optional[str] = None,
    ):
        """Initialize the manager.

        Args:
            vcs: VCS adapter
            worktrees_root: Directory new worktrees are created under
            current_path: Working directory of the command, captured once at start
            default_base: Base used by create when none is given, ahead of the
                repository default branch
        """
        self.vcs = vcs
        self.worktrees_root = os.path.abspath(os.path.expanduser(worktrees_root))
        self.current_path = current_path
        self.default_base = default_base

        self.inspector = RepositoryInspector(vcs)
        self.resolver = WorktreeStatusResolver(vcs)
        self.gate = SafetyGate(vcs)

        self._repository: Optional[Repository] = None
        self._registry: Optional[WorktreeRegistry] = None

    @property
    def repository(self) -> Repository:
        if self._repository is None:
            self._repository = self.inspector.resolve_repository()
        return self._repository

    @property
    def registry(self) -> WorktreeRegistry:
        if self._registry is None:
            self._registry = WorktreeRegistry(
                self.vcs, self.current_path, self.repository.default_branch
            )
        return self._registry

    @contextmanager
    def _worktree_context(self, name: str):
        """Tag errors raised inside the block with the worktree name."""
        try:
            yield
        except WorktreesError as e:
            if e.worktree is None:
                e.worktree = name
            raise

    def _get_record(self, name: str) -> WorktreeRecord:
        record = self.registry.find(name)
        if record is None:
            raise NotFoundError(name)
        return record

    # Create

    def create(self, name: str, base_ref: Optional[str] = None, sibling: bool = False) -> WorktreeRecord:
        """Create a feature worktree.

        Args:
            name: Feature name, e.g. ``001-login-page``
            base_ref: Ref to branch from; defaults to the configured base, then
                the repository default branch
            sibling: When the branch is checked out elsewhere, create a
                suffixed branch instead of failing

        Returns:
            The new WorktreeRecord with a clean status

        Raises:
            ValidationError: bad or duplicate name
            RefNotFoundError: base exists neither locally nor on any remote
            FetchFailedError: a remote has the base but fetching it failed
            ConflictError: branch checked out elsewhere and ``sibling`` not set
            FileSystemError: target directory unusable
            VcsError: git failed while adding the worktree
        """
        feature = FeatureName.validate(name)

        with self._worktree_context(feature.value):
            if self.registry.find(feature.value) is not None:
                raise ValidationError(
                    f"Worktree '{feature.value}' already exists", ErrorKind.ALREADY_EXISTS
                )

            base = base_ref or self.default_base or self.repository.default_branch
            branch, reuse_existing = self._plan_branch(feature.value, sibling)
            target = os.path.join(self.worktrees_root, feature.value)
            self._check_target(target)

            start_point = self._resolve_start_point(base)
            self._ensure_root()

            logger.info(
                f"Creating worktree {feature.value} at {target} "
                f"({'reusing' if reuse_existing else 'new'} branch {branch} from {start_point})"
            )
            self.vcs.add_worktree(target, branch, start_point, reuse_existing)
            self.vcs.set_branch_base(branch, base)

            record = WorktreeRecord(
                name=feature.value,
                branch=branch,
                base_ref=base,
                path=target,
                is_active=is_within(self.current_path, target),
                status=StatusBundle.clean(),
            )
            self.registry.add(record, WorktreeInfo(path=target, branch_name=branch))
            return record

    def _plan_branch(self, name: str, sibling: bool) -> tuple[str, bool]:
        """Decide which branch the new worktree uses.

        Returns:
            Tuple of (branch name, reuse existing branch)
        """
        if not self.vcs.branch_exists(name):
            return name, False

        checkouts = self.registry.branch_checkouts()
        if name not in checkouts:
            logger.debug(f"Reusing existing branch {name}")
            return name, True

        if not sibling:
            raise ConflictError(name, checkouts[name])

        sibling_branch = self._next_sibling_branch(name, checkouts)
        logger.debug(f"Branch {name} is checked out at {checkouts[name]}; using {sibling_branch}")
        return sibling_branch, False

    def _next_sibling_branch(self, name: str, checkouts: dict[str, str]) -> str:
        taken = set(self.vcs.local_branches()) | set(checkouts)
        suffix = SIBLING_START
        while f"{name}-{suffix}" in taken:
            suffix += 1
        return f"{name}-{suffix}"

    def _resolve_start_point(self, base: str) -> str:
        """Find a commit to branch from, fetching ``base`` from a remote if needed."""
        if self.vcs.ref_exists(base):
            return base

        remotes = sorted(self.repository.remotes, key=lambda remote: remote.name != "origin")
        for remote in remotes:
            if self.vcs.remote_has_ref(remote.name, base):
                logger.info(f"Fetching {base} from {remote.name}")
                self.vcs.fetch(remote.name, base)
                return f"{remote.name}/{base}"

        raise RefNotFoundError(base)

    @staticmethod
    def _check_target(target: str) -> None:
        if not os.path.exists(target):
            return
        if not os.path.isdir(target):
            raise FileSystemError(target, "Target path exists and is not a directory")
        if os.listdir(target):
            raise FileSystemError(target, "Target directory already exists and is not empty")

    def _ensure_root(self) -> None:
        try:
            os.makedirs(self.worktrees_root, exist_ok=True)
        except OSError as e:
            raise FileSystemError(self.worktrees_root, f"Cannot create worktrees root ({e.strerror})") from e

    # Switch

    def switch_to(self, name: str) -> SwitchResult:
        """Make ``name`` the current worktree of this command.

        The previous worktree is left untouched; a dirty previous worktree
        only produces a warning.

        Raises:
            NotFoundError: no worktree with that name
        """
        with self._worktree_context(FeatureName.normalize(name)):
            target = self._get_record(name)
            previous = self.registry.active()

            warnings = []
            if previous is not None:
                try:
                    status = self.resolver.resolve_status(previous)
                except VcsError as e:
                    logger.warning(f"Could not read status of {previous.name}: {e}")
                    warnings.append(f"could not read status of '{previous.name}'")
                else:
                    if status.is_dirty:
                        warnings.append(f"'{previous.name}' has uncommitted changes")

            self.current_path = target.path
            self.registry.set_current_path(target.path)
            logger.info(f"Switched to {target.name} at {target.path}")
            return SwitchResult(current=target, previous=previous, warnings=warnings)

    # Remove

    def remove(
        self,
        name: str,
        force: bool = False,
        delete_branch: bool = False,
        merge_base: Optional[str] = None,
    ) -> RemovalResult:
        """Remove a worktree, and optionally its branch.

        Args:
            name: Worktree to remove
            force: Discard untracked files
            delete_branch: Also delete the branch when it is merged into the base
            merge_base: Base for the merged check; defaults to the repository
                default branch

        Returns:
            RemovalResult; partial when the branch had to be kept

        Raises:
            NotFoundError: no worktree with that name
            RefNotFoundError: ``delete_branch`` with a base that does not exist
            UnsafeError: a safety precondition failed
            VcsError: git failed
        """
        with self._worktree_context(FeatureName.normalize(name)):
            record = self._get_record(name)

            base = None
            if delete_branch:
                base = merge_base or self.repository.default_branch
                if not self.vcs.ref_exists(base):
                    raise RefNotFoundError(base)

            status = self.resolver.resolve_status(record)
            decision = self.gate.check_removal(record, status, force)
            if not decision.allowed:
                raise UnsafeError(record.name, decision.reasons)

            logger.info(f"Removing worktree {record.name} at {record.path}")
            self.vcs.remove_worktree(record.path, force=force)
            self.registry.discard(record)
            result = RemovalResult(name=record.name, removed=True, branch_deleted=False, branch=record.branch)

            if not delete_branch:
                return result

            if record.branch is None:
                result.reasons.append("worktree had a detached HEAD, no branch to delete")
                return result

            branch_decision = self.gate.check_branch_deletion(record.branch, base)
            if branch_decision.allowed:
                logger.info(f"Deleting branch {record.branch}")
                self.vcs.delete_branch(record.branch)
                result.branch_deleted = True
            else:
                result.reasons.extend(branch_decision.reasons)
            return result

    # Queries

    def current(self) -> Optional[WorktreeRecord]:
        """Active worktree with its status resolved, or None outside any worktree."""
        record = self.registry.active()
        if record is not None:
            with self._worktree_context(record.name):
                self.resolver.resolve_status(record)
        return record

    def list(self, query: Optional[ListQuery] = None, with_status: bool = False) -> ListPage:
        """One page of worktrees matching ``query``."""
        query = query or ListQuery()
        records = self.registry.list()
        if query.needs_status:
            # Filter on resolved status so the total counts only matching worktrees
            self.resolver.resolve_all(records)
        page = ListQueryEngine.apply(query, records)
        if with_status:
            self.resolver.resolve_all(page.items)
        return page
