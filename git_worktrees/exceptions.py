"""Custom exceptions for git-worktrees"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Machine-readable classification carried by every error."""
    # Validation
    INVALID_FORMAT = "invalid-format"
    RESERVED = "reserved"
    ALREADY_EXISTS = "already-exists"
    INVALID_ARGUMENT = "invalid-argument"
    # Preconditions
    NOT_A_REPOSITORY = "not-a-repository"
    NO_DEFAULT_BRANCH = "no-default-branch"
    REF_NOT_FOUND = "ref-not-found"
    FETCH_FAILED = "fetch-failed"
    # State
    CONFLICT = "conflict"
    NOT_FOUND = "not-found"
    UNSAFE = "unsafe"
    # Environment
    VCS = "vcs"
    FILESYSTEM = "filesystem"
    INVALID_CONFIG = "invalid-config"


class WorktreesError(Exception):
    """Base exception for all git-worktrees errors."""

    kind: ErrorKind = ErrorKind.VCS

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        if kind is not None:
            self.kind = kind
        self.message = message
        # Name of the worktree being operated on, filled in by the manager
        self.worktree: Optional[str] = None
        super().__init__(message)


class ValidationError(WorktreesError):
    """Exception raised when user input fails validation."""

    kind = ErrorKind.INVALID_FORMAT


class PreconditionError(WorktreesError):
    """Exception raised when the repository is not in a usable state."""


class NotARepositoryError(PreconditionError):
    """Exception raised when the current location is outside any repository."""

    kind = ErrorKind.NOT_A_REPOSITORY

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class NoDefaultBranchError(PreconditionError):
    """Exception raised when no default branch can be determined."""

    kind = ErrorKind.NO_DEFAULT_BRANCH

    def __init__(self):
        super().__init__("Cannot determine the repository's default branch")


class RefNotFoundError(PreconditionError):
    """Exception raised when a ref does not exist locally or on any remote."""

    kind = ErrorKind.REF_NOT_FOUND

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Reference '{ref}' not found")


class FetchFailedError(PreconditionError):
    """Exception raised when fetching a ref from a remote fails."""

    kind = ErrorKind.FETCH_FAILED

    def __init__(self, remote: str, ref: str, message: Optional[str] = None):
        self.remote = remote
        self.ref = ref

        error_msg = f"Failed to fetch '{ref}' from remote '{remote}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConflictError(WorktreesError):
    """Exception raised when a branch is already checked out in another worktree."""

    kind = ErrorKind.CONFLICT

    def __init__(self, branch: str, path: str):
        self.branch = branch
        self.path = path
        super().__init__(
            f"Branch '{branch}' is already checked out at {path}. "
            "Use --sibling to create a separate branch for the new worktree"
        )


class NotFoundError(WorktreesError):
    """Exception raised when a worktree or branch does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, name: str, what: str = "Worktree"):
        self.name = name
        super().__init__(f"{what} '{name}' not found")


class UnsafeError(WorktreesError):
    """Exception raised when a safety precondition blocks a destructive operation."""

    kind = ErrorKind.UNSAFE

    def __init__(self, name: str, reasons: list[str]):
        self.name = name
        self.reasons = list(reasons)
        super().__init__(f"Refusing to remove worktree '{name}': {'; '.join(self.reasons)}")


class VcsError(WorktreesError):
    """Exception raised for errors in Git operations."""

    kind = ErrorKind.VCS

    def __init__(
        self,
        operation: str,
        target: Optional[str] = None,
        message: Optional[str] = None,
        status: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        self.operation = operation
        self.target = target
        self.status = status
        self.stderr = stderr

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class FileSystemError(WorktreesError):
    """Exception raised when a worktree directory cannot be created or used."""

    kind = ErrorKind.FILESYSTEM

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class ConfigError(WorktreesError):
    """Exception raised for invalid configuration values or files."""

    kind = ErrorKind.INVALID_CONFIG
