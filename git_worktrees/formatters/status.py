"""Status flag and safety message formatting utilities."""

from git_worktrees.constants import (
    SYMBOL_ACTIVE,
    SYMBOL_DETACHED,
    SYMBOL_DIRTY,
    SYMBOL_INACTIVE,
    SYMBOL_NO_UPSTREAM,
    SYMBOL_OPERATION,
    SYMBOL_UNPUSHED,
    SYMBOL_UNTRACKED,
)
from git_worktrees.exceptions import UnsafeError
from git_worktrees.models.worktree import OperationInProgress, RemovalResult, WorktreeRecord


def format_active(record: WorktreeRecord) -> str:
    """Marker shown in the first table column."""
    return SYMBOL_ACTIVE if record.is_active else SYMBOL_INACTIVE


def format_status_flags(record: WorktreeRecord) -> str:
    """
    Format a worktree's derived status as compact flags.

    Args:
        record: Worktree record, resolved or not

    Returns:
        Space-separated flags such as ``"M U ↑ ⚠rebase"``, ``"clean"`` when
        nothing is flagged, or an empty string when status was not resolved

    Example:
        A detached worktree with untracked files renders as ``"U ⊘"``.
    """
    status = record.status
    if status is None:
        return ""

    flags = []
    if status.is_dirty:
        flags.append(SYMBOL_DIRTY)
    if status.has_untracked:
        flags.append(SYMBOL_UNTRACKED)
    if status.has_unpushed_commits:
        flags.append(SYMBOL_UNPUSHED)
    if not status.checked_out:
        flags.append(SYMBOL_DETACHED)
    elif not status.upstream:
        flags.append(SYMBOL_NO_UPSTREAM)
    if status.op_in_progress is not OperationInProgress.NONE:
        flags.append(f"{SYMBOL_OPERATION}{status.op_in_progress.value}")

    return " ".join(flags) if flags else "clean"


def format_unsafe(error: UnsafeError) -> str:
    """
    Format a refused removal as a bullet list of every failed precondition.

    Example:
        "Cannot remove '002-b':\\n  • untracked files present, use force"
    """
    lines = [f"Cannot remove '{error.name}':"]
    lines.extend(f"  • {reason}" for reason in error.reasons)
    return "\n".join(lines)


def format_removal_result(result: RemovalResult) -> str:
    """One-line summary of a removal, followed by any kept-branch reasons."""
    if not result.removed:
        return f"Worktree '{result.name}' was not removed"

    message = f"Removed worktree '{result.name}'"
    if result.branch_deleted:
        message += f" and deleted branch '{result.branch}'"
    elif result.reasons:
        message += ", kept branch"
        if result.branch:
            message += f" '{result.branch}'"
        message += ":\n" + "\n".join(f"  • {reason}" for reason in result.reasons)
    return message
