"""Parsing of ``git worktree list --porcelain`` output."""

from typing import Any, Dict

from git_worktrees.models.worktree import WorktreeInfo
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


def _build_info(entry: Dict[str, Any]) -> WorktreeInfo:
    return WorktreeInfo(
        path=entry["path"],
        branch_name=entry.get("branch"),
        commit_sha=entry.get("HEAD", ""),
        is_main=entry.get("is_main", False),
        is_bare=entry.get("bare", False),
    )


def parse_worktree_porcelain(output: str) -> list[WorktreeInfo]:
    """Parse porcelain worktree output into WorktreeInfo entries.

    Format::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name    (or "detached")
        (blank line between worktrees)

    Args:
        output: Raw stdout of ``git worktree list --porcelain``

    Returns:
        List of WorktreeInfo in git's order; the first entry is the main worktree
    """
    worktree_list: list[WorktreeInfo] = []
    current_worktree: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current_worktree.get("path"):
                worktree_list.append(_build_info(current_worktree))
            current_worktree = {}
            continue

        if line.startswith("worktree "):
            if current_worktree.get("path"):
                worktree_list.append(_build_info(current_worktree))
            current_worktree = {
                "path": line.split(" ", 1)[1],
                # First worktree in list is always the main one
                "is_main": not worktree_list,
            }
        elif line.startswith("HEAD "):
            current_worktree["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current_worktree["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current_worktree["branch"] = None
        elif line == "detached":
            current_worktree["branch"] = None
        elif line == "bare":
            current_worktree["bare"] = True

    # Handle last entry if no trailing blank line
    if current_worktree.get("path"):
        worktree_list.append(_build_info(current_worktree))

    logger.debug(f"Parsed {len(worktree_list)} worktrees")
    for wt in worktree_list:
        logger.debug(f"  {wt}")
    return worktree_list
