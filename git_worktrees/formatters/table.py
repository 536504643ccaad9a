"""Rich table formatting for worktree listings."""

from typing import Optional

from rich.table import Table

from git_worktrees.constants import COLUMNS
from git_worktrees.models.repository import Repository
from git_worktrees.models.worktree import WorktreeRecord
from git_worktrees.formatters.status import format_active, format_status_flags


def format_branch(record: WorktreeRecord) -> str:
    return record.branch if record.branch else "(detached)"


def format_worktree_table(records: list[WorktreeRecord], show_status: bool = True) -> Table:
    """
    Build a table of worktrees.

    Args:
        records: Worktrees to show, in display order
        show_status: Include the status column (requires resolved records)

    Returns:
        rich Table ready to print
    """
    table = Table()
    columns = [col for col in COLUMNS if show_status or col.key != "status"]
    for col in columns:
        table.add_column(col.label, width=col.width or None, no_wrap=col.key != "path")

    for record in records:
        values = {
            "active": format_active(record),
            "name": record.name,
            "branch": format_branch(record),
            "base": record.base_ref,
            "status": format_status_flags(record),
            "path": record.path,
        }
        style = "bold green" if record.is_active else None
        table.add_row(*(values[col.key] for col in columns), style=style)

    return table


def format_repository_info(repository: Repository, worktrees_root: str, current: Optional[WorktreeRecord]) -> Table:
    """Two-column key/value table for the status command."""
    table = Table(show_header=False, box=None)
    table.add_column("key", style="bold")
    table.add_column("value")

    table.add_row("Repository", repository.root_path)
    table.add_row("Default branch", repository.default_branch)
    table.add_row("Worktrees root", worktrees_root)
    remotes = ", ".join(f"{remote.name} ({remote.url})" for remote in repository.remotes)
    table.add_row("Remotes", remotes or "(none)")

    if current is not None:
        table.add_row("Worktree", current.name)
        table.add_row("Branch", format_branch(current))
        table.add_row("Base", current.base_ref)
        table.add_row("Path", current.path)
        table.add_row("Status", format_status_flags(current))

    return table
