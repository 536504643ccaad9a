"""Display service for worktree information"""

import json
from typing import Optional

from rich.console import Console

from git_worktrees.constants import LEGEND_TEXT
from git_worktrees.exceptions import UnsafeError, WorktreesError
from git_worktrees.formatters import (
    format_removal_result,
    format_repository_info,
    format_unsafe,
    format_worktree_table,
    worktrees_to_csv,
    worktrees_to_json,
)
from git_worktrees.models.list_query import ListPage
from git_worktrees.models.repository import Repository
from git_worktrees.models.worktree import RemovalResult, SwitchResult, WorktreeRecord
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


class DisplayService:
    """Prints command results to the terminal."""

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        verbose: bool = False,
    ):
        self.console = console or Console()
        # Warnings and errors stay off stdout so `cd $(worktrees switch -p NAME)` works
        self.err_console = err_console or Console(stderr=True)
        self.verbose = verbose

    def display_page(self, page: ListPage, output_format: str = "text", show_status: bool = False) -> None:
        """Print one listing page in the requested format."""
        if output_format == "json":
            # Plain print so rich does not re-highlight or wrap the payload
            self.console.print(worktrees_to_json(page), markup=False, highlight=False, soft_wrap=True)
            return
        if output_format == "csv":
            self.console.print(worktrees_to_csv(page.items), end="", markup=False, highlight=False, soft_wrap=True)
            return

        if not page.items:
            if page.total:
                self.console.print(f"[yellow]Page {page.page} is empty ({page.total} worktree(s) in {page.total_pages} page(s))[/yellow]")
            else:
                self.console.print("[yellow]No worktrees found[/yellow]")
            return

        self.console.print(format_worktree_table(page.items, show_status=show_status))
        if page.total_pages > 1:
            self.console.print(f"Page {page.page} of {page.total_pages} ({page.total} worktrees)")
        if show_status and self.verbose:
            self.console.print(LEGEND_TEXT)

    def display_created(self, record: WorktreeRecord) -> None:
        self.console.print(
            f"[green]Created worktree '{record.name}'[/green] on branch "
            f"[cyan]{record.branch}[/cyan] from [cyan]{record.base_ref}[/cyan]"
        )
        self.console.print(f"  {record.path}", markup=False, highlight=False)

    def display_switch(self, result: SwitchResult, path_only: bool = False) -> None:
        """Print the switch target; with ``path_only`` print just the path for ``cd $(...)``."""
        for warning in result.warnings:
            self.warn(warning)

        if path_only:
            self.console.print(result.current.path, markup=False, highlight=False, soft_wrap=True)
            return

        self.console.print(f"Switched to worktree [cyan]{result.current.name}[/cyan]")
        self.console.print(f"  cd {result.current.path}", markup=False, highlight=False)

    def display_removal(self, result: RemovalResult) -> None:
        style = "yellow" if result.partial else "green"
        self.console.print(format_removal_result(result), style=style, markup=False, highlight=False)

    def display_status(
        self,
        repository: Repository,
        worktrees_root: str,
        current: Optional[WorktreeRecord],
        output_format: str = "text",
    ) -> None:
        if output_format == "json":
            payload = {
                "repository": repository.to_dict(),
                "worktrees_root": worktrees_root,
                "current": current.to_dict() if current else None,
            }
            self.console.print(json.dumps(payload, indent=2), markup=False, highlight=False, soft_wrap=True)
            return

        self.console.print(format_repository_info(repository, worktrees_root, current))
        if current is None:
            self.console.print("[yellow]Not inside a feature worktree[/yellow]")

    def warn(self, message: str) -> None:
        self.err_console.print(f"[yellow]Warning: {message}[/yellow]")

    def display_error(self, error: Exception) -> None:
        """Print an error; unsafe removals list every reason."""
        if isinstance(error, UnsafeError):
            self.err_console.print(format_unsafe(error), style="red", markup=False, highlight=False)
            return

        message = str(error)
        if isinstance(error, WorktreesError) and error.worktree and error.worktree not in message:
            message = f"{error.worktree}: {message}"
        self.err_console.print(f"Error: {message}", style="red", markup=False, highlight=False)
