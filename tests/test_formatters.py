"""Tests for output formatters"""
import csv
import io
import json
from dataclasses import replace

from rich.console import Console

from git_worktrees.exceptions import UnsafeError
from git_worktrees.formatters import (
    format_removal_result,
    format_status_flags,
    format_unsafe,
    format_worktree_table,
    worktrees_to_csv,
    worktrees_to_json,
)
from git_worktrees.models.list_query import ListPage
from git_worktrees.models.worktree import (
    OperationInProgress,
    RemovalResult,
    StatusBundle,
    WorktreeRecord,
)


def _record(name="001-a", branch="001-a", status=None, active=False):
    return WorktreeRecord(name=name, branch=branch, base_ref="main", path=f"/w/{name}", is_active=active, status=status)


class TestFormatStatusFlags:
    """Test compact status flags."""

    def test_unresolved(self):
        assert format_status_flags(_record()) == ""

    def test_clean(self):
        status = replace(StatusBundle.clean(), upstream="origin/001-a")
        assert format_status_flags(_record(status=status)) == "clean"

    def test_all_flags(self):
        status = StatusBundle(
            is_dirty=True,
            has_untracked=True,
            has_unpushed_commits=True,
            upstream="origin/001-a",
            op_in_progress=OperationInProgress.REBASE,
            checked_out=True,
        )
        assert format_status_flags(_record(status=status)) == "M U ↑ ⚠rebase"

    def test_no_upstream_and_detached(self):
        assert format_status_flags(_record(status=StatusBundle.clean())) == "✗"
        detached = _record(branch=None, status=StatusBundle.clean(checked_out=False))
        assert format_status_flags(detached) == "⊘"


class TestTable:
    def test_table_rows(self):
        table = format_worktree_table([_record(active=True), _record("002-b", "002-b")], show_status=False)
        assert [column.header for column in table.columns] == ["", "Worktree", "Branch", "Base", "Path"]
        assert table.row_count == 2

        console = Console(file=io.StringIO(), width=200)
        console.print(table)
        output = console.file.getvalue()
        assert "001-a" in output
        assert "/w/002-b" in output


class TestExport:
    """Test JSON and CSV output."""

    def test_json(self):
        page = ListPage(items=[_record()], page=1, page_size=20, total=1, filters={"name": "a"})
        data = json.loads(worktrees_to_json(page))
        assert data["total"] == 1
        assert data["pageSize"] == 20
        assert data["totalPages"] == 1
        assert data["filters"] == {"name": "a"}
        assert data["items"][0]["name"] == "001-a"
        assert data["items"][0]["base_ref"] == "main"

    def test_csv(self):
        records = [_record(status=StatusBundle.clean()), _record("002-b", branch=None)]
        rows = list(csv.DictReader(io.StringIO(worktrees_to_csv(records))))
        assert rows[0] == {
            "name": "001-a",
            "branch": "001-a",
            "base_ref": "main",
            "path": "/w/001-a",
            "active": "False",
            "status": "clean",
        }
        assert rows[1]["branch"] == ""
        assert rows[1]["status"] == ""


class TestMessages:
    def test_format_unsafe_lists_every_reason(self):
        error = UnsafeError("002-b", ["tracked changes present", "untracked files present, use force"])
        assert format_unsafe(error) == (
            "Cannot remove '002-b':\n"
            "  • tracked changes present\n"
            "  • untracked files present, use force"
        )

    def test_removal_result(self):
        assert format_removal_result(RemovalResult("001-a", True, True, branch="001-a")) == (
            "Removed worktree '001-a' and deleted branch '001-a'"
        )
        partial = RemovalResult("001-a", True, False, branch="001-a", reasons=["not merged"])
        assert format_removal_result(partial) == "Removed worktree '001-a', kept branch '001-a':\n  • not merged"
