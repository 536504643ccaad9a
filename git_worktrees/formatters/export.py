"""Machine-readable output formats for worktree listings."""

import csv
import io
import json

from git_worktrees.constants import CSV_FIELDS
from git_worktrees.models.list_query import ListPage
from git_worktrees.models.worktree import WorktreeRecord


def worktrees_to_json(page: ListPage) -> str:
    """
    Serialize one listing page as JSON.

    The payload carries ``items``, ``page``, ``pageSize`` and ``total``, plus
    ``totalPages`` and the active ``filters``.
    """
    payload = page.to_dict()
    payload["totalPages"] = page.total_pages
    payload["filters"] = page.filters
    return json.dumps(payload, indent=2)


def worktrees_to_csv(records: list[WorktreeRecord]) -> str:
    """Serialize worktrees as CSV with a header row."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for record in records:
        row = record.to_dict()
        row["branch"] = record.branch or ""
        row["status"] = record.status.label if record.status else ""
        writer.writerow(row)
    return buffer.getvalue()
