"""List query models."""

import math
from dataclasses import dataclass, field
from typing import Optional

from git_worktrees.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from git_worktrees.models.worktree import WorktreeRecord


@dataclass(frozen=True)
class ListQuery:
    """Validated filter and pagination parameters for one list request."""
    filter_name: Optional[str] = None  # case-insensitive substring of name
    filter_base: Optional[str] = None  # exact match on base_ref
    filter_status: Optional[str] = None  # clean, dirty or active
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def needs_status(self) -> bool:
        """True when filtering depends on resolved worktree status."""
        return self.filter_status in ("clean", "dirty")


@dataclass
class ListPage:
    """One page of filtered worktrees."""
    items: list[WorktreeRecord]
    page: int
    page_size: int
    total: int  # post-filter, pre-pagination count
    filters: dict = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
        }
