"""Service for validating list queries and paging worktree listings"""

from typing import Optional, Union

from git_worktrees.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    STATUS_FILTERS,
)
from git_worktrees.exceptions import ErrorKind, ValidationError
from git_worktrees.models.list_query import ListPage, ListQuery
from git_worktrees.models.worktree import WorktreeRecord

IntLike = Union[int, str]


def _parse_positive_int(value: IntLike, label: str) -> int:
    """Accept ints and digit-only strings; reject everything else."""
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a positive integer, got: {value}", ErrorKind.INVALID_ARGUMENT)
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(f"{label} must be a positive integer, got: {value}", ErrorKind.INVALID_ARGUMENT)
        value = int(text)
    if not isinstance(value, int) or value < 1:
        raise ValidationError(f"{label} must be a positive integer, got: {value}", ErrorKind.INVALID_ARGUMENT)
    return value


class ListQueryEngine:
    """Builds validated ListQuery objects and applies them to registry snapshots."""

    @staticmethod
    def build(
        filter_name: Optional[str] = None,
        filter_base: Optional[str] = None,
        page: Optional[IntLike] = None,
        page_size: Optional[IntLike] = None,
        filter_status: Optional[str] = None,
    ) -> ListQuery:
        """Validate list parameters.

        Raises:
            ValidationError: kind INVALID_ARGUMENT for a bad page, page size
                or status filter
        """
        page = DEFAULT_PAGE if page is None else _parse_positive_int(page, "page")
        page_size = DEFAULT_PAGE_SIZE if page_size is None else _parse_positive_int(page_size, "pageSize")

        if page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE:
            raise ValidationError(
                f"pageSize must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}, got: {page_size}",
                ErrorKind.INVALID_ARGUMENT,
            )

        if filter_status:
            filter_status = filter_status.strip().lower()
            if filter_status not in STATUS_FILTERS:
                raise ValidationError(
                    f"status filter must be one of {', '.join(STATUS_FILTERS)}, got: {filter_status}",
                    ErrorKind.INVALID_ARGUMENT,
                )

        return ListQuery(
            filter_name=filter_name or None,
            filter_base=filter_base or None,
            filter_status=filter_status or None,
            page=page,
            page_size=page_size,
        )

    @staticmethod
    def matches(query: ListQuery, record: WorktreeRecord) -> bool:
        if query.filter_name and query.filter_name.lower() not in record.name.lower():
            return False
        if query.filter_base and record.base_ref != query.filter_base:
            return False
        if query.filter_status == "active":
            return record.is_active
        if query.needs_status:
            # Unresolved records never match a clean/dirty filter
            if record.status is None:
                return False
            is_clean = record.status.label == "clean"
            return is_clean if query.filter_status == "clean" else not is_clean
        return True

    @classmethod
    def apply(cls, query: ListQuery, records: list[WorktreeRecord]) -> ListPage:
        """Filter, then slice one page out of the name-sorted records.

        Clean and dirty filters read ``record.status``, so callers resolve
        status for every record before applying such a query.
        """
        filtered = sorted(
            (record for record in records if cls.matches(query, record)),
            key=lambda record: record.name,
        )
        start = (query.page - 1) * query.page_size
        items = filtered[start:start + query.page_size]

        filters = {}
        if query.filter_name:
            filters["name"] = query.filter_name
        if query.filter_base:
            filters["base"] = query.filter_base
        if query.filter_status:
            filters["status"] = query.filter_status

        return ListPage(
            items=items,
            page=query.page,
            page_size=query.page_size,
            total=len(filtered),
            filters=filters,
        )
