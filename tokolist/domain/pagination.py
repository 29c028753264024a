"""Pagination state for page-numbered list endpoints."""

import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PaginationState:
    """Position of a list within the server-side result set.

    ``total`` and ``total_pages`` only carry meaning once a page has been
    fetched; the initial state is a placeholder that allows the first load.
    """

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0
    has_more: bool = True

    @classmethod
    def initial(cls, limit: int = 10) -> "PaginationState":
        return cls(page=1, limit=limit)

    @property
    def next_page(self) -> int:
        return self.page + 1


def _positive_int(value: Any) -> Optional[int]:
    """Coerce a metadata value, treating zero, junk and bools as absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def next_state(
    current: PaginationState,
    pagination_info: Mapping[str, Any],
    requested_page: int,
) -> PaginationState:
    """Compute the state after a page has been fetched.

    Without any metadata the list is assumed to be a single page, so
    ``has_more`` turns false rather than paging forever.
    """
    page = _positive_int(pagination_info.get("page")) or requested_page
    total = _positive_int(pagination_info.get("total")) or 0
    total_pages = (
        _positive_int(pagination_info.get("totalPages"))
        or _positive_int(pagination_info.get("totalPage"))
        or math.ceil(total / current.limit)
        or 1
    )
    return replace(
        current,
        page=page,
        total=total,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
