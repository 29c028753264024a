"""Pagination state management for infinite scroll."""

import logging
from typing import Any, Mapping

from tokolist.domain.pagination import PaginationState, next_state

logger = logging.getLogger("TokoList.PaginationManager")


class PaginationManager:
    def __init__(self, page_size: int = 10):
        self.page_size = page_size
        self.state = PaginationState.initial(page_size)

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    @property
    def next_page(self) -> int:
        return self.state.next_page

    def apply(self, pagination_info: Mapping[str, Any], requested_page: int) -> PaginationState:
        previous = self.state
        self.state = next_state(previous, pagination_info, requested_page)
        if previous.total_pages and previous.total_pages != self.state.total_pages:
            # Rows were added or removed server-side while paging
            logger.warning(
                "Total pages changed from %d to %d while paging",
                previous.total_pages,
                self.state.total_pages,
            )
        return self.state

    def reset(self) -> None:
        self.state = PaginationState.initial(self.page_size)
