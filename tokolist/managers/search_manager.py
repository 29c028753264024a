"""Search manager - client-side filtering of a loaded collection."""

import logging
from typing import Any, List, Sequence

logger = logging.getLogger("TokoList.SearchManager")


class SearchManager:
    """Filters records whose ``field`` contains the query, case-insensitively.

    The filter only sees what has already been loaded; it never triggers a
    fetch.
    """

    def __init__(self, field: str = "nama_produk"):
        self.field = field
        self.query: str = ""

    @property
    def active(self) -> bool:
        return bool(self.query.strip())

    def set_query(self, query: str) -> None:
        self.query = query or ""
        logger.debug("Search query set to %r", self.query)

    def clear(self) -> None:
        self.query = ""

    def matches(self, record: Any) -> bool:
        if not self.active:
            return True
        value = record.get(self.field) if isinstance(record, dict) else None
        if not isinstance(value, str):
            return False
        return self.query.strip().lower() in value.lower()

    def apply(self, items: Sequence[Any]) -> List[Any]:
        if not self.active:
            return list(items)
        return [item for item in items if self.matches(item)]
