"""Manager classes for list loading state."""

from .detail_loader import DetailLoader, RecordDetail
from .fetch_guard import FetchGuard, FetchGuardState
from .list_loader_manager import ListLoaderManager, LoaderState, LoaderStatus
from .list_merger import MergeMode, merge
from .pagination_manager import PaginationManager
from .record_actions import RecordActions
from .search_manager import SearchManager

__all__ = [
    "DetailLoader",
    "RecordDetail",
    "FetchGuard",
    "FetchGuardState",
    "ListLoaderManager",
    "LoaderState",
    "LoaderStatus",
    "MergeMode",
    "merge",
    "PaginationManager",
    "RecordActions",
    "SearchManager",
]
