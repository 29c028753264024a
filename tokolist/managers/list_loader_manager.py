"""List Loader Manager - first load, pull-to-refresh and infinite scroll."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from tokolist.core.protocols import PageSource
from tokolist.domain.pagination import PaginationState
from tokolist.domain.session import Session
from tokolist.errors import PreconditionError, TokoListError, raise_for_payload
from tokolist.managers.fetch_guard import FetchGuard
from tokolist.managers.list_merger import MergeMode, merge_page
from tokolist.managers.pagination_manager import PaginationManager
from tokolist.managers.search_manager import SearchManager
from tokolist.utils.response_normalizer import normalize

logger = logging.getLogger("TokoList.ListLoader")


class LoaderStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    REFRESHING = "refreshing"
    LOADING_MORE = "loading_more"
    ERROR = "error"


@dataclass(frozen=True)
class LoaderState:
    """Snapshot handed to screens and observers."""

    status: LoaderStatus = LoaderStatus.IDLE
    items: List[Any] = field(default_factory=list)
    visible_items: List[Any] = field(default_factory=list)
    pagination: PaginationState = field(default_factory=PaginationState)
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is LoaderStatus.LOADING

    @property
    def refreshing(self) -> bool:
        return self.status is LoaderStatus.REFRESHING

    @property
    def loading_more(self) -> bool:
        return self.status is LoaderStatus.LOADING_MORE

    @property
    def is_empty(self) -> bool:
        return self.status is LoaderStatus.READY and not self.items


class ListLoaderManager:
    """Loads a paginated list page by page into one growing collection.

    Only one fetch runs at a time; ``load_next_page`` calls arriving while a
    fetch is in flight, or inside the debounce window, are dropped.
    """

    def __init__(
        self,
        source: PageSource,
        session: Optional[Session],
        page_size: int = 10,
        guard: Optional[FetchGuard] = None,
        search_manager: Optional[SearchManager] = None,
        key: str = "id",
    ):
        """Initialize ListLoaderManager.

        Args:
            source: Fetches raw pages for a store
            session: Session of the signed-in user; must carry a toko_id
            page_size: Number of records requested per page
            guard: Fetch guard, a default 500ms one is created if omitted
            search_manager: Client-side filter applied to visible items
            key: Record field used to detect duplicates
        """
        self.source = source
        self.session = session
        self.pagination = PaginationManager(page_size=page_size)
        self.guard = guard or FetchGuard()
        self.search_manager = search_manager or SearchManager()
        self.key = key

        self._status = LoaderStatus.IDLE
        self._items: List[Any] = []
        self._error: Optional[str] = None
        self._disposed = False
        self._observers: List[Callable[[LoaderState], None]] = []

    @property
    def state(self) -> LoaderState:
        return LoaderState(
            status=self._status,
            items=list(self._items),
            visible_items=self.search_manager.apply(self._items),
            pagination=self.pagination.state,
            error=self._error,
        )

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_observer(self, observer: Callable[[LoaderState], None]) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Callable[[LoaderState], None]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        snapshot = self.state
        for observer in list(self._observers):
            observer(snapshot)

    def _set_status(self, status: LoaderStatus) -> None:
        self._status = status
        self._notify()

    def set_search_query(self, query: str) -> None:
        self.search_manager.set_query(query)
        self._notify()

    def dispose(self) -> None:
        """Detach the loader; results of fetches still in flight are dropped."""
        self._disposed = True
        self._observers.clear()

    async def load_first_page(self) -> bool:
        if self._status not in (LoaderStatus.IDLE, LoaderStatus.ERROR):
            logger.debug("Skip first load: loader is %s", self._status.value)
            return False
        return await self._fetch(1, MergeMode.REPLACE, LoaderStatus.LOADING, clear_on_error=True)

    async def refresh(self) -> bool:
        if self._status is not LoaderStatus.READY:
            logger.debug("Skip refresh: loader is %s", self._status.value)
            return False
        return await self._fetch(1, MergeMode.REPLACE, LoaderStatus.REFRESHING, clear_on_error=False)

    async def reload(self) -> bool:
        """Start over from page 1 after the records changed server-side."""
        if self._status is LoaderStatus.READY:
            return await self.refresh()
        return await self.load_first_page()

    async def load_next_page(self) -> bool:
        if self._status is not LoaderStatus.READY or not self.pagination.has_more:
            return False
        if self.search_manager.active:
            logger.debug("Skip load more: search is active")
            return False
        return await self._fetch(
            self.pagination.next_page,
            MergeMode.APPEND,
            LoaderStatus.LOADING_MORE,
            clear_on_error=False,
        )

    async def _fetch(
        self,
        page: int,
        mode: MergeMode,
        status: LoaderStatus,
        clear_on_error: bool,
    ) -> bool:
        if self._disposed:
            return False
        if self.session is None or not self.session.has_toko:
            self._fail(PreconditionError(), page, clear_on_error)
            return False
        if not self.guard.try_acquire():
            return False

        previous = self._status
        try:
            if status is LoaderStatus.REFRESHING:
                self.search_manager.clear()
            self._set_status(status)
            logger.info("Fetching page %d for toko %s", page, self.session.toko_id)
            raw = await self.source.fetch_page(
                self.session.toko_id, page, self.pagination.page_size
            )
            # ApiClient has already checked the body; other sources may not
            raise_for_payload(raw)
        except TokoListError as e:
            if not self._disposed:
                self._fail(e, page, clear_on_error)
            return False
        except BaseException:
            # Cancellation or a programming error; leave state as it was
            if not self._disposed:
                self._set_status(previous)
            raise
        finally:
            self.guard.release()

        if self._disposed:
            logger.debug("Discarding page %d: loader disposed", page)
            return False
        self._apply(raw, page, mode)
        return True

    def _apply(self, raw: Any, page: int, mode: MergeMode) -> None:
        normalized = normalize(raw, page)

        if mode is MergeMode.APPEND and not normalized.recognized:
            # Treated as an empty page; pagination stays where it was
            self._error = None
            self._set_status(LoaderStatus.READY)
            return

        result = merge_page(self._items, normalized.items, mode, self.key)
        if result.all_dropped:
            logger.warning(
                "Page %d only contained records already loaded (%d dropped)",
                page,
                result.dropped,
            )
        elif result.dropped:
            logger.info("Dropped %d duplicate records from page %d", result.dropped, page)

        self._items = result.items
        state = self.pagination.apply(normalized.pagination_info, page)
        self._error = None
        logger.info(
            "Loaded %d records from page %d (%d/%d pages, has_more=%s)",
            result.added,
            page,
            state.page,
            state.total_pages,
            state.has_more,
        )
        self._set_status(LoaderStatus.READY)

    def _fail(self, error: TokoListError, page: int, clear_items: bool) -> None:
        logger.error("Failed to load page %d: %s", page, error.message)
        self._error = error.message
        if clear_items:
            self._items = []
            self.pagination.reset()
        self._set_status(LoaderStatus.ERROR)
