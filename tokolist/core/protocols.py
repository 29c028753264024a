"""Protocol definitions for dependency injection."""

from typing import Any, Dict, Optional, Protocol, Union

from tokolist.domain.session import Session

RecordKey = Union[int, str]


class PageSource(Protocol):
    async def fetch_page(self, toko_id: RecordKey, page: int, limit: int) -> Any: ...


class DetailSource(Protocol):
    async def fetch_detail(self, record_id: RecordKey) -> Any: ...


class SessionPort(Protocol):
    def get_user(self) -> Optional[Session]: ...

    def save_user(self, session: Session) -> bool: ...

    def remove_user(self) -> bool: ...


class RecordActionSource(Protocol):
    async def update_status(
        self, record_id: RecordKey, payload: Dict[str, Any], method: str = "PATCH"
    ) -> Any: ...

    async def cancel(self, record_id: RecordKey) -> Any: ...
