"""Admin actions on listed records: reviewing returns and cancellations."""

import logging
from typing import Any, Optional

from tokolist.core.protocols import RecordActionSource, RecordKey, SessionPort
from tokolist.errors import PreconditionError
from tokolist.managers.list_loader_manager import ListLoaderManager

logger = logging.getLogger("TokoList.RecordActions")

RETURN_APPROVED = "approved"
RETURN_REJECTED = "rejected"


class RecordActions:
    """Sends status changes for one resource, then reloads its list.

    Args:
        source: Endpoints of the resource being changed
        sessions: Store holding the signed-in user, used as ``admin_id``
    """

    def __init__(self, source: RecordActionSource, sessions: SessionPort):
        self.source = source
        self.sessions = sessions

    def _admin_id(self) -> RecordKey:
        session = self.sessions.get_user()
        if session is None or session.user is None:
            raise PreconditionError("User not found in session")
        return session.user.id

    async def review_return(
        self,
        record_id: RecordKey,
        approve: bool,
        loader: Optional[ListLoaderManager] = None,
    ) -> Any:
        status = RETURN_APPROVED if approve else RETURN_REJECTED
        admin_id = self._admin_id()
        body = await self.source.update_status(
            record_id, {"status": status, "admin_id": admin_id}
        )
        logger.info("Return %s marked %s by admin %s", record_id, status, admin_id)
        await self._reload(loader)
        return body

    async def cancel(
        self, record_id: RecordKey, loader: Optional[ListLoaderManager] = None
    ) -> Any:
        body = await self.source.cancel(record_id)
        logger.info("Record %s cancelled", record_id)
        await self._reload(loader)
        return body

    async def _reload(self, loader: Optional[ListLoaderManager]) -> None:
        if loader is not None:
            await loader.reload()
