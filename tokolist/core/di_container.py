"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import Optional

import httpx

from tokolist.config import AppPaths, SettingsManager
from tokolist.core.protocols import SessionPort
from tokolist.domain.session import Session
from tokolist.managers import (
    DetailLoader,
    FetchGuard,
    ListLoaderManager,
    RecordActions,
    SearchManager,
)
from tokolist.services import ApiClient, SessionService


@dataclass
class AppContainer:
    settings: SettingsManager
    paths: AppPaths
    transport: Optional[httpx.AsyncBaseTransport] = None

    _api_client: Optional[ApiClient] = field(
        default=None, init=False, repr=False
    )
    _session_service: Optional[SessionPort] = field(
        default=None, init=False, repr=False
    )

    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            self._api_client = ApiClient(
                self.settings.base_url,
                timeout=self.settings.timeout,
                transport=self.transport,
            )
        return self._api_client

    @property
    def session_service(self) -> SessionPort:
        if self._session_service is None:
            path = self.settings.settings.session.path or self.paths.session_path
            self._session_service = SessionService(path)
        return self._session_service

    def list_loader(
        self,
        resource: str,
        session: Optional[Session] = None,
        search_field: str = "nama_produk",
    ) -> ListLoaderManager:
        if session is None:
            session = self.session_service.get_user()
        return ListLoaderManager(
            self.api_client.resource(resource),
            session,
            page_size=self.settings.page_size,
            guard=FetchGuard(min_interval=self.settings.debounce_seconds),
            search_manager=SearchManager(field=search_field),
        )

    def detail_loader(self, resource: str) -> DetailLoader:
        return DetailLoader(self.api_client.resource(resource))

    def record_actions(self, resource: str) -> RecordActions:
        return RecordActions(self.api_client.resource(resource), self.session_service)

    async def aclose(self) -> None:
        if self._api_client is not None:
            await self._api_client.aclose()
            self._api_client = None

    @classmethod
    def create(
        cls,
        settings: Optional[SettingsManager] = None,
        paths: Optional[AppPaths] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContainer":
        paths = paths or AppPaths.default()
        return cls(
            settings=settings or SettingsManager(paths.config_path),
            paths=paths,
            transport=transport,
        )
