"""HTTP client for the toko backend REST API."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from tokolist.core.protocols import RecordKey
from tokolist.errors import TransportError, raise_for_payload

logger = logging.getLogger("TokoList.ApiClient")


class Resource(str, Enum):
    PRODUK = "produk"
    PEMBELIAN = "pembelian"
    RETURN = "return"
    TRANSAKSI = "transaksi"


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class ApiClient:
    """Thin async wrapper around httpx that maps failures to TokoListError.

    Args:
        base_url: Backend root, e.g. ``http://10.0.2.2:3000``
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request_json(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises:
            TransportError: On network failure, non-2xx status or a body that
                is not JSON
            PayloadError: When the body carries ``success: false``
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise TransportError(f"Network error: {e}") from e

        if response.is_error:
            message = _server_message(response) or (
                f"HTTP {response.status_code}: {response.reason_phrase}"
            )
            raise TransportError(message, status_code=response.status_code)

        if method != "GET" and not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                "Response is not valid JSON", status_code=response.status_code
            ) from e

        raise_for_payload(body)
        return body

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request_json("GET", path, params=params)

    def resource(self, name: str) -> "ResourceClient":
        return ResourceClient(self, Resource(name))


class ResourceClient:
    """List and detail endpoints of one backend resource."""

    def __init__(self, api: ApiClient, resource: Resource):
        self.api = api
        self.resource = resource

    def list_path(self, toko_id: RecordKey) -> str:
        return f"/api/{self.resource.value}/toko/{toko_id}"

    def detail_path(self, record_id: RecordKey) -> str:
        return f"/api/{self.resource.value}/{record_id}"

    async def fetch_page(self, toko_id: RecordKey, page: int, limit: int) -> Any:
        return await self.api.get_json(
            self.list_path(toko_id), params={"page": page, "limit": limit}
        )

    async def fetch_detail(self, record_id: RecordKey) -> Any:
        return await self.api.get_json(self.detail_path(record_id))

    async def update_status(
        self, record_id: RecordKey, payload: Dict[str, Any], method: str = "PATCH"
    ) -> Any:
        return await self.api.request_json(
            method, f"{self.detail_path(record_id)}/status", json=payload
        )

    async def cancel(self, record_id: RecordKey) -> Any:
        """Cancel a purchase or a sale.

        Purchases are cancelled by setting their status to ``BATAL``; sales
        have a dedicated cancel endpoint.
        """
        if self.resource is Resource.PEMBELIAN:
            return await self.update_status(record_id, {"status": "BATAL"}, method="PUT")
        if self.resource is Resource.TRANSAKSI:
            return await self.api.request_json(
                "PATCH", f"/api/{self.resource.value}/cancel/{record_id}"
            )
        raise ValueError(f"{self.resource.value} records cannot be cancelled")
