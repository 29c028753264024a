"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePageSource:
    """In-memory page source returning canned envelopes per page number."""

    def __init__(self, pages: Optional[Dict[int, Any]] = None):
        self.pages: Dict[int, Any] = pages or {}
        self.calls: List[Tuple[Any, int, int]] = []
        self.gate: Optional[asyncio.Event] = None
        self.started: Optional[asyncio.Event] = None

    def hold(self) -> None:
        """Make the next fetches wait until ``release`` is called."""
        self.gate = asyncio.Event()
        self.started = asyncio.Event()

    def release(self) -> None:
        if self.gate is not None:
            self.gate.set()

    async def fetch_page(self, toko_id, page: int, limit: int) -> Any:
        self.calls.append((toko_id, page, limit))
        if self.started is not None:
            self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        response = self.pages.get(page, [])
        if isinstance(response, BaseException):
            raise response
        return response


def _make_page(ids, page: int, total: int, total_pages: int) -> Dict[str, Any]:
    return {
        "success": True,
        "data": [{"id": i, "nama_produk": f"Produk {i}"} for i in ids],
        "pagination": {"page": page, "total": total, "totalPages": total_pages},
    }


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page_source() -> FakePageSource:
    return FakePageSource()


@pytest.fixture
def session():
    from tokolist.domain.session import Session, User

    return Session(
        token="abc",
        user=User(id=7, toko_id=3, nama_lengkap="Siti", username="siti", role="admin"),
    )


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"


@pytest.fixture
def temp_session_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "session.json"


@pytest.fixture
def make_page():
    """Build a ``{data: [...], pagination}`` envelope for the given ids."""
    return _make_page
