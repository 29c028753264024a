"""Tests for ListLoaderManager."""

import asyncio

import pytest


@pytest.fixture
def build_loader(page_source, session, fake_clock):
    from tokolist.managers.fetch_guard import FetchGuard
    from tokolist.managers.list_loader_manager import ListLoaderManager

    def _build(source=None, current_session=session, page_size=2):
        return ListLoaderManager(
            source or page_source,
            current_session,
            page_size=page_size,
            guard=FetchGuard(min_interval=0.5, clock=fake_clock),
        )

    return _build


@pytest.mark.asyncio
async def test_first_page_loads_records(build_loader, page_source, make_page):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=5, total_pages=3)
    loader = build_loader()

    assert await loader.load_first_page() is True

    state = loader.state
    assert state.status is LoaderStatus.READY
    assert [r["id"] for r in state.items] == [1, 2]
    assert state.pagination.total == 5
    assert state.pagination.has_more is True
    assert state.error is None
    assert page_source.calls == [(3, 1, 2)]


@pytest.mark.asyncio
async def test_missing_toko_id_fails_without_network(build_loader, page_source):
    from tokolist.domain.session import Session, User
    from tokolist.managers.list_loader_manager import LoaderStatus

    loader = build_loader(current_session=Session(user=User(id=1)))

    assert await loader.load_first_page() is False

    assert loader.state.status is LoaderStatus.ERROR
    assert loader.state.error == "Toko ID not found in session"
    assert page_source.calls == []


@pytest.mark.asyncio
async def test_no_session_is_precondition_error(build_loader, page_source):
    from tokolist.managers.list_loader_manager import LoaderStatus

    loader = build_loader(current_session=None)

    await loader.load_first_page()

    assert loader.state.status is LoaderStatus.ERROR
    assert page_source.calls == []


@pytest.mark.asyncio
async def test_next_page_appends(build_loader, page_source, make_page, fake_clock):
    page_source.pages[1] = make_page([1, 2], page=1, total=4, total_pages=2)
    page_source.pages[2] = make_page([3, 4], page=2, total=4, total_pages=2)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    assert await loader.load_next_page() is True

    state = loader.state
    assert [r["id"] for r in state.items] == [1, 2, 3, 4]
    assert state.pagination.page == 2
    assert state.pagination.has_more is False
    assert page_source.calls[-1] == (3, 2, 2)


@pytest.mark.asyncio
async def test_next_page_noop_without_more(build_loader, page_source, fake_clock):
    page_source.pages[1] = {"data": [{"id": 1}]}
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    assert await loader.load_next_page() is False
    assert len(page_source.calls) == 1


@pytest.mark.asyncio
async def test_duplicate_on_second_page_is_dropped(
    build_loader, page_source, make_page, fake_clock, caplog
):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=6, total_pages=3)
    page_source.pages[2] = make_page([2], page=2, total=6, total_pages=3)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    with caplog.at_level("WARNING", logger="TokoList.ListLoader"):
        assert await loader.load_next_page() is True

    state = loader.state
    assert len(state.items) == 2
    assert state.status is LoaderStatus.READY
    assert state.error is None
    assert "only contained records already loaded" in caplog.text


@pytest.mark.asyncio
async def test_two_quick_next_page_calls_fetch_once(
    build_loader, page_source, make_page, fake_clock
):
    page_source.pages[1] = make_page([1, 2], page=1, total=10, total_pages=5)
    page_source.pages[2] = make_page([3, 4], page=2, total=10, total_pages=5)
    page_source.pages[3] = make_page([5, 6], page=3, total=10, total_pages=5)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    first = await loader.load_next_page()
    fake_clock.advance(0.1)
    second = await loader.load_next_page()

    assert (first, second) == (True, False)
    assert [call[1] for call in page_source.calls] == [1, 2]


@pytest.mark.asyncio
async def test_concurrent_next_page_calls_fetch_once(
    build_loader, page_source, make_page, fake_clock
):
    page_source.pages[1] = make_page([1, 2], page=1, total=10, total_pages=5)
    page_source.pages[2] = make_page([3, 4], page=2, total=10, total_pages=5)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    results = await asyncio.gather(loader.load_next_page(), loader.load_next_page())

    assert sorted(results) == [False, True]
    assert [call[1] for call in page_source.calls] == [1, 2]
    assert loader.guard.is_fetching is False


@pytest.mark.asyncio
async def test_refresh_keeps_items_visible_until_resolved(
    build_loader, page_source, make_page, fake_clock
):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    seen = []
    loader.add_observer(lambda state: seen.append(state))
    page_source.pages[1] = make_page([7, 8], page=1, total=2, total_pages=1)
    page_source.hold()
    task = asyncio.create_task(loader.refresh())
    await page_source.started.wait()

    assert loader.state.status is LoaderStatus.REFRESHING
    assert loader.state.refreshing is True
    assert [r["id"] for r in loader.state.items] == [1, 2]

    page_source.release()
    assert await task is True

    assert [r["id"] for r in loader.state.items] == [7, 8]
    assert all(state.items for state in seen)
    assert seen[-1].status is LoaderStatus.READY


@pytest.mark.asyncio
async def test_payload_error_on_next_page_keeps_items(
    build_loader, page_source, make_page, fake_clock
):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=4, total_pages=2)
    page_source.pages[2] = {"success": False, "message": "Toko ID tidak ditemukan"}
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    assert await loader.load_next_page() is False

    state = loader.state
    assert state.status is LoaderStatus.ERROR
    assert state.error == "Toko ID tidak ditemukan"
    assert [r["id"] for r in state.items] == [1, 2]


@pytest.mark.asyncio
async def test_payload_error_on_first_page_clears_items(
    build_loader, page_source, make_page, fake_clock
):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=4, total_pages=2)
    page_source.pages[2] = {"success": False, "message": "Server sibuk"}
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)
    await loader.load_next_page()
    fake_clock.advance(1)

    page_source.pages[1] = {"success": False, "message": "Toko ID tidak ditemukan"}
    assert await loader.load_first_page() is False

    state = loader.state
    assert state.status is LoaderStatus.ERROR
    assert state.error == "Toko ID tidak ditemukan"
    assert state.items == []
    assert state.pagination.page == 1


@pytest.mark.asyncio
async def test_transport_error_on_refresh_keeps_items(
    build_loader, page_source, make_page, fake_clock
):
    from tokolist.errors import TransportError
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    page_source.pages[1] = TransportError("Network error: boom")
    assert await loader.refresh() is False

    state = loader.state
    assert state.status is LoaderStatus.ERROR
    assert state.error == "Network error: boom"
    assert len(state.items) == 2
    assert loader.guard.is_fetching is False


@pytest.mark.asyncio
async def test_retry_from_error(build_loader, page_source, make_page, fake_clock):
    from tokolist.errors import TransportError
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = TransportError()
    loader = build_loader()
    await loader.load_first_page()
    assert loader.state.status is LoaderStatus.ERROR
    assert loader.state.error == "Failed to load data"

    fake_clock.advance(1)
    page_source.pages[1] = make_page([1], page=1, total=1, total_pages=1)

    assert await loader.load_first_page() is True
    assert loader.state.status is LoaderStatus.READY
    assert loader.state.error is None


@pytest.mark.asyncio
async def test_first_page_only_from_idle_or_error(build_loader, page_source, make_page, fake_clock):
    page_source.pages[1] = make_page([1], page=1, total=1, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    assert await loader.load_first_page() is False
    assert await build_loader().refresh() is False
    assert len(page_source.calls) == 1


@pytest.mark.asyncio
async def test_unknown_shape_on_first_page_shows_no_data(build_loader, page_source):
    page_source.pages[1] = {"data": {"unexpected": True}}
    loader = build_loader()

    assert await loader.load_first_page() is True

    state = loader.state
    assert state.is_empty is True
    assert state.error is None
    assert state.pagination.has_more is False


@pytest.mark.asyncio
async def test_unknown_shape_on_next_page_keeps_pagination(
    build_loader, page_source, make_page, fake_clock
):
    page_source.pages[1] = make_page([1, 2], page=1, total=6, total_pages=3)
    page_source.pages[2] = {"data": "garbage"}
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    await loader.load_next_page()

    state = loader.state
    assert len(state.items) == 2
    assert state.pagination.page == 1
    assert state.pagination.has_more is True


@pytest.mark.asyncio
async def test_dispose_discards_in_flight_result(build_loader, page_source, make_page):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    page_source.hold()
    loader = build_loader()
    task = asyncio.create_task(loader.load_first_page())
    await page_source.started.wait()

    loader.dispose()
    page_source.release()

    assert await task is False
    assert loader.state.items == []
    assert loader.state.status is LoaderStatus.LOADING
    assert loader.guard.is_fetching is False


@pytest.mark.asyncio
async def test_cancellation_releases_guard(build_loader, page_source, make_page):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1], page=1, total=1, total_pages=1)
    page_source.hold()
    loader = build_loader()
    task = asyncio.create_task(loader.load_first_page())
    await page_source.started.wait()

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert loader.guard.is_fetching is False
    assert loader.state.status is LoaderStatus.IDLE


@pytest.mark.asyncio
async def test_search_filters_and_blocks_load_more(
    build_loader, page_source, make_page, fake_clock
):
    page_source.pages[1] = make_page([1, 2], page=1, total=4, total_pages=2)
    loader = build_loader()
    await loader.load_first_page()
    fake_clock.advance(1)

    loader.set_search_query("produk 2")

    assert [r["id"] for r in loader.state.visible_items] == [2]
    assert await loader.load_next_page() is False
    assert len(page_source.calls) == 1


@pytest.mark.asyncio
async def test_refresh_clears_search(build_loader, page_source, make_page, fake_clock):
    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    loader.set_search_query("produk 1")
    fake_clock.advance(1)

    await loader.refresh()

    assert loader.search_manager.active is False
    assert len(loader.state.visible_items) == 2


@pytest.mark.asyncio
async def test_observers_see_loading_then_ready(build_loader, page_source, make_page):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1], page=1, total=1, total_pages=1)
    loader = build_loader()
    statuses = []
    observer = lambda state: statuses.append(state.status)
    loader.add_observer(observer)

    await loader.load_first_page()
    loader.remove_observer(observer)
    loader.set_search_query("x")

    assert statuses == [LoaderStatus.LOADING, LoaderStatus.READY]


@pytest.mark.asyncio
async def test_failing_observer_does_not_lock_loader(
    build_loader, page_source, make_page, fake_clock
):
    from tokolist.managers.list_loader_manager import LoaderStatus

    page_source.pages[1] = make_page([1], page=1, total=1, total_pages=1)
    loader = build_loader()
    calls = []

    def flaky_observer(state):
        calls.append(state.status)
        if len(calls) == 1:
            raise RuntimeError("render failed")

    loader.add_observer(flaky_observer)

    with pytest.raises(RuntimeError):
        await loader.load_first_page()

    assert loader.guard.is_fetching is False
    assert loader.state.status is LoaderStatus.IDLE

    fake_clock.advance(10)
    assert await loader.load_first_page() is True
    assert loader.state.status is LoaderStatus.READY
    assert page_source.calls == [(3, 1, 2)]


@pytest.mark.asyncio
async def test_rejected_refresh_keeps_search(
    build_loader, page_source, make_page
):
    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    loader.set_search_query("Produk 1")

    # Still inside the debounce window
    assert await loader.refresh() is False

    assert loader.search_manager.query == "Produk 1"
    assert [r["id"] for r in loader.state.visible_items] == [1]
    assert len(page_source.calls) == 1


@pytest.mark.asyncio
async def test_refresh_notifies_cleared_search(
    build_loader, page_source, make_page, fake_clock
):
    page_source.pages[1] = make_page([1, 2], page=1, total=2, total_pages=1)
    loader = build_loader()
    await loader.load_first_page()
    loader.set_search_query("Produk 1")
    fake_clock.advance(1)
    seen = []
    loader.add_observer(lambda state: seen.append(len(state.visible_items)))

    await loader.refresh()

    assert seen == [2, 2]
