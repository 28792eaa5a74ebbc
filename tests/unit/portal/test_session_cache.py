import asyncio
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock

from webmap_explorer.core.portal import PortalConnectionError, SessionCache, SessionProvider


def make_session():
    return SimpleNamespace(info=SimpleNamespace(name="Portal"), close=AsyncMock())


@pytest.mark.asyncio
async def test_session_created_lazily_and_memoized():
    provider = AsyncMock(spec=SessionProvider)
    provider.create_session.return_value = make_session()
    cache = SessionCache(lambda: provider)

    assert cache.session is None
    provider.create_session.assert_not_called()

    first = await cache.get()
    second = await cache.get()

    assert first is second
    provider.create_session.assert_awaited_once()


@pytest.mark.asyncio
async def test_concurrent_first_use_creates_one_session():
    provider = AsyncMock(spec=SessionProvider)

    async def slow_create():
        await asyncio.sleep(0.01)
        return make_session()

    provider.create_session.side_effect = slow_create
    cache = SessionCache(lambda: provider)

    sessions = await asyncio.gather(*(cache.get() for _ in range(5)))

    assert all(s is sessions[0] for s in sessions)
    assert provider.create_session.await_count == 1


@pytest.mark.asyncio
async def test_failed_creation_is_retried():
    provider = AsyncMock(spec=SessionProvider)
    session = make_session()
    provider.create_session.side_effect = [PortalConnectionError("offline"), session]
    cache = SessionCache(lambda: provider)

    with pytest.raises(PortalConnectionError):
        await cache.get()
    assert cache.session is None

    assert await cache.get() is session


@pytest.mark.asyncio
async def test_close_releases_session():
    provider = AsyncMock(spec=SessionProvider)
    session = make_session()
    provider.create_session.return_value = session
    cache = SessionCache(lambda: provider)
    await cache.get()

    await cache.close()

    session.close.assert_awaited_once()
    assert cache.session is None


@pytest.mark.asyncio
async def test_invalidate_uses_current_provider_on_next_get():
    old_provider = AsyncMock(spec=SessionProvider)
    old_session = make_session()
    old_provider.create_session.return_value = old_session
    new_provider = AsyncMock(spec=SessionProvider)
    new_session = make_session()
    new_provider.create_session.return_value = new_session
    providers = {"current": old_provider}
    cache = SessionCache(lambda: providers["current"])

    assert await cache.get() is old_session

    providers["current"] = new_provider
    assert await cache.get() is old_session
    assert cache.invalidate() is old_session

    assert await cache.get() is new_session
    new_provider.create_session.assert_awaited_once()
    old_provider.create_session.assert_awaited_once()
