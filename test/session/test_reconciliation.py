import uuid

import pytest

from session import CacheUnavailableError, SessionHandle


async def flushed_handle(store, payload):
    handle = SessionHandle(uuid.uuid4(), is_new=True)
    handle.set(payload)
    await store.flush(handle)
    return handle


@pytest.mark.asyncio
async def test_remember_promotes_entry_and_cookie(store, reconciler, cache, settings):
    handle = await flushed_handle(store, {"username": "alice", "authenticated": True, "remember": True})

    assert await reconciler.reconcile(handle)

    cached = await cache.get(settings.segment, str(handle.id))
    assert cached.ttl == settings.extended_ttl_ms
    assert cached.item == {"username": "alice", "authenticated": True, "remember": True}
    assert handle.cookie_ttl_ms == settings.extended_ttl_ms


@pytest.mark.asyncio
async def test_without_remember_default_ttl_stands(store, reconciler, cache, settings):
    handle = await flushed_handle(store, {"username": "alice", "authenticated": True, "remember": False})

    assert not await reconciler.reconcile(handle)

    assert (await cache.get(settings.segment, str(handle.id))).ttl == settings.default_ttl_ms
    assert handle.cookie_ttl_ms == settings.default_ttl_ms


@pytest.mark.asyncio
async def test_vanished_entry_is_a_no_op(store, reconciler, cache, settings):
    handle = await flushed_handle(store, {"username": "alice", "authenticated": True, "remember": True})
    await cache.delete(settings.segment, str(handle.id))

    assert not await reconciler.reconcile(handle)

    assert await cache.get(settings.segment, str(handle.id)) is None
    assert handle.cookie_ttl_ms == settings.default_ttl_ms


@pytest.mark.asyncio
async def test_write_failure_keeps_default_cookie(store, reconciler, cache, settings):
    handle = await flushed_handle(store, {"username": "alice", "authenticated": True, "remember": True})
    cache.fail_writes = True

    with pytest.raises(CacheUnavailableError):
        await reconciler.reconcile(handle)

    assert (await cache.get(settings.segment, str(handle.id))).ttl == settings.default_ttl_ms
    assert handle.cookie_ttl_ms == settings.default_ttl_ms


@pytest.mark.asyncio
async def test_promotion_rewrites_what_flush_stored(store, reconciler, cache, settings):
    handle = await flushed_handle(store, {"username": "alice", "authenticated": True, "remember": True})
    # another request for the same session wrote in between, last write wins
    await cache.set(settings.segment, str(handle.id), {"username": "carol", "authenticated": True, "remember": True}, 10)

    assert await reconciler.reconcile(handle)

    cached = await cache.get(settings.segment, str(handle.id))
    assert cached.item["username"] == "carol"
    assert cached.ttl == settings.extended_ttl_ms
