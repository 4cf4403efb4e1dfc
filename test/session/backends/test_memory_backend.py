import pytest

from session.backends import InMemorySessionCache


@pytest.mark.asyncio
async def test_set_then_get_keeps_booleans_and_strings(cache):
    await cache.set("sessions", "abc", {"username": "alice", "authenticated": True, "remember": False}, 1_000)

    cached = await cache.get("sessions", "abc")

    assert cached.item == {"username": "alice", "authenticated": True, "remember": False}
    assert cached.ttl == 1_000


@pytest.mark.asyncio
async def test_entry_expires(cache, clock):
    await cache.set("sessions", "abc", {"username": "alice"}, 1_000)

    clock.advance(0.5)
    assert (await cache.get("sessions", "abc")).ttl == 500

    clock.advance(0.5)
    assert await cache.get("sessions", "abc") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_set_replaces_value_and_ttl(cache):
    await cache.set("sessions", "abc", {"username": "alice"}, 1_000)
    await cache.set("sessions", "abc", {"username": "bob"}, 5_000)

    cached = await cache.get("sessions", "abc")
    assert cached.item == {"username": "bob"}
    assert cached.ttl == 5_000


@pytest.mark.asyncio
async def test_segments_are_isolated(cache):
    await cache.set("sessions", "abc", {"username": "alice"}, 1_000)

    assert await cache.get("other", "abc") is None


@pytest.mark.asyncio
async def test_delete_is_idempotent():
    cache = InMemorySessionCache("rememberme")
    await cache.set("sessions", "abc", {}, 1_000)

    await cache.delete("sessions", "abc")
    await cache.delete("sessions", "abc")

    assert await cache.get("sessions", "abc") is None


@pytest.mark.asyncio
async def test_expired_entries_are_evicted_on_write(cache, clock):
    for i in range(1_000):
        await cache.set("sessions", f"s{i}", {"username": "alice"}, 1_000)

    clock.advance(10)
    await cache.set("sessions", "fresh", {"username": "bob"}, 1_000)

    assert len(cache._entries) == 1
    assert (await cache.get("sessions", "fresh")).item == {"username": "bob"}


@pytest.mark.asyncio
async def test_oldest_entry_is_dropped_when_full(clock):
    cache = InMemorySessionCache("rememberme", clock=clock, maxsize=2)

    await cache.set("sessions", "a", {}, 60_000)
    await cache.set("sessions", "b", {}, 60_000)
    await cache.set("sessions", "c", {}, 60_000)

    assert await cache.get("sessions", "a") is None
    assert await cache.get("sessions", "b") is not None
    assert await cache.get("sessions", "c") is not None
    assert len(cache) == 2
