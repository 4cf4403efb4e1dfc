import sys
import os
from pathlib import Path
import logging

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# Add src to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Set environment variables before importing modules
os.environ.setdefault('SESSION_SECRET_KEY', 'test-secret-key')

from session import (  # noqa: E402
    CacheUnavailableError,
    InMemorySessionCache,
    SessionSettings,
    SessionStore,
    TTLReconciler,
)
from service import create_app  # noqa: E402

ONE_DAY_MS = 86_400_000
ONE_YEAR_MS = 31_536_000_000


class FakeClock:
    """Frozen wall clock, in seconds, so cache TTLs can be asserted exactly."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FlakySessionCache(InMemorySessionCache):
    """In-memory cache that can be told to behave like an unreachable Redis."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_reads = False
        self.fail_writes = False

    async def get(self, segment, id):
        if self.fail_reads:
            raise CacheUnavailableError("Cache connection error during session read")
        return await super().get(segment, id)

    async def set(self, segment, id, item, ttl_ms):
        if self.fail_writes:
            raise CacheUnavailableError("Cache connection error during session write")
        await super().set(segment, id, item, ttl_ms)

    async def delete(self, segment, id):
        if self.fail_writes:
            raise CacheUnavailableError("Cache connection error during session deletion")
        await super().delete(segment, id)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.INFO)


@pytest.fixture
def settings() -> SessionSettings:
    return SessionSettings(secret_key="test-secret-key", secure=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(settings, clock) -> FlakySessionCache:
    return FlakySessionCache(settings.partition, clock=clock)


@pytest.fixture
def store(cache, settings) -> SessionStore:
    return SessionStore(cache, settings)


@pytest.fixture
def reconciler(cache, settings) -> TTLReconciler:
    return TTLReconciler(cache, settings)


@pytest.fixture
def app(settings, cache):
    return create_app(settings=settings, cache=cache)


@pytest_asyncio.fixture
async def client(app):
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            yield client
