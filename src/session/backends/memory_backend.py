import time
import logging
from typing import Any, Callable, Optional

from cachetools import TLRUCache

from .base import SessionCache
from ..models import CachedItem

logger = logging.getLogger(__name__)


class InMemorySessionCache(SessionCache):
    """
    Process-local session cache on a cachetools TLRUCache.

    Values are stored encoded, exactly as they would be in Redis, together with
    their absolute expiry in milliseconds. Each entry carries its own TTL, and
    expired entries are evicted on every write. Once `maxsize` live entries are
    held the least recently used one is dropped.
    """
    name = "memory"

    def __init__(self, partition: str, clock: Callable[[], float] = time.time, maxsize: int = 10_000):
        super().__init__(partition)
        self._clock = clock
        self._entries: TLRUCache = TLRUCache(
            maxsize=maxsize,
            ttu=lambda key, value, now: value[1],
            timer=self._now_ms,
        )

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def get(self, segment: str, id: str) -> Optional[CachedItem]:
        key = self.generate_key(segment, id)
        entry = self._entries.get(key)
        if entry is None:
            return None

        raw, expires_at = entry
        item, stored = self.decode(raw)
        return CachedItem(item=item, stored=stored, ttl=expires_at - self._now_ms())

    async def set(self, segment: str, id: str, item: dict[str, Any], ttl_ms: int) -> None:
        key = self.generate_key(segment, id)
        now = self._now_ms()
        self._entries[key] = (self.encode(item, now), now + ttl_ms)
        logger.debug(f"Session entry {key} written with ttl {ttl_ms}ms")

    async def delete(self, segment: str, id: str) -> None:
        key = self.generate_key(segment, id)
        if self._entries.pop(key, None) is None:
            logger.debug(f"Session entry {key} was already gone")

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
