import time
import logging
from typing import Any, NoReturn, Optional

import redis.asyncio as aioredis
from redis import RedisError, ConnectionError as RedisConnectionError

from .base import SessionCache, CacheUnavailableError
from ..models import CachedItem

logger = logging.getLogger(__name__)


class RedisSessionCache(SessionCache):
    name = "redis"

    def __init__(self, redis_client: aioredis.Redis, partition: str):
        """Initialize the Redis session cache with an async Redis client."""
        super().__init__(partition)
        self.redis_client = redis_client

    def _handle_redis_error(self, operation: str, key: str, error: Exception) -> NoReturn:
        """Centralized error handling for Redis operations."""
        if isinstance(error, RedisConnectionError):
            logger.error(f"Redis connection failed during {operation} for {key}: {error}")
            raise CacheUnavailableError(f"Cache connection error during {operation}") from error
        elif isinstance(error, RedisError):
            logger.error(f"Redis error during {operation} for {key}: {error}")
            raise CacheUnavailableError(f"Cache error during {operation}") from error
        else:
            logger.error(f"Unexpected error during {operation} for {key}: {error}")
            raise CacheUnavailableError(f"Unexpected error during {operation}") from error

    async def get(self, segment: str, id: str) -> Optional[CachedItem]:
        key = self.generate_key(segment, id)
        try:
            raw = await self.redis_client.get(key)
            if raw is None:
                return None
            ttl = await self.redis_client.pttl(key)
        except RedisError as e:
            self._handle_redis_error("session read", key, e)

        # -2: expired between the two calls, -1: no expiry set (not written by us)
        if ttl == -2:
            return None
        if ttl < 0:
            logger.warning(f"Session entry {key} has no TTL, ignoring it")
            return None

        try:
            item, stored = self.decode(raw)
        except ValueError as e:
            logger.error(f"Invalid session data format for {key}: {e}")
            return None

        return CachedItem(item=item, stored=stored, ttl=ttl)

    async def set(self, segment: str, id: str, item: dict[str, Any], ttl_ms: int) -> None:
        key = self.generate_key(segment, id)
        try:
            value = self.encode(item, int(time.time() * 1000))
            await self.redis_client.set(key, value, px=ttl_ms)
            logger.debug(f"Session entry {key} written with ttl {ttl_ms}ms")
        except (RedisError, TypeError, ValueError) as e:
            self._handle_redis_error("session write", key, e)

    async def delete(self, segment: str, id: str) -> None:
        key = self.generate_key(segment, id)
        try:
            deleted_count = await self.redis_client.delete(key)
        except RedisError as e:
            self._handle_redis_error("session deletion", key, e)

        if deleted_count == 0:
            logger.debug(f"Session entry {key} was already gone, may have expired or been removed concurrently")
        else:
            logger.debug(f"Session entry {key} deleted successfully")

    async def ping(self) -> bool:
        try:
            return bool(await self.redis_client.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.redis_client.aclose()
