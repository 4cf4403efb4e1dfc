from .base import SessionCache, CacheUnavailableError
from .memory_backend import InMemorySessionCache
from .redis_backend import RedisSessionCache

__all__ = [
    "SessionCache",
    "CacheUnavailableError",
    "InMemorySessionCache",
    "RedisSessionCache",
]
