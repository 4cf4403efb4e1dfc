"""Cache-backed HTTP sessions with "remember me" TTL promotion."""

from .backends import SessionCache, CacheUnavailableError, InMemorySessionCache, RedisSessionCache
from .config import SessionSettings
from .cookie import SessionIdCookie
from .models import SessionData, CachedItem
from .reconciliation import TTLReconciler
from .store import SessionHandle, SessionStore

__all__ = [
    "SessionCache",
    "CacheUnavailableError",
    "InMemorySessionCache",
    "RedisSessionCache",
    "SessionSettings",
    "SessionIdCookie",
    "SessionData",
    "CachedItem",
    "TTLReconciler",
    "SessionHandle",
    "SessionStore",
]
