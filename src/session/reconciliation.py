import logging

from .backends import SessionCache
from .config import SessionSettings
from .store import SessionHandle

logger = logging.getLogger('rememberme.session.reconciliation')


class TTLReconciler:
    """
    Promotes "remember me" sessions to the extended TTL class.

    Runs after SessionStore.flush for session-mutating routes. The flush always
    writes the default TTL, so promotion is a separate rewrite of the same
    entry followed by a cookie update carrying the same session id.

    There is no per-session lock: two concurrent requests on one session can
    interleave their flush/promote writes and the last write seen by the cache
    wins.
    """

    def __init__(self, cache: SessionCache, settings: SessionSettings):
        self.cache = cache
        self.settings = settings

    async def reconcile(self, handle: SessionHandle) -> bool:
        """
        Returns:
            True if both TTLs were promoted to the extended class

        Raises:
            CacheUnavailableError: if the cache could not be read or rewritten
        """
        if handle.get("remember") is not True:
            return False

        segment, session_id = self.settings.segment, str(handle.id)
        cached = await self.cache.get(segment, session_id)
        if cached is None:
            # Expired or evicted right after the flush, the next request sees an empty session
            logger.info(f"Session {session_id} vanished before TTL promotion, keeping default TTL")
            return False

        await self.cache.set(segment, session_id, cached.item, self.settings.extended_ttl_ms)
        handle.cookie_ttl_ms = self.settings.extended_ttl_ms
        logger.debug(f"Session {session_id} promoted to ttl {self.settings.extended_ttl_ms}ms")
        return True
