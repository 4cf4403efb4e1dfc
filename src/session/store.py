import copy
import uuid
import logging
from typing import Any, Mapping, Optional
from uuid import UUID

from fastapi import Request, Response

from .backends import SessionCache, CacheUnavailableError
from .config import SessionSettings
from .cookie import SessionIdCookie
from .models import SessionData

logger = logging.getLogger('rememberme.session.store')


class SessionHandle:
    """
    Per-request view of a session payload.

    Reads and writes only touch the in-memory payload. Persisting it is the
    job of SessionStore.flush, which runs once when the response is finalized.
    """

    def __init__(self, session_id: UUID, payload: Optional[dict[str, Any]] = None, is_new: bool = False):
        self.id = session_id
        self.is_new = is_new
        self._payload: dict[str, Any] = dict(payload or {})
        self._modified = False
        self._cleared = False
        # TTL of the cookie to send with the response, None means no cookie
        self.cookie_ttl_ms: Optional[int] = None

    @property
    def modified(self) -> bool:
        return self._modified

    @property
    def cleared(self) -> bool:
        return self._cleared

    @property
    def payload(self) -> dict[str, Any]:
        return copy.deepcopy(self._payload)

    @property
    def data(self) -> SessionData:
        return SessionData.model_validate(self._payload)

    def get(self, key: str, default: Any = None) -> Any:
        # Copies so a caller has to go through set() to change anything
        return copy.deepcopy(self._payload.get(key, default))

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        if isinstance(key, Mapping):
            self._payload.update(copy.deepcopy(dict(key)))
        else:
            self._payload[key] = copy.deepcopy(value)
        self._modified = True
        self._cleared = False

    def clear(self, key: Optional[str] = None) -> None:
        """
        Remove `key` from the payload, or the whole payload when no key is given.

        Once the payload is empty the cache entry is scheduled for deletion.
        """
        if key is None:
            self._payload.clear()
        else:
            self._payload.pop(key, None)
        self._modified = True
        if not self._payload:
            self._cleared = True

    def __repr__(self) -> str:
        return f"SessionHandle(id={self.id}, keys={sorted(self._payload)}, modified={self._modified})"


class SessionStore:
    def __init__(self, cache: SessionCache, settings: SessionSettings, cookie: Optional[SessionIdCookie] = None):
        self.cache = cache
        self.settings = settings
        self.cookie = cookie or SessionIdCookie(settings)

    async def load(self, session_id: UUID) -> dict[str, Any]:
        """Payload stored for `session_id`, empty when missing, expired or unreachable."""
        try:
            cached = await self.cache.get(self.settings.segment, str(session_id))
        except CacheUnavailableError as e:
            logger.warning(f"Session cache unavailable while reading session {session_id}, continuing with an empty session: {e}")
            return {}

        if cached is None:
            logger.debug(f"No live cache entry for session {session_id}")
            return {}
        return cached.item

    async def resolve(self, request: Request) -> SessionHandle:
        """
        Bind a session handle to this request.

        Never fails: a missing or badly signed cookie starts a new session, a
        missing entry or an unreachable cache yields an empty payload.
        """
        session_id = self.cookie.read(request)
        if session_id is None:
            handle = SessionHandle(uuid.uuid4(), is_new=True)
            logger.debug(f"Started new session {handle.id}")
            return handle

        return SessionHandle(session_id, await self.load(session_id))

    async def flush(self, handle: SessionHandle) -> bool:
        """
        Persist the handle's payload with the default TTL and schedule the
        default-TTL cookie.

        Returns:
            True if the cache was written to (or the entry deleted)

        Raises:
            CacheUnavailableError: if the write or delete failed
        """
        segment, session_id = self.settings.segment, str(handle.id)

        if handle.cleared:
            await self.cache.delete(segment, session_id)
            logger.info(f"Session {session_id} cleared")
        elif handle.modified or (handle.is_new and self.settings.store_blank):
            await self.cache.set(segment, session_id, handle.payload, self.settings.default_ttl_ms)
            logger.debug(f"Session {session_id} flushed with ttl {self.settings.default_ttl_ms}ms")
        else:
            return False

        handle.cookie_ttl_ms = self.settings.default_ttl_ms
        return True

    def commit_cookie(self, handle: SessionHandle, response: Response) -> None:
        if handle.cookie_ttl_ms is None:
            return
        self.cookie.attach_to_response(response, handle.id, handle.cookie_ttl_ms)
