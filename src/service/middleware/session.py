import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from fastapi import Request

from session import SessionStore, TTLReconciler, CacheUnavailableError

logger = logging.getLogger('rememberme.service.middleware')


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Drives the session lifecycle around each request:
    resolve -> handler (behind the route auth gate) -> flush -> reconcile -> cookie.

    Flush and reconciliation both finish before the response is returned.
    Cache failures while persisting are logged and never turn the response
    into an error.
    """

    def __init__(self, app: ASGIApp, store: SessionStore, reconciler: TTLReconciler):
        super().__init__(app)
        self.store = store
        self.reconciler = reconciler

    async def dispatch(self, request: Request, call_next):
        handle = await self.store.resolve(request)
        request.state.session = handle

        response = await call_next(request)

        try:
            flushed = await self.store.flush(handle)
        except CacheUnavailableError as e:
            logger.error(f"Failed to persist session {handle.id}, response delivered without it: {e}")
            flushed = False

        # Only an entry written by this flush is promoted
        if flushed and not handle.cleared and getattr(request.state, "session_mutating", False):
            try:
                await self.reconciler.reconcile(handle)
            except CacheUnavailableError as e:
                logger.error(f"Failed to reconcile TTLs for session {handle.id}: {e}")

        self.store.commit_cookie(handle, response)
        return response
