import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from fastapi import Request

logger = logging.getLogger('rememberme.service.access')


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with its session cookie traffic."""

    def __init__(self, app: ASGIApp, cookie_name: str = "session"):
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        has_cookie = self.cookie_name in request.cookies

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(f"{request.method} {request.url.path} raised {type(exc).__name__}: {exc}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        cookie_set = any(
            h.startswith(f"{self.cookie_name}=") for h in response.headers.getlist("set-cookie")
        )
        message = (
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed_ms:.1f}ms (session cookie in: {has_cookie}, set: {cookie_set})"
        )

        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.info(message)
        else:
            logger.debug(message)
        return response
