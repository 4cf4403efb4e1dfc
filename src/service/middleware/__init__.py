import logging as log
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from session import SessionStore, TTLReconciler
from .logging import RequestResponseLoggingMiddleware
from .error_handling import ErrorHandlingMiddleware
from .session import SessionMiddleware
from .exception_handlers import custom_http_exception_handler

logger = log.getLogger('rememberme.service.middleware')


def setup_middleware(
    app: FastAPI,
    store: SessionStore,
    reconciler: TTLReconciler,
    cors_allowed_origins: list[str],
    cors_allowed_methods: list[str],
    cors_allowed_headers: list[str]
):
    """
    Setup all middleware for the FastAPI application.

    Middleware are added in reverse order (last added = first executed).
    Current order of execution:
    1. CORSMiddleware (handles CORS)
    2. ErrorHandlingMiddleware (catches unhandled errors)
    3. RequestResponseLoggingMiddleware (logs requests/responses)
    4. SessionMiddleware (resolves the session, then flushes and reconciles it after the handler)

    Args:
        app: FastAPI application instance
        store: Session store bound to the process-wide session cache
        reconciler: TTL reconciler bound to the same cache
        cors_allowed_origins: List of allowed CORS origins
        cors_allowed_methods: List of allowed HTTP methods
        cors_allowed_headers: List of allowed headers
    """
    # Add custom exception handler for HTTPExceptions
    app.add_exception_handler(HTTPException, custom_http_exception_handler)

    # Innermost, so it sees the final handler response before anyone else
    app.add_middleware(SessionMiddleware, store=store, reconciler=reconciler)

    # Add comprehensive request/response logging for debugging
    app.add_middleware(RequestResponseLoggingMiddleware, cookie_name=store.settings.cookie_name)

    # Add error handling middleware to format unexpected errors
    app.add_middleware(ErrorHandlingMiddleware)

    # Setup CORS policy
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins,
        allow_credentials=True,
        allow_methods=cors_allowed_methods,
        allow_headers=cors_allowed_headers,
    )

    logger.info(f"CORS configured with origins: {cors_allowed_origins}")


__all__ = [
    'setup_middleware',
    'RequestResponseLoggingMiddleware',
    'ErrorHandlingMiddleware',
    'SessionMiddleware',
    'custom_http_exception_handler',
]
