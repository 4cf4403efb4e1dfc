import logging
from typing import Optional

from fastapi import FastAPI

from auth import BaseCredentialCheck, OpaqueCredentialCheck
from session import SessionCache, SessionSettings, SessionStore, TTLReconciler

from .config import get_cors_config, setup_auth, build_session_cache
from .lifecycle import lifespan
from .middleware import setup_middleware
from .routers import misc, pages, session

logger = logging.getLogger('rememberme.service')


def create_app(
    settings: Optional[SessionSettings] = None,
    cache: Optional[SessionCache] = None,
    credential_check: Optional[BaseCredentialCheck] = None,
) -> FastAPI:
    """
    Build the application.

    The session cache is created once here (or injected) and shared by the
    session store and the TTL reconciler.
    """
    settings = settings or SessionSettings.from_env()
    if cache is None:
        cache = build_session_cache(settings.partition)

    store = SessionStore(cache, settings)
    reconciler = TTLReconciler(cache, settings)

    app = FastAPI(title="rememberme", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_cache = cache
    app.state.session_store = store
    app.state.auth_config = setup_auth()
    app.state.credential_check = credential_check or OpaqueCredentialCheck()

    setup_middleware(app, store, reconciler, *get_cors_config())

    app.include_router(pages.router)
    app.include_router(session.router)
    app.include_router(misc.router)

    logger.info(f"Application created with '{cache.name}' session cache")
    return app
