"""
Configuration setup for the rememberme service.

This module handles all configuration initialization including:
- CORS settings
- Authentication configuration
- Session cache selection
"""
import os
import logging
from typing import Optional, Tuple

from auth import AuthConfig, SessionAuth
from session import SessionCache, InMemorySessionCache, RedisSessionCache
from .redis_client import create_redis_client

logger = logging.getLogger('rememberme.service.config')


def get_cors_config() -> Tuple[list[str], list[str], list[str]]:
    """
    Parse and return CORS configuration from environment variables.

    Returns:
        Tuple containing (origins, methods, headers) lists
    """
    # Parse allowed origins
    cors_allowed_origins = os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
    cors_allowed_origins = [origin.strip() for origin in cors_allowed_origins if origin.strip()]

    # Development fallback
    if not cors_allowed_origins:
        logger.warning("CORS_ALLOWED_ORIGINS not set, using development defaults")
        cors_allowed_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    # Parse allowed methods
    cors_allowed_methods = os.getenv("CORS_ALLOWED_METHODS", "GET,POST,OPTIONS").split(",")
    cors_allowed_methods = [method.strip() for method in cors_allowed_methods if method.strip()]

    # Parse allowed headers
    cors_allowed_headers = os.getenv("CORS_ALLOWED_HEADERS", "Content-Type").split(",")
    cors_allowed_headers = [header.strip() for header in cors_allowed_headers if header.strip()]

    return cors_allowed_origins, cors_allowed_methods, cors_allowed_headers


def setup_auth() -> AuthConfig:
    """
    Configure and return authentication strategies.

    The session strategy is the default for every route.

    Returns:
        Configured AuthConfig instance
    """
    auth_config = AuthConfig()
    auth_config.register_auth_strategy("session", SessionAuth())
    auth_config.set_default_strategy("session")
    logger.info("Authentication configured with session strategy")
    return auth_config


def build_session_cache(partition: str, redis_url: Optional[str] = None) -> SessionCache:
    """
    Create the session cache handle for the process.

    Uses Redis when a URL is given or REDIS_URL is set, otherwise falls back
    to the in-memory cache.
    """
    redis_url = redis_url or os.getenv("REDIS_URL")
    if not redis_url:
        logger.warning("REDIS_URL not set, falling back to InMemorySessionCache for sessions")
        return InMemorySessionCache(partition)

    return RedisSessionCache(create_redis_client(redis_url), partition)


__all__ = [
    'get_cors_config',
    'setup_auth',
    'build_session_cache',
]
