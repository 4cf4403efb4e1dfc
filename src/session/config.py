import os
import logging
from typing import Optional

from pydantic import BaseModel, field_validator
from fastapi_sessions.frontends.implementations import CookieParameters
from fastapi_sessions.frontends.implementations.cookie import SameSiteEnum

logger = logging.getLogger('rememberme.session.config')

ONE_DAY_MS = 86_400_000


class SessionSettings(BaseModel):
    """
    Cookie and cache constants shared by the session store and the TTL reconciler.

    TTLs are expressed in milliseconds, the unit the session cache works in.
    """
    secret_key: str
    cookie_name: str = "session"
    cookie_domain: Optional[str] = None
    cookie_path: str = "/"
    secure: bool = True
    http_only: bool = True
    same_site: SameSiteEnum = SameSiteEnum.lax
    # Payload is never inlined into the cookie, only the session id travels
    max_cookie_size: int = 0
    partition: str = "rememberme"
    segment: str = "sessions"
    default_ttl_ms: int = ONE_DAY_MS
    extended_ttl_ms: int = ONE_DAY_MS * 365
    store_blank: bool = False

    @field_validator("max_cookie_size")
    @classmethod
    def _no_inline_storage(cls, value: int) -> int:
        if value != 0:
            raise ValueError("max_cookie_size must be 0: session data is only stored server-side")
        return value

    @field_validator("default_ttl_ms", "extended_ttl_ms")
    @classmethod
    def _positive_ttl(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("session TTLs must be positive")
        return value

    @classmethod
    def from_env(cls) -> "SessionSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: if SESSION_SECRET_KEY is not set
        """
        # Get secret key from environment variable
        if not (secret_key := os.getenv("SESSION_SECRET_KEY")):
            raise ValueError("SESSION_SECRET_KEY environment variable must be set")

        # For development, allow insecure cookies over HTTP
        secure_cookies = os.getenv("SECURE_COOKIES", "true").lower() == "true"
        if not secure_cookies:
            logger.warning("SECURE_COOKIES is disabled, session cookies will be sent over plain HTTP")

        settings = cls(
            secret_key=secret_key,
            cookie_name=os.getenv("SESSION_COOKIE_NAME", "session"),
            cookie_domain=os.getenv("COOKIE_DOMAIN") or None,
            secure=secure_cookies,
            partition=os.getenv("SESSION_CACHE_PARTITION", "rememberme"),
            segment=os.getenv("SESSION_CACHE_SEGMENT", "sessions"),
            default_ttl_ms=int(os.getenv("SESSION_TTL_MS", ONE_DAY_MS)),
            extended_ttl_ms=int(os.getenv("SESSION_REMEMBER_TTL_MS", ONE_DAY_MS * 365)),
            store_blank=os.getenv("SESSION_STORE_BLANK", "false").lower() == "true",
        )
        logger.info(
            f"Session settings loaded: cookie={settings.cookie_name}, segment={settings.segment}, "
            f"default_ttl_ms={settings.default_ttl_ms}, extended_ttl_ms={settings.extended_ttl_ms}"
        )
        return settings

    def cookie_params(self, ttl_ms: Optional[int] = None) -> CookieParameters:
        """Cookie parameters for the given TTL class (defaults to the short one)."""
        ttl_ms = self.default_ttl_ms if ttl_ms is None else ttl_ms
        return CookieParameters(
            max_age=ttl_ms // 1000,
            path=self.cookie_path,
            domain=self.cookie_domain,
            secure=self.secure,
            httponly=self.http_only,
            samesite=self.same_site,
        )
