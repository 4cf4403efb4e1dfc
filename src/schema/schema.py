from typing import Any, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials posted to /login."""

    username: str = Field(min_length=1, description="Identity claim stored in the session.")
    password: Optional[str] = Field(default=None, description="Handed to the credential check, never stored.")
    remember: bool = Field(
        default=False,
        description="Keep the session (cookie and cache entry) alive for the extended TTL.",
    )


class ProfileUpdateRequest(BaseModel):
    """Profile fields that can be changed with POST /user."""

    username: str = Field(min_length=1)


class PageResponse(BaseModel):
    """Body returned by the page routes in place of a rendered view."""

    page: str
    auth: bool
    session: tuple[str, dict[str, Any]] = Field(description="Session id and its current payload.")
    credentials: Optional[str] = None
    username: Optional[str] = None


class StatusResponse(BaseModel):
    status: str = "ok"
    cache: str
    cache_available: bool
