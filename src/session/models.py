from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class SessionData(BaseModel):
    """Typed view over a session payload. Unknown fields are kept as-is."""
    model_config = ConfigDict(extra="allow")

    username: Optional[str] = None
    authenticated: bool = False
    remember: bool = False


class CachedItem(BaseModel):
    """A session cache entry as read back from the cache."""
    item: dict[str, Any]
    # Epoch milliseconds of the write that produced this entry
    stored: int
    # Remaining lifetime in milliseconds
    ttl: int
