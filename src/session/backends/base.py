import json
from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import quote

from fastapi_sessions.backends.session_backend import BackendError

from ..models import CachedItem


class CacheUnavailableError(BackendError):
    """Raised when the session cache cannot be reached or refuses an operation."""


class SessionCache(ABC):
    """
    Key-value store with a per-entry TTL, addressed by (segment, id).

    A missing or expired entry is a normal outcome and reads as None.
    Every write replaces the whole entry in a single operation.
    """
    name: str = "cache"

    def __init__(self, partition: str):
        self.partition = partition

    def generate_key(self, segment: str, id: str) -> str:
        return f"{self.partition}:{quote(segment, safe='')}:{quote(str(id), safe='')}"

    @staticmethod
    def encode(item: dict[str, Any], stored: int) -> str:
        return json.dumps({"item": item, "stored": stored})

    @staticmethod
    def decode(raw: str) -> tuple[dict[str, Any], int]:
        """
        Decode a stored envelope.

        Raises:
            ValueError: if the value is not a valid envelope
        """
        envelope = json.loads(raw)
        if not isinstance(envelope, dict) or not isinstance(envelope.get("item"), dict):
            raise ValueError("Cache value is not a session envelope")
        try:
            stored = int(envelope.get("stored", 0))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cache envelope has an invalid stored time: {e}") from e
        return envelope["item"], stored

    @abstractmethod
    async def get(self, segment: str, id: str) -> Optional[CachedItem]:
        """
        Read an entry.

        Returns:
            The cached item with its remaining TTL, or None when missing or expired

        Raises:
            CacheUnavailableError: if the cache cannot be reached
        """
        pass

    @abstractmethod
    async def set(self, segment: str, id: str, item: dict[str, Any], ttl_ms: int) -> None:
        """
        Replace an entry's value and TTL.

        Raises:
            CacheUnavailableError: if the cache cannot be reached
        """
        pass

    @abstractmethod
    async def delete(self, segment: str, id: str) -> None:
        """
        Remove an entry. Deleting a missing entry is not an error.

        Raises:
            CacheUnavailableError: if the cache cannot be reached
        """
        pass

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass
