from pydantic import BaseModel
from typing import Optional


class AuthResult(BaseModel):
    """Outcome of authenticating a request against its session payload."""
    is_authenticated: bool = False
    credentials: Optional[str] = None
    strategy: Optional[str] = None

    @classmethod
    def authenticated(cls, credentials: Optional[str], strategy: Optional[str] = None) -> "AuthResult":
        return cls(is_authenticated=True, credentials=credentials, strategy=strategy)

    @classmethod
    def unauthenticated(cls, strategy: Optional[str] = None) -> "AuthResult":
        return cls(is_authenticated=False, strategy=strategy)
