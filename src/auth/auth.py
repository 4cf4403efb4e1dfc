import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .schema import AuthResult

logger = logging.getLogger('rememberme.auth')


class AuthMode(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    DISABLED = "disabled"


class BaseAuth():
    name: str = "base"

    def authenticate(self, payload: Optional[Mapping[str, Any]]) -> AuthResult:
        """
        Decide whether a session payload carries an authenticated identity.

        Implementations must not touch the cache or the cookie, the payload
        is all they get.
        """
        raise NotImplementedError


class SessionAuth(BaseAuth):
    """Authenticated iff the server-side payload says so; identity is its username."""
    name = "session"

    def authenticate(self, payload: Optional[Mapping[str, Any]]) -> AuthResult:
        if payload and payload.get("authenticated") is True:
            return AuthResult.authenticated(payload.get("username"), strategy=self.name)
        return AuthResult.unauthenticated(strategy=self.name)


class AuthConfig:
    # This class is used to store different types of authentication methods

    def __init__(self):
        self.auth_strategies: Dict[str, BaseAuth] = {}
        self._default: Optional[str] = None

    def register_auth_strategy(self, name: str, auth_strategy: BaseAuth):
        """
        Register a new authentication strategy.

        Args:
            name (str): The name of the authentication strategy.
            auth_strategy (BaseAuth): An instance of a class that inherits from BaseAuth.
        """
        if not isinstance(auth_strategy, BaseAuth):
            raise TypeError(f"{name} must be an instance of BaseAuth")
        self.auth_strategies[name] = auth_strategy

    def set_default_strategy(self, name: str):
        if name not in self.auth_strategies:
            raise KeyError(f"Unknown auth strategy: {name}")
        self._default = name

    @property
    def default_strategy(self) -> BaseAuth:
        if self._default is None:
            raise RuntimeError("No default auth strategy configured")
        return self.auth_strategies[self._default]


class BaseCredentialCheck():
    async def acheck(self, username: str, password: Optional[str]) -> bool:
        raise NotImplementedError


class OpaqueCredentialCheck(BaseCredentialCheck):
    """
    Accepts any non-blank username.

    Stands in for a real identity provider: passwords are never verified here.
    """

    async def acheck(self, username: str, password: Optional[str]) -> bool:
        return bool(username and username.strip())
