from .auth import AuthConfig, AuthMode, BaseAuth, SessionAuth, BaseCredentialCheck, OpaqueCredentialCheck
from .schema import AuthResult

__all__ = [
    "AuthConfig",
    "AuthMode",
    "BaseAuth",
    "SessionAuth",
    "BaseCredentialCheck",
    "OpaqueCredentialCheck",
    "AuthResult",
]
