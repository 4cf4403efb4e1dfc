"""
Route-level session settings.

Every route served through SessionRoute goes through the authentication gate
before its dependencies are resolved. Routes require an authenticated session
unless they opt out with @route_options(auth=AuthMode.OPTIONAL) or
AuthMode.DISABLED. Routes that change the session payload are flagged with
session_mutating=True so the session middleware reconciles TTLs afterwards.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, TypeVar

from fastapi import HTTPException, Request, Response
from fastapi.routing import APIRoute

from auth import AuthConfig, AuthMode, AuthResult

logger = logging.getLogger('rememberme.service.routing')

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class RouteOptions:
    auth: AuthMode = AuthMode.REQUIRED
    session_mutating: bool = False


DEFAULT_ROUTE_OPTIONS = RouteOptions()


def route_options(*, auth: AuthMode | str = AuthMode.REQUIRED, session_mutating: bool = False) -> Callable[[F], F]:
    """Attach session settings to an endpoint. Must sit below the router decorator."""
    options = RouteOptions(AuthMode(auth), session_mutating)

    def decorator(func: F) -> F:
        func.__route_options__ = options  # type: ignore[attr-defined]
        return func

    return decorator


def get_route_options(endpoint: Callable[..., Any]) -> RouteOptions:
    return getattr(endpoint, "__route_options__", DEFAULT_ROUTE_OPTIONS)


def unauthorized_detail(message: str = "Your session has expired or is invalid. Please log in again.") -> dict:
    return {
        "error": "Authentication required",
        "error_code": "unauthorized",
        "message": message,
    }


def authenticate_request(request: Request, mode: AuthMode) -> AuthResult:
    """
    Run the default auth strategy against the request's session payload.

    Raises:
        HTTPException: 401 when the mode is REQUIRED and the session is not authenticated
    """
    if mode is AuthMode.DISABLED:
        return AuthResult.unauthenticated()

    auth_config: AuthConfig = request.app.state.auth_config
    handle = getattr(request.state, "session", None)
    result = auth_config.default_strategy.authenticate(handle.payload if handle else None)

    if mode is AuthMode.REQUIRED and not result.is_authenticated:
        logger.info(f"Rejected unauthenticated request to {request.method} {request.url.path}")
        raise HTTPException(status_code=401, detail=unauthorized_detail())

    return result


class SessionRoute(APIRoute):
    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()
        options = get_route_options(self.endpoint)

        async def session_route_handler(request: Request) -> Response:
            request.state.auth = authenticate_request(request, options.auth)
            request.state.session_mutating = options.session_mutating
            return await original_route_handler(request)

        return session_route_handler
