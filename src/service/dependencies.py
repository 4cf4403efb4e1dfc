"""
FastAPI dependencies for the rememberme service.

This module provides reusable dependency functions that can be injected
into route handlers throughout the application.
"""
from fastapi import Request

from auth import AuthResult, BaseCredentialCheck
from session import SessionHandle, SessionStore


def get_session(request: Request) -> SessionHandle:
    """
    Session handle bound to this request by SessionMiddleware.

    Raises:
        RuntimeError: if the session middleware is not installed
    """
    handle = getattr(request.state, "session", None)
    if handle is None:
        raise RuntimeError("SessionMiddleware must be installed to use sessions")
    return handle


def get_auth_result(request: Request) -> AuthResult:
    """Authentication outcome recorded by the route gate, unauthenticated if the gate was bypassed."""
    return getattr(request.state, "auth", None) or AuthResult.unauthenticated()


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_credential_check(request: Request) -> BaseCredentialCheck:
    return request.app.state.credential_check
