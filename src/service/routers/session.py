import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from auth import AuthMode, BaseCredentialCheck
from schema import LoginRequest, ProfileUpdateRequest
from session import SessionHandle
from ..dependencies import get_credential_check, get_session
from ..routing import SessionRoute, route_options, unauthorized_detail

logger = logging.getLogger('rememberme.service.routers.session')

router = APIRouter(
    tags=["session"],
    route_class=SessionRoute,
)


@router.post("/login")
@route_options(auth=AuthMode.OPTIONAL, session_mutating=True)
async def login(
    credentials: LoginRequest,
    session: Annotated[SessionHandle, Depends(get_session)],
    credential_check: Annotated[BaseCredentialCheck, Depends(get_credential_check)],
) -> RedirectResponse:
    """
    Log the user in. With `remember` set, both the cookie and the cache entry
    are kept for the extended TTL.
    """
    if not await credential_check.acheck(credentials.username, credentials.password):
        logger.info(f"Login refused for session {session.id}")
        raise HTTPException(status_code=401, detail=unauthorized_detail("Invalid username or password"))

    session.set({
        "username": credentials.username,
        # stored, as the TTL policy is decided again on every session-mutating request
        "remember": credentials.remember,
        "authenticated": True,
    })
    logger.info(f"Session {session.id} logged in, remember={credentials.remember}")
    return RedirectResponse("/", status_code=302)


@router.get("/logout")
async def logout(session: Annotated[SessionHandle, Depends(get_session)]) -> RedirectResponse:
    session.clear()
    logger.info(f"Session {session.id} logged out")
    return RedirectResponse("/", status_code=302)


@router.post("/user")
@route_options(session_mutating=True)
async def update_user(
    profile: ProfileUpdateRequest,
    session: Annotated[SessionHandle, Depends(get_session)],
) -> RedirectResponse:
    """
    Update the profile held in the session. Without a user database, the
    session payload is the only copy that needs to be kept in sync.
    """
    session.set("username", profile.username)
    logger.info(f"Session {session.id} username updated")
    return RedirectResponse("/", status_code=302)
