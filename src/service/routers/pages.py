from typing import Annotated

from fastapi import APIRouter, Depends

from auth import AuthMode, AuthResult
from schema import PageResponse
from session import SessionHandle
from ..dependencies import get_auth_result, get_session
from ..routing import SessionRoute, route_options

router = APIRouter(
    tags=["pages"],
    route_class=SessionRoute,
)


def build_page(name: str, session: SessionHandle, auth: AuthResult) -> PageResponse:
    return PageResponse(
        page=name,
        auth=auth.is_authenticated,
        session=(str(session.id), session.payload),
        credentials=auth.credentials,
    )


@router.get("/")
@route_options(auth=AuthMode.OPTIONAL)
async def default_page(
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthResult, Depends(get_auth_result)],
) -> PageResponse:
    return build_page("default page", session, auth)


@router.get("/login")
@route_options(auth=AuthMode.OPTIONAL)
async def login_page(
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthResult, Depends(get_auth_result)],
) -> PageResponse:
    return build_page("login page", session, auth)


@router.get("/secured")
async def secured_page(
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthResult, Depends(get_auth_result)],
) -> PageResponse:
    return build_page("authenticated page", session, auth)


@router.get("/user")
async def account_page(
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthResult, Depends(get_auth_result)],
) -> PageResponse:
    page = build_page("account page", session, auth)
    page.username = session.data.username
    return page
