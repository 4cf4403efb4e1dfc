from typing import Annotated

from fastapi import APIRouter, Depends

from auth import AuthMode
from schema import StatusResponse
from session import SessionStore
from ..dependencies import get_session_store
from ..routing import SessionRoute, route_options

router = APIRouter(route_class=SessionRoute)


@router.get("/status")
@route_options(auth=AuthMode.DISABLED)
async def get_status(store: Annotated[SessionStore, Depends(get_session_store)]) -> StatusResponse:
    """Health check endpoint with session cache availability."""
    return StatusResponse(
        status="ok",
        cache=store.cache.name,
        cache_available=await store.cache.ping(),
    )
