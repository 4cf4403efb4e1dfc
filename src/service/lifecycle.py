import logging
from typing import AsyncGenerator
from fastapi import FastAPI
from contextlib import asynccontextmanager

logger = logging.getLogger("rememberme.service.lifecycle")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    cache = app.state.session_cache

    if await cache.ping():
        logger.info(f"Session cache '{cache.name}' is reachable")
    else:
        # Sessions degrade to anonymous until the cache comes back
        logger.warning(f"Session cache '{cache.name}' is not reachable at startup")

    yield

    # Cleanup during shutdown
    try:
        await cache.close()
    except Exception as e:
        logger.error(f"Failed to close session cache: {e}")
