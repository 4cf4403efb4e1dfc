import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exception_handlers import http_exception_handler

logger = logging.getLogger('rememberme.service.middleware')


async def custom_http_exception_handler(request: Request, exc: HTTPException):
    """Custom handler for HTTPExceptions so authentication failures share one JSON shape"""

    if exc.status_code == 401:
        if isinstance(exc.detail, dict):
            error_response = exc.detail
        else:
            error_response = {
                "error": "Authentication required",
                "error_code": "unauthorized",
                "message": str(exc.detail) if exc.detail else "Session invalid or expired",
            }

        logger.info(f"Rejected {request.method} {request.url.path}: {error_response.get('message')}")
        return JSONResponse(
            status_code=401,
            content=error_response,
            headers=exc.headers,
        )

    logger.warning(f"{request.method} {request.url.path} failed with {exc.status_code}: {exc.detail}")
    return await http_exception_handler(request, exc)
