"""
Mapping of the error taxonomy onto HTTP responses.

Every non-2xx response body has the shape ``{"error": <message>}``. Server
side failures return a generic message; their detail only reaches the log.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from forum_service.api.validation import describe_validation_error
from forum_service.core.exceptions import ApiError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = ApiError.default_message


def error_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    """Render ClientInputError / NotFoundError / ConflictError / UpstreamFailure."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.status_code, GENERIC_SERVER_ERROR)

    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and parameters are client input errors (400), not 422s."""
    message = describe_validation_error(exc.errors())
    logger.warning(f"{request.method} {request.url.path} -> 400: {message}")
    return error_response(400, message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and the like, in the same body shape. Headers such as `Allow` are kept."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on `app`."""
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
