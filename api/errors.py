"""
Exception handlers.

Maps the BlogError hierarchy onto HTTP responses. The first matching base
in STATUS_MAP wins, so more specific classes are listed before their bases.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BlogError,
    ConflictError,
    ExternalServiceError,
    MalformedQueryError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_MAP: list[tuple[type[BlogError], int]] = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
    (ConflictError, 409),
    (UpstreamUnavailableError, 503),
    (ExternalServiceError, 502),
    (MalformedQueryError, 500),
]


def status_for(exc: BlogError) -> int:
    """HTTP status for a BlogError; unknown subclasses are server errors."""
    for error_type, status_code in STATUS_MAP:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the BlogError handler on an application."""
    app.add_exception_handler(BlogError, blog_error_handler)
