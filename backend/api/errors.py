"""
Error response handling.

Maps the shared exception hierarchy to HTTP status codes. Every error body
is the exception's ``to_dict()``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Any, Optional

from shared.exceptions import (
    KastelError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str
    details: dict[str, Any] = {}


# Checked in order; the first matching base class wins
STATUS_CODES: list[tuple[type[KastelError], int]] = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (ConflictError, 409),
    (ValidationError, 422),
]


def status_code_for(error: KastelError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 400


async def kastel_error_handler(request: Request, exc: KastelError) -> JSONResponse:
    status_code = status_code_for(exc)
    headers: Optional[dict[str, str]] = None
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}

    logger.debug(f"{request.method} {request.url.path} -> {status_code} {exc.code}")
    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KastelError, kastel_error_handler)
