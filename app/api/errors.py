"""Translate catalog errors into HTTP responses."""
import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.constants import MSG_INVALID_MOVIE_ID
from app.core.exceptions import (
    CatalogError,
    ConflictError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses (InvalidRatingError) resolve through their base
ERROR_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

REQUIRED_TEXT_FIELDS = ("title", "director")


def status_code_for(error: CatalogError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Turn pydantic error entries into one human-readable sentence."""
    messages = []
    for error in errors:
        location = error.get("loc", ())
        if location and location[0] == "path":
            messages.append(MSG_INVALID_MOVIE_ID)
            continue
        raised = (error.get("ctx") or {}).get("error")
        if raised is not None:
            messages.append(str(raised))
            continue
        field = ".".join(str(part) for part in location[1:])
        if error.get("type") == "missing" and field in REQUIRED_TEXT_FIELDS:
            messages.append(f"{field.capitalize()} is required and must be a non-empty string.")
            continue
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return " ".join(dict.fromkeys(messages))


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_errors(exc.errors())
    logger.info(f"{request.method} {request.url.path} -> 400: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
