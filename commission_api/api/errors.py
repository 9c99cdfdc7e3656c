"""
Exception handlers.

Every error leaves the API in the same JSON shape, which the Odoo
integration parses:

    {"success": false, "error": "...", "timestamp": "...", "path": "...", "method": "..."}
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def error_response(request: Request, status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "method": request.method,
        },
        headers=headers,
    )


def integrity_error_status(exc: IntegrityError) -> tuple[int, str]:
    """Map a constraint violation to an HTTP status and message."""
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    text = str(exc.orig).lower()

    if code == UNIQUE_VIOLATION or "unique" in text:
        return status.HTTP_409_CONFLICT, "Resource already exists"
    if code == FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return status.HTTP_400_BAD_REQUEST, "Invalid reference to related resource"
    return status.HTTP_400_BAD_REQUEST, "Constraint violation"


def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Validation error: " + ", ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(request, status.HTTP_400_BAD_REQUEST, format_validation_errors(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    status_code, message = integrity_error_status(exc)
    logger.warning(f"{request.method} {request.url.path}: {message} ({exc.orig})")
    return error_response(request, status_code, message)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
