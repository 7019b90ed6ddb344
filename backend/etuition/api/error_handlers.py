"""Error Handlers — global exception handlers for the eTuition API.

Invariants:
    - ETuitionError -> its own http_status with the {error: {...}} envelope
    - 401 responses carry WWW-Authenticate: Bearer
    - RequestValidationError -> 400 VALIDATION_ERROR, one detail per bad field,
      field names as the client sent them (camelCase, no "body." prefix)
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - 4xx domain errors log at warning, 5xx at error: a forbidden read is not an outage
    - Registered from main.py via register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from etuition.core.errors import ETuitionError, ErrorSeverity

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}
_REQUEST_PARTS = {"body", "query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register the eTuition domain/infrastructure error handler."""

    @app.exception_handler(ETuitionError)
    async def etuition_error_handler(request: Request, exc: ETuitionError):
        """Map any ETuitionError onto its status and envelope."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "user_email": exc.context.user_email,
            },
        )
        headers = _BEARER_CHALLENGE if exc.http_status == 401 else None
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register the request-validation handler (bad bodies, ids, query params)."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = [_field_detail(e) for e in exc.errors()]
        logger.warning(
            f"Invalid request on {request.url.path}: "
            f"{', '.join(d['field'] for d in details)}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "category": "validation",
                    "severity": ErrorSeverity.ERROR.value,
                    "details": details,
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register the catch-all handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=exc,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _field_detail(error: dict) -> dict:
    """One validation error as {field, message, type}; 'body.appId' -> 'appId'."""
    loc = [str(part) for part in error["loc"]]
    if len(loc) > 1 and loc[0] in _REQUEST_PARTS:
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": error["msg"],
        "type": error["type"],
    }
