"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées, des codes
d'erreur cohérents et un support pour le tracing des requêtes.

Le moteur d'insights ne lève pas d'exception sur des données partielles: seules les erreurs de
structure (payload invalide) et les ressources inconnues remontent jusqu'ici.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class ErrorCodes:
    """Standard error codes for the API."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Business logic errors
    UNKNOWN_SIGN = "UNKNOWN_SIGN"


HTTP_ERROR_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
}


class APIError(HTTPException):
    """Custom API error with standard envelope."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize an API error with standardized envelope."""
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.trace_id = trace_id
        self.details = details


def create_error_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers or request state."""
    trace_id = request.headers.get(REQUEST_ID_HEADER)
    if trace_id:
        return trace_id
    return getattr(request.state, "request_id", None)


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with standard envelope."""
    trace_id = extract_trace_id(request) or exc.trace_id
    log.warning(
        "API error occurred",
        extra={"code": exc.code, "status_code": exc.status_code, "trace_id": trace_id},
    )
    return create_error_response(
        exc.status_code,
        ErrorEnvelope(code=exc.code, message=exc.message, trace_id=trace_id, details=exc.details),
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle FastAPI/Starlette HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    log.warning(
        "HTTP exception occurred",
        extra={"code": code, "status_code": exc.status_code, "trace_id": trace_id},
    )
    return create_error_response(
        exc.status_code,
        ErrorEnvelope(code=code, message=str(exc.detail), trace_id=trace_id),
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request payload validation errors (422)."""
    trace_id = extract_trace_id(request)
    errors = jsonable_encoder(exc.errors())
    log.info(
        "Request validation failed",
        extra={"trace_id": trace_id, "error_count": len(errors)},
    )
    return create_error_response(
        422,
        ErrorEnvelope(
            code=ErrorCodes.VALIDATION_ERROR,
            message="Invalid request payload",
            trace_id=trace_id,
            details={"errors": errors},
        ),
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "Unexpected error occurred",
        extra={
            "trace_id": trace_id,
            "exception_type": type(exc).__name__,
        },
        exc_info=True,
    )
    return create_error_response(
        500,
        ErrorEnvelope(
            code=ErrorCodes.INTERNAL_ERROR,
            message="An unexpected error occurred",
            trace_id=trace_id,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Branche les handlers d'erreurs standard sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_exception)


def not_found(message: str, code: str = ErrorCodes.NOT_FOUND, details: dict[str, Any] | None = None) -> APIError:
    """Create a 404 Not Found error."""
    return APIError(404, code, message, details=details)
