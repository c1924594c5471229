"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées, des codes
d'erreur cohérents et un support pour le tracing des requêtes. Les erreurs métier du calcul
astrologique y sont traduites en statuts HTTP (400 / 503 / 500).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vedic_backend.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
)
from vedic_backend.domain.errors import AstrologyError

log = logging.getLogger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


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


# Common error codes
class ErrorCodes:
    """Standard error codes for the API."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(
        code=code,
        message=message,
        trace_id=trace_id,
        details=details,
    )

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
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id

    # Set by RequestIDMiddleware
    return getattr(request.state, "trace_id", None)


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with standard envelope."""
    trace_id = extract_trace_id(request) or exc.trace_id

    log.warning(
        "API error occurred",
        extra={
            "code": exc.code,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "trace_id": trace_id,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=trace_id,
        details=exc.details,
    )


def handle_astrology_error(request: Request, exc: AstrologyError) -> JSONResponse:
    """Traduit une erreur du pipeline astrologique en réponse HTTP.

    Le détail interne (`exc.detail`) n'est jamais renvoyé; seule la validation expose la liste
    complète des violations pour permettre une correction en un seul aller-retour.
    """
    trace_id = extract_trace_id(request)

    log.error(
        "Astrology error occurred",
        extra={
            "code": exc.code,
            "stage": exc.stage,
            "status_code": exc.status_code,
            "trace_id": trace_id,
            "internal_detail": exc.detail,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=trace_id,
        details=exc.details if exc.status_code == HTTP_BAD_REQUEST else None,
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)

    error_codes = {
        400: ErrorCodes.BAD_REQUEST,
        404: ErrorCodes.NOT_FOUND,
        405: ErrorCodes.METHOD_NOT_ALLOWED,
        500: ErrorCodes.INTERNAL_ERROR,
        503: ErrorCodes.SERVICE_UNAVAILABLE,
    }

    code = error_codes.get(exc.status_code, "HTTP_ERROR")

    log.warning(
        "HTTP exception occurred",
        extra={
            "code": code,
            "error_message": str(exc.detail),
            "status_code": exc.status_code,
            "trace_id": trace_id,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=trace_id,
    )


def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Corps illisible ou non-objet: 400, comme toute erreur d'entrée."""
    trace_id = extract_trace_id(request)
    errors = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]

    log.warning(
        "Request body rejected",
        extra={"code": ErrorCodes.BAD_REQUEST, "errors": errors, "trace_id": trace_id},
    )

    return create_error_response(
        status_code=HTTP_BAD_REQUEST,
        code=ErrorCodes.BAD_REQUEST,
        message="Request body must be a JSON object",
        trace_id=trace_id,
        details={"errors": errors},
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)

    log.error(
        "Unexpected error occurred",
        extra={
            "code": ErrorCodes.INTERNAL_ERROR,
            "trace_id": trace_id,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )

    return create_error_response(
        status_code=HTTP_INTERNAL_SERVER_ERROR,
        code=ErrorCodes.INTERNAL_ERROR,
        message="An unexpected error occurred",
        trace_id=trace_id,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Branche les gestionnaires d'erreurs sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(AstrologyError, handle_astrology_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)


def bad_request(
    message: str, trace_id: str | None = None, details: dict[str, Any] | None = None
) -> APIError:
    """Create a 400 Bad Request error."""
    return APIError(HTTP_BAD_REQUEST, ErrorCodes.BAD_REQUEST, message, trace_id, details)
