"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec une enveloppe unique
(`{code, message, trace_id, details}`), des codes d'erreur cohérents et la propagation de
l'identifiant de requête.

Correspondances:
- `InvalidInputError` -> 422 `INVALID_INPUT` (409 `STEP_CONFLICT` pour une action hors étape)
- `ExternalServiceError` -> 502 `BAD_GATEWAY`
- `RequestValidationError` -> 422 `VALIDATION_ERROR`
- `HTTPException` -> code dérivé du statut
- toute autre exception -> 500 `INTERNAL_ERROR`
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from arcana.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_CONFLICT,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_UNPROCESSABLE_ENTITY,
)
from arcana.domain.errors import ExternalServiceError, InvalidInputError

log = structlog.get_logger(__name__)


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
    INVALID_INPUT = "INVALID_INPUT"
    STEP_CONFLICT = "STEP_CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BAD_GATEWAY = "BAD_GATEWAY"


_STATUS_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    409: ErrorCodes.STEP_CONFLICT,
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
    502: ErrorCodes.BAD_GATEWAY,
}


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    content = asdict(envelope)
    if not envelope.details:
        content.pop("details")
    return JSONResponse(status_code=status_code, content=content)


def extract_trace_id(request: Request) -> str | None:
    """Identifiant de requête: en-tête `X-Request-ID`, sinon celui posé par le middleware."""
    return request.headers.get("X-Request-ID") or getattr(request.state, "request_id", None)


def handle_invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    trace_id = extract_trace_id(request)
    if exc.field == "step":
        status, code = HTTP_CONFLICT, ErrorCodes.STEP_CONFLICT
    else:
        status, code = HTTP_UNPROCESSABLE_ENTITY, ErrorCodes.INVALID_INPUT
    log.info("invalid_input", field=exc.field, code=code, trace_id=trace_id)
    return create_error_response(
        status, code, str(exc), trace_id, details={"field": exc.field}
    )


def handle_external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    trace_id = extract_trace_id(request)
    log.error("external_service_error", service=exc.service, reason=exc.reason, trace_id=trace_id)
    return create_error_response(
        HTTP_BAD_GATEWAY,
        ErrorCodes.BAD_GATEWAY,
        f"{exc.service} is unavailable",
        trace_id,
        details={"service": exc.service},
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    trace_id = extract_trace_id(request)
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return create_error_response(
        HTTP_UNPROCESSABLE_ENTITY,
        ErrorCodes.VALIDATION_ERROR,
        "Request validation failed",
        trace_id,
        details={"errors": errors},
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)
    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    log.info("http_exception", code=code, status_code=exc.status_code, trace_id=trace_id)
    return create_error_response(exc.status_code, code, str(exc.detail), trace_id)


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.exception(
        "unexpected_error", exception_type=type(exc).__name__, trace_id=trace_id
    )
    return create_error_response(
        HTTP_INTERNAL_SERVER_ERROR,
        ErrorCodes.INTERNAL_ERROR,
        "An unexpected error occurred",
        trace_id,
    )


def not_found(message: str) -> HTTPException:
    """Create a 404 Not Found error."""
    return HTTPException(status_code=404, detail=message)


def register_error_handlers(app: FastAPI) -> None:
    """Branche les gestionnaires d'erreurs sur l'application."""
    app.add_exception_handler(InvalidInputError, handle_invalid_input)
    app.add_exception_handler(ExternalServiceError, handle_external_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
