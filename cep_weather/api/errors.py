"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées, des codes
d'erreur cohérents et un support pour le tracing des requêtes. Les erreurs du cas d'usage
(`CoreError`) sont traduites ici en statuts HTTP, selon leur `ErrorKind`.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cep_weather.app.tracing import current_trace_id
from cep_weather.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_GATEWAY_TIMEOUT,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_METHOD_NOT_ALLOWED,
    HTTP_NOT_FOUND,
    HTTP_UNPROCESSABLE_ENTITY,
)
from cep_weather.domain.errors import CoreError, DeadlineExceededError, ErrorKind

log = structlog.get_logger(__name__)


class ErrorCodes:
    """Standard error codes for the API."""

    INVALID_ZIPCODE = "INVALID_ZIPCODE"
    ZIPCODE_NOT_FOUND = "ZIPCODE_NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Table exhaustive: toute valeur de ErrorKind doit y figurer.
CORE_ERROR_STATUS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.INVALID_CODE: (HTTP_UNPROCESSABLE_ENTITY, ErrorCodes.INVALID_ZIPCODE),
    ErrorKind.CODE_NOT_FOUND: (HTTP_NOT_FOUND, ErrorCodes.ZIPCODE_NOT_FOUND),
    ErrorKind.UPSTREAM_UNAVAILABLE: (HTTP_BAD_GATEWAY, ErrorCodes.UPSTREAM_UNAVAILABLE),
}

_HTTP_ERROR_CODES = {
    HTTP_NOT_FOUND: ErrorCodes.NOT_FOUND,
    HTTP_METHOD_NOT_ALLOWED: ErrorCodes.METHOD_NOT_ALLOWED,
    HTTP_UNPROCESSABLE_ENTITY: ErrorCodes.INVALID_ZIPCODE,
    HTTP_INTERNAL_SERVER_ERROR: ErrorCodes.INTERNAL_ERROR,
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers, request state or the current span."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    if hasattr(request.state, "trace_id"):
        return request.state.trace_id
    return current_trace_id()


def status_for_core_error(exc: CoreError) -> tuple[int, str]:
    """Retourne (statut HTTP, code d'erreur) pour une erreur du cas d'usage."""
    if isinstance(exc, DeadlineExceededError):
        return HTTP_GATEWAY_TIMEOUT, ErrorCodes.UPSTREAM_TIMEOUT
    return CORE_ERROR_STATUS[exc.kind]


def handle_core_error(request: Request, exc: CoreError) -> JSONResponse:
    """Handle use-case errors with standard envelope."""
    trace_id = extract_trace_id(request)
    status_code, code = status_for_core_error(exc)
    cause = exc.__cause__
    log_method = log.warning if status_code >= HTTP_INTERNAL_SERVER_ERROR else log.info
    log_method(
        "temperature_lookup_failed",
        code=code,
        kind=exc.kind.value,
        stage=exc.stage.value,
        status_code=status_code,
        cause=type(cause).__name__ if cause else None,
        trace_id=trace_id,
    )
    return create_error_response(status_code, code, exc.message, trace_id)


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI/Starlette HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    log.info("http_exception", code=code, status_code=exc.status_code, trace_id=trace_id)
    return create_error_response(exc.status_code, code, str(exc.detail), trace_id)


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps JSON illisible ou champ `cep` absent: même réponse qu'un CEP invalide."""
    trace_id = extract_trace_id(request)
    log.info("request_validation_failed", errors=len(exc.errors()), trace_id=trace_id)
    return create_error_response(
        HTTP_UNPROCESSABLE_ENTITY, ErrorCodes.INVALID_ZIPCODE, "invalid zipcode", trace_id
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        exception_type=type(exc).__name__,
        trace_id=trace_id,
        exc_info=exc,
    )
    return create_error_response(
        HTTP_INTERNAL_SERVER_ERROR,
        ErrorCodes.INTERNAL_ERROR,
        "An unexpected error occurred",
        trace_id,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs sur l'application."""
    from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: PLC0415

    app.add_exception_handler(CoreError, handle_core_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_exception)
