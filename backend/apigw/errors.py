"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées
`{code, message, trace_id, details}` et la traduction des exceptions métier des
demandes de couverture en réponses HTTP.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from backend.domain.errors import (
    AlreadyReviewed,
    CoverageRequestNotFound,
    InvalidEthiopianInput,
    RejectionReasonRequired,
    SubmissionWindowClosed,
)

log = structlog.get_logger(__name__)


class ErrorCodes:
    """Standard error codes for the API."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Business logic errors
    INVALID_ETHIOPIAN_INPUT = "INVALID_ETHIOPIAN_INPUT"
    SUBMISSION_WINDOW_CLOSED = "SUBMISSION_WINDOW_CLOSED"
    ALREADY_REVIEWED = "ALREADY_REVIEWED"
    REJECTION_REASON_REQUIRED = "REJECTION_REASON_REQUIRED"


_HTTP_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    404: ErrorCodes.NOT_FOUND,
    409: ErrorCodes.CONFLICT,
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
}


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
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "trace_id", None)


def to_api_error(exc: Exception) -> APIError | None:
    """Traduit une exception métier en `APIError`, ou None si elle n'est pas reconnue."""
    if isinstance(exc, InvalidEthiopianInput):
        return APIError(
            422,
            ErrorCodes.INVALID_ETHIOPIAN_INPUT,
            f"invalid Ethiopian {exc.field}",
            details={"field": exc.field, "value": exc.value},
        )
    if isinstance(exc, SubmissionWindowClosed):
        return APIError(
            422,
            ErrorCodes.SUBMISSION_WINDOW_CLOSED,
            exc.message,
            details={"reason": exc.reason},
        )
    if isinstance(exc, CoverageRequestNotFound):
        return APIError(404, ErrorCodes.NOT_FOUND, "Coverage request not found")
    if isinstance(exc, AlreadyReviewed):
        return APIError(409, ErrorCodes.ALREADY_REVIEWED, "Coverage request already reviewed")
    if isinstance(exc, RejectionReasonRequired):
        return APIError(
            422, ErrorCodes.REJECTION_REASON_REQUIRED, "A rejection requires a reason"
        )
    return None


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with standard envelope."""
    trace_id = extract_trace_id(request) or exc.trace_id
    log.warning(
        "api_error",
        code=exc.code,
        status_code=exc.status_code,
        trace_id=trace_id,
        path=request.url.path,
    )
    return create_error_response(
        exc.status_code,
        ErrorEnvelope(exc.code, exc.message, trace_id, exc.details),
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    log.warning("http_error", code=code, status_code=exc.status_code, trace_id=trace_id)
    return create_error_response(
        exc.status_code, ErrorEnvelope(code, str(exc.detail), trace_id)
    )


def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle coverage domain exceptions by mapping them to an `APIError`."""
    api_error = to_api_error(exc)
    if api_error is None:
        return handle_generic_exception(request, exc)
    return handle_api_error(request, api_error)


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        trace_id=trace_id,
        exception_type=type(exc).__name__,
        exc_info=exc,
    )
    return create_error_response(
        500,
        ErrorEnvelope(ErrorCodes.INTERNAL_ERROR, "An unexpected error occurred", trace_id),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Branche les gestionnaires d'erreurs sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    for exc_type in (
        InvalidEthiopianInput,
        SubmissionWindowClosed,
        CoverageRequestNotFound,
        AlreadyReviewed,
        RejectionReasonRequired,
    ):
        app.add_exception_handler(exc_type, handle_domain_error)
    app.add_exception_handler(Exception, handle_generic_exception)
