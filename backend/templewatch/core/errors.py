"""
Centralized error types and their HTTP mapping.
Services raise these; routes stay thin and translate them with error_to_http.
"""
from __future__ import annotations

from fastapi import HTTPException
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_UNAUTHORIZED = 401
STATUS_INTERNAL_ERROR = 500

MSG_TOKEN_INVALID = "Authentication token expired or invalid"
MSG_TOKEN_REQUIRED = "Authentication token required"


class TempleWatchError(Exception):
    """Base for every error this service raises on purpose."""

    status_code: int = STATUS_INTERNAL_ERROR

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(TempleWatchError):
    """No token could be resolved, or the booking API rejected it (401)."""

    status_code = STATUS_UNAUTHORIZED

    def __init__(self, message: str = MSG_TOKEN_INVALID) -> None:
        super().__init__(message)


class UpstreamUnavailable(TempleWatchError):
    """Network failure, non-2xx status or malformed JSON from the booking API."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        # Upstream status when there was a response; None for transport errors
        self.upstream_status = status_code


class DeliveryFailed(TempleWatchError):
    """Webhook POST failed. Logged by the notifier, never escalated."""


class InternalError(TempleWatchError):
    """Anything else; surfaced as a generic 500."""


# ---------------------------------------------------------------------------
# Error rules: (exception type, status_code, detail). First match wins.
# detail None = use the exception's own message.
# ---------------------------------------------------------------------------

ERROR_RULES: list[tuple[type[Exception], int, str | None]] = [
    (Unauthorized, STATUS_UNAUTHORIZED, None),
]


def error_to_http(exc: Exception, default_detail: str | None = None) -> HTTPException:
    """
    Map an exception from a service call into an HTTPException.
    Unauthorized keeps its 401 so the UI can prompt for a new token; everything else is a 500
    with default_detail (or the exception message when no default is given).
    """
    for exc_type, status_code, detail in ERROR_RULES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=detail or str(exc) or MSG_TOKEN_INVALID)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=default_detail or str(exc))


def error_response(exc: Exception, default_detail: str | None = None, **extra) -> JSONResponse:
    """Same mapping as error_to_http, rendered as the {"error": ...} body the dashboard reads."""
    http_exc = error_to_http(exc, default_detail)
    return JSONResponse({**extra, "error": http_exc.detail}, status_code=http_exc.status_code)
