"""
Centralized error handling for engagement and notification failures.

One taxonomy is shared by the server (services raise, routes map to HTTP) and the
client (HTTP status mapped back to the same classes), so callers catch one set of errors.
"""
from __future__ import annotations

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_UNPROCESSABLE = 422
STATUS_INTERNAL_ERROR = 500

MSG_COMMENT_FIELDS_REQUIRED = "Author, email, and content are required"
MSG_CONTENT_NOT_FOUND = "Content not found"
MSG_COMMENT_NOT_FOUND = "Comment not found"
MSG_NOTIFICATION_NOT_FOUND = "Notification not found"
MSG_NOTIFICATION_ALREADY_SENT = "Cannot resend notifications that were already sent successfully"
MSG_INVALID_CONTENT_TYPE = "Invalid content type"
MSG_ADMIN_REQUIRED = "Admin privileges required"
MSG_TOKEN_MISSING = "No bearer token stored; sign in as an admin first"


class IshaaziError(Exception):
    """Base for every error raised by services and the client."""

    status_code = STATUS_INTERNAL_ERROR

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NetworkError(IshaaziError):
    """Connection failure, timeout, or an unexpected server error."""


class FetchError(NetworkError):
    """Reading current state (stats, comments) from the server failed."""


class ValidationError(IshaaziError):
    status_code = STATUS_BAD_REQUEST


class AuthorizationError(IshaaziError):
    status_code = STATUS_UNAUTHORIZED


class NotFoundError(IshaaziError):
    status_code = STATUS_NOT_FOUND


# ---------------------------------------------------------------------------
# Status rules: (status codes, error class). First match wins.
# Add new rules here instead of scattering checks in the client.
# ---------------------------------------------------------------------------

STATUS_ERROR_RULES: list[tuple[tuple[int, ...], type[IshaaziError]]] = [
    ((STATUS_BAD_REQUEST, STATUS_UNPROCESSABLE), ValidationError),
    ((STATUS_UNAUTHORIZED, STATUS_FORBIDDEN), AuthorizationError),
    ((STATUS_NOT_FOUND,), NotFoundError),
]


def domain_error_to_http(exc: IshaaziError) -> HTTPException:
    """Map a service error into an HTTPException carrying its status and message."""
    return HTTPException(status_code=exc.status_code, detail=exc.message or exc.__class__.__name__)


def http_status_to_error(status_code: int, detail: str | None = None) -> IshaaziError:
    """
    Map an HTTP error status from the API back into the taxonomy.
    Unknown statuses (5xx, 409, ...) become NetworkError.
    """
    message = detail or f"API error: {status_code}"
    for statuses, error_cls in STATUS_ERROR_RULES:
        if status_code in statuses:
            return error_cls(message, status_code=status_code)
    return NetworkError(message, status_code=status_code)
