"""
Error taxonomy and HTTP mapping.

Every failure in the request path is raised as one of the JobBoardError
subclasses below and converted to a JSON response by the handlers that
register_exception_handlers() installs. Messages are safe to show to callers;
driver errors and credential details stay in the server logs.
"""

import enum
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JobBoardError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(JobBoardError):
    """Malformed input shape or type."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"
    message = "Invalid input"


class NotFoundError(JobBoardError):
    """Unknown entity id."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"
    message = "Resource not found"


class AuthErrorKind(str, enum.Enum):
    """
    Why an authentication or authorization check failed.

    - MISSING: no bearer token on the request
    - MALFORMED: token unparsable or signature does not verify
    - EXPIRED: token past its expiry
    - INVALID_CREDENTIALS: sign-in failed (unknown user or wrong password)
    - FORBIDDEN: valid token but the caller may not perform the action
    """
    MISSING = "MISSING"
    MALFORMED = "MALFORMED"
    EXPIRED = "EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"


_AUTH_RESPONSES = {
    AuthErrorKind.MISSING: (status.HTTP_401_UNAUTHORIZED, "Access denied. No token provided."),
    AuthErrorKind.MALFORMED: (status.HTTP_403_FORBIDDEN, "Invalid token"),
    AuthErrorKind.EXPIRED: (status.HTTP_403_FORBIDDEN, "Token has expired"),
    AuthErrorKind.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid credentials"),
    AuthErrorKind.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Not permitted"),
}


class AuthError(JobBoardError):
    """Missing, malformed or expired token, credential mismatch, or insufficient role."""
    error = "auth_error"

    def __init__(self, kind: AuthErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.status_code, default_message = _AUTH_RESPONSES[kind]
        super().__init__(message or default_message)


class ServiceUnavailableError(JobBoardError):
    """Backing store unreachable or timed out."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "service_unavailable"
    message = "Service temporarily unavailable"


class InternalError(JobBoardError):
    """Unexpected failure, including hashing failures."""


def _error_response(exc: JobBoardError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError) and exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "detail": exc.message},
        headers=headers,
    )


async def job_board_error_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/path/query validation failures as 400 ValidationError."""
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    fields = [f for f in fields if f]
    message = "Invalid input"
    if fields:
        message = f"Invalid input: {', '.join(fields)}"
    return _error_response(ValidationError(message))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the taxonomy handlers on an application."""
    app.add_exception_handler(JobBoardError, job_board_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
