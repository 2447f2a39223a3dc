# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as the same JSON envelope:
#   {"detail": ..., "code": ..., "message": ..., "suggestion"?: ..., "details"?: ...}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MyContactsException(Exception):
    """
    Base exception for the MyContacts API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MYCONTACTS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        # "message" mirrors "detail" for clients that read response.data.message
        result = {
            "detail": self.message,
            "code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Error Kinds
# =============================================================================

class ValidationFailedError(MyContactsException):
    """Raised when input is missing or malformed. User-correctable."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: dict[str, str] | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion=suggestion or "Fix the listed fields and try again",
            details={"errors": errors} if errors else None,
        )
        self.errors = errors or {}


class UnauthorizedError(MyContactsException):
    """Raised when credentials are missing, invalid or expired."""

    def __init__(self, message: str = "Not authorized", suggestion: str | None = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion=suggestion or "Log in again to obtain a fresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictError(MyContactsException):
    """Raised when a resource with the same unique key already exists."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details,
        )


class NotFoundError(MyContactsException):
    """
    Raised when a resource is missing or not owned by the caller.

    The two cases share one response so callers cannot probe for other
    users' data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class StoreUnavailableError(MyContactsException):
    """Raised when the document store cannot serve a request."""

    def __init__(self, error: str):
        super().__init__(
            message="Database is unavailable",
            code="STORE_UNAVAILABLE",
            status_code=503,
            suggestion="Try again later; check /health for database status",
            details={"error": error},
        )


# =============================================================================
# Specific Errors
# =============================================================================

class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            message=f"User already registered: {username}",
            details={"username": username},
        )
        self.suggestion = "Pick a different username or log in instead"


class InvalidCredentialsError(UnauthorizedError):
    """Raised when login fails. Never says which half was wrong."""

    def __init__(self):
        super().__init__(
            message="Username or password is not valid",
            suggestion="Check your username and password",
        )


class ContactNotFoundError(NotFoundError):
    """Raised when a contact ID doesn't exist for the caller."""

    def __init__(self, contact_id: str):
        super().__init__(
            message="Contact not found",
            details={"contact_id": contact_id},
        )
        self.suggestion = "Check that the contact id is correct and hasn't been deleted"


# =============================================================================
# Exception Handlers
# =============================================================================

async def mycontacts_exception_handler(
    request: Request,
    exc: MyContactsException
) -> JSONResponse:
    """
    Convert MyContactsException to JSON response.

    Returns structured error with:
    - detail/message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body/path validation errors from FastAPI.

    Converts pydantic's error list into field-level messages and reports
    them as a 400 VALIDATION_ERROR.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    error = ValidationFailedError(message="Request validation failed", errors=errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Report anything unexpected as a generic 500 without internal detail."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
    )
