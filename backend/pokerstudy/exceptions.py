"""
Poker Study Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, validators and the template catalog; caught by global handlers.

Exception Hierarchy:
    PokerStudyError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    ├── AuthenticationError        → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── ConflictError              → 409 Conflict
    ├── ConfirmationRequiredError  → 428 Precondition Required
    ├── DatabaseError              → 500 Internal Server Error
    └── RateLimitExceededError     → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class PokerStudyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PokerStudyError):
    """
    Raised when client input breaks an entity rule.

    When:    Blank hand text, rating out of range, unknown player type,
             observation longer than 280 characters, and so on.
    HTTP:    400 Bad Request

    Pydantic's own request-shape failures keep FastAPI's 422; this
    exception covers the business rules in `pokerstudy.validation`.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(PokerStudyError):
    """
    Raised when claimed-user credentials are missing or wrong.

    HTTP:    401 Unauthorized, with a `WWW-Authenticate: Basic` header
    """

    def __init__(
        self,
        message: str = "Invalid name or password.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PokerStudyError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/players/{id} with an unknown id, or a template lookup
             for an id the catalog does not define.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(PokerStudyError):
    """
    Raised when a write would break a uniqueness rule.

    When:    Claiming a name that is already claimed (case-insensitive).
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfirmationRequiredError(PokerStudyError):
    """
    Raised when a destructive request arrives without explicit confirmation.

    What:    Carries the dialog the client should show before retrying with
             `confirm=true`.
    HTTP:    428 Precondition Required
    """

    def __init__(
        self,
        dialog: Dict[str, Any],
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=dialog.get("message", "Confirmation required"), context=context)
        self.dialog = dialog


class DatabaseError(PokerStudyError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(PokerStudyError):
    """
    A client exceeded the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with Retry-After

    RateLimitMiddleware runs outside the routing layer, so it builds the
    response from this exception itself instead of raising it.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
