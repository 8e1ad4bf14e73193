"""
Agora Backend — Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message, an optional context dict and
       the HTTP status it maps to. Global exception handlers (registered in
       main.py) catch these and return the standard response envelope:
       {"success": false, "message": ..., "errors": [...]}.
Who:   Raised by services, repositories, dependencies and middleware.

Exception Hierarchy:
    AgoraError (base)             → 500
    ├── ValidationError           → 400 Bad Request
    ├── ConflictError             → 400 Bad Request (duplicate username/email/like)
    ├── UnauthorizedError         → 401 Unauthorized
    │   ├── InvalidTokenError
    │   └── ExpiredTokenError
    ├── ForbiddenError            → 403 Forbidden (authenticated, not the owner)
    ├── NotFoundError             → 404 Not Found
    ├── RateLimitExceededError    → 429 Too Many Requests
    └── DatabaseError             → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class AgoraError(Exception):
    """
    Base exception for all Agora application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AgoraError):
    """
    Raised when client input fails validation.

    Field-level failures are collected in `errors` as
    [{"field": "title", "message": "..."}] and returned to the client.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors
        if self.errors is None and field:
            self.errors = [{"field": field, "message": message}]


class ConflictError(AgoraError):
    """
    Raised when an operation collides with existing state.

    When:  Duplicate username or email, liking a post twice, unliking a
           post that was never liked. Also raised when the database's unique
           constraint rejects a concurrent duplicate insert.
    HTTP:  400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "The request conflicts with the current state",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(AgoraError):
    """Missing, invalid or expired credentials."""

    status_code = 401

    def __init__(
        self,
        message: str = "Access denied. No token provided.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(UnauthorizedError):
    """Token signature, structure or subject could not be verified."""

    def __init__(
        self,
        message: str = "Invalid token.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ExpiredTokenError(UnauthorizedError):
    """Token was well-formed and signed, but its `exp` claim has passed."""

    def __init__(
        self,
        message: str = "Token expired. Please login again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(AgoraError):
    """
    Raised when an authenticated user acts on a resource they do not own.

    HTTP:  403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "You are not authorized to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AgoraError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; the service layer converts
    that None into this exception so the handler can answer 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(AgoraError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header.
    """

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "Too many requests from this IP, please try again later."
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(AgoraError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint names) is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
