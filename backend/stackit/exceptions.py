"""
StackIt Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Services raise domain errors; global handlers registered in main.py
       turn them into structured JSON with the right HTTP status code.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services, security dependencies and middleware.

Exception Hierarchy:
    StackItError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

Schema-level problems (missing fields, wrong types) never reach this
hierarchy; FastAPI answers them with 422 on its own.
"""

from typing import Any, Dict, Optional


class StackItError(Exception):
    """
    Base exception for all StackIt application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StackItError):
    """
    Raised when client input breaks a business rule.

    When:    Invalid vote type, username already taken, duplicate registration.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid vote type",
            "details": {"field": "vote_type", "allowed": ["upvote", "downvote"]}
        }
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


class AuthenticationError(StackItError):
    """
    Raised when the caller cannot be identified.

    When:    Missing bearer token, bad signature, expired token, wrong password,
             token subject pointing at a deleted user.
    HTTP:    401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(StackItError):
    """
    Raised when an authenticated user acts on something they do not own.

    When:    Editing someone else's question, accepting an answer on a question
             you did not ask, reading another user's notification, admin routes.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StackItError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so routes stay free of existence checks.
    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StackItError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the original
    exception type travels in `context` and is logged server-side only.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(StackItError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP: 429 Too Many Requests, with a Retry-After header.
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
