"""
Exercise Tracker — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for each failure class of the API.
How:   Each exception carries a user-facing message, an HTTP status code and
       an optional context dict. Global handlers (registered in main.py)
       turn them into plain-text responses; context is logged, never returned.
Who:   Raised by services, request parsing and middleware.

Exception Hierarchy:
    ExerciseTrackerError (base)   → 500
    ├── ClientInputError          → 400 Bad Request
    │   └── DuplicateUsername     → 400 "Username already taken"
    ├── NotFoundError             → 404 Not Found
    │   └── UserNotFound          → 404 "User not found"
    ├── InternalFailure           → 500 "Server error"
    └── RateLimitExceededError    → 429 Too Many Requests

Error bodies are plain text, not JSON.
"""

from typing import Any, Dict, Optional


class ExerciseTrackerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     User-facing text (returned as the response body)
        status_code: HTTP status the global handler responds with
        context:     Debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ClientInputError(ExerciseTrackerError):
    """
    Raised when the client sent a request that can be corrected.

    When: Missing required body fields, malformed bodies, bad query values,
          duplicate usernames.
    HTTP: 400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateUsername(ClientInputError):
    """Raised when create_user hits the username uniqueness constraint."""

    def __init__(self, username: str):
        super().__init__(
            message="Username already taken",
            field="username",
            context={"username": username},
        )
        self.username = username


class NotFoundError(ExerciseTrackerError):
    """
    Raised when a referenced resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so routes stay free of status-code logic.
    HTTP: 404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class UserNotFound(NotFoundError):
    """Raised when a userId path parameter does not resolve to a User."""

    def __init__(self, user_id: str):
        super().__init__(resource="user", resource_id=user_id)
        self.user_id = user_id


class InternalFailure(ExerciseTrackerError):
    """
    Raised when a store operation fails or input cannot be coerced into a
    storable value (unparseable date or duration).

    HTTP: 500 Internal Server Error

    The message returned to the client is always the generic "Server error";
    the original exception type and offending values travel in `context`.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(ExerciseTrackerError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP: 429 Too Many Requests, with a Retry-After header.
    """

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Too many requests. Retry in {retry_after} seconds."
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
