"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    AgoraException (base)
       │
       ├── ValidationError (400)       ← Malformed or out-of-range input
       ├── UnauthorizedError (401)     ← No caller identity on a write
       ├── ForbiddenError (403)        ← Authenticated but not the owner
       ├── NotFoundError (404)         ← Referenced entity absent
       │      ├── PostNotFoundError
       │      ├── UserNotFoundError
       │      └── NotificationNotFoundError
       ├── ConflictError (409)         ← Uniqueness violation (email, username)
       ├── RateLimitExceeded (429)     ← Caller exceeded a rate-limit policy
       └── InternalServerError (500)   ← Unexpected failure, details hidden

Usage:
======
    from agora.shared.core.exceptions import NotFoundError, ValidationError

    # Raise with automatic status code
    raise NotFoundError("Post", post_id)
    # Results in: {"success": false, "code": "NOT_FOUND", "error": "Post with id 'abc' not found"}

    # Raise with field-level details
    raise ValidationError("Post cannot be empty", errors={"content": ["Post cannot be empty"]})

Exception Handling:
===================
    Exceptions are normalized by agora.shared.core.responses.handle_error into:
    {
        "success": false,
        "error": "Post with id 'abc-123' not found",
        "code": "NOT_FOUND",
        "statusCode": 404,
        "details": {"resource": "Post", "id": "abc-123"}
    }
"""

from typing import Any, Optional


class AgoraException(Exception):
    """
    Base exception for all Agora application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context

    Example:
        raise AgoraException(
            message="Something went wrong",
            status_code=400,
            error_code="BAD_REQUEST",
            details={"field": "email"}
        )
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_SERVER_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the failure envelope.

        Returns:
            Dictionary with error details for JSON response
        """
        payload: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.error_code,
            "statusCode": self.status_code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION ERRORS (400)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(AgoraException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation. Field-level messages are kept
    under ``details["errors"]`` as ``{field: [messages]}``.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[dict[str, list[str]]] = None,
    ) -> None:
        self.errors = errors or {}
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details={"errors": self.errors} if self.errors else None,
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a single failing field."""
        return cls(message, errors={field: [message]})

    def field_errors(self, field: str) -> list[str]:
        """Messages recorded for one field."""
        return self.errors.get(field, [])


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class UnauthorizedError(AgoraException):
    """
    Missing or invalid caller identity (401 Unauthorized).

    Raised when:
    - A write is attempted anonymously
    - Token expired or malformed
    - Sign-in credentials are wrong
    """

    def __init__(
        self,
        message: str = "You must be logged in to perform this action",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED",
            details=details,
        )


class ForbiddenError(AgoraException):
    """
    Authorization failed error (403 Forbidden).

    Raised when the caller is authenticated but does not own the resource.
    """

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="FORBIDDEN",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(AgoraException):
    """
    Resource not found error (404 Not Found).

    Base class for all "not found" errors with automatic message formatting.

    Example:
        raise NotFoundError("Post", post_id)
        # Message: "Post with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class PostNotFoundError(NotFoundError):
    """Post not found error."""

    def __init__(self, post_id: str) -> None:
        super().__init__(resource="Post", resource_id=post_id)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        super().__init__(resource="User", resource_id=user_id)


class NotificationNotFoundError(NotFoundError):
    """Notification not found error."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(resource="Notification", resource_id=notification_id)


# ═══════════════════════════════════════════════════════════════════════════════
# CONFLICT ERRORS (409)
# ═══════════════════════════════════════════════════════════════════════════════


class ConflictError(AgoraException):
    """
    Resource conflict error (409 Conflict).

    Raised when storage rejects a write because of a uniqueness constraint.

    Example:
        raise ConflictError("Email already in use", resource="User")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        resource: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details={"resource": resource} if resource else None,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITING (429)
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimitExceeded(AgoraException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Carries the epoch timestamp when the window resets so clients can back off.
    """

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        reset_at: Optional[float] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        self.reset_at = reset_at
        self.retry_after = retry_after
        details: dict[str, Any] = {}
        if reset_at is not None:
            details["reset_at"] = reset_at
        if retry_after is not None:
            details["retry_after_seconds"] = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# SERVER ERRORS (500)
# ═══════════════════════════════════════════════════════════════════════════════


class InternalServerError(AgoraException):
    """
    Unexpected server error (500).

    The message is generic; the original exception is only logged.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred. Please try again later.",
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
        )
