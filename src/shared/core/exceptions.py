"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    Level2Exception (base)
       │
       ├── UnauthorizedError (403)           ← Actor mismatch, not the owner, missing resource
       │      └── AuthenticationError (401)  ← Missing or invalid session
       ├── NotFoundError (404)               ← Owner-side lookup of a missing resource
       │      ├── StoryNotFoundError
       │      ├── ProfileNotFoundError
       │      └── PublicProfileNotFoundError ← Uniform public not-found (no details)
       ├── ValidationError (400)             ← Input outside declared bounds
       ├── ConflictError (409)               ← Resource already exists
       └── StorageError (503)                ← Backend failure (details logged, never returned)

Usage:
======
    from src.shared.core.exceptions import ValidationError, UnauthorizedError

    raise ValidationError("name", "Profile name is required")
    # Results in: {"error": {"code": "VALIDATION_ERROR", "message": "Profile name is required",
    #              "details": {"field": "name", "reason": "Profile name is required"}}}

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "UNAUTHORIZED",
            "message": "You do not have permission to perform this action",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class Level2Exception(Exception):
    """
    Base exception for all Level2 application errors.

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
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHORIZATION ERRORS (403, 401)
# ═══════════════════════════════════════════════════════════════════════════════


class UnauthorizedError(Level2Exception):
    """
    Authorization failed error (403 Forbidden).

    Raised when:
    - The caller-claimed actor differs from the session principal
    - The resource belongs to someone else
    - The resource does not exist (a mutation never reveals existence)

    The message is deliberately generic and carries no details.
    """

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        status_code: int = 403,
        error_code: str = "UNAUTHORIZED",
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
        )


class AuthenticationError(UnauthorizedError):
    """
    Authentication failed error (401 Unauthorized).

    Raised when the session is missing, malformed or expired.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(Level2Exception):
    """
    Resource not found error (404 Not Found).

    Base class for all "not found" errors with automatic message formatting.

    Example:
        raise NotFoundError("Profile", profile_id)
        # Message: "Profile with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class StoryNotFoundError(NotFoundError):
    """Work story not found error."""

    def __init__(self, story_id: str) -> None:
        super().__init__(resource="Story", resource_id=story_id)


class ProfileNotFoundError(NotFoundError):
    """Profile not found error."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(resource="Profile", resource_id=profile_id)


class PublicProfileNotFoundError(NotFoundError):
    """
    The single not-found shape of the public read path.

    Unknown, malformed, inactive and expired tokens all raise this with
    no arguments, so the response body never varies.
    """

    def __init__(self) -> None:
        super().__init__(resource="Profile")


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(Level2Exception):
    """
    Validation error (400 Bad Request).

    Raised when input falls outside declared bounds. The field and reason
    are returned to the caller since they are not security-sensitive.

    Example:
        raise ValidationError("title", "Story title is required")
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(
            message=reason,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details={"field": field, "reason": reason},
        )


class ConflictError(Level2Exception):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Share link already exists")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# STORAGE ERRORS (503)
# ═══════════════════════════════════════════════════════════════════════════════


class StorageError(Level2Exception):
    """
    Storage backend failure (503).

    The underlying error is logged where it is caught; the client only
    ever sees the generic retry message.
    """

    def __init__(self, operation: Optional[str] = None) -> None:
        self.operation = operation
        super().__init__(
            message="Something went wrong. Please try again.",
            status_code=503,
            error_code="STORAGE_ERROR",
        )
