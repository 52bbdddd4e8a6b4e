"""Domain exceptions for the application.

These exceptions represent business-logic errors. Plain API endpoints
render them as RFC 7807 Problem Details; admin mutations running through
the action gateway render them as failed action results.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message, safe to show to users
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Article not found", resource="article", resource_id=slug)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when an operation conflicts with existing data.

    Covers uniqueness violations and referential guards such as deleting
    a role that still has users.
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when input passes schema validation but violates a business rule.

    Example:
        raise ValidationError(
            "Unknown permission keys",
            errors=[{"field": "permissions", "message": "blog.PUBLISH is not defined"}],
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when no authenticated user is present or credentials are invalid."""

    message = "Authentication required"
    error_code = "auth_required"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when the authenticated user may not perform an action.

    Example:
        raise ForbiddenError(
            "You don't have permission to delete users",
            details={"required_permission": "user.DELETE"},
        )
    """

    message = "You don't have permission to perform this action"
    error_code = "permission_denied"
    status_code = 403

