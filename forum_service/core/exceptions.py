"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=404,
            detail="Post not found",
            type="post-not-found",
            title="Post Not Found",
            instance="/api/v1/posts/abc123",
            extra={"post_id": "abc123"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class NotFoundException(AppException):
    """Exception raised when a resource is not found.

    Parent-scoped listings raise this before any page is planned, e.g.
    the replies of a comment that does not exist.

    Example:
        raise NotFoundException(
            detail="Comment with ID 42 not found",
            type="comment-not-found",
            extra={"comment_id": 42},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class ValidationException(AppException):
    """Exception raised for malformed or out-of-range query input.

    Covers bad cursor tokens, limits outside the allowed range, ``page < 1``,
    oversized tag lists and mutually exclusive identifiers. Always raised
    before the repository is touched.

    Example:
        raise ValidationException(
            detail="Invalid cursor",
            extra={"field": "cursor", "value": "abc"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize validation exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
            field: Name of the offending query parameter, if any.
        """
        self.field = field
        payload = dict(extra or {})
        if field is not None:
            payload.setdefault("errors", [{"field": field, "message": detail}])
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=payload,
        )


class InternalServerException(AppException):
    """Exception raised for unexpected server-side failures."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred while processing your request",
        type: str = "internal-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Internal Server Error",
            instance=instance,
            extra=extra,
        )


# Aliases matching the names used across the pagination layer
NotFoundError = NotFoundException
ValidationError = ValidationException

__all__ = [
    "AppException",
    "InternalServerException",
    "NotFoundError",
    "NotFoundException",
    "ValidationError",
    "ValidationException",
]
