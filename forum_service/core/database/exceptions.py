"""Database repository exceptions.

These describe failures of the repository itself (bad filter fields, broken
queries). They are not validation errors and propagate to the generic error
handler unchanged.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidFilterError(RepositoryError):
    """A predicate or sort key names something the model does not have.

    Attributes:
        model_name: Model the predicate was compiled against
        field: The unknown field or relationship
    """

    def __init__(self, model_name: str, field: str, reason: str = "unknown field"):
        self.model_name = model_name
        self.field = field
        super().__init__(
            f"Cannot filter {model_name} on {field!r}: {reason}",
            details={"model": model_name, "field": field},
        )


__all__ = ["InvalidFilterError", "RepositoryError"]
