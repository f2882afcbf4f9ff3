"""Shared response schemas."""

from __future__ import annotations

from forum_service.core.schemas.error import FieldError, ProblemDetail, ValidationProblemDetail

__all__ = ["FieldError", "ProblemDetail", "ValidationProblemDetail"]
