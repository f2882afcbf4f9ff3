"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=400,
            content=ProblemDetail(
                type="validation-error",
                title="Validation Error",
                status=400,
                detail="Invalid cursor",
                instance="/api/v1/posts?cursor=zzz",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "validation-error",
                "title": "Validation Error",
                "status": 400,
                "detail": "limit must be greater than 0",
                "instance": "/api/v1/posts?limit=0",
            }
        },
        str_strip_whitespace=True,
    )

    @staticmethod
    def _default_title(status_code: int) -> str:
        return _TITLES.get(status_code, "Error")


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(description="Dotted location of the offending input")
    message: str = Field(description="What was wrong with it")
    type: str | None = Field(default=None, description="Machine-readable error code")
    value: Any | None = Field(default=None, description="The rejected input, when safe to echo")


class ValidationProblemDetail(ProblemDetail):
    """Problem detail carrying per-field validation errors."""

    errors: list[FieldError] = Field(default_factory=list)


__all__ = ["FieldError", "ProblemDetail", "ValidationProblemDetail"]
