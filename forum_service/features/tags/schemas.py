"""Pydantic schemas for the tags feature."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from forum_service.core.pagination.schemas import CamelModel


class TagRead(CamelModel):
    """Tag as embedded in post responses."""

    id: int
    name: str = Field(description="Unique tag name")

    model_config = ConfigDict(from_attributes=True)
