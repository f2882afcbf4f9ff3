"""Pydantic schemas for the posts feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from forum_service.core.pagination.schemas import CamelModel
from forum_service.features.tags.schemas import TagRead


class AuthorRead(CamelModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class PostRead(CamelModel):
    """Post as returned by the feed and search endpoints."""

    id: UUID
    title: str
    content: str
    author: AuthorRead
    tags: list[TagRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
