"""Pydantic schemas for the comments feature."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Self, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from forum_service.core.pagination import CursorPage, PageResult
from forum_service.core.pagination.schemas import CamelModel, CursorPagination
from forum_service.features.posts.schemas import AuthorRead

T = TypeVar("T")


class CommentRead(CamelModel):
    id: int
    post_id: UUID
    parent_id: int | None = None
    content: str
    author: AuthorRead
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentMeta(CamelModel):
    total_comments: int = Field(ge=0, description="Top-level comments on the post")


class CommentPage(CursorPage[T], Generic[T]):
    """Cursor page of a post's top-level comments with their total."""

    meta: CommentMeta

    @classmethod
    def from_result(cls, result: PageResult, item_schema: type[BaseModel]) -> Self:
        return cls(
            data=[item_schema.model_validate(item) for item in result.items],
            pagination=CursorPagination.from_envelope(result.envelope),
            meta=CommentMeta(total_comments=result.total or 0),
        )
