"""Repository and sort key for comments."""

from __future__ import annotations

from forum_service.core.database.repository import BaseRepository
from forum_service.core.pagination.cursor import KeyType, SortField, SortKey
from forum_service.features.comments.models import Comment

# Integer ids are unique and increase with insertion: oldest first
COMMENT_SORT_KEY = SortKey.of(SortField("id", KeyType.INTEGER))


class CommentRepository(BaseRepository[Comment]):
    def __init__(self) -> None:
        super().__init__(Comment)


_comment_repository: CommentRepository | None = None


def get_comment_repository() -> CommentRepository:
    """Get the shared CommentRepository instance."""
    global _comment_repository
    if _comment_repository is None:
        _comment_repository = CommentRepository()
    return _comment_repository


__all__ = ["COMMENT_SORT_KEY", "CommentRepository", "get_comment_repository"]
