"""Repository and sort key for posts."""

from __future__ import annotations

from forum_service.core.database.repository import BaseRepository
from forum_service.core.pagination.cursor import KeyType, SortField, SortKey
from forum_service.features.posts.models import Post

# Newest first; created_at is not unique, so the id breaks ties
POST_SORT_KEY = SortKey.of(
    SortField("created_at", KeyType.DATETIME, descending=True),
).with_tie_breaker(SortField("id", KeyType.UUID, descending=True))


class PostRepository(BaseRepository[Post]):
    def __init__(self) -> None:
        super().__init__(Post)


_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get the shared PostRepository instance."""
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository


__all__ = ["POST_SORT_KEY", "PostRepository", "get_post_repository"]
