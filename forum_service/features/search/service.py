"""Service layer for post search.

Matching rules:
    - the term matches if it appears in the title OR the content
      (literal, case-insensitive substring)
    - tags match if the post has ANY of the listed tags
    - term and tags combine with AND
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from forum_service.core.pagination import (
    build_tag_predicate,
    build_text_predicate,
    compose,
    search,
)
from forum_service.core.pagination.sanitizers import sanitize_search_term, sanitize_tag_ids
from forum_service.core.settings import get_pagination_settings
from forum_service.features.posts.repository import PostRepository, get_post_repository
from forum_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from forum_service.core.pagination import CursorPlan, PageResult
    from forum_service.features.posts.models import Post

lazy_logger = get_lazy_logger(__name__)

SEARCH_FIELDS = ("title", "content")


class SearchService:
    def __init__(self, session: AsyncSession, repo: PostRepository | None = None) -> None:
        self._session = session
        self._repo = repo or get_post_repository()

    async def search_posts(
        self,
        plan: CursorPlan,
        *,
        term: Any = None,
        tag_ids: str | None = None,
    ) -> PageResult[Post]:
        """Search posts by text and/or tags.

        Args:
            plan: Validated cursor plan.
            term: Raw search term.
            tag_ids: Raw comma-separated tag id list.

        Returns:
            Page of posts with a ``meta`` summary of the search.

        Raises:
            ValidationException: If neither a term nor a usable tag is given,
                the term is malformed, or too many tag ids are supplied.
        """
        settings = get_pagination_settings()
        tags = sanitize_tag_ids(tag_ids, max_items=settings.max_tag_ids)
        text = sanitize_search_term(
            term,
            has_alternative_filter=bool(tags),
            max_length=settings.search_max_length,
        )

        predicate = compose(
            text=build_text_predicate(text, SEARCH_FIELDS) if text else None,
            tags=build_tag_predicate(tags) if tags else None,
        )
        lazy_logger.debug(lambda: f"service.search_posts: predicate={predicate}")

        return await search(self._repo.bind(self._session), plan, predicate, text)
