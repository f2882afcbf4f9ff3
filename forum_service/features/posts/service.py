"""Service layer for the post feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from forum_service.core.pagination import build_tag_predicate, compose, paginate
from forum_service.core.pagination.sanitizers import sanitize_tag_ids
from forum_service.core.settings import get_pagination_settings
from forum_service.features.posts.repository import PostRepository, get_post_repository
from forum_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from forum_service.core.pagination import CursorPlan, PageResult
    from forum_service.features.posts.models import Post

lazy_logger = get_lazy_logger(__name__)


class PostService:
    """Listing of posts, newest first."""

    def __init__(self, session: AsyncSession, repo: PostRepository | None = None) -> None:
        self._session = session
        self._repo = repo or get_post_repository()

    async def list_posts(self, plan: CursorPlan, *, tag_ids: str | None = None) -> PageResult[Post]:
        """List posts, optionally only those carrying any of ``tag_ids``.

        An unfiltered listing is valid here, unlike search.

        Args:
            plan: Validated cursor plan.
            tag_ids: Raw comma-separated tag id list.

        Raises:
            ValidationException: If more tag ids are supplied than allowed.
        """
        tags = sanitize_tag_ids(tag_ids, max_items=get_pagination_settings().max_tag_ids)
        predicate = compose(tags=build_tag_predicate(tags) if tags else None)

        page = await paginate(self._repo.bind(self._session), plan, predicate)
        lazy_logger.debug(
            lambda: f"service.list_posts(tags={tags}, state={plan.state}) -> "
            f"{len(page.items)} posts, has_more={page.envelope.has_more}"
        )
        return page
