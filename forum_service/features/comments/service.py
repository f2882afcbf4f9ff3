"""Service layer for comment listings.

Both listings are scoped to a parent (a post, or a comment for replies).
The parent's existence is checked first; a missing parent is a 404 and no
page is fetched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forum_service.core.exceptions import NotFoundException
from forum_service.core.pagination import compose, paginate
from forum_service.features.comments.repository import CommentRepository, get_comment_repository
from forum_service.features.posts.repository import PostRepository, get_post_repository
from forum_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from forum_service.core.pagination import CursorPlan, PageResult
    from forum_service.features.comments.models import Comment

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class CommentService:
    """Cursor-paginated comment listings."""

    def __init__(
        self,
        session: AsyncSession,
        repo: CommentRepository | None = None,
        post_repo: PostRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_comment_repository()
        self._post_repo = post_repo or get_post_repository()

    async def list_post_comments(self, post_id: UUID, plan: CursorPlan) -> PageResult[Comment]:
        """Top-level comments of a post, oldest first, with their total.

        Raises:
            NotFoundException: If the post does not exist.
        """
        if not await self._post_repo.exists(self._session, id=post_id):
            logger.info("Comments requested for missing post", extra={"post_id": str(post_id)})
            raise NotFoundException(
                detail=f"Post with ID {post_id} not found",
                type="post-not-found",
                extra={"post_id": str(post_id)},
            )

        predicate = compose(equals=[("post_id", post_id)], is_null=["parent_id"])
        page = await paginate(self._repo.bind(self._session), plan, predicate, include_total=True)
        lazy_logger.debug(
            lambda: f"service.list_post_comments(post_id={post_id}) -> "
            f"{len(page.items)}/{page.total} comments"
        )
        return page

    async def list_replies(self, comment_id: int, plan: CursorPlan) -> PageResult[Comment]:
        """Direct replies to a comment, oldest first.

        Raises:
            NotFoundException: If the parent comment does not exist.
        """
        if not await self._repo.exists(self._session, id=comment_id):
            logger.info("Replies requested for missing comment", extra={"comment_id": comment_id})
            raise NotFoundException(
                detail=f"Comment with ID {comment_id} not found",
                type="comment-not-found",
                extra={"comment_id": comment_id},
            )

        predicate = compose(equals=[("parent_id", comment_id)])
        page = await paginate(self._repo.bind(self._session), plan, predicate)
        lazy_logger.debug(
            lambda: f"service.list_replies(comment_id={comment_id}, state={plan.state}) -> "
            f"{len(page.items)} replies"
        )
        return page
