"""API router for comment listings.

Endpoints:
    GET /posts/{post_id}/comments        - Top-level comments of a post
    GET /comments/{comment_id}/replies   - Replies to a comment

Both are cursor-paginated on the integer comment id; ``nextCursor`` is the id
of the last comment on the page.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from forum_service.core.dependencies import SessionDep, cursor_plan
from forum_service.core.pagination import CursorPage, CursorPlan
from forum_service.core.pagination.cursor import MAX_INTEGER_ID
from forum_service.features.comments.repository import COMMENT_SORT_KEY
from forum_service.features.comments.schemas import CommentPage, CommentRead
from forum_service.features.comments.service import CommentService

router = APIRouter(tags=["comments"])

CommentPlan = Annotated[CursorPlan, Depends(cursor_plan(COMMENT_SORT_KEY, "comments"))]


@router.get(
    "/posts/{post_id}/comments",
    response_model=CommentPage[CommentRead],
    summary="List a post's comments",
    responses={
        400: {"description": "Invalid limit or cursor"},
        404: {"description": "Post not found"},
    },
)
async def list_post_comments(
    post_id: UUID,
    session: SessionDep,
    plan: CommentPlan,
) -> CommentPage[CommentRead]:
    service = CommentService(session)
    page = await service.list_post_comments(post_id, plan)
    return CommentPage[CommentRead].from_result(page, CommentRead)


@router.get(
    "/comments/{comment_id}/replies",
    response_model=CursorPage[CommentRead],
    summary="List replies to a comment",
    responses={
        400: {"description": "Invalid limit or cursor"},
        404: {"description": "Comment not found"},
    },
)
async def list_replies(
    comment_id: Annotated[int, Path(ge=1, le=MAX_INTEGER_ID)],
    session: SessionDep,
    plan: CommentPlan,
) -> CursorPage[CommentRead]:
    service = CommentService(session)
    page = await service.list_replies(comment_id, plan)
    return CursorPage[CommentRead].from_result(page, CommentRead)
