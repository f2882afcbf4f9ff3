"""API router for the post feed.

Endpoints:
    GET /posts - Newest posts first, cursor-paginated, optional ``tagIds`` filter

Example:
    GET /posts?limit=5
    GET /posts?limit=5&cursor=<pagination.nextCursor>&tagIds=1,2
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from forum_service.core.dependencies import SessionDep, cursor_plan
from forum_service.core.pagination import CursorPage, CursorPlan
from forum_service.features.posts.repository import POST_SORT_KEY
from forum_service.features.posts.schemas import PostRead
from forum_service.features.posts.service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

FeedPlan = Annotated[CursorPlan, Depends(cursor_plan(POST_SORT_KEY, "feed"))]
TagIdsQuery = Annotated[
    str | None,
    Query(alias="tagIds", description="Comma-separated tag ids; posts with any of them match"),
]


@router.get(
    "",
    response_model=CursorPage[PostRead],
    summary="List posts",
    description="Newest posts first. Pass `pagination.nextCursor` back as `cursor` for more.",
    responses={400: {"description": "Invalid limit, cursor or tag list"}},
)
async def list_posts(
    session: SessionDep,
    plan: FeedPlan,
    tag_ids: TagIdsQuery = None,
) -> CursorPage[PostRead]:
    service = PostService(session)
    page = await service.list_posts(plan, tag_ids=tag_ids)
    return CursorPage[PostRead].from_result(page, PostRead)
