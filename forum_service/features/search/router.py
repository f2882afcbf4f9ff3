"""API router for post search.

Endpoints:
    GET /posts/search - Search posts by ``search`` term and/or ``tagIds``

Example:
    GET /posts/search?search=javascript&tagIds=1,2&limit=10

    {
        "data": [...],
        "pagination": {"hasMore": true, "nextCursor": "eyJ2Ijp7..."},
        "meta": {"searchTerm": "javascript", "resultsFound": 42, "currentPageSize": 10}
    }
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from forum_service.core.dependencies import SessionDep, cursor_plan
from forum_service.core.pagination import CursorPlan, SearchPage
from forum_service.features.posts.repository import POST_SORT_KEY
from forum_service.features.posts.schemas import PostRead
from forum_service.features.search.service import SearchService

router = APIRouter(prefix="/posts", tags=["search"])

SearchPlan = Annotated[CursorPlan, Depends(cursor_plan(POST_SORT_KEY, "search"))]


@router.get(
    "/search",
    response_model=SearchPage[PostRead],
    summary="Search posts",
    description=(
        "Case-insensitive substring match on title or content, AND-ed with an "
        "any-of tag filter. At least one of `search` or `tagIds` is required."
    ),
    responses={400: {"description": "Missing or malformed search input"}},
)
async def search_posts(
    session: SessionDep,
    plan: SearchPlan,
    search: Annotated[str | None, Query(description="Free-text term")] = None,
    tag_ids: Annotated[
        str | None, Query(alias="tagIds", description="Comma-separated tag ids (max 10)")
    ] = None,
) -> SearchPage[PostRead]:
    service = SearchService(session)
    page = await service.search_posts(plan, term=search, tag_ids=tag_ids)
    return SearchPage[PostRead].from_result(page, PostRead)
