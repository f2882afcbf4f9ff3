"""Pagination dependencies for FastAPI routes.

Query values arrive as raw strings and are validated by the page planner, so
a malformed ``limit``, ``page`` or ``cursor`` becomes a 400 problem response
from the ``AppException`` handler instead of FastAPI's generic 422.

Usage:
    FeedPlan = Annotated[CursorPlan, Depends(cursor_plan(POST_SORT_KEY, "feed"))]

    @router.get("/posts")
    async def list_posts(plan: FeedPlan, session: SessionDep):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Query

from forum_service.core.pagination.cursor import SortKey
from forum_service.core.pagination.planner import CursorPlan, OffsetPlan
from forum_service.core.settings import get_pagination_settings
from forum_service.core.settings.pagination import Profile

LimitQuery = Annotated[
    str | None,
    Query(description="Items per page (defaults and ceilings depend on the endpoint)"),
]
CursorQuery = Annotated[
    str | None,
    Query(description="Opaque cursor from the previous page's pagination.nextCursor"),
]
PageQuery = Annotated[str | None, Query(description="1-based page number")]


def cursor_plan(sort_key: SortKey, profile: Profile) -> Callable[..., CursorPlan]:
    """Build a dependency that plans a cursor-mode page.

    Args:
        sort_key: Unique sort key of the collection.
        profile: Settings profile supplying default and maximum limits.
    """

    def dependency(limit: LimitQuery = None, cursor: CursorQuery = None) -> CursorPlan:
        limits = get_pagination_settings().limits_for(profile)
        return CursorPlan.from_request(sort_key, limits, limit=limit, cursor=cursor)

    return dependency


def offset_plan(sort_key: SortKey, profile: Profile) -> Callable[..., OffsetPlan]:
    """Build a dependency that plans an offset-mode page."""

    def dependency(page: PageQuery = None, limit: LimitQuery = None) -> OffsetPlan:
        limits = get_pagination_settings().limits_for(profile)
        return OffsetPlan.from_request(sort_key, limits, page=page, limit=limit)

    return dependency


__all__ = ["CursorQuery", "LimitQuery", "PageQuery", "cursor_plan", "offset_plan"]
