"""API router for the admin report listing.

Endpoints:
    GET /admin/reports - Offset-paginated reports with filters

Example:
    GET /admin/reports?status=pending&resourceType=post&page=2&limit=20

    {
        "data": [...],
        "pagination": {"total": 53, "page": 2, "limit": 20, "totalPages": 3,
                       "hasNext": true, "hasPrevious": true}
    }
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from forum_service.core.dependencies import SessionDep, offset_plan
from forum_service.core.pagination import OffsetPage, OffsetPlan
from forum_service.features.reports.repository import REPORT_SORT_KEY
from forum_service.features.reports.schemas import ReportRead
from forum_service.features.reports.service import ReportFilters, ReportService

router = APIRouter(prefix="/admin/reports", tags=["admin"])

AdminPlan = Annotated[OffsetPlan, Depends(offset_plan(REPORT_SORT_KEY, "admin"))]


def get_report_filters(
    status: Annotated[str | None, Query(description="pending, reviewed, resolved or dismissed")] = None,
    reason_id: Annotated[str | None, Query(alias="reasonId")] = None,
    post_id: Annotated[str | None, Query(alias="postId")] = None,
    comment_id: Annotated[str | None, Query(alias="commentId")] = None,
    resource_type: Annotated[
        str | None, Query(alias="resourceType", description="post or comment")
    ] = None,
    date_from: Annotated[str | None, Query(alias="dateFrom", description="YYYY-MM-DD")] = None,
    date_to: Annotated[str | None, Query(alias="dateTo", description="YYYY-MM-DD")] = None,
) -> ReportFilters:
    return ReportFilters(
        status=status,
        reason_id=reason_id,
        post_id=post_id,
        comment_id=comment_id,
        resource_type=resource_type,
        date_from=date_from,
        date_to=date_to,
    )


@router.get(
    "",
    response_model=OffsetPage[ReportRead],
    summary="List moderation reports",
    responses={400: {"description": "Invalid paging or filter values"}},
)
async def list_reports(
    session: SessionDep,
    plan: AdminPlan,
    filters: Annotated[ReportFilters, Depends(get_report_filters)],
) -> OffsetPage[ReportRead]:
    service = ReportService(session)
    page = await service.list_reports(plan, filters)
    return OffsetPage[ReportRead].from_result(page, ReportRead)
