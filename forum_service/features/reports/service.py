"""Service layer for the admin report listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from forum_service.core.exceptions import ValidationException
from forum_service.core.pagination import DateRange, ResourceScope, compose, paginate
from forum_service.core.pagination.sanitizers import (
    sanitize_choice,
    sanitize_date,
    sanitize_exclusive_pair,
    sanitize_positive_int,
    sanitize_uuid,
)
from forum_service.features.reports.models import ReportStatus
from forum_service.features.reports.repository import ReportRepository, get_report_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from forum_service.core.pagination import OffsetPlan, PageResult, Predicate
    from forum_service.features.reports.models import Report

logger = logging.getLogger(__name__)

RESOURCE_TYPES = ("post", "comment")


@dataclass(frozen=True, slots=True)
class ReportFilters:
    """Raw report-listing query values, exactly as received."""

    status: Any = None
    reason_id: Any = None
    post_id: Any = None
    comment_id: Any = None
    resource_type: Any = None
    date_from: Any = None
    date_to: Any = None


def build_report_predicate(filters: ReportFilters) -> Predicate:
    """Sanitize report filters and compose them into one predicate.

    - ``postId`` and ``commentId`` are mutually exclusive (at most one)
    - ``resourceType`` restricts to post or comment reports by requiring the
      other identifier to be null; it cannot contradict a supplied identifier
    - ``dateFrom``/``dateTo`` cover whole days

    Raises:
        ValidationException: On any malformed or contradictory value.
    """
    status = sanitize_choice(filters.status, [s.value for s in ReportStatus], field="status")
    reason_id = sanitize_positive_int(filters.reason_id, field="reasonId")
    post_id, comment_id = sanitize_exclusive_pair(
        sanitize_uuid(filters.post_id, field="postId"),
        sanitize_positive_int(filters.comment_id, field="commentId"),
        allow_neither=True,
    )
    resource_type = sanitize_choice(filters.resource_type, RESOURCE_TYPES, field="resourceType")
    date_from = sanitize_date(filters.date_from, field="dateFrom", bound="start")
    date_to = sanitize_date(filters.date_to, field="dateTo", bound="end")

    if date_from and date_to and date_from > date_to:
        raise ValidationException(detail="dateFrom must not be after dateTo", field="dateFrom")

    scope = None
    equals: list[tuple[str, Any]] = []
    if resource_type == "post":
        if comment_id is not None:
            raise ValidationException(
                detail="commentId cannot be combined with resourceType=post",
                field="commentId",
            )
        scope = ResourceScope("post", post_id)
    elif resource_type == "comment":
        if post_id is not None:
            raise ValidationException(
                detail="postId cannot be combined with resourceType=comment",
                field="postId",
            )
        scope = ResourceScope("comment", comment_id)
    elif post_id is not None:
        equals.append(("post_id", post_id))
    elif comment_id is not None:
        equals.append(("comment_id", comment_id))

    if reason_id is not None:
        equals.append(("reason_id", reason_id))

    return compose(
        status=("status", status) if status else None,
        resource_scope=scope,
        equals=equals,
        date_range=DateRange("created_at", date_from, date_to),
    )


class ReportService:
    def __init__(self, session: AsyncSession, repo: ReportRepository | None = None) -> None:
        self._session = session
        self._repo = repo or get_report_repository()

    async def list_reports(self, plan: OffsetPlan, filters: ReportFilters) -> PageResult[Report]:
        """List reports newest first, one page at a time with totals."""
        predicate = build_report_predicate(filters)
        page = await paginate(self._repo.bind(self._session), plan, predicate)
        logger.info(
            "Reports listed",
            extra={
                "predicate": str(predicate),
                "page": plan.page_number,
                "total": page.total,
            },
        )
        return page
