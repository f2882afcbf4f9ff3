"""Repository and sort key for reports."""

from __future__ import annotations

from forum_service.core.database.repository import BaseRepository
from forum_service.core.pagination.cursor import KeyType, SortField, SortKey
from forum_service.features.reports.models import Report

# Newest first, id breaks ties so pages never overlap
REPORT_SORT_KEY = SortKey.of(
    SortField("created_at", KeyType.DATETIME, descending=True),
).with_tie_breaker(SortField("id", KeyType.INTEGER, descending=True))


class ReportRepository(BaseRepository[Report]):
    def __init__(self) -> None:
        super().__init__(Report)


_report_repository: ReportRepository | None = None


def get_report_repository() -> ReportRepository:
    """Get the shared ReportRepository instance."""
    global _report_repository
    if _report_repository is None:
        _report_repository = ReportRepository()
    return _report_repository


__all__ = ["REPORT_SORT_KEY", "ReportRepository", "get_report_repository"]
