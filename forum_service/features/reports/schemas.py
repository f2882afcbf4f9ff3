"""Pydantic schemas for the reports feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict

from forum_service.core.pagination.schemas import CamelModel


class ReportReasonRead(CamelModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ReportRead(CamelModel):
    """Report as shown in the admin listing."""

    id: int
    status: str
    reason: ReportReasonRead
    reporter_id: int
    post_id: UUID | None = None
    comment_id: int | None = None
    details: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
