"""Report and report reason models."""

from __future__ import annotations

import uuid
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_service.core.database.base import Base, IntegerPKMixin, TimestampMixin

if TYPE_CHECKING:
    from forum_service.features.users.models import User


class ReportStatus(StrEnum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportReason(Base, IntegerPKMixin):
    __tablename__ = "report_reasons"

    name: Mapped[str] = mapped_column(String(100), unique=True)


class Report(Base, IntegerPKMixin, TimestampMixin):
    """A user's report against exactly one post or one comment."""

    __tablename__ = "reports"

    reporter_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    reason_id: Mapped[int] = mapped_column(ForeignKey("report_reasons.id"), index=True)
    post_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), index=True, default=None
    )
    comment_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), index=True, default=None
    )
    status: Mapped[str] = mapped_column(String(20), default=ReportStatus.PENDING, index=True)
    details: Mapped[str | None] = mapped_column(Text, default=None)

    reporter: Mapped[User] = relationship(lazy="selectin")
    reason: Mapped[ReportReason] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, status={self.status!r})>"
