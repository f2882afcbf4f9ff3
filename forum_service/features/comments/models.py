"""Comment model."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_service.core.database.base import Base, IntegerPKMixin, TimestampMixin

if TYPE_CHECKING:
    from forum_service.features.users.models import User


class Comment(Base, IntegerPKMixin, TimestampMixin):
    """A comment on a post; ``parent_id`` is set for replies."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text)
    post_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("posts.id", ondelete="CASCADE"), index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"),
        index=True,
        default=None,
    )

    author: Mapped[User] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, parent_id={self.parent_id})>"
