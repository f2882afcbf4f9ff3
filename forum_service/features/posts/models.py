"""Post model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_service.core.database.base import Base, TimestampMixin, UUIDPKMixin
from forum_service.features.tags.models import post_tags

if TYPE_CHECKING:
    from forum_service.features.tags.models import Tag
    from forum_service.features.users.models import User


class Post(Base, UUIDPKMixin, TimestampMixin):
    """A forum post.

    Posts are listed newest first; ``created_at`` is not unique, so the
    ``id`` breaks ties.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    author: Mapped[User] = relationship(lazy="selectin")
    tags: Mapped[list[Tag]] = relationship(secondary=post_tags, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r})>"
