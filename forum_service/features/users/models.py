"""User model."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from forum_service.core.database.base import Base, IntegerPKMixin, TimestampMixin


class User(Base, IntegerPKMixin, TimestampMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
