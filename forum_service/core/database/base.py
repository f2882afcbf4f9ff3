"""Declarative base and composable column mixins.

Examples:
    class Tag(Base, IntegerPKMixin):
        __tablename__ = "tags"
        name: Mapped[str] = mapped_column(String(50), unique=True)

    class Post(Base, UUIDPKMixin, TimestampMixin):
        __tablename__ = "posts"
        title: Mapped[str] = mapped_column(String(200))
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with predictable constraint names."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ============================================================================
# Primary Key Mixins
# ============================================================================


class IntegerPKMixin:
    """Auto-increment integer primary key.

    Integer ids double as a unique, monotonic sort key, so collections keyed
    this way paginate on ``id`` alone.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


class UUIDPKMixin:
    """UUID v4 primary key.

    UUID v4 is not time-sortable; collections keyed this way sort on a
    timestamp and use ``id`` only as the tie-breaker.
    """

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


# ============================================================================
# Timestamp Mixins
# ============================================================================


class TimestampMixin:
    """Creation and modification timestamps.

    Uses both Python-side defaults (for test environments) and database
    server defaults (for direct SQL inserts).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
    )


__all__ = ["NAMING_CONVENTION", "Base", "IntegerPKMixin", "TimestampMixin", "UUIDPKMixin"]
