"""Database layer: declarative base, statement filters and repositories."""

from forum_service.core.database.base import Base, IntegerPKMixin, TimestampMixin, UUIDPKMixin
from forum_service.core.database.exceptions import InvalidFilterError, RepositoryError
from forum_service.core.database.filters import (
    LimitOffset,
    OrderBy,
    PredicateCompiler,
    PredicateFilter,
    SeekFilter,
    StatementFilter,
)
from forum_service.core.database.repository import BaseRepository, SessionPageRepository

__all__ = [
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "InvalidFilterError",
    "LimitOffset",
    "OrderBy",
    "PredicateCompiler",
    "PredicateFilter",
    "RepositoryError",
    "SeekFilter",
    "SessionPageRepository",
    "StatementFilter",
    "TimestampMixin",
    "UUIDPKMixin",
]
