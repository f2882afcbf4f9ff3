"""Query descriptor handed to the persistence layer.

The pagination layer never builds SQL. It describes *what* to fetch with a
:class:`QueryDescriptor` and lets a :class:`PageRepository` decide *how*.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from forum_service.core.pagination.cursor import SortKey
from forum_service.core.pagination.predicates import MatchAll, Predicate


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    """Everything a repository needs to fetch one page.

    Attributes:
        predicate: Filter tree to translate into a WHERE clause.
        order_by: Sort key; also the seek key when ``cursor`` is set.
        limit: Maximum rows to return (already over-fetched by cursor plans).
        skip: Rows to skip. Cursor plans use 1 to step over the cursor row,
            offset plans use ``(page - 1) * limit``.
        cursor: Decoded ``{field: value}`` position to seek past, if any.
        include_total: Also count all rows matching ``predicate``.
    """

    order_by: SortKey
    limit: int
    predicate: Predicate = field(default_factory=MatchAll)
    skip: int = 0
    cursor: dict[str, Any] | None = None
    include_total: bool = False

    def __str__(self) -> str:
        return (
            f"where={self.predicate} order_by=[{self.order_by}] limit={self.limit} "
            f"skip={self.skip} cursor={self.cursor} total={self.include_total}"
        )


@dataclass(frozen=True, slots=True)
class RepositoryResult[T]:
    """Rows returned for a descriptor, plus the total when requested."""

    rows: Sequence[T]
    count: int | None = None


class PageRepository[T](Protocol):
    """Anything that can execute a :class:`QueryDescriptor`."""

    async def fetch(self, query: QueryDescriptor) -> RepositoryResult[T]: ...


__all__ = ["PageRepository", "QueryDescriptor", "RepositoryResult"]
