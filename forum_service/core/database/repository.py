"""Generic async repository executing pagination query descriptors.

The pagination layer describes a page with a ``QueryDescriptor``; the
repository turns it into SQL. Feature repositories subclass
:class:`BaseRepository` and add their own lookups.

Example:
    class PostRepository(BaseRepository[Post]):
        def __init__(self) -> None:
            super().__init__(Post)

    repo = PostRepository()
    result = await repo.fetch_page(session, plan.build(predicate))
    result.rows, result.count
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from forum_service.core.database.filters import (
    LimitOffset,
    OrderBy,
    PredicateFilter,
    SeekFilter,
)
from forum_service.core.pagination.query import RepositoryResult
from forum_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from forum_service.core.pagination.query import QueryDescriptor


class BaseRepository[T]:
    """Generic repository over one mapped model.

    Repositories are stateless; the session is passed to every call so one
    instance can be shared by all requests.
    """

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def exists(self, session: AsyncSession, **filters: Any) -> bool:
        """Whether any row matches the given column equalities."""
        stmt = select(self.model).filter_by(**filters).limit(1)
        found = (await session.execute(select(stmt.exists()))).scalar_one()
        self._lazy.debug(lambda: f"db.exists: {self.model.__name__}({filters}) -> {found}")
        return bool(found)

    async def fetch_page(
        self,
        session: AsyncSession,
        query: QueryDescriptor,
        *,
        statement: Select[tuple[T]] | None = None,
    ) -> RepositoryResult[T]:
        """Execute a pagination query descriptor.

        The count (when requested) and the page fetch run one after the
        other: an ``AsyncSession`` must not be used concurrently.

        Args:
            session: Database session
            query: What to fetch: predicate, order, limit, skip, cursor
            statement: Base select to start from (e.g. with loader options);
                defaults to ``select(model)``

        Returns:
            Rows in sort-key order plus the total when ``include_total`` is set.
            When the total is known and ``skip`` reaches it, no rows are
            fetched.
        """
        base = statement if statement is not None else select(self.model)
        filtered = PredicateFilter(self.model, query.predicate).apply(base)

        total = None
        if query.include_total:
            count_stmt = select(func.count()).select_from(
                filtered.order_by(None).subquery()
            )
            total = (await session.execute(count_stmt)).scalar_one()

        if total is not None and query.cursor is None and query.skip >= total:
            # Past the last match; also keeps huge offsets out of SQL
            self._lazy.debug(
                lambda: f"db.fetch_page: {self.model.__name__}({query}) -> past the end, total={total}"
            )
            return RepositoryResult(rows=[], count=total)

        paged = OrderBy(self.model, query.order_by).apply(filtered)
        offset = query.skip
        if query.cursor is not None:
            paged = SeekFilter(self.model, query.order_by, query.cursor).apply(paged)
            # The strict seek already steps over the cursor row
            offset = max(query.skip - 1, 0)
        paged = LimitOffset(query.limit, offset).apply(paged)

        rows = (await session.execute(paged)).scalars().unique().all()
        self._lazy.debug(
            lambda: f"db.fetch_page: {self.model.__name__}({query}) -> {len(rows)} rows, total={total}"
        )
        return RepositoryResult(rows=rows, count=total)

    def bind(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]] | None = None,
    ) -> SessionPageRepository[T]:
        """Adapt this repository to the ``PageRepository`` protocol for one session."""
        return SessionPageRepository(self, session, statement)


class SessionPageRepository[T]:
    """A repository bound to a session, exposing ``fetch(query)``."""

    def __init__(
        self,
        repository: BaseRepository[T],
        session: AsyncSession,
        statement: Select[tuple[T]] | None = None,
    ) -> None:
        self.repository = repository
        self.session = session
        self.statement = statement

    async def fetch(self, query: QueryDescriptor) -> RepositoryResult[T]:
        return await self.repository.fetch_page(self.session, query, statement=self.statement)


__all__ = ["BaseRepository", "SessionPageRepository"]
