"""The one "page a list" operation shared by every listing endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forum_service.core.pagination.assembler import assemble, assemble_search
from forum_service.core.pagination.planner import CursorPlan

if TYPE_CHECKING:
    from forum_service.core.pagination.assembler import PageResult
    from forum_service.core.pagination.planner import PagePlan
    from forum_service.core.pagination.predicates import Predicate
    from forum_service.core.pagination.query import PageRepository, QueryDescriptor
    from forum_service.core.pagination.sanitizers import SanitizedTerm

logger = logging.getLogger(__name__)


def _describe(plan: PagePlan, predicate: Predicate, include_total: bool) -> QueryDescriptor:
    if isinstance(plan, CursorPlan):
        return plan.build(predicate, include_total=include_total)
    # Offset plans always count
    return plan.build(predicate)


async def paginate[T](
    repository: PageRepository[T],
    plan: PagePlan,
    predicate: Predicate,
    *,
    include_total: bool = False,
) -> PageResult[T]:
    """Fetch one page for ``predicate`` according to ``plan``.

    Args:
        repository: Executes the query descriptor.
        plan: Cursor or offset plan, already validated.
        predicate: Composed filter tree.
        include_total: Also count all matches (cursor plans only; offset
            plans always count).

    Repository errors propagate unchanged.
    """
    result = await repository.fetch(_describe(plan, predicate, include_total))
    page = assemble(plan, result)
    logger.debug(
        "Page fetched",
        extra={"mode": plan.mode, "predicate": str(predicate), "rows": len(page.items)},
    )
    return page


async def search[T](
    repository: PageRepository[T],
    plan: PagePlan,
    predicate: Predicate,
    term: SanitizedTerm | None,
) -> PageResult[T]:
    """Like :func:`paginate`, counting matches for the ``meta`` block."""
    result = await repository.fetch(_describe(plan, predicate, include_total=True))
    page = assemble_search(plan, result, term)
    logger.info(
        "Search executed",
        extra={
            "predicate": str(predicate),
            "results_found": page.meta.results_found,
            "page_size": len(page.items),
        },
    )
    return page


__all__ = ["paginate", "search"]
