"""Result assembly: raw repository rows into a page plus envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from forum_service.core.pagination.planner import (
    CursorEnvelope,
    CursorPlan,
    OffsetEnvelope,
    PagePlan,
)
from forum_service.core.pagination.query import RepositoryResult
from forum_service.core.pagination.sanitizers import SanitizedTerm


@dataclass(frozen=True, slots=True)
class SearchSummary:
    """Display-only summary of an applied search."""

    search_term: str | None
    results_found: int
    current_page_size: int


@dataclass(frozen=True, slots=True)
class PageResult[T]:
    items: list[T]
    envelope: CursorEnvelope | OffsetEnvelope
    meta: Any | None = None
    total: int | None = None


def assemble[T](plan: PagePlan, result: RepositoryResult[T]) -> PageResult[T]:
    """Truncate (cursor mode) or pass through (offset mode) and attach the envelope.

    Raises:
        ValueError: If an offset plan receives a result without a count.
    """
    if isinstance(plan, CursorPlan):
        return PageResult(
            items=plan.page(result.rows),
            envelope=plan.envelope(result.rows),
            total=result.count,
        )

    if result.count is None:
        raise ValueError("Offset pagination requires a total count from the repository")
    return PageResult(
        items=plan.page(result.rows),
        envelope=plan.envelope(result.count),
        total=result.count,
    )


def assemble_search[T](
    plan: PagePlan,
    result: RepositoryResult[T],
    term: SanitizedTerm | None,
) -> PageResult[T]:
    """Like :func:`assemble`, plus a ``meta`` block echoing the search.

    ``results_found`` is the total number of matches when the repository
    counted them, otherwise the size of this page.
    """
    page = assemble(plan, result)
    found = result.count if result.count is not None else len(page.items)
    meta = SearchSummary(
        search_term=term.text if term is not None else None,
        results_found=found,
        current_page_size=len(page.items),
    )
    return PageResult(items=page.items, envelope=page.envelope, meta=meta, total=page.total)


__all__ = ["PageResult", "SearchSummary", "assemble", "assemble_search"]
