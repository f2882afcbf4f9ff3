"""Page planning: cursor (seek) and offset (page number) strategies.

A plan is created from the raw ``limit``/``cursor``/``page`` query values of
one request. Creation validates them, so an invalid request never reaches
the repository. The plan then

1. builds the :class:`QueryDescriptor` for a predicate, and
2. turns the fetched rows into the page plus its pagination envelope.

The two strategies are separate classes rather than one function with a
mode flag; endpoints pick one and never switch within a request.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Literal

from forum_service.core.exceptions import ValidationException
from forum_service.core.pagination.cursor import CursorCodec, CursorToken, SortKey
from forum_service.core.pagination.query import QueryDescriptor
from forum_service.core.pagination.sanitizers import parse_int
from forum_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from forum_service.core.pagination.predicates import Predicate

lazy_logger = get_lazy_logger(__name__)


@dataclass(frozen=True, slots=True)
class PageLimits:
    """Default and maximum page size for one endpoint profile."""

    default: int
    maximum: int

    def __post_init__(self) -> None:
        if not 1 <= self.default <= self.maximum:
            raise ValueError(
                f"Invalid page limits: default={self.default} maximum={self.maximum}"
            )


class CursorState(StrEnum):
    FIRST_PAGE = "first_page"
    SUBSEQUENT_PAGE = "subsequent_page"


# ──────────────────────────────────────────────────────────────
# Envelopes
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CursorEnvelope:
    has_more: bool
    next_cursor: CursorToken | None


@dataclass(frozen=True, slots=True)
class OffsetEnvelope:
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_previous: bool


# ──────────────────────────────────────────────────────────────
# Cursor mode
# ──────────────────────────────────────────────────────────────


class CursorPlan:
    """Seek-based pagination over a unique sort key.

    Fetches ``limit + 1`` rows; the extra row only signals that another
    page exists and is never returned.

    Example:
        plan = CursorPlan.from_request(key, PageLimits(10, 50), limit="5", cursor=None)
        result = await repo.fetch(plan.build(predicate))
        rows, envelope = plan.page(result.rows), plan.envelope(result.rows)
    """

    mode: Literal["cursor"] = "cursor"

    def __init__(self, sort_key: SortKey, limit: int, position: Any | None = None) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.sort_key = sort_key
        self.limit = limit
        self.position = position
        self.codec: CursorCodec = sort_key.codec()

    @classmethod
    def from_request(
        cls,
        sort_key: SortKey,
        limits: PageLimits,
        *,
        limit: Any = None,
        cursor: Any = None,
    ) -> CursorPlan:
        """Validate raw query values and create a plan.

        ``limit`` defaults when absent and is clamped down to
        ``limits.maximum``; a non-integer or non-positive limit is rejected.
        A blank cursor means the first page.

        Raises:
            ValidationException: On a bad limit or a malformed cursor.
        """
        size = parse_int(limit, field="limit")
        if size is None:
            size = limits.default
        elif size < 1:
            raise ValidationException(detail="limit must be greater than 0", field="limit")
        size = min(size, limits.maximum)

        position = None
        if cursor is not None and not (isinstance(cursor, str) and not cursor.strip()):
            position = sort_key.codec().decode(cursor)

        return cls(sort_key, size, position)

    @property
    def state(self) -> CursorState:
        if self.position is None:
            return CursorState.FIRST_PAGE
        return CursorState.SUBSEQUENT_PAGE

    def build(self, predicate: Predicate, *, include_total: bool = False) -> QueryDescriptor:
        """Describe the over-fetching query for ``predicate``."""
        seek = None if self.position is None else self.codec.position(self.position)
        query = QueryDescriptor(
            predicate=predicate,
            order_by=self.sort_key,
            limit=self.limit + 1,
            skip=0 if seek is None else 1,
            cursor=seek,
            include_total=include_total,
        )
        lazy_logger.debug(lambda: f"pagination.cursor: state={self.state} {query}")
        return query

    def page[T](self, rows: Sequence[T]) -> list[T]:
        return list(rows[: self.limit])

    def envelope(self, rows: Sequence[Any]) -> CursorEnvelope:
        """``hasMore`` and the cursor of the last *kept* row."""
        if len(rows) > self.limit:
            return CursorEnvelope(
                has_more=True,
                next_cursor=self.codec.encode_row(rows[self.limit - 1]),
            )
        return CursorEnvelope(has_more=False, next_cursor=None)


# ──────────────────────────────────────────────────────────────
# Offset mode
# ──────────────────────────────────────────────────────────────


class OffsetPlan:
    """Page-number pagination with a total count."""

    mode: Literal["offset"] = "offset"

    def __init__(self, sort_key: SortKey, page: int, limit: int) -> None:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        self.sort_key = sort_key
        self.page_number = page
        self.limit = limit

    @classmethod
    def from_request(
        cls,
        sort_key: SortKey,
        limits: PageLimits,
        *,
        page: Any = None,
        limit: Any = None,
    ) -> OffsetPlan:
        """Validate raw query values and create a plan.

        Raises:
            ValidationException: If ``page < 1``, ``limit < 1`` or ``limit``
                exceeds ``limits.maximum``.
        """
        number = parse_int(page, field="page")
        if number is None:
            number = 1
        elif number < 1:
            raise ValidationException(detail="page must be greater than 0", field="page")

        size = parse_int(limit, field="limit")
        if size is None:
            size = limits.default
        elif size < 1:
            raise ValidationException(detail="limit must be greater than 0", field="limit")
        elif size > limits.maximum:
            raise ValidationException(
                detail=f"limit must be at most {limits.maximum}",
                field="limit",
            )
        return cls(sort_key, number, size)

    @property
    def skip(self) -> int:
        return (self.page_number - 1) * self.limit

    def build(self, predicate: Predicate) -> QueryDescriptor:
        query = QueryDescriptor(
            predicate=predicate,
            order_by=self.sort_key,
            limit=self.limit,
            skip=self.skip,
            include_total=True,
        )
        lazy_logger.debug(lambda: f"pagination.offset: page={self.page_number} {query}")
        return query

    def page[T](self, rows: Sequence[T]) -> list[T]:
        return list(rows)

    def envelope(self, total: int) -> OffsetEnvelope:
        total_pages = math.ceil(total / self.limit) if total > 0 else 0
        return OffsetEnvelope(
            total=total,
            page=self.page_number,
            limit=self.limit,
            total_pages=total_pages,
            has_next=self.page_number < total_pages,
            has_previous=self.page_number > 1 and total_pages > 0,
        )


PagePlan = CursorPlan | OffsetPlan

__all__ = [
    "CursorEnvelope",
    "CursorPlan",
    "CursorState",
    "OffsetEnvelope",
    "OffsetPlan",
    "PageLimits",
    "PagePlan",
]
