"""Pagination response schemas.

Two envelope styles, serialised in camelCase:

1. Cursor style: ``{data, pagination: {hasMore, nextCursor}}``
2. Offset style: ``{data, pagination: {total, page, limit, totalPages, hasNext, hasPrevious}}``

Search responses add ``meta: {searchTerm, resultsFound, currentPageSize}``.
"""

from __future__ import annotations

from typing import Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from forum_service.core.pagination.assembler import PageResult, SearchSummary
from forum_service.core.pagination.planner import CursorEnvelope, OffsetEnvelope

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CursorPagination(CamelModel):
    has_more: bool = Field(description="Whether more items exist after this page")
    next_cursor: int | str | None = Field(
        default=None,
        description="Cursor to pass back for the next page",
    )

    @classmethod
    def from_envelope(cls, envelope: CursorEnvelope) -> CursorPagination:
        return cls(has_more=envelope.has_more, next_cursor=envelope.next_cursor)


class OffsetPagination(CamelModel):
    total: int = Field(ge=0, description="Items matching the filters")
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    has_next: bool
    has_previous: bool

    @classmethod
    def from_envelope(cls, envelope: OffsetEnvelope) -> OffsetPagination:
        return cls(
            total=envelope.total,
            page=envelope.page,
            limit=envelope.limit,
            total_pages=envelope.total_pages,
            has_next=envelope.has_next,
            has_previous=envelope.has_previous,
        )


class SearchMeta(CamelModel):
    """Echo of the applied search, for client display only."""

    search_term: str | None = None
    results_found: int = Field(ge=0)
    current_page_size: int = Field(ge=0)

    @classmethod
    def from_summary(cls, summary: SearchSummary) -> SearchMeta:
        return cls(
            search_term=summary.search_term,
            results_found=summary.results_found,
            current_page_size=summary.current_page_size,
        )


class CursorPage(CamelModel, Generic[T]):
    """Cursor-paginated list response.

    Example response:
        {"data": [...], "pagination": {"hasMore": true, "nextCursor": 42}}
    """

    data: list[T]
    pagination: CursorPagination

    @classmethod
    def from_result(cls, result: PageResult, item_schema: type[BaseModel]) -> Self:
        return cls(
            data=[item_schema.model_validate(item) for item in result.items],
            pagination=CursorPagination.from_envelope(result.envelope),
        )


class OffsetPage(CamelModel, Generic[T]):
    """Offset-paginated list response."""

    data: list[T]
    pagination: OffsetPagination

    @classmethod
    def from_result(cls, result: PageResult, item_schema: type[BaseModel]) -> Self:
        return cls(
            data=[item_schema.model_validate(item) for item in result.items],
            pagination=OffsetPagination.from_envelope(result.envelope),
        )


class SearchPage(CursorPage[T], Generic[T]):
    meta: SearchMeta

    @classmethod
    def from_result(cls, result: PageResult, item_schema: type[BaseModel]) -> Self:
        return cls(
            data=[item_schema.model_validate(item) for item in result.items],
            pagination=CursorPagination.from_envelope(result.envelope),
            meta=SearchMeta.from_summary(result.meta),
        )


__all__ = [
    "CamelModel",
    "CursorPage",
    "CursorPagination",
    "OffsetPage",
    "OffsetPagination",
    "SearchMeta",
    "SearchPage",
]
