"""Cursor and offset pagination with composable filter predicates.

Request flow::

    raw query values
      -> sanitizers (validate, normalise, escape)
      -> predicates.compose (AND of independent filter dimensions)
      -> planner (CursorPlan / OffsetPlan -> QueryDescriptor)
      -> PageRepository.fetch
      -> assembler (truncate, envelope, meta)
"""

from forum_service.core.pagination.assembler import (
    PageResult,
    SearchSummary,
    assemble,
    assemble_search,
)
from forum_service.core.pagination.cursor import (
    CompositeCursorCodec,
    CursorCodec,
    CursorToken,
    IntegerCursorCodec,
    KeyType,
    SortField,
    SortKey,
    UUIDCursorCodec,
)
from forum_service.core.pagination.planner import (
    CursorEnvelope,
    CursorPlan,
    CursorState,
    OffsetEnvelope,
    OffsetPlan,
    PageLimits,
    PagePlan,
)
from forum_service.core.pagination.predicates import (
    And,
    Between,
    Contains,
    DateRange,
    Equals,
    HasAny,
    IsNull,
    MatchAll,
    Or,
    Predicate,
    ResourceScope,
    build_tag_predicate,
    build_text_predicate,
    compose,
)
from forum_service.core.pagination.query import PageRepository, QueryDescriptor, RepositoryResult
from forum_service.core.pagination.sanitizers import SanitizedTerm
from forum_service.core.pagination.schemas import (
    CursorPage,
    CursorPagination,
    OffsetPage,
    OffsetPagination,
    SearchMeta,
    SearchPage,
)
from forum_service.core.pagination.service import paginate, search

__all__ = [
    "And",
    "Between",
    "CompositeCursorCodec",
    "Contains",
    "CursorCodec",
    "CursorEnvelope",
    "CursorPage",
    "CursorPagination",
    "CursorPlan",
    "CursorState",
    "CursorToken",
    "DateRange",
    "Equals",
    "HasAny",
    "IntegerCursorCodec",
    "IsNull",
    "KeyType",
    "MatchAll",
    "OffsetEnvelope",
    "OffsetPage",
    "OffsetPagination",
    "OffsetPlan",
    "Or",
    "PageLimits",
    "PagePlan",
    "PageRepository",
    "PageResult",
    "Predicate",
    "QueryDescriptor",
    "RepositoryResult",
    "ResourceScope",
    "SanitizedTerm",
    "SearchMeta",
    "SearchPage",
    "SearchSummary",
    "SortField",
    "SortKey",
    "UUIDCursorCodec",
    "assemble",
    "assemble_search",
    "build_tag_predicate",
    "build_text_predicate",
    "compose",
    "paginate",
    "search",
]
