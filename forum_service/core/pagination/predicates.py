"""Composable filter predicates.

A predicate is a small immutable tree: ``Or`` groups for multi-field text
matches, ``And`` groups for combining independent filter dimensions, and
leaves for the individual conditions. The tree is storage-agnostic; the
repository translates it into its own query language.

Each node renders to a compact string which is handy in logs::

    AND(OR(title~foo, content~foo), tags∈[1,2])
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from forum_service.core.pagination.sanitizers import SanitizedTerm


class Predicate:
    """Base class for predicate tree nodes."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class MatchAll(Predicate):
    """Universal predicate: no filtering."""

    def __str__(self) -> str:
        return "ALL"


@dataclass(frozen=True, slots=True)
class Contains(Predicate):
    """Case-insensitive literal substring match on one field."""

    field: str
    term: SanitizedTerm

    def __str__(self) -> str:
        return f"{self.field}~{self.term.text}"


@dataclass(frozen=True, slots=True)
class Equals(Predicate):
    field: str
    value: Any

    def __str__(self) -> str:
        return f"{self.field}={self.value}"


@dataclass(frozen=True, slots=True)
class IsNull(Predicate):
    field: str

    def __str__(self) -> str:
        return f"{self.field}=null"


@dataclass(frozen=True, slots=True)
class Between(Predicate):
    """Inclusive range; either bound may be open."""

    field: str
    lower: datetime | None = None
    upper: datetime | None = None

    def __str__(self) -> str:
        lower = self.lower.isoformat() if self.lower else "*"
        upper = self.upper.isoformat() if self.upper else "*"
        return f"{self.field}∈[{lower}..{upper}]"


@dataclass(frozen=True, slots=True)
class HasAny(Predicate):
    """Row has at least one related item whose ``field`` is in ``values``."""

    relation: str
    values: tuple[Any, ...]
    field: str = "id"

    def __str__(self) -> str:
        return f"{self.relation}∈[{','.join(str(v) for v in self.values)}]"


@dataclass(frozen=True, slots=True)
class And(Predicate):
    children: tuple[Predicate, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f"AND({', '.join(str(c) for c in self.children)})"


@dataclass(frozen=True, slots=True)
class Or(Predicate):
    children: tuple[Predicate, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f"OR({', '.join(str(c) for c in self.children)})"


# ──────────────────────────────────────────────────────────────
# Builders
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ResourceScope:
    """Restrict rows to one resource type.

    For ``kind="post"`` rows must have ``comment_id`` null (and match
    ``post_id`` when an identifier is given); ``"comment"`` is the mirror.
    """

    kind: Literal["post", "comment"]
    identifier: Any | None = None
    post_field: str = "post_id"
    comment_field: str = "comment_id"


@dataclass(frozen=True, slots=True)
class DateRange:
    field: str
    lower: datetime | None = None
    upper: datetime | None = None


def build_text_predicate(term: SanitizedTerm, fields: Sequence[str]) -> Or:
    """One ``Contains`` leaf per searchable field, OR-ed together."""
    if not fields:
        raise ValueError("At least one searchable field is required")
    return Or(tuple(Contains(name, term) for name in fields))


def build_tag_predicate(tag_ids: Iterable[int], relation: str = "tags") -> HasAny:
    """Membership filter: any of the listed tags qualifies."""
    return HasAny(relation=relation, values=tuple(tag_ids))


def build_scope_predicate(scope: ResourceScope) -> And:
    if scope.kind == "post":
        own, other = scope.post_field, scope.comment_field
    else:
        own, other = scope.comment_field, scope.post_field
    children: list[Predicate] = []
    if scope.identifier is not None:
        children.append(Equals(own, scope.identifier))
    children.append(IsNull(other))
    return And(tuple(children))


def compose(
    text: Predicate | None = None,
    tags: Predicate | None = None,
    status: tuple[str, Any] | None = None,
    resource_scope: ResourceScope | None = None,
    equals: Iterable[tuple[str, Any]] = (),
    is_null: Iterable[str] = (),
    date_range: DateRange | None = None,
) -> Predicate:
    """Combine independent filter dimensions with AND.

    Args:
        text: Text group from :func:`build_text_predicate`.
        tags: Membership filter from :func:`build_tag_predicate`.
        status: ``(field, value)`` equality on a status column.
        resource_scope: Post/comment exclusivity filter.
        equals: Further ``(field, value)`` equalities, in order.
        is_null: Fields that must be null, e.g. ``parent_id`` for top-level comments.
        date_range: Inclusive range on a timestamp column.

    Returns:
        ``AND(...)`` of the supplied dimensions, or :class:`MatchAll` when
        nothing was supplied. Groups are kept as siblings, never merged.
    """
    children: list[Predicate] = []
    if text is not None:
        children.append(text)
    if tags is not None:
        children.append(tags)
    if status is not None:
        children.append(Equals(*status))
    if resource_scope is not None:
        children.append(build_scope_predicate(resource_scope))
    children.extend(Equals(name, value) for name, value in equals)
    children.extend(IsNull(name) for name in is_null)
    if date_range is not None and (date_range.lower or date_range.upper):
        children.append(Between(date_range.field, date_range.lower, date_range.upper))

    if not children:
        return MatchAll()
    return And(tuple(children))


__all__ = [
    "And",
    "Between",
    "Contains",
    "DateRange",
    "Equals",
    "HasAny",
    "IsNull",
    "MatchAll",
    "Or",
    "Predicate",
    "ResourceScope",
    "build_scope_predicate",
    "build_tag_predicate",
    "build_text_predicate",
    "compose",
]
