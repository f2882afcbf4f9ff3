"""Statement filters: predicate trees, ordering and keyset seeks for SQLAlchemy.

Each filter takes a ``Select`` and returns a new one, so they compose::

    stmt = select(Post)
    stmt = PredicateFilter(Post, predicate).apply(stmt)
    stmt = OrderBy(Post, sort_key).apply(stmt)
    stmt = SeekFilter(Post, sort_key, position).apply(stmt)
    stmt = LimitOffset(limit=11, offset=0).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.orm import InstrumentedAttribute, RelationshipProperty

from forum_service.core.database.exceptions import InvalidFilterError
from forum_service.core.pagination.predicates import (
    And,
    Between,
    Contains,
    Equals,
    HasAny,
    IsNull,
    MatchAll,
    Or,
    Predicate,
)
from forum_service.core.pagination.sanitizers import LIKE_ESCAPE

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

    from forum_service.core.pagination.cursor import SortKey


class StatementFilter(ABC):
    """Base class for composable statement filters."""

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]: ...


def resolve_column(model: type[Any], name: str) -> InstrumentedAttribute[Any]:
    """Look up a mapped column attribute by name.

    Raises:
        InvalidFilterError: If ``name`` is not a column of ``model``.
    """
    attr = getattr(model, name, None)
    if not isinstance(attr, InstrumentedAttribute) or isinstance(
        attr.property, RelationshipProperty
    ):
        raise InvalidFilterError(model.__name__, name)
    return attr


class PredicateCompiler:
    """Translate a predicate tree into a SQLAlchemy boolean expression.

    - ``Contains`` -> ``lower(col) LIKE lower('%pattern%') ESCAPE '\\'``
    - ``HasAny``   -> ``EXISTS`` over the relationship (``rel.any(id IN ...)``)
    - ``Between``  -> ``col >= lower AND col <= upper``
    - ``And``/``Or`` -> ``and_``/``or_``; ``MatchAll`` -> no condition

    Example:
        clause = PredicateCompiler(Post).compile(predicate)
        if clause is not None:
            stmt = stmt.where(clause)
    """

    def __init__(self, model: type[Any]) -> None:
        self.model = model

    def compile(self, predicate: Predicate) -> ColumnElement[bool] | None:
        if isinstance(predicate, MatchAll):
            return None
        return self._compile(predicate)

    def _compile(self, node: Predicate) -> ColumnElement[bool]:
        match node:
            case MatchAll():
                return true()
            case Contains(field=name, term=term):
                column = resolve_column(self.model, name)
                return func.lower(column).like(f"%{term.pattern.lower()}%", escape=LIKE_ESCAPE)
            case Equals(field=name, value=value):
                return resolve_column(self.model, name) == value
            case IsNull(field=name):
                return resolve_column(self.model, name).is_(None)
            case Between(field=name, lower=lower, upper=upper):
                column = resolve_column(self.model, name)
                bounds = []
                if lower is not None:
                    bounds.append(column >= lower)
                if upper is not None:
                    bounds.append(column <= upper)
                return and_(true(), *bounds)
            case HasAny(relation=relation, values=values, field=name):
                return self._has_any(relation, name, values)
            case And(children=children):
                return and_(true(), *(self._compile(c) for c in children))
            case Or(children=children):
                return or_(false(), *(self._compile(c) for c in children))
        raise InvalidFilterError(self.model.__name__, type(node).__name__, "unsupported predicate")

    def _has_any(self, relation: str, name: str, values: tuple[Any, ...]) -> ColumnElement[bool]:
        attr = getattr(self.model, relation, None)
        if not isinstance(attr, InstrumentedAttribute) or not isinstance(
            attr.property, RelationshipProperty
        ):
            raise InvalidFilterError(self.model.__name__, relation, "not a relationship")
        target = attr.property.mapper.class_
        return attr.any(resolve_column(target, name).in_(values))


class PredicateFilter(StatementFilter):
    def __init__(self, model: type[Any], predicate: Predicate) -> None:
        self.clause = PredicateCompiler(model).compile(predicate)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if self.clause is None:
            return statement
        return statement.where(self.clause)


class OrderBy(StatementFilter):
    """ORDER BY every field of a sort key, in order."""

    def __init__(self, model: type[Any], sort_key: SortKey) -> None:
        self.columns = [
            (resolve_column(model, field.name), field.descending) for field in sort_key.fields
        ]

    def apply(self, statement: Select[Any]) -> Select[Any]:
        return statement.order_by(
            *(column.desc() if descending else column.asc() for column, descending in self.columns)
        )


class SeekFilter(StatementFilter):
    """Keyset condition selecting rows strictly after a cursor position.

    For fields (a, b, c) with position (v1, v2, v3) the condition is::

        (a op v1) OR
        (a = v1 AND b op v2) OR
        (a = v1 AND b = v2 AND c op v3)

    where ``op`` is ``<`` for descending fields and ``>`` for ascending ones.
    The row at the position itself never matches, whether or not it still
    exists.
    """

    def __init__(self, model: type[Any], sort_key: SortKey, position: dict[str, Any]) -> None:
        missing = [name for name in sort_key.names if name not in position]
        if missing:
            raise InvalidFilterError(model.__name__, ",".join(missing), "missing from cursor")
        self.model = model
        self.sort_key = sort_key
        self.position = position

    def condition(self) -> ColumnElement[bool]:
        or_conditions = []
        eq_conditions: list[ColumnElement[bool]] = []
        for field in self.sort_key.fields:
            column = resolve_column(self.model, field.name)
            value = self.position[field.name]
            compare = column < value if field.descending else column > value
            or_conditions.append(and_(*eq_conditions, compare) if eq_conditions else compare)
            eq_conditions.append(column == value)
        return or_(*or_conditions)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        return statement.where(self.condition())


class LimitOffset(StatementFilter):
    def __init__(self, limit: int, offset: int = 0) -> None:
        self.limit = limit
        self.offset = offset

    def apply(self, statement: Select[Any]) -> Select[Any]:
        statement = statement.limit(self.limit)
        if self.offset:
            statement = statement.offset(self.offset)
        return statement


__all__ = [
    "LimitOffset",
    "OrderBy",
    "PredicateCompiler",
    "PredicateFilter",
    "SeekFilter",
    "StatementFilter",
    "resolve_column",
]
