"""Unit tests for predicate composition."""
from __future__ import annotations

from datetime import UTC, datetime

import pytest

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
    ResourceScope,
    build_scope_predicate,
    build_tag_predicate,
    build_text_predicate,
    compose,
)
from forum_service.core.pagination.sanitizers import sanitize_search_term

TERM = sanitize_search_term("foo")


class TestBuilders:
    def test_text_predicate_ors_every_field(self):
        predicate = build_text_predicate(TERM, ("title", "content"))

        assert predicate == Or((Contains("title", TERM), Contains("content", TERM)))

    def test_text_predicate_needs_fields(self):
        with pytest.raises(ValueError):
            build_text_predicate(TERM, ())

    def test_tag_predicate(self):
        assert build_tag_predicate([1, 2]) == HasAny("tags", (1, 2))

    def test_post_scope_with_identifier(self):
        predicate = build_scope_predicate(ResourceScope("post", "abc"))

        assert predicate == And((Equals("post_id", "abc"), IsNull("comment_id")))

    def test_comment_scope_without_identifier(self):
        predicate = build_scope_predicate(ResourceScope("comment"))

        assert predicate == And((IsNull("post_id"),))


class TestCompose:
    def test_nothing_supplied_matches_all(self):
        assert compose() == MatchAll()
        assert compose(date_range=DateRange("created_at")) == MatchAll()

    def test_groups_stay_siblings(self):
        text = build_text_predicate(TERM, ("title", "content"))
        tags = build_tag_predicate([1, 2])

        predicate = compose(text=text, tags=tags)

        assert predicate == And((text, tags))
        assert str(predicate) == "AND(OR(title~foo, content~foo), tags∈[1,2])"

    def test_single_dimension_is_still_wrapped(self):
        tags = build_tag_predicate([3])

        assert compose(tags=tags) == And((tags,))

    def test_all_dimensions_in_order(self):
        lower = datetime(2025, 1, 1, tzinfo=UTC)

        predicate = compose(
            status=("status", "pending"),
            resource_scope=ResourceScope("post"),
            equals=[("reason_id", 2)],
            is_null=["parent_id"],
            date_range=DateRange("created_at", lower=lower),
        )

        assert predicate.children == (
            Equals("status", "pending"),
            And((IsNull("comment_id"),)),
            Equals("reason_id", 2),
            IsNull("parent_id"),
            Between("created_at", lower, None),
        )

    def test_str_of_leaves(self):
        assert str(MatchAll()) == "ALL"
        assert str(IsNull("parent_id")) == "parent_id=null"
        assert str(Between("created_at")) == "created_at∈[*..*]"

    def test_nodes_are_immutable(self):
        predicate = Equals("status", "pending")

        with pytest.raises(AttributeError):
            predicate.value = "resolved"  # type: ignore[misc]
