"""Pagination settings for API responses.

Each listing endpoint belongs to a profile with its own default and maximum
page size. Profiles are read here once and handed to the page planner as
:class:`PageLimits`, so no endpoint re-declares its own numbers.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_FEED_MAX_LIMIT=30, PAGINATION_ADMIN_MAX_LIMIT=200
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from forum_service.core.pagination.planner import PageLimits

Profile = Literal["feed", "search", "comments", "admin"]


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        feed_default_limit / feed_max_limit: Post feed (cursor mode).
        search_default_limit / search_max_limit: Post search (cursor mode).
        comments_default_limit / comments_max_limit: Comments and replies (cursor mode).
        admin_default_limit / admin_max_limit: Admin listings (offset mode).
        max_tag_ids: Longest accepted tag id list.
        search_max_length: Longest accepted search term.

    Example:
        limits = get_pagination_settings().limits_for("feed")
        plan = CursorPlan.from_request(key, limits, limit=raw_limit)
    """

    feed_default_limit: int = Field(default=10, ge=1, le=1000)
    feed_max_limit: int = Field(default=50, ge=1, le=1000)
    search_default_limit: int = Field(default=10, ge=1, le=1000)
    search_max_limit: int = Field(default=50, ge=1, le=1000)
    comments_default_limit: int = Field(default=10, ge=1, le=1000)
    comments_max_limit: int = Field(default=50, ge=1, le=1000)
    admin_default_limit: int = Field(default=10, ge=1, le=1000)
    admin_max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Ceiling for admin listings; larger requests are rejected",
    )
    max_tag_ids: int = Field(default=10, ge=1, le=100)
    search_max_length: int = Field(default=200, ge=1, le=2000)

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _defaults_within_maximums(self) -> PaginationSettings:
        for profile in ("feed", "search", "comments", "admin"):
            default = getattr(self, f"{profile}_default_limit")
            maximum = getattr(self, f"{profile}_max_limit")
            if default > maximum:
                raise ValueError(
                    f"{profile}_default_limit ({default}) exceeds {profile}_max_limit ({maximum})"
                )
        return self

    def limits_for(self, profile: Profile) -> PageLimits:
        return PageLimits(
            default=getattr(self, f"{profile}_default_limit"),
            maximum=getattr(self, f"{profile}_max_limit"),
        )
