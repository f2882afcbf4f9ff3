"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine, session factory, session
    - Application Fixtures: FastAPI app wired to the test database, HTTP client
    - Data Fixtures: ``forum`` factory for users, tags, posts, comments, reports
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests never touch a real database or start a log listener thread
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("LOG_USE_QUEUE", "false")
os.environ.setdefault("LOG_JSON_LOGS", "false")

BASE_TIME = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory SQLite engine with every table created.

    ``StaticPool`` keeps one connection so all sessions see the same database.
    """
    import forum_service.features.models  # noqa: F401
    from forum_service.core.database.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for reading in tests; rolled back afterwards."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """FastAPI application whose request sessions come from the test database.

    Example:
        async def test_endpoint(client):
            response = await client.get("/api/v1/posts")
            assert response.status_code == 200
    """
    from forum_service.app.main import create_app
    from forum_service.core.dependencies.database import get_db_session

    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings are cached per process; tests that patch env vars need a fresh load."""
    from forum_service.core.settings import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================================
# Data Fixtures
# ============================================================================


class ForumFactory:
    """Create and commit forum rows for a test.

    Each call commits and expunges, so later reads (including requests made
    through the ``client`` fixture) load fresh instances from the database.

    Example:
        async def test_feed(forum, client):
            user = await forum.user()
            await forum.post(user, title="Hello")
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def _save(self, *instances: Any) -> None:
        async with self._session_factory() as session:
            session.add_all(instances)
            await session.commit()
            session.expunge_all()

    async def user(self, username: str | None = None):
        from forum_service.features.users.models import User

        user = User(username=username or f"user{self._next()}")
        await self._save(user)
        return user

    async def tag(self, name: str | None = None):
        from forum_service.features.tags.models import Tag

        tag = Tag(name=name or f"tag{self._next()}")
        await self._save(tag)
        return tag

    async def post(
        self,
        author,
        *,
        title: str | None = None,
        content: str = "Body",
        tags: list | None = None,
        created_at: datetime | None = None,
    ):
        from forum_service.features.posts.models import Post
        from forum_service.features.tags.models import Tag

        number = self._next()
        post = Post(
            title=title or f"Post {number}",
            content=content,
            author_id=author.id,
            created_at=created_at or BASE_TIME + timedelta(minutes=number),
        )
        async with self._session_factory() as session:
            if tags:
                post.tags = [await session.get(Tag, tag.id) for tag in tags]
            session.add(post)
            await session.commit()
            session.expunge_all()
        return post

    async def posts(self, author, count: int, **kwargs: Any) -> list:
        return [await self.post(author, **kwargs) for _ in range(count)]

    async def comment(self, post, author, *, parent=None, content: str | None = None):
        from forum_service.features.comments.models import Comment

        comment = Comment(
            content=content or f"Comment {self._next()}",
            post_id=post.id,
            author_id=author.id,
            parent_id=parent.id if parent is not None else None,
        )
        await self._save(comment)
        return comment

    async def reason(self, name: str | None = None):
        from forum_service.features.reports.models import ReportReason

        reason = ReportReason(name=name or f"reason{self._next()}")
        await self._save(reason)
        return reason

    async def report(
        self,
        reporter,
        reason,
        *,
        post=None,
        comment=None,
        status: str = "pending",
        created_at: datetime | None = None,
    ):
        from forum_service.features.reports.models import Report

        report = Report(
            reporter_id=reporter.id,
            reason_id=reason.id,
            post_id=post.id if post is not None else None,
            comment_id=comment.id if comment is not None else None,
            status=status,
            created_at=created_at or BASE_TIME + timedelta(minutes=self._next()),
        )
        await self._save(report)
        return report


@pytest.fixture
def forum(session_factory: async_sessionmaker[AsyncSession]) -> ForumFactory:
    return ForumFactory(session_factory)
