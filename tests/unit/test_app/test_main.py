"""Tests for the application factory."""

from __future__ import annotations

from forum_service.app.main import create_app


def test_routes_are_registered_under_api_prefix() -> None:
    paths = set(create_app().openapi()["paths"])

    assert {
        "/api/v1/posts",
        "/api/v1/posts/search",
        "/api/v1/posts/{post_id}/comments",
        "/api/v1/comments/{comment_id}/replies",
        "/api/v1/admin/reports",
    } <= paths


def test_docs_can_be_disabled(monkeypatch) -> None:
    from forum_service.core.settings import clear_settings_cache

    monkeypatch.setenv("APP_DOCS_ENABLED", "false")
    clear_settings_cache()

    app = create_app()

    assert app.docs_url is None
    assert app.openapi_url is None


async def test_search_path_is_served_by_search(client) -> None:
    response = await client.get("/api/v1/posts/search", params={"search": "x"})

    assert response.status_code == 200
    assert response.json()["meta"]["searchTerm"] == "x"
