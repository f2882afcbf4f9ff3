"""Integration tests for comment and reply listings."""

from __future__ import annotations

from uuid import uuid4

import pytest


@pytest.fixture
async def thread(forum):
    author = await forum.user()
    post = await forum.post(author)
    other_post = await forum.post(author)
    top = [await forum.comment(post, author) for _ in range(5)]
    replies = [await forum.comment(post, author, parent=top[0]) for _ in range(3)]
    await forum.comment(other_post, author)
    return post, top, replies


class TestPostComments:
    async def test_top_level_comments_oldest_first(self, client, thread):
        post, top, _ = thread

        response = await client.get(f"/api/v1/posts/{post.id}/comments")

        body = response.json()
        assert response.status_code == 200
        assert [c["id"] for c in body["data"]] == [c.id for c in top]
        assert all(c["parentId"] is None for c in body["data"])
        assert body["meta"] == {"totalComments": 5}

    async def test_integer_cursor(self, client, thread):
        post, top, _ = thread
        url = f"/api/v1/posts/{post.id}/comments"

        first = (await client.get(url, params={"limit": 2})).json()
        assert first["pagination"] == {"hasMore": True, "nextCursor": top[1].id}

        second = (await client.get(url, params={"limit": 2, "cursor": first["pagination"]["nextCursor"]})).json()
        assert [c["id"] for c in second["data"]] == [top[2].id, top[3].id]
        assert second["meta"]["totalComments"] == 5

    async def test_post_without_comments(self, client, forum):
        post = await forum.post(await forum.user())

        body = (await client.get(f"/api/v1/posts/{post.id}/comments")).json()

        assert body["data"] == []
        assert body["meta"]["totalComments"] == 0
        assert body["pagination"]["hasMore"] is False

    async def test_unknown_post_is_404(self, client):
        response = await client.get(f"/api/v1/posts/{uuid4()}/comments")

        assert response.status_code == 404
        assert response.json()["type"] == "post-not-found"

    async def test_malformed_post_id_is_400(self, client):
        response = await client.get("/api/v1/posts/not-a-uuid/comments")

        assert response.status_code == 400

    async def test_non_integer_cursor_is_400(self, client, thread):
        post, _, _ = thread

        response = await client.get(f"/api/v1/posts/{post.id}/comments", params={"cursor": "abc"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "cursor"

    async def test_cursor_beyond_bigint_is_400(self, client, thread):
        post, _, _ = thread

        response = await client.get(
            f"/api/v1/posts/{post.id}/comments", params={"cursor": "9" * 30}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "cursor"


class TestReplies:
    async def test_replies_of_a_comment(self, client, thread):
        _, top, replies = thread

        response = await client.get(f"/api/v1/comments/{top[0].id}/replies")

        body = response.json()
        assert [c["id"] for c in body["data"]] == [r.id for r in replies]
        assert all(c["parentId"] == top[0].id for c in body["data"])
        assert "meta" not in body

    async def test_comment_without_replies(self, client, thread):
        _, top, _ = thread

        body = (await client.get(f"/api/v1/comments/{top[1].id}/replies")).json()

        assert body == {"data": [], "pagination": {"hasMore": False, "nextCursor": None}}

    async def test_paging_replies(self, client, thread):
        _, top, replies = thread
        url = f"/api/v1/comments/{top[0].id}/replies"

        first = (await client.get(url, params={"limit": 2})).json()
        second = (await client.get(url, params={"limit": 2, "cursor": str(first["pagination"]["nextCursor"])})).json()

        assert [c["id"] for c in second["data"]] == [replies[2].id]
        assert second["pagination"]["hasMore"] is False

    async def test_unknown_comment_is_404(self, client):
        response = await client.get("/api/v1/comments/9999/replies")

        assert response.status_code == 404
        assert response.json()["comment_id"] == 9999

    @pytest.mark.parametrize("comment_id", ["0", "abc", str(2**63), "9" * 30])
    async def test_invalid_comment_id_is_400(self, client, comment_id):
        response = await client.get(f"/api/v1/comments/{comment_id}/replies")

        assert response.status_code == 400

    async def test_reply_cursor_beyond_bigint_is_400(self, client, thread):
        _, top, _ = thread

        response = await client.get(
            f"/api/v1/comments/{top[0].id}/replies", params={"cursor": "9" * 30}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "cursor"
