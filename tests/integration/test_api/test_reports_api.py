"""Integration tests for the admin report listing."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

URL = "/api/v1/admin/reports"


@pytest.fixture
async def reports(forum):
    """Five post reports and three comment reports spread over three days."""
    reporter = await forum.user()
    spam, abuse = await forum.reason("spam"), await forum.reason("abuse")
    post = await forum.post(reporter)
    comment = await forum.comment(post, reporter)

    created = []
    for i in range(5):
        created.append(
            await forum.report(
                reporter,
                spam if i % 2 == 0 else abuse,
                post=post,
                status="pending" if i < 3 else "resolved",
                created_at=datetime(2025, 1, 10 + i % 3, 12, i, tzinfo=UTC),
            )
        )
    for i in range(3):
        created.append(
            await forum.report(
                reporter,
                abuse,
                comment=comment,
                status="dismissed",
                created_at=datetime(2025, 1, 11, 8, i, tzinfo=UTC),
            )
        )
    return {"post": post, "comment": comment, "spam": spam, "abuse": abuse, "reports": created}


def ids(response) -> set[int]:
    return {r["id"] for r in response.json()["data"]}


class TestReportPaging:
    async def test_first_page(self, client, reports):
        response = await client.get(URL, params={"limit": 3})

        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 3
        assert body["pagination"] == {
            "total": 8,
            "page": 1,
            "limit": 3,
            "totalPages": 3,
            "hasNext": True,
            "hasPrevious": False,
        }

    async def test_newest_first_across_pages(self, client, reports):
        pages = [
            (await client.get(URL, params={"limit": 3, "page": page})).json()["data"]
            for page in (1, 2, 3)
        ]

        seen = [r["createdAt"] for page in pages for r in page]
        assert len(seen) == 8
        assert seen == sorted(seen, reverse=True)
        assert pages[2] and len(pages[2]) == 2

    async def test_page_past_the_end(self, client, reports):
        body = (await client.get(URL, params={"limit": 3, "page": 10})).json()

        assert body["data"] == []
        assert body["pagination"]["hasNext"] is False
        assert body["pagination"]["hasPrevious"] is True

    async def test_huge_page_is_empty_with_envelope(self, client, reports):
        page = 2**62

        body = (await client.get(URL, params={"limit": 3, "page": str(page)})).json()

        assert body["data"] == []
        assert body["pagination"]["page"] == page
        assert body["pagination"]["total"] == 8
        assert body["pagination"]["totalPages"] == 3
        assert body["pagination"]["hasNext"] is False
        assert body["pagination"]["hasPrevious"] is True

    async def test_no_reports(self, client):
        body = (await client.get(URL)).json()

        assert body["pagination"] == {
            "total": 0,
            "page": 1,
            "limit": 10,
            "totalPages": 0,
            "hasNext": False,
            "hasPrevious": False,
        }

    async def test_report_shape(self, client, reports):
        body = (await client.get(URL, params={"resourceType": "comment", "limit": 1})).json()

        report = body["data"][0]
        assert report["reason"] == {"id": reports["abuse"].id, "name": "abuse"}
        assert report["commentId"] == reports["comment"].id
        assert report["postId"] is None
        assert report["status"] == "dismissed"

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            ({"page": "0"}, "page"),
            ({"limit": "0"}, "limit"),
            ({"limit": "101"}, "limit"),
            ({"page": "x"}, "page"),
            ({"page": "9" * 25}, "page"),
        ],
    )
    async def test_invalid_paging(self, client, params, field):
        response = await client.get(URL, params=params)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field


class TestReportFilters:
    async def test_status(self, client, reports):
        body = (await client.get(URL, params={"status": "pending"})).json()

        assert body["pagination"]["total"] == 3
        assert {r["status"] for r in body["data"]} == {"pending"}

    async def test_reason(self, client, reports):
        body = (await client.get(URL, params={"reasonId": reports["spam"].id})).json()

        assert body["pagination"]["total"] == 3

    async def test_post_id(self, client, reports):
        body = (await client.get(URL, params={"postId": str(reports["post"].id)})).json()

        assert body["pagination"]["total"] == 5

    async def test_comment_id(self, client, reports):
        body = (await client.get(URL, params={"commentId": reports["comment"].id})).json()

        assert body["pagination"]["total"] == 3

    @pytest.mark.parametrize(("resource_type", "total"), [("post", 5), ("comment", 3)])
    async def test_resource_type(self, client, reports, resource_type, total):
        body = (await client.get(URL, params={"resourceType": resource_type})).json()

        assert body["pagination"]["total"] == total

    async def test_resource_type_with_matching_id(self, client, reports):
        params = {"resourceType": "post", "postId": str(reports["post"].id), "status": "resolved"}

        body = (await client.get(URL, params=params)).json()

        assert body["pagination"]["total"] == 2

    async def test_date_range_covers_whole_days(self, client, reports):
        body = (await client.get(URL, params={"dateFrom": "2025-01-11", "dateTo": "2025-01-11"})).json()

        # two post reports and every comment report fall on the 11th
        assert body["pagination"]["total"] == 5

    async def test_open_ended_date_range(self, client, reports):
        body = (await client.get(URL, params={"dateFrom": "2025-01-12"})).json()

        assert body["pagination"]["total"] == 1

    async def test_filters_combine(self, client, reports):
        params = {"status": "pending", "reasonId": reports["spam"].id, "dateTo": "2025-01-10"}

        body = (await client.get(URL, params=params)).json()

        assert body["pagination"]["total"] == 1

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            ({"status": "open"}, "status"),
            ({"reasonId": "abc"}, "reasonId"),
            ({"reasonId": "9" * 30}, "reasonId"),
            ({"commentId": "9" * 30}, "commentId"),
            ({"postId": "123"}, "postId"),
            ({"postId": str(uuid4()), "commentId": "1"}, "postId"),
            ({"resourceType": "user"}, "resourceType"),
            ({"resourceType": "comment", "postId": str(uuid4())}, "postId"),
            ({"resourceType": "post", "commentId": "4"}, "commentId"),
            ({"dateFrom": "10/01/2025"}, "dateFrom"),
            ({"dateFrom": "2025-01-12", "dateTo": "2025-01-10"}, "dateFrom"),
        ],
    )
    async def test_invalid_filters(self, client, params, field):
        response = await client.get(URL, params=params)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field
