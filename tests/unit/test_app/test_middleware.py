"""Tests for the request ID middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from forum_service.app.middleware import RequestIDMiddleware
from forum_service.infra.logging import get_log_context


@pytest.fixture
def echo_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict:
        return {"state": request.state.request_id, "context": get_log_context().get("request_id")}

    return app


async def test_generates_request_id(echo_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=echo_app), base_url="http://test") as client:
        response = await client.get("/echo")

    request_id = response.headers["x-request-id"]
    assert len(request_id) == 36
    assert response.json() == {"state": request_id, "context": request_id}


async def test_propagates_incoming_request_id(echo_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=echo_app), base_url="http://test") as client:
        response = await client.get("/echo", headers={"X-Request-ID": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"
    assert response.json()["context"] == "abc-123"


async def test_context_is_cleared_after_request(echo_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=echo_app), base_url="http://test") as client:
        await client.get("/echo", headers={"X-Request-ID": "abc-123"})

    assert "request_id" not in get_log_context()
