"""Request ID middleware for per-request log correlation.

- Reads the X-Request-ID header, or generates a UUID when it is missing
- Stores the id in ``request.state.request_id`` and the logging context
- Echoes it in the X-Request-ID response header
- Clears the logging context when the request completes

Pure ASGI so the context var is set in the same task that runs the handler.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from forum_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class RequestIDMiddleware:
    header_name = "x-request-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        header_bytes = headers.get(self.header_name.encode("latin-1"))
        request_id = header_bytes.decode("latin-1") if header_bytes else str(uuid.uuid4())

        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()


def configure_middleware(app: FastAPI) -> None:
    app.add_middleware(RequestIDMiddleware)
