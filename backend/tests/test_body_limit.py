"""
Showcase Backend — Upload Size Limit Middleware Tests
======================================================

What:  Tests for UploadSizeLimitMiddleware on its own, wrapped around a tiny
       ASGI app that reads the whole body.
How:   Hand-built ASGI scope/receive/send so the number of body bytes pulled
       from the client can be counted exactly.

Test Strategy:
    ✅ A declared Content-Length over the limit is refused without reading
    ✅ A chunked body stops being read once it crosses the limit
    ✅ Bodies within the limit reach the app untouched
    ✅ GET requests are not inspected
"""

import json

import pytest
from starlette.requests import Request
from starlette.responses import JSONResponse

from showcase.middleware.body_limit import MULTIPART_OVERHEAD, UploadSizeLimitMiddleware

LIMIT = 1024
CHUNK = 16 * 1024


async def body_length_app(scope, receive, send):
    body = await Request(scope, receive).body()
    await JSONResponse({"length": len(body)})(scope, receive, send)


class ClientStream:
    """Feeds `chunks` body chunks to the app and records what it sends back."""

    def __init__(self, chunks: int, chunk: bytes = b"\x00" * CHUNK):
        self.remaining = chunks
        self.chunk = chunk
        self.pulled = 0
        self.messages = []

    async def receive(self):
        if self.remaining == 0:
            return {"type": "http.disconnect"}
        self.remaining -= 1
        self.pulled += len(self.chunk)
        return {"type": "http.request", "body": self.chunk, "more_body": self.remaining > 0}

    async def send(self, message):
        self.messages.append(message)

    @property
    def status(self):
        return next(m["status"] for m in self.messages if m["type"] == "http.response.start")

    @property
    def json(self):
        return json.loads(b"".join(m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"))


def _scope(method="POST", headers=()):
    return {
        "type": "http",
        "method": method,
        "path": "/api/projects",
        "headers": [(k.encode(), v.encode()) for k, v in headers],
        "query_string": b"",
    }


class TestUploadSizeLimitMiddleware:

    def setup_method(self):
        self.middleware = UploadSizeLimitMiddleware(body_length_app, max_upload_size=LIMIT)

    @pytest.mark.asyncio
    async def test_declared_length_over_limit_is_refused_unread(self):
        client = ClientStream(chunks=10)
        declared = str(LIMIT + MULTIPART_OVERHEAD + 1)

        await self.middleware(_scope(headers=[("content-length", declared)]), client.receive, client.send)

        assert client.status == 400
        assert client.pulled == 0
        assert client.json["error"] == "validation_error"
        assert client.json["details"] == {"max_size": LIMIT, "content_length": int(declared)}

    @pytest.mark.asyncio
    async def test_chunked_body_stops_at_limit(self):
        client = ClientStream(chunks=100)

        await self.middleware(_scope(), client.receive, client.send)

        assert client.status == 400
        assert client.json["message"].startswith("File too large")
        assert client.json["details"] == {"max_size": LIMIT}
        assert client.pulled <= LIMIT + MULTIPART_OVERHEAD + CHUNK
        # Only the size-limit response is sent
        assert [m["type"] for m in client.messages] == ["http.response.start", "http.response.body"]

    @pytest.mark.asyncio
    async def test_body_within_limit_passes_through(self):
        client = ClientStream(chunks=2)

        await self.middleware(_scope(), client.receive, client.send)

        assert client.status == 200
        assert client.json == {"length": 2 * CHUNK}

    @pytest.mark.asyncio
    async def test_get_is_not_inspected(self):
        client = ClientStream(chunks=100)

        await self.middleware(_scope(method="GET"), client.receive, client.send)

        assert client.status == 200
        assert client.json == {"length": 100 * CHUNK}
