"""
Test Mocks
===========

A local stand-in for the PDF Gen Studio REST API. It records every request it
receives and answers with canned responses registered per method and path.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from aiohttp import web
from aiohttp.test_utils import TestServer

__all__ = ["CannedResponse", "FakePDFGenStudioAPI", "RecordedRequest", "SAMPLE_TEMPLATE"]


SAMPLE_TEMPLATE: Dict[str, Any] = {
    "id": "tpl_123",
    "name": "Invoice",
    "description": "Monthly invoice",
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-02-01T00:00:00Z",
    "json": {
        "elements": [
            {"id": "title", "type": "text", "text": "INVOICE", "name": "Title"},
            {"id": "logo", "type": "image", "src": "https://example.com/logo.png"},
            {"id": "divider", "type": "line"},
        ]
    },
}


@dataclass
class RecordedRequest:
    """One request as seen by the fake API."""

    method: str
    path: str
    query_string: str
    query: Dict[str, str]
    headers: Dict[str, str]
    body: str

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


@dataclass
class CannedResponse:
    status: int = 200
    body: bytes = b""
    content_type: Optional[str] = None
    reason: Optional[str] = None

    def to_response(self) -> web.Response:
        response = web.Response(status=self.status, body=self.body, reason=self.reason)
        if self.content_type:
            response.content_type = self.content_type
        return response


@dataclass
class FakePDFGenStudioAPI:
    """aiohttp application recording requests; unknown routes answer 404."""

    requests: List[RecordedRequest] = field(default_factory=list)
    _routes: Dict[Tuple[str, str], CannedResponse] = field(default_factory=dict)
    _server: Optional[TestServer] = None

    def __post_init__(self) -> None:
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._handle)

    @property
    def url(self) -> str:
        assert self._server is not None, "fake API is not running"
        return str(self._server.make_url("/"))

    async def start(self) -> "FakePDFGenStudioAPI":
        self._server = TestServer(self.app)
        await self._server.start_server()
        return self

    async def close(self) -> None:
        if self._server is not None:
            await self._server.close()

    def respond_json(self, method: str, path: str, payload: Any, status: int = 200) -> None:
        self._routes[(method.upper(), path)] = CannedResponse(
            status=status, body=json.dumps(payload).encode(), content_type="application/json"
        )

    def respond_text(self, method: str, path: str, text: str, status: int) -> None:
        self._routes[(method.upper(), path)] = CannedResponse(
            status=status, body=text.encode(), content_type="text/plain"
        )

    def respond_bytes(
        self, method: str, path: str, payload: bytes, content_type: str = "image/png"
    ) -> None:
        self._routes[(method.upper(), path)] = CannedResponse(
            body=payload, content_type=content_type
        )

    def respond_empty(self, method: str, path: str, status: int) -> None:
        self._routes[(method.upper(), path)] = CannedResponse(status=status)

    def requests_to(self, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == path]

    @property
    def last_request(self) -> RecordedRequest:
        assert self.requests, "no request reached the fake API"
        return self.requests[-1]

    async def _handle(self, request: web.Request) -> web.Response:
        body = await request.text()
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                query_string=request.query_string,
                query=dict(request.query),
                headers=dict(request.headers),
                body=body,
            )
        )
        canned = self._routes.get((request.method, request.path))
        if canned is None:
            return web.json_response({"success": False, "message": "not found"}, status=404)
        return canned.to_response()
