"""Fake API for testing console controllers without a server."""

import json
from dataclasses import dataclass
from typing import Any

import httpx

from nikah_console.client import ApiClient


@dataclass
class Call:
    method: str
    path: str
    params: dict[str, str]
    json: Any


class FakeApi:
    """Canned responses per (method, path), served through ``httpx.MockTransport``.

    Responses registered for the same route are served in order; the last one
    repeats. A body may be a callable taking the request JSON. All requests are
    recorded for assertions.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], list[tuple[int, Any]]] = {}
        self.calls: list[Call] = []

    def add_response(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.responses.setdefault((method.upper(), path), []).append((status, body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content) if request.content else None
        call = Call(request.method, request.url.path, dict(request.url.params), payload)
        self.calls.append(call)
        queue = self.responses.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": f"FakeApi: no response for {request.method} {call.path}"})
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(body):
            body = body(payload)
        return httpx.Response(status, json=body if body is not None else {})

    def client(self) -> ApiClient:
        return ApiClient("http://fake", token="test-token", transport=httpx.MockTransport(self.handler))

    def calls_to(self, method: str, path: str) -> list[Call]:
        return [c for c in self.calls if c.method == method.upper() and c.path == path]

