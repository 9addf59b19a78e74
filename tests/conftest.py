"""Shared fixtures: a fake Immich server behind httpx.MockTransport."""

import json
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from immich_core.cache import ResponseCache
from immich_core.client import ImmichClient

BASE_URL = "https://immich.test"
API_KEY = "test-api-key"

Route = Union[Callable[[httpx.Request], httpx.Response], tuple[int, Any]]


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeImmich:
    """Routes requests by (method, path) and records every request it sees.

    Unrouted requests get the 404 body Immich itself sends.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, json_body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(
                404,
                json={"message": f"Cannot {request.method} {request.url.path}", "error": "Not Found", "statusCode": 404},
            )
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def fake() -> FakeImmich:
    return FakeImmich()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def client(fake: FakeImmich, clock: FakeClock):
    immich = ImmichClient(
        BASE_URL,
        API_KEY,
        cache=ResponseCache(300, clock=clock),
        transport=httpx.MockTransport(fake.handler),
    )
    yield immich
    await immich.aclose()


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str, content: bytes = b"\xff\xd8\xff fake jpeg") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)

    return _make


def asset_id_sequence(prefix: str = "asset") -> Callable[[httpx.Request], httpx.Response]:
    """Upload handler answering each POST /api/assets with a fresh id."""
    counter = {"n": 0}

    def _handler(request: httpx.Request) -> httpx.Response:
        counter["n"] += 1
        return httpx.Response(201, json={"id": f"{prefix}-{counter['n']}", "status": "created"})

    return _handler


def error_response(status: int, message: Optional[str] = None) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"message": message or "boom", "statusCode": status})

    return _handler
