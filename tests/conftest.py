import asyncio
import json

import pytest

from gamescout_core.ttl_cache import TTLCache


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeResponse:
    def __init__(self, status: int, body: str):
        self.status = status
        self._body = body

    async def text(self):
        return self._body


class FakeRequest:
    def __init__(self, route: dict):
        self.route = route

    async def __aenter__(self):
        if self.route.get("block"):
            await asyncio.Event().wait()
        if self.route.get("error") is not None:
            raise self.route["error"]
        payload = self.route.get("payload")
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return FakeResponse(self.route.get("status", 200), body)

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession: canned responses per URL, every call recorded."""

    def __init__(self):
        self.routes: list[dict] = []
        self.calls: list[tuple[str, dict]] = []

    def add(self, url, payload=None, status=200, match=None, error=None, block=False):
        self.routes.append(
            {"url": url, "payload": payload, "status": status, "match": match or {}, "error": error, "block": block}
        )

    def get(self, url, params=None, headers=None):
        params = dict(params or {})
        self.calls.append((url, params))
        for route in self.routes:
            if route["url"] == url and all(params.get(k) == v for k, v in route["match"].items()):
                return FakeRequest(route)
        raise AssertionError(f"Unexpected request: {url} {params}")

    def count(self, url, **match) -> int:
        return sum(1 for u, p in self.calls if u == url and all(p.get(k) == v for k, v in match.items()))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def session():
    return FakeSession()
