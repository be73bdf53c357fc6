"""Shared fixtures: a controllable clock and an in-memory Hacker News API."""

import json

import httpx
import pytest
import pytest_asyncio

from config import Settings
from main import create_app

BASE_URL = "https://hn.test/v0"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHackerNews:
    """Serves ``beststories.json`` and ``item/{id}.json`` from dictionaries."""

    def __init__(self):
        self.best_ids = []
        self.items = {}
        self.raw_bodies = {}
        self.requests = []
        self.fail_with = None

    def add_story(self, item_id: int, score: int, **fields) -> dict:
        item = {
            "id": item_id,
            "type": "story",
            "title": f"Story {item_id}",
            "url": f"https://example.com/{item_id}",
            "by": "pg",
            "time": 1175714200,
            "score": score,
            "descendants": 3,
            "kids": [item_id * 10 + 1, item_id * 10 + 2],
        }
        item.update(fields)
        self.items[item_id] = item
        self.best_ids.append(item_id)
        return item

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def item_fetches(self) -> list[int]:
        return [int(path.rsplit("/", 1)[1].split(".")[0]) for path in self.paths if "/item/" in path]

    def id_list_fetches(self) -> int:
        return sum(1 for path in self.paths if path.endswith("/beststories.json"))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        path = request.url.path
        if path in self.raw_bodies:
            return httpx.Response(200, content=self.raw_bodies[path])
        if path == "/v0/beststories.json":
            return httpx.Response(200, content=json.dumps(self.best_ids))
        if path.startswith("/v0/item/"):
            item_id = int(path.rsplit("/", 1)[1].removesuffix(".json"))
            return httpx.Response(200, content=json.dumps(self.items.get(item_id)))
        return httpx.Response(404)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeHackerNews:
    return FakeHackerNews()


@pytest.fixture
def app(upstream: FakeHackerNews, clock: FakeClock):
    settings = Settings(base_url=BASE_URL)
    return create_app(settings, transport=httpx.MockTransport(upstream.handler), timer=clock)


@pytest_asyncio.fixture
async def client(app) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)  # type: ignore[arg-type]
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.story_service.client.aclose()
