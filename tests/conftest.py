# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from typing import Awaitable, Callable, Dict, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import unused_port

from lawtree.config import CrawlerConfig, RetryPolicy

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
Route = Union[str, Handler]


# --------------------------------------------------------------------------- #
#                               Test doubles                                  #
# --------------------------------------------------------------------------- #


class FakeClock:
    """Monotonic clock advanced only by its own ``sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay


class FakeSite:
    """Local aiohttp server; a route is either HTML text or a handler."""

    def __init__(self, port: int) -> None:
        self.port = port
        self.base = f"http://127.0.0.1:{port}"
        self.hits: Counter[str] = Counter()
        self._runner: Optional[web.AppRunner] = None

    async def start(self, routes: Dict[str, Route]) -> str:
        app = web.Application()
        for path, route in routes.items():
            app.router.add_get(path, self._wrap(path, route))
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        await web.TCPSite(self._runner, "127.0.0.1", self.port).start()
        return self.base

    def url(self, path: str) -> str:
        return f"{self.base}{path}"

    def _wrap(self, path: str, route: Route) -> Handler:
        async def handler(request: web.Request) -> web.StreamResponse:
            self.hits[path] += 1
            if isinstance(route, str):
                return web.Response(text=route, content_type="text/html")
            return await route(request)

        return handler

    async def close(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest.fixture()
def unused_tcp_port() -> int:
    return unused_port()


@pytest_asyncio.fixture
async def fake_site(unused_tcp_port: int):
    site = FakeSite(unused_tcp_port)
    yield site
    await site.close()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Deterministic retry schedule: 0.5, 1, 2, 4, 4, ... within 30 s."""
    return CrawlerConfig(
        timeout=2.0,
        user_agent="TestAgent/1.0",
        concurrency=4,
        retry=RetryPolicy(
            initial_interval=0.5,
            multiplier=2.0,
            randomization_factor=0.0,
            max_interval=4.0,
            max_elapsed_time=30.0,
        ),
    )


@pytest.fixture()
def quick_retry_config() -> CrawlerConfig:
    """Real-time retries that give up after a fraction of a second."""
    return CrawlerConfig(
        timeout=2.0,
        user_agent="TestAgent/1.0",
        concurrency=4,
        retry=RetryPolicy(
            initial_interval=0.02,
            multiplier=2.0,
            randomization_factor=0.0,
            max_interval=0.05,
            max_elapsed_time=0.2,
        ),
    )
