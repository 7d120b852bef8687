"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from aggregator_core.api.app import create_app
from aggregator_core.config import AppConfig
from aggregator_core.exchange import OneInchClient


class FakeUpstream:
    """Scripted stand-in for the 1inch API, served through httpx.MockTransport.

    Register responses per (method, path); unregistered paths get a 404.
    Every request is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        body: Any = None,
        status: int = 200,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        self.routes[(method.upper(), path)] = handler or (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"description": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    def count(self, path: str) -> int:
        return sum(1 for r in self.calls if r.url.path == path)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def oneinch(upstream) -> OneInchClient:
    return OneInchClient(
        api_key="test-key",
        transport=httpx.MockTransport(upstream),
        retry_backoff_s=0.0,
    )


@pytest.fixture
def make_api(oneinch):
    """Build a TestClient around a fresh app; the client is closed at teardown."""
    clients: list[TestClient] = []

    def _make(config: AppConfig | None = None, client: OneInchClient | None = None) -> TestClient:
        app = create_app(config or AppConfig(environment="production"), client=client or oneinch)
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def api(make_api) -> TestClient:
    """Production-mode app with an API key: every route goes upstream."""
    return make_api()
