"""Shared fixtures for timeular-client tests.

The Timeular API is faked with `httpx.MockTransport`; no test touches the
network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

API_URL = "https://api.timeular.com/api/v3/"
API_PATH_PREFIX = "/api/v3/"


def activity_record(activity_id: str, name: str, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": activity_id,
        "name": name,
        "color": "#a1b2c3",
        "integration": "zei",
        "spaceId": "space-1",
        "deviceSide": None,
    }
    record.update(overrides)
    return record


def entry_record(
    entry_id: str,
    activity_id: str,
    started_at: str,
    stopped_at: str,
    text: str | None = None,
) -> dict[str, Any]:
    return {
        "id": entry_id,
        "activityId": activity_id,
        "duration": {"startedAt": started_at, "stoppedAt": stopped_at},
        "note": {"text": text, "tags": [], "mentions": []},
    }


class FakeTimeularApi:
    """Route table keyed by (method, endpoint); records every request.

    Unknown routes answer 404. Routes may be a `(status, json)` pair or a
    callable taking the request and returning an `httpx.Response`.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, endpoint: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, endpoint)] = lambda request: httpx.Response(status, json=json)

    def add_handler(self, method: str, endpoint: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, endpoint)] = handler

    def count(self, method: str | None = None, endpoint: str | None = None) -> int:
        return sum(
            1
            for request in self.requests
            if (method is None or request.method == method)
            and (endpoint is None or _endpoint_of(request) == endpoint)
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, _endpoint_of(request)))
        if route is None:
            return httpx.Response(404)
        return route(request)


def _endpoint_of(request: httpx.Request) -> str:
    return request.url.path.removeprefix(API_PATH_PREFIX)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_url=API_URL,
        api_key="test-key",
        api_secret="test-secret",
        user_agent="timeular-client-tests/1.0",
    )


@pytest.fixture
def fake_api() -> FakeTimeularApi:
    api = FakeTimeularApi()
    api.add("POST", "developer/sign-in", json={"token": "token-123"})
    return api


@pytest.fixture
def http_client(fake_api: FakeTimeularApi) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
