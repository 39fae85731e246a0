from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from inkbridge.adapters.network import StaticNetworkProbe
from inkbridge.adapters.store import MemoryCredentialStore
from inkbridge.services.bridge import InkBridge
from inkbridge.services.settings import BridgeSettings

API_BASE = "https://api.test/api"
MAC = "AA:BB:CC:11:22:33"
DEVICE_ID = "AABBCC112233"


class FakeBackend:
    """Records requests and answers them from a path -> (status, body) table.

    A body that is a ``str`` is sent verbatim, anything else as JSON. With
    ``offline`` set every request raises a connect error instead.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []
        self.offline = False
        self.failures_before_success = 0

    def route(self, endpoint: str, status: int = 200, body: Any = None) -> None:
        self.routes[endpoint] = (status, body)

    def calls(self, endpoint: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == f"/api{endpoint}"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if self.failures_before_success > 0:
            self.failures_before_success -= 1
            raise httpx.ConnectTimeout("timed out", request=request)
        path = request.url.path
        endpoint = path[len("/api"):] if path.startswith("/api") else path
        route = self.routes.get(endpoint)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def probe() -> StaticNetworkProbe:
    return StaticNetworkProbe(connected=True, address=MAC)


@pytest.fixture()
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture()
def make_bridge(backend, sleeps, probe, store):
    def factory(**kwargs: Any) -> InkBridge:
        settings = kwargs.pop("settings", None) or BridgeSettings(api_base_url=API_BASE)
        return InkBridge(
            settings=settings,
            store=kwargs.pop("store", store),
            probe=kwargs.pop("probe", probe),
            http_transport=httpx.MockTransport(backend),
            sleep=sleeps,
            **kwargs,
        )

    return factory


@pytest.fixture()
def registered_store() -> MemoryCredentialStore:
    return MemoryCredentialStore(
        {
            "deviceId": DEVICE_ID,
            "uid": "u1",
            "apikey": "k1",
            "friendlyuser": "f1",
        }
    )
