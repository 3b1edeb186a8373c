"""Pytest configuration, UAA stub server and app fixtures.

Async tests are marked with ``@pytest.mark.asyncio``. Some environments run
the suite without ``pytest-asyncio`` installed, so a fallback hook executes
those coroutines on a fresh event loop.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from config.settings import ProviderConfig, Settings
from uaa_login.api.deps import get_app_settings, get_http_client, get_provider_config
from uaa_login.api.main import create_app

UAA_BASE_URL = "https://uaa.test"
UAA_AUTH_URL = "https://login.test/oauth/authorize"


def pytest_configure(config: pytest.Config) -> None:
    """Register local markers used in the suite."""
    config.addinivalue_line("markers", "asyncio: mark test as asyncio-compatible")


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run ``@pytest.mark.asyncio`` tests without external plugins."""
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    kwargs: dict[str, Any] = {
        arg: pyfuncitem.funcargs[arg]
        for arg in pyfuncitem._fixtureinfo.argnames
    }
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_func(**kwargs))
    finally:
        loop.close()
        asyncio.set_event_loop(asyncio.new_event_loop())
    return True


class UAAStub:
    """In-memory stand-in for the UAA token and userinfo endpoints."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_body: Any = {
            "access_token": "at-123",
            "token_type": "bearer",
            "expires_in": 43199,
            "scope": "openid",
        }
        self.userinfo_status = 200
        self.userinfo_body: Any = {
            "user_id": "u-1",
            "user_name": "alice",
            "email": "alice@example.com",
            "email_verified": True,
        }
        self.fail_paths: set[str] = set()

    @property
    def paths(self) -> list[str]:
        return [req.url.path for req in self.requests]

    def _respond(self, status: int, body: Any) -> httpx.Response:
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.fail_paths:
            raise httpx.ConnectError("connection refused", request=request)
        if request.url.path == "/oauth/token":
            return self._respond(self.token_status, self.token_body)
        if request.url.path == "/userinfo":
            return self._respond(self.userinfo_status, self.userinfo_body)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def provider_config() -> ProviderConfig:
    return ProviderConfig(
        client_id="test-client",
        client_secret="test-secret",
        base_url=UAA_BASE_URL,
        auth_url=UAA_AUTH_URL,
    )


@pytest.fixture()
def uaa_stub() -> UAAStub:
    return UAAStub()


@pytest.fixture()
def app_client(provider_config: ProviderConfig, uaa_stub: UAAStub) -> Iterator[TestClient]:
    """TestClient wired to the UAA stub instead of the network."""
    app = create_app()
    settings = Settings(uaa_env="dev")

    async def _http_client() -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(transport=uaa_stub.transport()) as client:
            yield client

    app.dependency_overrides[get_provider_config] = lambda: provider_config
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http_client
    yield TestClient(app)
    app.dependency_overrides.clear()
