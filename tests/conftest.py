"""pytest fixtures for the SxT SDK tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from sxt_sdk import ClientConfig

BASE_URL = "https://sxt.test"

_ENV_VARS = (
    "accessToken",
    "SXT_ACCESS_TOKEN",
    "SXT_BASE_URL",
    "SXT_API_VERSION",
    "SXT_ORIGIN_APP",
    "SXT_TIMEOUT",
    "SXT_RETRIES",
    "SXT_CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeService:
    """Mock transport that records requests and answers with a fixed response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.text = "OK"
        self.handler: Callable[[httpx.Request], httpx.Response] | None = None

    def respond(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return httpx.Response(self.status_code, text=self.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, access_token="test-token")
