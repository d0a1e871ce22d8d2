"""Shared test fixtures."""

import json
from typing import Any

import httpx
import pytest

from omi.client import OmiClient
from omi.config import OmiConfig
from omi.facade import OmiFacade

TEST_API_KEY = "test-key"
TEST_APP_ID = "app-123"


class FakeOmi:
    """Records outbound requests and serves one canned response.

    ``handler`` can be replaced outright for per-request behaviour.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.text_body: str | None = None
        self.handler = self._default_handler

    def respond(self, status_code: int = 200, json: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.json_body = json
        self.text_body = text

    def _default_handler(self, request: httpx.Request) -> httpx.Response:
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def config() -> OmiConfig:
    return OmiConfig(api_key=TEST_API_KEY, app_id=TEST_APP_ID)


@pytest.fixture
def fake_omi() -> FakeOmi:
    return FakeOmi()


@pytest.fixture
def client(config: OmiConfig, fake_omi: FakeOmi) -> OmiClient:
    return OmiClient(config, transport=fake_omi.transport)


@pytest.fixture
def facade(config: OmiConfig, client: OmiClient) -> OmiFacade:
    return OmiFacade(config, client=client)
