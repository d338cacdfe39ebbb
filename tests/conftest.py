"""Shared fixtures: a client with fixed credentials and a mocked aiohttp transport."""

from __future__ import annotations

from typing import Any, Callable

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from aioresponses import aioresponses
from yarl import URL

from openai_endpoints import ClientSettings, OpenAIAuthentication, OpenAIClient

BASE_URL = "https://api.openai.com/v1/"
TEST_API_KEY = "sk-test-key-0001"
TEST_ORGANIZATION = "org-test"


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(FILE_DELETE_RETRY_DELAY_SECONDS=0, FINE_TUNE_POLL_INTERVAL_SECONDS=0)


@pytest_asyncio.fixture
async def client(settings: ClientSettings):
    """OpenAIClient bound to test credentials; closed after the test."""
    api = OpenAIClient(OpenAIAuthentication(TEST_API_KEY, TEST_ORGANIZATION), settings)
    yield api
    await api.close()


@pytest.fixture
def mock_http():
    with aioresponses() as mocked:
        yield mocked


@pytest.fixture
def sent_requests(mock_http) -> Callable[[str, str], list[Any]]:
    """Return the recorded calls for ``(method, url)``."""

    def _lookup(method: str, url: str) -> list[Any]:
        return mock_http.requests.get((method.upper(), URL(url)), [])

    return _lookup


@pytest_asyncio.fixture
async def local_api():
    """Start a local aiohttp app and return an OpenAIClient pointed at it.

    Used where a real socket matters: slow or stalled bodies, mid-transfer failures.
    """
    servers: list[TestServer] = []
    clients: list[OpenAIClient] = []

    async def _start(app: web.Application, **overrides: Any) -> OpenAIClient:
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        api = OpenAIClient(
            OpenAIAuthentication(TEST_API_KEY, TEST_ORGANIZATION),
            ClientSettings(DOMAIN=f"http://{server.host}:{server.port}", **overrides),
        )
        clients.append(api)
        return api

    yield _start
    for api in clients:
        await api.close()
    for server in servers:
        await server.close()
