"""
Pytest configuration and fixtures for the geo search proxy tests.

Provides a fake remote search service (httpx mock transport with a call
counter) and a factory for application test clients wired to it.
"""

import logging
from contextlib import ExitStack

import httpx
import pytest
from fastapi.testclient import TestClient

from server.api_server import create_app
from shared.logging.logging_setup import ColorLogger
from shared.models.config import SearchConfig

SECRET_TOKEN = "sk-live-5f3c9a1e7b2d4c60a8e9f1b3d5c7e9a0"
SEARCH_ENDPOINT = "https://search.example.test/graphql"
MAPS_API_KEY = "maps-public-key"


class FakeSearchBackend:
    """Stand-in for the remote Smart Search endpoint.

    Answers every request with ``response`` (or raises ``exc``) and records
    each request it receives.
    """

    def __init__(self, response: httpx.Response | None = None, exc: Exception | None = None):
        self.response = response if response is not None else httpx.Response(200, json={"data": {}})
        self.exc = exc
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def search_config():
    """Fully configured search settings."""
    return SearchConfig(
        endpoint=SEARCH_ENDPOINT,
        access_token=SECRET_TOKEN,
        maps_api_key=MAPS_API_KEY,
    )


@pytest.fixture
def test_logger():
    """Application logger whose records propagate to the root logger so caplog sees them."""
    return ColorLogger(logging.getLogger("tests.geo_search_proxy"))


@pytest.fixture
def make_client(search_config, test_logger):
    """Factory returning ``(TestClient, FakeSearchBackend)`` for a given upstream behaviour."""
    with ExitStack() as stack:

        def _make(response=None, exc=None, config=None):
            backend = FakeSearchBackend(response=response, exc=exc)
            app = create_app(
                search_config=config if config is not None else search_config,
                transport=httpx.MockTransport(backend.handler),
                logger=test_logger,
                cors_origins=["*"],
            )
            client = stack.enter_context(TestClient(app))
            return client, backend

        yield _make


@pytest.fixture
def circle_variables():
    """Minimal valid circle search variables."""
    return {
        "query": "coffee shop",
        "centerLat": 41.8781,
        "centerLon": -87.6298,
        "maxDistance": "5mi",
    }


@pytest.fixture
def bbox_variables():
    """Minimal valid bounding-box search variables."""
    return {
        "query": "coffee shop",
        "swLat": 41.6,
        "swLon": -87.9,
        "neLat": 42.1,
        "neLon": -87.5,
    }
