"""
Shared fixtures for the Lattice MCP server tests.

Everything here runs offline: the mock client serves the fixture org, and the
live client is always pointed at an httpx.MockTransport.
"""

import json

import httpx
import pytest

from lattice.client import LiveLatticeClient
from lattice.mock_client import MockLatticeClient
from lattice_mcp.dispatcher import Dispatcher

TEST_BASE_URL = "https://lattice.test"
TEST_TOKEN = "test-token"


@pytest.fixture
def mock_client():
    return MockLatticeClient()


@pytest.fixture
def dispatcher(mock_client):
    return Dispatcher(mock_client)


def envelope(data, success=True, message=None):
    """Wrap a payload the way the Lattice API does."""
    body = {"data": data, "success": success}
    if message is not None:
        body["message"] = message
    return body


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_transport(routes: dict, status_code: int = 200) -> RecordingTransport:
    """Serve envelope(routes[path]) for known paths, 404 for anything else."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path not in routes:
            return httpx.Response(404, json={"success": False, "message": "no route"})
        return httpx.Response(status_code, content=json.dumps(envelope(routes[path])))

    return RecordingTransport(handler)


def live_client(transport: httpx.AsyncBaseTransport, **kwargs) -> LiveLatticeClient:
    return LiveLatticeClient(api_token=TEST_TOKEN, base_url=TEST_BASE_URL, transport=transport, **kwargs)
