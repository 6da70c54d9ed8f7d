"""Pytest fixtures for dragdropdo tests."""
import json
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, Dict

import pytest

API_BASE = "https://api-dev.dragdropdo.com"


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, body: Any = None, headers: Dict[str, str] = None):
        self.status = status
        if body is None:
            self._text = ''
        elif isinstance(body, str):
            self._text = body
        else:
            self._text = json.dumps(body)
        self.headers = headers or {}

    async def text(self) -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: Dict[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> Dict[str, str]:
        return self.kwargs.get('headers') or {}

    @property
    def data(self) -> Any:
        return self.kwargs.get('data')

    @property
    def json(self) -> Any:
        return json.loads(self.data)


class FakeSession:
    """
    Replays queued responses per (method, url) and records every request.

    Responses for the same route are served in the order they were added.
    """

    def __init__(self):
        self.routes = defaultdict(deque)
        self.calls = []
        self.closed = False

    def add(self, method: str, url: str, status: int = 200, body: Any = None,
            headers: Dict[str, str] = None) -> 'FakeSession':
        self.routes[(method, url)].append(FakeResponse(status, body, headers))
        return self

    def fail(self, method: str, url: str, error: Exception) -> 'FakeSession':
        self.routes[(method, url)].append(error)
        return self

    def request(self, method: str, url: str, **kwargs):
        self.calls.append(RecordedCall(method, url, kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = queue.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def calls_to(self, method: str, url: str):
        return [c for c in self.calls if c.method == method and c.url == url]

    @property
    def pending(self):
        return [route for route, queue in self.routes.items() if queue]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    """Fake aiohttp session; asserts every queued response was consumed."""
    session = FakeSession()
    yield session
    assert not session.pending, f"Not all HTTP mocks were used: {session.pending}"


@pytest.fixture
def client_config():
    """Default client configuration for tests."""
    from dragdropdo import ClientConfig
    return ClientConfig(api_key="test-key", base_url=API_BASE)


@pytest.fixture
def api_client(client_config, fake_session):
    """AsyncAPIClient wired to the fake session."""
    from dragdropdo import AsyncAPIClient
    return AsyncAPIClient(client_config, session=fake_session)


@pytest.fixture
def client(fake_session):
    """High-level client wired to the fake session."""
    from dragdropdo import Dragdropdo
    return Dragdropdo(api_key="test-key", base_url=API_BASE, session=fake_session)


@pytest.fixture
def sample_file(tmp_path):
    """Writes a 20-byte file with known content."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(b"0123456789ABCDEFGHIJ")
    return path


@pytest.fixture
def status_payload():
    """Builds a status response body."""
    def build(operation_status: str, file_status: str = None, **file_fields):
        return {
            'data': {
                'operationStatus': operation_status,
                'filesData': [{
                    'fileKey': 'file-key-123',
                    'status': file_status or operation_status,
                    **file_fields,
                }],
            }
        }
    return build
