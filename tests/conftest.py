"""Shared fixtures: a dict-backed session store and clients on a mock transport."""

import httpx
import pytest

from dashboard.api import ApiClient, AsyncApiClient
from dashboard.session import SessionStore

BASE_URL = "http://localhost:3000"


class Recorder:
    """Collects outgoing requests and answers them with a canned handler."""

    __test__ = False

    def __init__(self, handler=None):
        self.requests = []
        self.handler = handler or (lambda request: httpx.Response(200, json={"ok": True}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def store():
    return SessionStore({})


@pytest.fixture
def navigations():
    return []


@pytest.fixture
def make_client(store, navigations):
    """Build a sync ApiClient whose transport is driven by ``handler``."""
    clients = []

    def _make(handler=None):
        recorder = Recorder(handler)
        client = ApiClient(
            BASE_URL,
            store,
            on_session_expired=navigations.append,
            transport=httpx.MockTransport(recorder),
        )
        clients.append(client)
        return client, recorder

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def make_async_client(store, navigations):
    def _make(handler=None):
        recorder = Recorder(handler)
        client = AsyncApiClient(
            BASE_URL,
            store,
            on_session_expired=navigations.append,
            transport=httpx.MockTransport(recorder),
        )
        return client, recorder

    return _make
