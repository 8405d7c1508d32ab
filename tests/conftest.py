"""Shared test fixtures for turboclient.

Provides JSON response fixtures, connection parameters for both credential
methods, a silent log config, and a factory for clients wired to an
:class:`httpx.MockTransport`.  These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from turboclient.client.turbo import TurboClient
from turboclient.logger import LogConfig, NullLogger
from turboclient.models import ConnectionParameters, OAuthCredentials


FIXTURES_DIR = Path(__file__).parent / "fixtures"

BASE_URL = "https://turbo.example.com/api/v3"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Request recording
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler that records requests and replays queued responses.

    The last queued response is repeated once the queue runs dry.
    """

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses) or [httpx.Response(200, content=b"{}")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> type[RecordingHandler]:
    """The :class:`RecordingHandler` class, for building mock transports."""
    return RecordingHandler


# ---------------------------------------------------------------------------
# Response fixtures
# ---------------------------------------------------------------------------


def read_fixture(name: str) -> bytes:
    """Read ``tests/fixtures/<name>`` as raw bytes."""
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture
def fixture_bytes() -> Callable[[str], bytes]:
    """Loader for JSON response bodies in ``tests/fixtures``."""
    return read_fixture


# ---------------------------------------------------------------------------
# Connection parameters
# ---------------------------------------------------------------------------


@pytest.fixture
def login_params() -> ConnectionParameters:
    """Username/password parameters for ``turbo.example.com``."""
    return ConnectionParameters(
        hostname="turbo.example.com",
        username="administrator",
        password="pa55word",
    )


@pytest.fixture
def oauth_params() -> ConnectionParameters:
    """OAuth client-credential parameters for ``turbo.example.com``."""
    return ConnectionParameters(
        hostname="turbo.example.com",
        oauth_creds=OAuthCredentials(
            client_id="integration-client",
            client_secret="s3cret",
            role="OBSERVER",
        ),
    )


# ---------------------------------------------------------------------------
# Logging and clients
# ---------------------------------------------------------------------------


@pytest.fixture
def null_log() -> LogConfig:
    """A log config that discards every message."""
    return LogConfig(NullLogger(), {})


@pytest.fixture
def make_client(null_log: LogConfig):
    """Factory building a :class:`TurboClient` on top of a mock transport.

    Usage::

        def test_x(make_client):
            handler = RecordingHandler(httpx.Response(200, json=[]))
            client = make_client(handler)
    """
    created: list[TurboClient] = []

    def _factory(
        handler: Handler,
        headers: Optional[dict[str, str]] = None,
        base_url: str = BASE_URL,
    ) -> TurboClient:
        client = TurboClient(
            base_url=base_url,
            http=httpx.Client(transport=httpx.MockTransport(handler)),
            headers=headers,
            log_config=null_log,
        )
        created.append(client)
        return client

    yield _factory

    for client in created:
        client.close()
