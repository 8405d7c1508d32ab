"""Fixtures for tests against a live Turbonomic instance.

These tests only run when ``INTEGRATION`` is set.  Connection parameters
come from the ``T8C_*`` variables read by
:func:`turboclient.config.connection_parameters_from_env`; test targets
come from ``T8C_TEST_*`` variables.
"""

from __future__ import annotations

import os

import pytest

from turboclient import TurboClient, new_client
from turboclient.config import connection_parameters_from_env
from turboclient.logger import NullLogger
from turboclient.models import ConnectionParameters


@pytest.fixture(scope="session")
def live_params() -> ConnectionParameters:
    return connection_parameters_from_env()


@pytest.fixture
def live_client(live_params: ConnectionParameters) -> TurboClient:
    with new_client(live_params, logger=NullLogger()) as client:
        yield client


@pytest.fixture
def target_env():
    """Lookup for ``T8C_TEST_<NAME>``; skips the test when unset."""

    def _get(name: str) -> str:
        value = os.environ.get(f"T8C_TEST_{name}")
        if not value:
            pytest.skip(f"T8C_TEST_{name} is not set")
        return value

    return _get
