"""The full client: dispatcher plus every resource mixin."""

from __future__ import annotations

from turboclient.api.actions import ActionsAPI
from turboclient.api.entities import EntitiesAPI
from turboclient.api.search import SearchAPI
from turboclient.api.stats import StatsAPI


class TurboClient(EntitiesAPI, ActionsAPI, SearchAPI, StatsAPI):
    """Authenticated Turbonomic client.

    Build one with :func:`~turboclient.client.factory.new_client` (runs the
    login handshake) or :func:`~turboclient.client.factory.client_from_session`
    (reuses an existing token or cookie session).
    """

    def __enter__(self) -> TurboClient:
        return self
