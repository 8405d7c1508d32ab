"""Resource operations, one module per API area.

Each module defines its request/response models and a mixin class built on
:class:`~turboclient.client.dispatcher.AuthenticatedClient`:

* :mod:`~turboclient.api.entities` -- :class:`EntitiesAPI` (entities, tags)
* :mod:`~turboclient.api.actions` -- :class:`ActionsAPI`
* :mod:`~turboclient.api.search` -- :class:`SearchAPI`
* :mod:`~turboclient.api.stats` -- :class:`StatsAPI`
"""

from turboclient.api.actions import ActionResult, ActionsAPI, ActionsRequest
from turboclient.api.common import Filter, Tag
from turboclient.api.entities import EntitiesAPI, EntityRequest, EntityResult, TagEntityRequest
from turboclient.api.search import Criteria, SearchAPI, SearchDTO, SearchRequest, SearchResult
from turboclient.api.stats import (
    EntityStats,
    StatisticRequest,
    StatsAPI,
    StatsRequest,
)

__all__ = [
    "ActionResult",
    "ActionsAPI",
    "ActionsRequest",
    "Criteria",
    "EntitiesAPI",
    "EntityRequest",
    "EntityResult",
    "EntityStats",
    "Filter",
    "SearchAPI",
    "SearchDTO",
    "SearchRequest",
    "SearchResult",
    "StatisticRequest",
    "StatsAPI",
    "StatsRequest",
    "Tag",
    "TagEntityRequest",
]
