"""Statistics retrieval for an entity.

``POST /stats/{uuid}`` with a body naming the statistics wanted and an
optional time window::

    {"endDate": "+1d", "statistics": [{"name": "StorageAccess"}]}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, TypeAdapter

from turboclient.api.common import Filter, RequestBody, ResponseModel, decode_json
from turboclient.client.dispatcher import AuthenticatedClient, request_options
from turboclient.models import CommonReqParams


class StatisticRequest(RequestBody):
    """One statistic to retrieve."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"relatedEntityType", "filters"})

    name: str
    related_entity_type: str = ""
    filters: list[Filter] = Field(default_factory=list)


class StatsRequestBody(RequestBody):
    omit_empty: ClassVar[frozenset[str]] = frozenset({"startDate", "endDate"})

    start_date: str = ""
    end_date: str = ""
    statistics: list[StatisticRequest] = Field(default_factory=list)


class StatsRequest(BaseModel):
    """Statistics for the entity ``entity_uuid`` between two dates.

    Dates are passed through untouched: epoch milliseconds or relative
    values such as ``"-1d"`` both work.
    """

    entity_uuid: str
    start_date: str = ""
    end_date: str = ""
    statistics: list[StatisticRequest] = Field(default_factory=list)
    params: CommonReqParams = Field(default_factory=CommonReqParams)


# --- Response shapes ---


class StatValues(ResponseModel):
    max: float = 0.0
    min: float = 0.0
    avg: float = 0.0
    total: float = 0.0
    total_max: float = 0.0
    total_min: float = 0.0


class RelatedEntity(ResponseModel):
    uuid: str = ""


class HistUtilization(ResponseModel):
    type: str = ""
    usage: float = 0.0
    capacity: float = 0.0


class Statistic(ResponseModel):
    name: str = ""
    capacity: StatValues = Field(default_factory=StatValues)
    reserved: StatValues = Field(default_factory=StatValues)
    filters: list[Filter] = Field(default_factory=list)
    related_entity: Optional[RelatedEntity] = None
    units: str = ""
    values: StatValues = Field(default_factory=StatValues)
    value: float = 0.0
    commodity_source: dict[str, Any] = Field(default_factory=dict)
    hist_utilizations: list[HistUtilization] = Field(default_factory=list)


class EntityStats(ResponseModel):
    """Statistics of one entity at one point in time."""

    display_name: str = ""
    date: Optional[datetime] = None
    statistics: list[Statistic] = Field(default_factory=list)
    epoch: str = ""


_STATS = TypeAdapter(list[EntityStats])


class StatsAPI(AuthenticatedClient):
    """Statistics operations."""

    def get_stats(self, req: StatsRequest) -> list[EntityStats]:
        """Retrieve ``req.statistics`` for ``req.entity_uuid``.

        Raises:
            RequestFailed: If the API returns status >= 400.
            ResponseDecodeError: If the body is not a list of statistics snapshots.
        """
        payload = StatsRequestBody(
            start_date=req.start_date,
            end_date=req.end_date,
            statistics=req.statistics,
        )
        body = self.request(
            request_options(
                "POST",
                f"/stats/{req.entity_uuid}",
                body=payload.to_json(),
                params=req.params,
            )
        )
        return decode_json(_STATS, body)
