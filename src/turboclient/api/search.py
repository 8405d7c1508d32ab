"""Entity search.

:meth:`SearchAPI.search_entities` posts a caller-built :class:`SearchDTO` to
``/search``.  :meth:`SearchAPI.search_entity_by_name` is a shorthand that
builds a single ``EQ`` criterion on the display name, using the name filter
that matches the entity type.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, Field, TypeAdapter

from turboclient.api.common import (
    DiscoveredBy,
    EntityRef,
    Filter,
    RequestBody,
    ResponseModel,
    Template,
    decode_json,
)
from turboclient.client.dispatcher import AuthenticatedClient, request_options
from turboclient.exceptions import UnsupportedEntityTypeError
from turboclient.models import CommonReqParams

NAME_FILTERS: dict[str, str] = {
    "VirtualMachine": "vmsByName",
    "VirtualVolume": "virtualVolumeByName",
    "DatabaseServer": "databaseByName",
}
"""Entity type -> search filter matching on display name."""


def filter_type_for(entity_type: str) -> str:
    """Return the name filter for *entity_type*.

    Raises:
        UnsupportedEntityTypeError: If there is no name filter for the type.
    """
    try:
        return NAME_FILTERS[entity_type]
    except KeyError:
        raise UnsupportedEntityTypeError(
            f"entity type of {entity_type} not supported"
        ) from None


# --- Request shapes ---


class Criteria(RequestBody):
    """One search criterion, e.g. ``displayName EQ "web-01"``."""

    case_sensitive: bool = False
    exp_type: str = ""
    exp_val: str = ""
    filter_type: str = ""


class SearchDTO(RequestBody):
    """Body of ``POST /search``."""

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {"scope", "environmentType", "cloudType"}
    )

    criteria_list: list[Criteria] = Field(default_factory=list)
    logical_operator: str = ""
    class_name: str = ""
    scope: str = ""
    environment_type: str = ""
    cloud_type: str = ""


class SearchRequest(BaseModel):
    """Search for entities of one type by display name."""

    name: str
    entity_type: str
    environment_type: str = ""
    cloud_type: str = ""
    case_sensitive: bool = False
    params: CommonReqParams = Field(default_factory=CommonReqParams)


# --- Response shapes ---


class StatValue(ResponseModel):
    max: float = 0.0
    min: float = 0.0
    avg: float = 0.0
    total: float = 0.0


class DiskStat(ResponseModel):
    name: str = ""
    capacity: StatValue = Field(default_factory=StatValue)
    filters: list[Filter] = Field(default_factory=list)
    units: str = ""
    values: StatValue = Field(default_factory=StatValue)
    value: float = 0.0


class AccountRef(ResponseModel):
    uuid: str = ""
    display_name: str = ""
    class_name: str = ""
    environment_type: str = ""
    discovered_by: DiscoveredBy = Field(default_factory=DiscoveredBy)
    vendor_ids: dict[str, str] = Field(default_factory=dict)
    state: str = ""
    severity: str = ""
    severity_breakdown: dict[str, int] = Field(default_factory=dict)
    tags: dict[str, list[str]] = Field(default_factory=dict)
    staleness: str = ""


class VirtualDisk(ResponseModel):
    uuid: str = ""
    display_name: str = ""
    tier: str = ""
    stats: list[DiskStat] = Field(default_factory=list)
    attached_virtual_machine: EntityRef = Field(default_factory=EntityRef)
    provider: EntityRef = Field(default_factory=EntityRef)
    data_center: EntityRef = Field(default_factory=EntityRef)
    environment_type: str = ""
    last_modified: int = 0
    business_account: AccountRef = Field(default_factory=AccountRef)
    snapshot_id: str = ""
    encryption: str = ""
    attachment_state: str = ""
    hourly_billed_ops: float = 0.0
    creation_time_stamp: int = 0
    resource_id: str = ""


class VirtualDisksAspect(ResponseModel):
    virtual_disks: list[VirtualDisk] = Field(default_factory=list)
    type: str = ""


class VirtualMachineAspect(ResponseModel):
    os: str = ""
    ip: list[str] = Field(default_factory=list)
    num_vcpus: int = Field(default=0, alias="numVCPUs")
    ebs_optimized: bool = False
    resource_id: str = ""
    creation_time_stamp: int = 0
    type: str = ""


class SearchAspects(ResponseModel):
    virtual_machine_aspect: Optional[VirtualMachineAspect] = None
    virtual_disks_aspect: Optional[VirtualDisksAspect] = None


class SearchResult(ResponseModel):
    """One entity matched by a search."""

    uuid: str = ""
    display_name: str = ""
    class_name: str = ""
    environment_type: str = ""
    discovered_by: DiscoveredBy = Field(default_factory=DiscoveredBy)
    vendor_ids: dict[str, str] = Field(default_factory=dict)
    state: str = ""
    severity: str = ""
    cost_price: float = 0.0
    severity_breakdown: dict[str, int] = Field(default_factory=dict)
    template: Template = Field(default_factory=Template)
    aspects: SearchAspects = Field(default_factory=SearchAspects)
    tags: dict[str, list[str]] = Field(default_factory=dict)


_RESULTS = TypeAdapter(list[SearchResult])


class SearchAPI(AuthenticatedClient):
    """Search operations."""

    def search_entities(
        self,
        dto: SearchDTO,
        params: Optional[CommonReqParams] = None,
    ) -> list[SearchResult]:
        """Run the search described by *dto*.

        Args:
            dto: Criteria, logical operator, class name and optional scope,
                environment and cloud type.
            params: Per-call headers and query parameters (e.g.
                ``{"query_type": "EXACT"}``).

        Raises:
            RequestFailed: If the API returns status >= 400.
            ResponseDecodeError: If the body is not a list of entities.
        """
        body = self.request(request_options("POST", "/search", body=dto.to_json(), params=params))
        return decode_json(_RESULTS, body)

    def search_entity_by_name(self, req: SearchRequest) -> list[SearchResult]:
        """Find entities of ``req.entity_type`` whose display name equals ``req.name``.

        Raises:
            UnsupportedEntityTypeError: If the entity type has no name filter.
                No request is sent in that case.
        """
        dto = SearchDTO(
            criteria_list=[
                Criteria(
                    case_sensitive=req.case_sensitive,
                    exp_type="EQ",
                    exp_val=req.name,
                    filter_type=filter_type_for(req.entity_type),
                )
            ],
            logical_operator="OR",
            class_name=req.entity_type,
            environment_type=req.environment_type,
            cloud_type=req.cloud_type,
        )
        return self.search_entities(dto, req.params)
