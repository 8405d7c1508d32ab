"""Entity retrieval and tagging.

Endpoints:
    ``GET /entities/{uuid}`` -- :meth:`EntitiesAPI.get_entity`
    ``GET /entities/{uuid}/tags`` -- :meth:`EntitiesAPI.get_entity_tags`
    ``POST /entities/{uuid}/tags`` -- :meth:`EntitiesAPI.tag_entity`
"""

from __future__ import annotations

from pydantic import BaseModel, Field, TypeAdapter

from turboclient.api.common import (
    DiscoveredBy,
    EntityRef,
    ResponseModel,
    Tag,
    Template,
    decode_json,
)
from turboclient.client.dispatcher import AuthenticatedClient, request_options
from turboclient.models import CommonReqParams


class EntityRequest(BaseModel):
    """Identifies one entity, plus optional per-call headers and query parameters."""

    uuid: str
    params: CommonReqParams = Field(default_factory=CommonReqParams)


class TagEntityRequest(BaseModel):
    """Tags to attach to an entity."""

    uuid: str
    tags: list[Tag] = Field(default_factory=list)
    params: CommonReqParams = Field(default_factory=CommonReqParams)


class EntityResult(ResponseModel):
    """A single managed entity such as a virtual machine."""

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
    providers: list[EntityRef] = Field(default_factory=list)
    template: Template = Field(default_factory=Template)
    tags: dict[str, list[str]] = Field(default_factory=dict)
    staleness: str = ""


_ENTITY = TypeAdapter(EntityResult)
_TAGS = TypeAdapter(list[Tag])


class EntitiesAPI(AuthenticatedClient):
    """Entity and tag operations."""

    def get_entity(self, req: EntityRequest) -> EntityResult:
        """Fetch the entity with ``req.uuid``.

        Raises:
            RequestFailed: If the API returns status >= 400.
            ResponseDecodeError: If the body is not an entity object.
        """
        body = self.request(request_options("GET", f"/entities/{req.uuid}", params=req.params))
        self.log.debug(body.decode("utf-8", errors="replace"))
        return decode_json(_ENTITY, body)

    def get_entity_tags(self, req: EntityRequest) -> list[Tag]:
        """List the tags attached to the entity with ``req.uuid``."""
        body = self.request(
            request_options("GET", f"/entities/{req.uuid}/tags", params=req.params)
        )
        return decode_json(_TAGS, body)

    def tag_entity(self, req: TagEntityRequest) -> list[Tag]:
        """Attach ``req.tags`` to the entity and return the entity's resulting tags."""
        payload = _TAGS.dump_json(req.tags, by_alias=True)
        body = self.request(
            request_options("POST", f"/entities/{req.uuid}/tags", body=payload, params=req.params)
        )
        return decode_json(_TAGS, body)
