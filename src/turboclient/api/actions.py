"""Action listing for an entity.

``POST /entities/{uuid}/actions`` with a body such as::

    {"actionStateList": ["READY"], "actionTypeList": ["RESIZE"], "detailLevel": "EXECUTION"}

``detailLevel`` is left out when empty.  The response is a list of actions;
compound actions (several resizes executed together) carry their parts in
``compoundActions``.
"""

from __future__ import annotations

from datetime import datetime
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
from turboclient.models import CommonReqParams


class ActionsRequest(BaseModel):
    """Selects the actions of one entity by state and type."""

    uuid: str
    action_state: list[str] = Field(default_factory=list)
    action_type: list[str] = Field(default_factory=list)
    detail_level: str = ""
    params: CommonReqParams = Field(default_factory=CommonReqParams)


class ActionsCriteria(RequestBody):
    """Body of the actions query."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"detailLevel"})

    action_state_list: list[str] = Field(default_factory=list)
    action_type_list: list[str] = Field(default_factory=list)
    detail_level: str = ""


# --- Response shapes ---


class BusinessAccount(EntityRef):
    pass


class CloudAspect(ResponseModel):
    business_account: BusinessAccount = Field(default_factory=BusinessAccount)
    type: str = ""


class ActionAspects(ResponseModel):
    cloud_aspect: Optional[CloudAspect] = None


class ActionEntity(ResponseModel):
    """An entity as embedded in an action (target, current or new entity)."""

    uuid: str = ""
    display_name: str = ""
    class_name: str = ""
    environment_type: str = ""
    discovered_by: DiscoveredBy = Field(default_factory=DiscoveredBy)
    vendor_ids: dict[str, str] = Field(default_factory=dict)
    state: str = ""
    aspects: ActionAspects = Field(default_factory=ActionAspects)
    tags: dict[str, list[str]] = Field(default_factory=dict)


class ActionLocation(ResponseModel):
    uuid: str = ""
    display_name: str = ""
    class_name: str = ""
    environment_type: str = ""
    discovered_by: DiscoveredBy = Field(default_factory=DiscoveredBy)
    vendor_ids: dict[str, str] = Field(default_factory=dict)


class Risk(ResponseModel):
    sub_category: str = ""
    description: str = ""
    severity: str = ""
    importance: float = 0.0


class ActionStat(ResponseModel):
    name: str = ""
    filters: list[Filter] = Field(default_factory=list)
    units: str = ""
    value: float = 0.0


class CompoundAction(ResponseModel):
    """One part of a compound action."""

    display_name: str = ""
    action_type: str = ""
    action_state: str = ""
    action_mode: str = ""
    details: str = ""
    target: ActionEntity = Field(default_factory=ActionEntity)
    current_entity: ActionEntity = Field(default_factory=ActionEntity)
    new_entity: ActionEntity = Field(default_factory=ActionEntity)
    current_value: str = ""
    new_value: str = ""


class ActionResult(ResponseModel):
    """A recommended or executed action."""

    uuid: str = ""
    display_name: str = ""
    action_impact_id: int = Field(default=0, alias="actionImpactID")
    market_id: int = Field(default=0, alias="marketID")
    create_time: Optional[datetime] = None
    action_type: str = ""
    action_state: str = ""
    action_mode: str = ""
    details: str = ""
    importance: float = 0.0
    target: ActionEntity = Field(default_factory=ActionEntity)
    current_entity: ActionEntity = Field(default_factory=ActionEntity)
    new_entity: ActionEntity = Field(default_factory=ActionEntity)
    current_value: str = ""
    new_value: str = ""
    template: Template = Field(default_factory=Template)
    risk: Risk = Field(default_factory=Risk)
    stats: list[ActionStat] = Field(default_factory=list)
    current_location: ActionLocation = Field(default_factory=ActionLocation)
    new_location: ActionLocation = Field(default_factory=ActionLocation)
    compound_actions: list[CompoundAction] = Field(default_factory=list)
    source: str = ""
    action_id: int = Field(default=0, alias="actionID")


_ACTIONS = TypeAdapter(list[ActionResult])


class ActionsAPI(AuthenticatedClient):
    """Action operations."""

    def get_actions_by_uuid(self, req: ActionsRequest) -> list[ActionResult]:
        """List the actions affecting the entity ``req.uuid``.

        Args:
            req: Entity UUID, action state/type filters and detail level.

        Returns:
            The matching actions, in API order.

        Raises:
            RequestFailed: If the API returns status >= 400.
            ResponseDecodeError: If the body is not a list of actions.
        """
        criteria = ActionsCriteria(
            action_state_list=req.action_state,
            action_type_list=req.action_type,
            detail_level=req.detail_level,
        )
        body = self.request(
            request_options(
                "POST",
                f"/entities/{req.uuid}/actions",
                body=criteria.to_json(),
                params=req.params,
            )
        )
        return decode_json(_ACTIONS, body)
