"""Tests for action listing."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from turboclient.api.actions import ActionsCriteria, ActionsRequest
from turboclient.exceptions import RequestFailed


def _request(uuid: str, detail_level: str = "EXECUTION") -> ActionsRequest:
    return ActionsRequest(
        uuid=uuid,
        action_state=["READY"],
        action_type=["RESIZE"],
        detail_level=detail_level,
    )


class TestActionsCriteria:
    def test_exact_body(self) -> None:
        criteria = ActionsCriteria(
            action_state_list=["READY"],
            action_type_list=["RESIZE"],
            detail_level="EXECUTION",
        )
        assert criteria.to_json() == (
            b'{"actionStateList":["READY"],"actionTypeList":["RESIZE"],"detailLevel":"EXECUTION"}'
        )

    def test_detail_level_omitted_when_empty(self) -> None:
        criteria = ActionsCriteria(action_state_list=["READY"])
        assert criteria.to_json() == b'{"actionStateList":["READY"],"actionTypeList":[]}'


class TestGetActionsByUuid:
    def test_single_action(self, make_client, recorder, fixture_bytes) -> None:
        handler = recorder(httpx.Response(200, content=fixture_bytes("GetActionsByUuid.json")))
        client = make_client(handler)

        actions = client.get_actions_by_uuid(_request("75941320319680"))

        request = handler.last
        assert request.method == "POST"
        assert request.url.path == "/api/v3/entities/75941320319680/actions"
        assert request.content == (
            b'{"actionStateList":["READY"],"actionTypeList":["RESIZE"],"detailLevel":"EXECUTION"}'
        )

        assert len(actions) == 1
        action = actions[0]
        assert action.uuid == "638911097668880"
        assert action.target.uuid == "75941320319680"
        assert action.action_impact_id == 638911097668880
        assert action.market_id == 777777
        assert action.action_id == 638911097668880
        assert action.create_time == datetime(2024, 5, 6, 10, 12, 34, tzinfo=timezone.utc)
        assert action.risk.sub_category == "Performance Assurance"
        assert action.stats[0].filters[0].value == "investment"
        assert action.current_location.display_name == "DC-East"
        assert action.template.discovered is True
        assert action.compound_actions == []

    def test_compound_action(self, make_client, recorder, fixture_bytes) -> None:
        handler = recorder(
            httpx.Response(200, content=fixture_bytes("GetActionsByUuidCompound.json"))
        )
        client = make_client(handler)

        actions = client.get_actions_by_uuid(_request("76084922964120"))

        assert handler.last.url.path == "/api/v3/entities/76084922964120/actions"
        assert len(actions) == 1
        action = actions[0]
        assert action.uuid == "639054921252942"
        assert action.target.uuid == "76084922964120"
        assert action.target.aspects.cloud_aspect is not None
        assert action.target.aspects.cloud_aspect.business_account.display_name == "Production Account"

        parts = action.compound_actions
        assert len(parts) == 3
        assert parts[0].target.discovered_by.uuid == "75878878480048"
        assert [(p.current_value, p.new_value) for p in parts] == [
            ("262144.0", "491520.0"),
            ("1048576.0", "1310720.0"),
            ("200.0", "10.0"),
        ]

    def test_multiple_actions(self, make_client, recorder, fixture_bytes) -> None:
        handler = recorder(httpx.Response(200, content=fixture_bytes("GetActionsByUuidMulti.json")))
        client = make_client(handler)

        actions = client.get_actions_by_uuid(_request("75930461864800"))

        assert len(actions) == 2
        assert actions[0].uuid == "638883006725506"
        assert actions[0].target.uuid == "75930461864800"
        assert (actions[0].current_value, actions[0].new_value) == ("2621440.0", "3670016.0")
        assert actions[1].uuid == "638929431495649"
        assert (actions[1].current_value, actions[1].new_value) == ("1.0", "2.0")
        assert actions[1].create_time is None

    def test_no_detail_level(self, make_client, recorder) -> None:
        handler = recorder(httpx.Response(200, content=b"[]"))
        client = make_client(handler)

        assert client.get_actions_by_uuid(_request("1", detail_level="")) == []
        assert b"detailLevel" not in handler.last.content

    def test_error_body_is_surfaced(self, make_client, recorder) -> None:
        client = make_client(recorder(httpx.Response(400, content=b"invalid action state FOO")))

        with pytest.raises(RequestFailed, match="invalid action state FOO"):
            client.get_actions_by_uuid(_request("1"))
