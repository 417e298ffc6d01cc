"""HTTP surface: parse, confirm/execute, snapshot."""

import pytest
from fastapi.testclient import TestClient

from homebox.main import app
from homebox.services import assistant_workflow


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("HOMEBOX_AI_DISABLE", "1")
    assistant_workflow.reset_store()
    with TestClient(app) as test_client:
        yield test_client
    assistant_workflow.reset_store()


def _seed(client):
    response = client.post(
        "/inventory/locations",
        json={"locations": [{"name": "柜子", "type": "cabinet", "parentName": "书房"}, {"name": "书房", "type": "room"}]},
    )
    assert response.status_code == 200


def test_home_lists_routes(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["ai_enabled"] is False


def test_parse_does_not_mutate_store(client):
    _seed(client)
    response = client.post("/assistant/parse", json={"text": "在书房里加入置物柜1，帮我把网络连接线放到里面"})
    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "local"
    assert [a["action"] for a in body["actions"]] == ["add_cabinet", "add_item"]

    snapshot = client.get("/inventory/snapshot").json()
    assert {loc["name"] for loc in snapshot["locations"]} == {"书房", "柜子"}
    assert snapshot["items"] == []
    assert snapshot["hierarchy"] == "书房 → [柜子]"


def test_parse_then_execute_round_trip(client):
    _seed(client)
    parsed = client.post("/assistant/parse", json={"text": "在书房里加入置物柜1，帮我把网络连接线放到里面"}).json()

    # the UI hands back the confirmed list, items first to prove the executor re-sorts
    confirmed = list(reversed(parsed["actions"]))
    result = client.post("/assistant/execute", json={"actions": confirmed}).json()

    assert [a["action"] for a in result["success"]] == ["add_cabinet", "add_item"]
    assert result["failed"] == []

    snapshot = client.get("/inventory/snapshot").json()
    assert "书房 → [柜子, 置物柜1]" == snapshot["hierarchy"]
    assert [item["name"] for item in snapshot["items"]] == ["网络连接线"]


def test_execute_reports_failures_and_rejections(client):
    _seed(client)
    result = client.post(
        "/assistant/execute",
        json={
            "actions": [
                {"action": "add_item", "name": "雨伞", "locationName": "阳台"},
                {"action": "add_item", "name": "--", "locationName": "柜子"},
                {"action": "delete_item", "name": "PS5"},
            ]
        },
    ).json()
    assert result["success"] == []
    assert [a["name"] for a in result["failed"]] == ["雨伞", "PS5"]
    assert result["rejected"] == [{"action": "add_item", "name": "--", "quantity": 1, "locationName": "柜子"}]


def test_execute_rejects_unknown_action_tag(client):
    response = client.post("/assistant/execute", json={"actions": [{"action": "teleport", "name": "月球"}]})
    assert response.status_code == 422


def test_reply_context_reflects_execution(client):
    _seed(client)
    nothing = client.post("/assistant/reply-context", json={"success": [], "failed": []}).json()
    assert nothing["executed"] is False
    assert "本次没有执行任何操作" in nothing["prompt"]

    done = client.post(
        "/assistant/reply-context",
        json={"success": [{"action": "add_room", "name": "阳台"}]},
    ).json()
    assert done["executed"] is True
    assert '房间"阳台"' in done["prompt"]


def test_seeding_container_under_container_stays_unnested(client):
    _seed(client)
    response = client.post(
        "/inventory/locations",
        json={"locations": [{"name": "小盒", "type": "box", "parentName": "柜子"}]},
    )
    # "柜子" is not a room, so the box is created free-standing rather than nested
    assert response.status_code == 200
    snapshot = client.get("/inventory/snapshot").json()
    box = next(loc for loc in snapshot["locations"] if loc["name"] == "小盒")
    assert box["parentId"] is None
