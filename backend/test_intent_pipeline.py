"""End-to-end parse: normalize → remote/local → validate."""

import json

import pytest

from homebox.core.intent.actions import AddCabinet, AddItem
from homebox.core.intent.locations import Location, LocationKind
from homebox.core.intent.pipeline import SOURCE_LOCAL, SOURCE_NONE, SOURCE_REMOTE, parse_utterance


LOCATIONS = [
    Location(id="r1", name="书房", kind=LocationKind.ROOM),
    Location(id="c1", name="柜子", kind=LocationKind.CABINET, parent_id="r1"),
]


@pytest.fixture(autouse=True)
def _no_remote(monkeypatch):
    monkeypatch.setenv("HOMEBOX_AI_DISABLE", "1")


def test_traditional_input_is_normalized_before_local_parsing():
    result = parse_utterance("一次性內衣褲放到了書房的櫃子裡", LOCATIONS)
    assert result.text == "一次性内衣裤放到了书房的柜子里"
    assert result.source == SOURCE_LOCAL
    assert result.actions == [AddItem(name="一次性内衣裤", category="衣物", quantity=1, location_name="柜子")]


def test_remote_result_is_preferred():
    reply = json.dumps([{"action": "add_item", "name": "口罩", "locationName": "柜子"}], ensure_ascii=False)
    result = parse_utterance("口罩放到柜子里", LOCATIONS, transport=lambda messages: reply)
    assert result.source == SOURCE_REMOTE
    assert [a.name for a in result.actions] == ["口罩"]


def test_empty_remote_result_falls_back_to_local():
    result = parse_utterance("在书房里加入置物柜1，帮我把网络连接线放到里面", LOCATIONS, transport=lambda messages: "[]")
    assert result.source == SOURCE_LOCAL
    assert isinstance(result.actions[0], AddCabinet)
    assert result.actions[1].location_name == "置物柜1"
    assert result.unresolved == []


def test_remote_failure_falls_back_to_local():
    def _broken(messages):
        raise ConnectionError("offline")

    result = parse_utterance("口罩放到柜子里", LOCATIONS, transport=_broken)
    assert result.source == SOURCE_LOCAL
    assert [a.name for a in result.actions] == ["口罩"]


def test_remote_references_are_repaired():
    reply = json.dumps([{"action": "add_item", "name": "口罩", "locationName": "书房柜"}], ensure_ascii=False)
    result = parse_utterance("口罩放到书房的柜子里", LOCATIONS, transport=lambda messages: reply)
    assert result.actions[0].location_name == "柜子"


def test_query_yields_nothing():
    result = parse_utterance("家里有哪些空间？", LOCATIONS)
    assert result.actions == []
    assert result.source == SOURCE_NONE
    assert result.has_actions is False


def test_blank_input():
    result = parse_utterance("   ", LOCATIONS)
    assert result.text == ""
    assert result.actions == []


def test_payload_shape():
    payload = parse_utterance("口罩放到柜子里", LOCATIONS).to_payload()
    assert payload["source"] == "local"
    assert payload["actions"][0]["locationName"] == "柜子"
    assert payload["unresolved"] == []
