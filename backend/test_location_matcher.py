"""Location matching and hierarchy rendering."""

from homebox.core.intent.locations import (
    Location,
    LocationKind,
    build_hierarchy,
    find_all_locations,
    find_best_location,
)


def _room(loc_id, name):
    return Location(id=loc_id, name=name, kind=LocationKind.ROOM)


def _cabinet(loc_id, name, parent_id=None, kind=LocationKind.CABINET):
    return Location(id=loc_id, name=name, kind=kind, parent_id=parent_id)


def _household():
    return [
        _room("r1", "书房"),
        _room("r2", "客厅"),
        _cabinet("c1", "柜子", "r1"),
        _cabinet("c2", "杂物收纳柜", "r2"),
        _cabinet("c3", "鞋柜", "r2"),
    ]


def test_container_beats_room_when_both_mentioned():
    best = find_best_location("一次性内衣裤放到了书房的柜子里", _household())
    assert best is not None
    assert best.name == "柜子"


def test_longer_container_name_wins():
    best = find_best_location("客厅杂物收纳柜放着湿纸巾", _household())
    assert best.name == "杂物收纳柜"


def test_longer_room_name_wins_among_rooms():
    locations = [_room("r1", "卧室"), _room("r2", "主卧室")]
    assert find_best_location("主卧室里有什么", locations).name == "主卧室"


def test_room_is_used_when_no_container_matches():
    assert find_best_location("把书房的PS5删掉", _household()).name == "书房"


def test_no_match_returns_none():
    assert find_best_location("阳台上有花", _household()) is None
    assert find_best_location("", _household()) is None


def test_duplicate_names_still_resolve():
    locations = [_cabinet("a", "柜子"), _cabinet("b", "柜子")]
    best = find_best_location("柜子里的东西", locations)
    assert best is not None and best.id in {"a", "b"}


def test_find_all_locations_returns_every_mention():
    found = {loc.name for loc in find_all_locations("书房的柜子和客厅", _household())}
    assert found == {"书房", "柜子", "客厅"}


def test_matcher_does_not_mutate_input():
    locations = _household()
    before = list(locations)
    find_best_location("书房的柜子", locations)
    assert locations == before


def test_build_hierarchy_lists_children_under_rooms():
    locations = _household() + [_room("r3", "阳台")]
    assert build_hierarchy(locations).splitlines() == [
        "书房 → [柜子]",
        "客厅 → [杂物收纳柜, 鞋柜]",
        "阳台",
    ]


def test_location_from_payload_maps_collaborator_shape():
    loc = Location.from_payload({"id": 7, "name": "衣柜", "type": "wardrobe", "parentId": "r1"})
    assert loc.id == "7"
    assert loc.kind is LocationKind.WARDROBE
    assert loc.parent_id == "r1"

    unknown = Location.from_payload({"id": "x", "name": "神秘柜", "type": "mystery"})
    assert unknown.kind is LocationKind.CABINET

    room = Location.from_payload({"id": "r", "name": "客厅", "type": "room", "parentId": "zzz"})
    assert room.parent_id is None
