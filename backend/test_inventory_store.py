"""In-memory collaborator: two-level hierarchy and item bookkeeping."""

import pytest

from homebox.core.intent.locations import LocationKind
from homebox.core.inventory.store import Bounds, InMemoryInventoryStore, ItemSpec, LocationSpec

BOUNDS = Bounds(x=0, y=0, width=40, height=40)


@pytest.fixture()
def store():
    return InMemoryInventoryStore()


def test_container_under_room_is_accepted(store):
    room_id = store.create_location(LocationSpec(name="书房", kind=LocationKind.ROOM, bounds=BOUNDS))
    cabinet_id = store.create_location(
        LocationSpec(name="柜子", kind=LocationKind.CABINET, bounds=BOUNDS, parent_id=room_id)
    )
    snapshot = {loc.id: loc for loc in store.snapshot()}
    assert snapshot[cabinet_id].parent_id == room_id
    assert snapshot[room_id].parent_id is None


def test_nesting_below_a_container_is_rejected(store):
    room_id = store.create_location(LocationSpec(name="书房", kind=LocationKind.ROOM, bounds=BOUNDS))
    cabinet_id = store.create_location(
        LocationSpec(name="柜子", kind=LocationKind.CABINET, bounds=BOUNDS, parent_id=room_id)
    )
    with pytest.raises(ValueError):
        store.create_location(LocationSpec(name="小盒", kind=LocationKind.BOX, bounds=BOUNDS, parent_id=cabinet_id))


def test_room_with_parent_is_rejected(store):
    room_id = store.create_location(LocationSpec(name="书房", kind=LocationKind.ROOM, bounds=BOUNDS))
    with pytest.raises(ValueError):
        store.create_location(LocationSpec(name="里间", kind=LocationKind.ROOM, bounds=BOUNDS, parent_id=room_id))


def test_item_fields_are_normalized(store):
    room_id = store.create_location(LocationSpec(name="书房", kind=LocationKind.ROOM, bounds=BOUNDS))
    item_id = store.create_item(ItemSpec(name="口罩", location_id=room_id, category="杂项", quantity=0))
    (item,) = store.list_items()
    assert item.id == item_id
    assert item.category == "其他"
    assert item.quantity == 1


def test_item_in_unknown_location_is_rejected(store):
    with pytest.raises(ValueError):
        store.create_item(ItemSpec(name="口罩", location_id="missing"))


def test_delete_unknown_item_raises(store):
    with pytest.raises(KeyError):
        store.delete_item("missing")
