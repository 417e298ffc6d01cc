"""Structured actions produced by intent parsing.

Each action kind has its own dataclass so the required fields of a kind are
always present. The wire form (``to_payload`` / ``action_from_payload``)
matches the JSON schema the hosted model is instructed to emit, which is
also what the UI sends back after the confirmation step.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Set, Union

ADD_ROOM = "add_room"
ADD_CABINET = "add_cabinet"
ADD_ITEM = "add_item"
DELETE_ITEM = "delete_item"

ACTION_TAGS: Sequence[str] = (ADD_ROOM, ADD_CABINET, ADD_ITEM, DELETE_ITEM)

CATEGORY_OTHER = "其他"
CATEGORIES: Sequence[str] = (
    "电子产品",
    "工具",
    "衣物",
    "书籍",
    "厨房用品",
    "药品",
    "纪念品",
    CATEGORY_OTHER,
)

DEFAULT_CONTAINER_TYPE = "cabinet"
DEFAULT_ROOM_TYPE = "living"


def _is_filler(ch: str) -> bool:
    # punctuation (dashes included) and separators
    return ch.isspace() or unicodedata.category(ch)[0] in "PZ"


def is_meaningful_name(name: Any) -> bool:
    """False for empty names and names made only of punctuation/space/dashes.

    Symbols and emoji ("🎁", "№") count as content.
    """

    if name is None:
        return False
    text = str(name).strip()
    return any(not _is_filler(ch) for ch in text)


def normalize_category(value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    return text if text in CATEGORIES else CATEGORY_OTHER


def normalize_quantity(value: Any) -> int:
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class AddRoom:
    action: ClassVar[str] = ADD_ROOM

    name: str
    room_type: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": self.action, "name": self.name}
        if self.room_type:
            payload["type"] = self.room_type
        return payload


@dataclass(frozen=True)
class AddCabinet:
    action: ClassVar[str] = ADD_CABINET

    name: str
    type_hint: Optional[str] = None
    parent_room: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": self.action, "name": self.name}
        if self.type_hint:
            payload["type"] = self.type_hint
        if self.parent_room:
            payload["parentRoom"] = self.parent_room
        return payload


@dataclass(frozen=True)
class AddItem:
    action: ClassVar[str] = ADD_ITEM

    name: str
    category: str = CATEGORY_OTHER
    quantity: int = 1
    location_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "locationName": self.location_name,
        }


@dataclass(frozen=True)
class DeleteItem:
    action: ClassVar[str] = DELETE_ITEM

    name: str
    location_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "name": self.name,
            "locationName": self.location_name,
        }


Action = Union[AddRoom, AddCabinet, AddItem, DeleteItem]

# Actions that reference a location by name.
PLACEMENT_ACTIONS = (AddItem, DeleteItem)
# Actions that bring a new location into existence.
CREATION_ACTIONS = (AddRoom, AddCabinet)


def action_from_payload(payload: Any) -> Optional[Action]:
    """Build a typed action from a loosely-typed dict, or ``None`` if unusable."""

    if not isinstance(payload, Mapping):
        return None
    tag = _clean(payload.get("action"))
    name = payload.get("name")
    if not tag or not is_meaningful_name(name):
        return None
    name = str(name).strip()

    if tag == ADD_ROOM:
        return AddRoom(name=name, room_type=_clean(payload.get("type")))
    if tag == ADD_CABINET:
        return AddCabinet(
            name=name,
            type_hint=_clean(payload.get("type")),
            parent_room=_clean(payload.get("parentRoom") or payload.get("parentRoomName")),
        )
    if tag == ADD_ITEM:
        return AddItem(
            name=name,
            category=normalize_category(payload.get("category")),
            quantity=normalize_quantity(payload.get("quantity", 1)),
            location_name=_clean(payload.get("locationName")),
        )
    if tag == DELETE_ITEM:
        return DeleteItem(name=name, location_name=_clean(payload.get("locationName")))
    return None


def actions_from_payloads(payloads: Any) -> List[Action]:
    if not isinstance(payloads, list):
        return []
    actions: List[Action] = []
    for entry in payloads:
        action = action_from_payload(entry)
        if action is not None:
            actions.append(action)
    return actions


def created_location_names(actions: Sequence[Action]) -> Set[str]:
    """Names of rooms/containers that the batch itself will create."""

    return {action.name for action in actions if isinstance(action, CREATION_ACTIONS)}
