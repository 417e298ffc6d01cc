"""Location snapshot model and text → location matching."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence


class LocationKind(str, Enum):
    ROOM = "room"
    CABINET = "cabinet"
    WARDROBE = "wardrobe"
    SHELF = "shelf"
    DRAWER = "drawer"
    BOX = "box"

    @classmethod
    def parse(cls, value: Any, default: Optional["LocationKind"] = None) -> "LocationKind":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.CABINET


@dataclass(frozen=True)
class Location:
    """Read-only view of one room or container, as seen by the parsers."""

    id: str
    name: str
    kind: LocationKind
    parent_id: Optional[str] = None
    room_type: Optional[str] = None

    @property
    def is_room(self) -> bool:
        return self.kind is LocationKind.ROOM

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Location":
        kind = LocationKind.parse(payload.get("type") or payload.get("kind"))
        parent_id = payload.get("parentId", payload.get("parent_id"))
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload.get("name", "")),
            kind=kind,
            parent_id=None if kind is LocationKind.ROOM else (str(parent_id) if parent_id else None),
            room_type=payload.get("roomType") or payload.get("room_type"),
        )


def _match_priority(location: Location) -> tuple:
    # containers first, then longest name first
    return (1 if location.is_room else 0, -len(location.name))


def find_all_locations(text: str, locations: Iterable[Location]) -> List[Location]:
    """Every location whose name occurs literally in ``text``."""

    if not text:
        return []
    return [loc for loc in locations if loc.name and loc.name in text]


def find_best_location(text: str, locations: Iterable[Location]) -> Optional[Location]:
    """Most specific location mentioned in ``text``.

    Containers outrank rooms; within the same class a longer name outranks a
    shorter one, so "杂物收纳柜" wins over "柜子" and any container wins over
    "客厅". ``sorted`` is stable, so equal names resolve to the first one in
    snapshot order.
    """

    if not text:
        return None
    for loc in sorted(locations, key=_match_priority):
        if loc.name and loc.name in text:
            return loc
    return None


def rooms(locations: Iterable[Location]) -> List[Location]:
    return [loc for loc in locations if loc.is_room]


def containers(locations: Iterable[Location]) -> List[Location]:
    return [loc for loc in locations if not loc.is_room]


def room_names(locations: Iterable[Location]) -> List[str]:
    return [loc.name for loc in rooms(locations)]


def location_names(locations: Iterable[Location]) -> List[str]:
    return [loc.name for loc in locations]


def build_hierarchy(locations: Sequence[Location]) -> str:
    """One line per room: ``客厅 → [鞋柜, 杂物收纳柜]`` or just ``客厅``."""

    all_containers = containers(locations)
    lines: List[str] = []
    for room in rooms(locations):
        children = [c.name for c in all_containers if c.parent_id == room.id]
        if children:
            lines.append(f"{room.name} → [{', '.join(children)}]")
        else:
            lines.append(room.name)
    return "\n".join(lines)
