"""Location/item collaborator used by the executor, plus an in-memory implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional, Protocol
from uuid import uuid4

from homebox.core.intent.actions import CATEGORY_OTHER, normalize_category, normalize_quantity
from homebox.core.intent.locations import Location, LocationKind


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Bounds:
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class LocationSpec:
    name: str
    kind: LocationKind
    bounds: Bounds
    parent_id: Optional[str] = None
    room_type: Optional[str] = None


@dataclass(frozen=True)
class ItemSpec:
    name: str
    location_id: Optional[str]
    category: str = CATEGORY_OTHER
    quantity: int = 1
    description: str = ""


@dataclass
class LocationRecord:
    name: str
    kind: LocationKind
    bounds: Bounds
    parent_id: Optional[str] = None
    room_type: Optional[str] = None
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: str = field(default_factory=_now_iso)

    def to_location(self) -> Location:
        return Location(
            id=self.id,
            name=self.name,
            kind=self.kind,
            parent_id=self.parent_id,
            room_type=self.room_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "parentId": self.parent_id,
            "roomType": self.room_type,
            "bounds": self.bounds.to_dict(),
            "createdAt": self.created_at,
        }


@dataclass
class ItemRecord:
    name: str
    location_id: Optional[str]
    category: str = CATEGORY_OTHER
    quantity: int = 1
    description: str = ""
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "description": self.description,
            "locationId": self.location_id,
            "createdAt": self.created_at,
        }


class InventoryStore(Protocol):
    """Read/write interface the executor needs from the storage layer."""

    def list_locations(self) -> List[LocationRecord]:
        ...

    def list_items(self) -> List[ItemRecord]:
        ...

    def create_location(self, spec: LocationSpec) -> str:
        ...

    def create_item(self, spec: ItemSpec) -> str:
        ...

    def delete_item(self, item_id: str) -> None:
        ...


class InMemoryInventoryStore:
    """Process-local store; enough for the API and for tests."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._locations: Dict[str, LocationRecord] = {}
        self._items: Dict[str, ItemRecord] = {}

    def list_locations(self) -> List[LocationRecord]:
        with self._lock:
            return list(self._locations.values())

    def list_items(self) -> List[ItemRecord]:
        with self._lock:
            return list(self._items.values())

    def snapshot(self) -> List[Location]:
        """Parser-facing view of the current locations."""

        return [record.to_location() for record in self.list_locations()]

    def create_location(self, spec: LocationSpec) -> str:
        with self._lock:
            if spec.kind is LocationKind.ROOM:
                if spec.parent_id is not None:
                    raise ValueError("rooms cannot have a parent")
            elif spec.parent_id is not None:
                parent = self._locations.get(spec.parent_id)
                if parent is None or parent.kind is not LocationKind.ROOM:
                    raise ValueError(f"parent {spec.parent_id!r} is not a room")
            record = LocationRecord(
                name=spec.name,
                kind=spec.kind,
                bounds=spec.bounds,
                parent_id=spec.parent_id,
                room_type=spec.room_type,
            )
            self._locations[record.id] = record
            return record.id

    def create_item(self, spec: ItemSpec) -> str:
        with self._lock:
            if spec.location_id is not None and spec.location_id not in self._locations:
                raise ValueError(f"unknown location {spec.location_id!r}")
            record = ItemRecord(
                name=spec.name,
                location_id=spec.location_id,
                category=normalize_category(spec.category),
                quantity=normalize_quantity(spec.quantity),
                description=spec.description,
            )
            self._items[record.id] = record
            return record.id

    def delete_item(self, item_id: str) -> None:
        with self._lock:
            if item_id not in self._items:
                raise KeyError(item_id)
            del self._items[item_id]

    def clear(self) -> None:
        with self._lock:
            self._locations.clear()
            self._items.clear()
