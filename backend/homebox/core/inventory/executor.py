"""Applies confirmed actions to the inventory store in dependency order."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from homebox.core.intent.actions import (
    DEFAULT_CONTAINER_TYPE,
    DEFAULT_ROOM_TYPE,
    Action,
    AddCabinet,
    AddItem,
    AddRoom,
    DeleteItem,
)
from homebox.core.intent.locations import LocationKind, find_best_location

from .store import Bounds, InventoryStore, ItemSpec, LocationRecord, LocationSpec

logger = logging.getLogger(__name__)

GRID = 20
CABINET_SIZE = 40
ROOM_WIDTH = 160
ROOM_HEIGHT = 120
ROOM_PITCH = 200
ROOM_MARGIN = 40
ROOMS_PER_ROW = 3

_ORDER: Dict[str, int] = {
    AddRoom.action: 0,
    AddCabinet.action: 1,
    AddItem.action: 2,
    DeleteItem.action: 2,
}


def execution_order(actions: Sequence[Action]) -> List[Action]:
    """Rooms, then containers, then item changes. Stable within each group."""

    return sorted(actions, key=lambda action: _ORDER.get(action.action, 9))


def snap(value: float, grid: int = GRID) -> int:
    return int(round(value / grid)) * grid


@dataclass
class ExecutionReport:
    success: List[Action] = field(default_factory=list)
    failed: List[Action] = field(default_factory=list)

    @property
    def executed(self) -> bool:
        return bool(self.success)

    def to_payload(self) -> Dict[str, object]:
        return {
            "success": [action.to_payload() for action in self.success],
            "failed": [action.to_payload() for action in self.failed],
        }


class ActionExecutor:
    """Apply validated actions one by one; a failing action never stops the batch."""

    def __init__(self, store: InventoryStore, *, rng: Optional[random.Random] = None, grid: int = GRID) -> None:
        self._store = store
        self._rng = rng or random.Random()
        self._grid = grid

    def execute(self, actions: Sequence[Action]) -> ExecutionReport:
        report = ExecutionReport()
        for action in execution_order(actions):
            try:
                outcome = self._apply(action)
            except Exception:
                logger.exception("[Executor] %s failed: %s", action.action, action)
                report.failed.append(action)
                continue
            if outcome is None:
                logger.info("[Executor][FAILED] %s", action)
                report.failed.append(action)
            else:
                logger.info("[Executor][EXECUTED] %s", outcome)
                report.success.append(outcome)
        return report

    def _apply(self, action: Action) -> Optional[Action]:
        if isinstance(action, AddRoom):
            return self._add_room(action)
        if isinstance(action, AddCabinet):
            return self._add_cabinet(action)
        if isinstance(action, AddItem):
            return self._add_item(action)
        if isinstance(action, DeleteItem):
            return self._delete_item(action)
        return None

    # ------------------------------------------------------------
    # individual actions
    # ------------------------------------------------------------
    def _add_room(self, action: AddRoom) -> Action:
        existing = [loc for loc in self._store.list_locations() if loc.kind is LocationKind.ROOM]
        col = len(existing) % ROOMS_PER_ROW
        row = len(existing) // ROOMS_PER_ROW
        bounds = Bounds(
            x=col * ROOM_PITCH + ROOM_MARGIN,
            y=row * ROOM_PITCH + ROOM_MARGIN,
            width=ROOM_WIDTH,
            height=ROOM_HEIGHT,
        )
        self._store.create_location(
            LocationSpec(
                name=action.name,
                kind=LocationKind.ROOM,
                bounds=bounds,
                room_type=action.room_type or DEFAULT_ROOM_TYPE,
            )
        )
        return action

    def _add_cabinet(self, action: AddCabinet) -> Action:
        parent = self._find_room(action.parent_room) if action.parent_room else None
        rand = self._rng.random
        if parent is not None:
            pb = parent.bounds
            x = pb.x + 10 + rand() * max(20, pb.width - 60)
            y = pb.y + 10 + rand() * max(20, pb.height - 60)
        else:
            x = 60 + rand() * 400
            y = 60 + rand() * 300
        kind = LocationKind.parse(action.type_hint or DEFAULT_CONTAINER_TYPE)
        if kind is LocationKind.ROOM:
            kind = LocationKind.CABINET
        self._store.create_location(
            LocationSpec(
                name=action.name,
                kind=kind,
                bounds=Bounds(
                    x=snap(x, self._grid),
                    y=snap(y, self._grid),
                    width=CABINET_SIZE,
                    height=CABINET_SIZE,
                ),
                parent_id=parent.id if parent is not None else None,
                room_type=kind.value,
            )
        )
        return action

    def _add_item(self, action: AddItem) -> Optional[Action]:
        target = self._resolve_location(action)
        if target is None:
            return None
        self._store.create_item(
            ItemSpec(
                name=action.name,
                location_id=target.id,
                category=action.category,
                quantity=action.quantity,
            )
        )
        return replace(action, location_name=target.name)

    def _delete_item(self, action: DeleteItem) -> Optional[Action]:
        # First item with this exact name, regardless of location_name: two
        # same-named items in different rooms cannot be told apart here.
        for item in self._store.list_items():
            if item.name == action.name:
                self._store.delete_item(item.id)
                return action
        return None

    # ------------------------------------------------------------
    # lookups against the live store
    # ------------------------------------------------------------
    def _find_room(self, name: str) -> Optional[LocationRecord]:
        for loc in self._store.list_locations():
            if loc.kind is LocationKind.ROOM and loc.name == name:
                return loc
        return None

    def _resolve_location(self, action: AddItem) -> Optional[LocationRecord]:
        records = self._store.list_locations()
        if action.location_name:
            for loc in records:
                if loc.name == action.location_name:
                    return loc
        by_id = {record.id: record for record in records}
        snapshot = [record.to_location() for record in records]
        for probe in (action.location_name, action.name):
            if not probe:
                continue
            best = find_best_location(probe, snapshot)
            if best is not None:
                return by_id[best.id]
        return None
