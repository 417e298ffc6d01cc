"""Shared helpers tying the intent pipeline to the live inventory store."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Sequence

from homebox.core.ai.reply_prompt import build_reply_prompt
from homebox.core.intent import Action, IntentParseResult, build_hierarchy, parse_utterance
from homebox.core.intent.locations import Location, LocationKind
from homebox.core.intent.remote_parser import Transport
from homebox.core.inventory import ActionExecutor, Bounds, ExecutionReport, InMemoryInventoryStore, LocationSpec

logger = logging.getLogger(__name__)

_store = InMemoryInventoryStore()
# One utterance at a time: parse and execute never interleave on the store.
_pipeline_lock = Lock()


def get_store() -> InMemoryInventoryStore:
    return _store


def parse_message(text: str, *, transport: Optional[Transport] = None) -> IntentParseResult:
    with _pipeline_lock:
        return parse_utterance(text, _store.snapshot(), transport=transport)


def execute_actions(actions: Sequence[Action]) -> ExecutionReport:
    with _pipeline_lock:
        report = ActionExecutor(_store).execute(actions)
    logger.info(
        "[AssistantWorkflow] executed %d ok / %d failed", len(report.success), len(report.failed)
    )
    return report


def reply_context(success: Sequence[Action], failed: Sequence[Action]) -> str:
    return build_reply_prompt(_store.list_locations(), _store.list_items(), success, failed)


def snapshot_payload() -> Dict[str, Any]:
    locations: List[Location] = _store.snapshot()
    return {
        "locations": [record.to_dict() for record in _store.list_locations()],
        "items": [record.to_dict() for record in _store.list_items()],
        "hierarchy": build_hierarchy(locations),
    }


def seed_locations(entries: Iterable[Dict[str, Any]]) -> List[str]:
    """Create rooms/containers directly (bypassing the parser); rooms first.

    ``entries`` carry ``name``, ``type`` and, for containers, ``parentName``.
    """

    created: List[str] = []
    ordered = sorted(entries, key=lambda entry: 0 if entry.get("type") == "room" else 1)
    with _pipeline_lock:
        for index, entry in enumerate(ordered):
            kind = LocationKind.parse(entry.get("type"))
            parent_id = None
            if kind is not LocationKind.ROOM and entry.get("parentName"):
                for record in _store.list_locations():
                    if record.kind is LocationKind.ROOM and record.name == entry["parentName"]:
                        parent_id = record.id
                        break
            created.append(
                _store.create_location(
                    LocationSpec(
                        name=str(entry["name"]),
                        kind=kind,
                        bounds=Bounds(x=40 * index, y=40 * index, width=40, height=40),
                        parent_id=parent_id,
                        room_type=entry.get("roomType"),
                    )
                )
            )
    return created


def reset_store() -> None:
    with _pipeline_lock:
        _store.clear()
