"""Natural-language intent resolution for the HomeBox assistant."""

from .actions import (
    ACTION_TAGS,
    CATEGORIES,
    Action,
    AddCabinet,
    AddItem,
    AddRoom,
    DeleteItem,
    action_from_payload,
    actions_from_payloads,
    is_meaningful_name,
)
from .local_parser import guess_category, infer_container_type, infer_room_type, local_parse_intent
from .locations import Location, LocationKind, build_hierarchy, find_all_locations, find_best_location
from .pipeline import IntentParseResult, parse_utterance
from .remote_parser import build_intent_prompt, extract_json_array, parse_intent_with_ai
from .script_normalizer import to_simplified
from .validator import unresolved_references, validate_actions

__all__ = [
    "ACTION_TAGS",
    "CATEGORIES",
    "Action",
    "AddCabinet",
    "AddItem",
    "AddRoom",
    "DeleteItem",
    "action_from_payload",
    "actions_from_payloads",
    "is_meaningful_name",
    "guess_category",
    "infer_container_type",
    "infer_room_type",
    "local_parse_intent",
    "Location",
    "LocationKind",
    "build_hierarchy",
    "find_all_locations",
    "find_best_location",
    "IntentParseResult",
    "parse_utterance",
    "build_intent_prompt",
    "extract_json_array",
    "parse_intent_with_ai",
    "to_simplified",
    "unresolved_references",
    "validate_actions",
]
