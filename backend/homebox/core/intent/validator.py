"""Post-parse validation: drop degenerate actions and repair location references."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from .actions import Action, AddCabinet, AddRoom, PLACEMENT_ACTIONS, created_location_names, is_meaningful_name
from .locations import Location, find_best_location, location_names, room_names

logger = logging.getLogger(__name__)


def validate_actions(actions: Sequence[Action], locations: Sequence[Location], text: str) -> List[Action]:
    """Return a cleaned copy of ``actions``.

    * actions without a meaningful name are dropped;
    * an item/delete reference that names neither an existing location nor a
      location created earlier in the same batch is rewritten to the best
      location mentioned in the original ``text``; if there is none the
      reference is left as is and the executor reports the failure;
    * a cabinet's ``parent_room`` that names no known room is cleared.
    """

    kept = [action for action in actions if is_meaningful_name(action.name)]
    if len(kept) != len(actions):
        logger.info("[Validator] dropped %d degenerate actions", len(actions) - len(kept))

    existing = set(location_names(locations))
    existing_rooms = set(room_names(locations))
    created = created_location_names(kept)
    created_rooms = {action.name for action in kept if isinstance(action, AddRoom)}
    best = find_best_location(text, locations)

    validated: List[Action] = []
    for action in kept:
        if isinstance(action, PLACEMENT_ACTIONS):
            target = action.location_name
            if target not in existing and target not in created:
                if best is not None:
                    logger.info("[Validator] %s: %r → %r", action.action, target, best.name)
                    action = replace(action, location_name=best.name)
                else:
                    logger.info("[Validator] %s: unresolved location %r", action.action, target)
        elif isinstance(action, AddCabinet) and action.parent_room:
            if action.parent_room not in existing_rooms and action.parent_room not in created_rooms:
                logger.info("[Validator] add_cabinet: unknown parent room %r cleared", action.parent_room)
                action = replace(action, parent_room=None)
        validated.append(action)
    return validated


def unresolved_references(actions: Sequence[Action], locations: Sequence[Location]) -> List[Action]:
    """Item/delete actions whose location is neither existing nor created in-batch."""

    existing = set(location_names(locations))
    created = created_location_names(actions)
    return [
        action
        for action in actions
        if isinstance(action, PLACEMENT_ACTIONS)
        and (action.location_name not in existing and action.location_name not in created)
    ]
