# backend/homebox/core/intent/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .actions import Action
from .local_parser import local_parse_intent
from .locations import Location
from .remote_parser import Transport, parse_intent_with_ai
from .script_normalizer import to_simplified
from .validator import unresolved_references, validate_actions

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"
SOURCE_NONE = "none"


@dataclass
class IntentParseResult:
    """Actions awaiting confirmation for one utterance."""

    text: str
    actions: List[Action] = field(default_factory=list)
    source: str = SOURCE_NONE
    unresolved: List[Action] = field(default_factory=list)

    @property
    def has_actions(self) -> bool:
        return bool(self.actions)

    def to_payload(self) -> Dict[str, object]:
        return {
            "text": self.text,
            "source": self.source,
            "actions": [action.to_payload() for action in self.actions],
            "unresolved": [action.to_payload() for action in self.unresolved],
        }


def parse_utterance(
    raw_text: str,
    locations: Sequence[Location],
    *,
    transport: Optional[Transport] = None,
    use_remote: bool = True,
) -> IntentParseResult:
    """normalize → remote parser (fallback: local parser) → validate.

    Nothing is mutated here; the returned actions still have to be confirmed
    and handed to the executor.
    """

    text = to_simplified((raw_text or "").strip())
    if not text:
        return IntentParseResult(text="")

    source = SOURCE_NONE
    actions: List[Action] = []
    if use_remote:
        actions = parse_intent_with_ai(text, locations, transport=transport)
        if actions:
            source = SOURCE_REMOTE
    if not actions:
        actions = local_parse_intent(text, locations)
        if actions:
            source = SOURCE_LOCAL

    actions = validate_actions(actions, locations, text)
    if not actions:
        source = SOURCE_NONE

    result = IntentParseResult(
        text=text,
        actions=actions,
        source=source,
        unresolved=unresolved_references(actions, locations),
    )
    logger.info("[IntentPipeline] %s → %d actions via %s", text, len(actions), source)
    return result
