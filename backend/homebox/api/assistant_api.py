"""Assistant endpoints: parse an utterance, execute confirmed actions, reply context."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from homebox.core.intent import Action, action_from_payload
from homebox.services import assistant_workflow


class ParseRequest(BaseModel):
    text: str = Field(..., description="用户输入的原始文本（繁体/简体均可）")


class ActionModel(BaseModel):
    action: Literal["add_room", "add_cabinet", "add_item", "delete_item"]
    name: str = Field(..., min_length=1)
    type: Optional[str] = None
    parentRoom: Optional[str] = None
    category: Optional[str] = None
    quantity: int = Field(1, ge=1)
    locationName: Optional[str] = None

    def to_action(self) -> Optional[Action]:
        return action_from_payload(self.model_dump(exclude_none=True))


class ParseResponse(BaseModel):
    text: str
    source: str
    actions: List[Dict[str, Any]] = Field(default_factory=list)
    unresolved: List[Dict[str, Any]] = Field(default_factory=list)


class ExecuteRequest(BaseModel):
    actions: List[ActionModel] = Field(default_factory=list)


class ExecuteResponse(BaseModel):
    success: List[Dict[str, Any]] = Field(default_factory=list)
    failed: List[Dict[str, Any]] = Field(default_factory=list)
    rejected: List[Dict[str, Any]] = Field(default_factory=list, description="名称无效而未执行的操作")


class ReplyContextRequest(BaseModel):
    success: List[ActionModel] = Field(default_factory=list)
    failed: List[ActionModel] = Field(default_factory=list)


class ReplyContextResponse(BaseModel):
    prompt: str
    executed: bool


router = APIRouter(prefix="/assistant", tags=["Assistant"])


def _to_actions(models: List[ActionModel]) -> List[Action]:
    converted = (model.to_action() for model in models)
    return [action for action in converted if action is not None]


@router.post("/parse", response_model=ParseResponse)
def parse_message(payload: ParseRequest) -> ParseResponse:
    """Parse only; nothing is written until ``/assistant/execute`` is called."""

    result = assistant_workflow.parse_message(payload.text)
    return ParseResponse(**result.to_payload())


@router.post("/execute", response_model=ExecuteResponse)
def execute_actions(payload: ExecuteRequest) -> ExecuteResponse:
    actions: List[Action] = []
    rejected: List[Dict[str, Any]] = []
    for model in payload.actions:
        action = model.to_action()
        if action is None:
            rejected.append(model.model_dump(exclude_none=True))
        else:
            actions.append(action)
    report = assistant_workflow.execute_actions(actions)
    return ExecuteResponse(**report.to_payload(), rejected=rejected)


@router.post("/reply-context", response_model=ReplyContextResponse)
def reply_context(payload: ReplyContextRequest) -> ReplyContextResponse:
    success = _to_actions(payload.success)
    failed = _to_actions(payload.failed)
    prompt = assistant_workflow.reply_context(success, failed)
    return ReplyContextResponse(prompt=prompt, executed=bool(success))
