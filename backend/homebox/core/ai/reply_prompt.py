"""System prompt for the assistant's conversational reply.

The reply model only sees what actually happened: the household layout after
execution and the list of actions that succeeded. When nothing succeeded the
prompt forbids any wording that claims an action was carried out.
"""

from __future__ import annotations

from typing import Sequence

from homebox.core.intent.actions import Action, AddCabinet, AddItem, AddRoom, DeleteItem
from homebox.core.intent.locations import LocationKind
from homebox.core.inventory.store import ItemRecord, LocationRecord


def describe_action(action: Action) -> str:
    if isinstance(action, AddItem):
        return f'物品"{action.name}" → {action.location_name or ""}'
    if isinstance(action, AddCabinet):
        return f'收纳"{action.name}" → {action.parent_room or ""}'
    if isinstance(action, AddRoom):
        return f'房间"{action.name}"'
    if isinstance(action, DeleteItem):
        return f'删除"{action.name}"'
    return action.name


def describe_actions(actions: Sequence[Action]) -> str:
    return "；".join(describe_action(action) for action in actions)


def _layout(locations: Sequence[LocationRecord], items: Sequence[ItemRecord]) -> str:
    rooms = [loc for loc in locations if loc.kind is LocationKind.ROOM]
    cabinets = [loc for loc in locations if loc.kind is not LocationKind.ROOM]
    lines = []
    for room in rooms:
        children = []
        for cabinet in cabinets:
            if cabinet.parent_id != room.id:
                continue
            held = [f"{item.name}×{item.quantity}" for item in items if item.location_id == cabinet.id]
            children.append(f"{cabinet.name}({','.join(held)})" if held else cabinet.name)
        suffix = f" → [{', '.join(children)}]" if children else ""
        lines.append(f"  {room.name}{suffix}")
    return "\n".join(lines)


def build_reply_prompt(
    locations: Sequence[LocationRecord],
    items: Sequence[ItemRecord],
    success: Sequence[Action],
    failed: Sequence[Action] = (),
) -> str:
    room_count = sum(1 for loc in locations if loc.kind is LocationKind.ROOM)
    cabinet_count = len(locations) - room_count

    if success:
        note = (
            f"\n\n✅ 系统已自动完成操作: {describe_actions(success)}\n"
            "请简短确认即可，不要重复操作细节。"
        )
    else:
        note = (
            "\n\n⚠️ 注意：本次没有执行任何操作。你绝对不能说\"已完成/已添加/已放入\"之类的话。"
            "如果用户想要操作但未执行，请如实说明没有找到对应的位置或收纳点，或给出建议。"
        )
    if failed:
        note += f"\n❌ 以下操作失败: {describe_actions(failed)}"

    return (
        "你是HomeBox收纳助手，帮用户管理家中物品。\n\n"
        f"家庭布局:\n{_layout(locations, items) or '(空)'}\n"
        f"统计: {room_count}房间, {cabinet_count}收纳点, {len(items)}物品{note}\n\n"
        "回复规则: 简洁友好中文，不提及系统内部机制。"
    )
