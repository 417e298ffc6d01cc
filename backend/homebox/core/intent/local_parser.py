"""Rule-based intent parsing used when the hosted model returns nothing.

The approach mirrors how a person reads these sentences: find the location
that is mentioned, strip it together with the verbs and particles, and what
is left are the item or furniture names. Four verb classes are recognised
(place-item, add-furniture, delete and the compound "create a container and
fill it" form) and every branch emits the same action schema as the remote
parser.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .actions import (
    DEFAULT_CONTAINER_TYPE,
    Action,
    AddCabinet,
    AddItem,
    AddRoom,
    CATEGORY_OTHER,
    DeleteItem,
)
from .locations import Location, find_all_locations, find_best_location, room_names

logger = logging.getLogger(__name__)

MAX_ITEM_NAME_LENGTH = 15
MAX_FURNITURE_NAME_LENGTH = 10
# Upper bound on the copies a single "<n>个" instruction creates.
MAX_FURNITURE_QUANTITY = 20

_PLACE_PATTERN = re.compile(r"(?:放到|放在|放进|放了|存到|存在|搬到|收到|放着|记录|帮我)")
# Placement verbs proper, without the helper words "帮我"/"记录".
_STRONG_PLACE_PATTERN = re.compile(r"(?:放到|放在|放进|放了|存到|存在|搬到|收到|放着)")
_FURNITURE_PATTERN = re.compile(r"(?:添加|新增|创建|加个|加一|加两|加三|加入)")
_DELETE_PATTERN = re.compile(r"(?:删除|移除|去掉|删掉|移掉|扔掉)")

_COMPOUND_CABINET_PATTERN = re.compile(
    r"(?:添加|新增|创建|加入|加个|加)\s*[\-—]?\s*([^,，。、帮把]+?)(?:，|,|帮|把|$)"
)
_COMPOUND_ITEMS_PATTERN = re.compile(r"(?:把|将)\s*(.+?)\s*(?:放到|放在|放进|存到|收到)")
_STORAGE_PREFIX_PATTERN = re.compile(r"^收纳[\-—]")
_LEADING_COUNT_PATTERN = re.compile(r"^(?:\d+|[一两二三四五六七八九十])\s*[个件]")
_ITEM_TAIL_PATTERN = re.compile(r"(?:里面|进去|都|也)+$")

_LIST_SPLIT_PATTERN = re.compile(r"[和以及、，,。；;！!？?\s]+")
_PLACE_SPLIT_PATTERN = re.compile(r"[\s、，,。；;！!？?]+")

_DELETE_NOISE_PATTERN = re.compile(r"(?:删除|移除|去掉|删掉|移掉|扔掉|把|的|了|帮我|从|里)")
_PLACE_NOISE_PATTERN = re.compile(
    r"(?:放到了|放在了|放进了|放到|放在|放进|存到了|存到|搬到了|搬到|收到了|收到|放着|放了|存着|装着|"
    r"里面是|里面|上面|下面|中间|帮我|记录|加入|添加|以及|和)+"
)
# Single-character particles, stripped only at token edges so "面包" and "上衣" stay whole.
_LEADING_PARTICLE_PATTERN = re.compile(r"^(?:[的里中了在上下面]*有|[的里了在])+")
_TRAILING_PARTICLE_PATTERN = re.compile(r"(?:[上下里]面|[的里中了在上下])+$")
_FURNITURE_NOISE_PATTERN = re.compile(
    r"(?:添加|新增|创建|帮我|给我|一下|加|在|里|的|个|件|一|两|二|三|四|五|六|\d)"
)

_EXPLICIT_COUNT_PATTERN = re.compile(r"(\d+)\s*个")

CN_NUMERALS: Dict[str, int] = {
    "一": 1,
    "两": 2,
    "二": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
}

# Checked in order; clothing keywords come first so "内衣" is never claimed
# by a later, looser keyword.
CATEGORY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("衣", "衣物"), ("裤", "衣物"), ("鞋", "衣物"), ("袜", "衣物"), ("帽", "衣物"),
    ("外套", "衣物"), ("雨衣", "衣物"), ("围巾", "衣物"), ("手套", "衣物"),
    ("书", "书籍"), ("笔", "书籍"), ("本子", "书籍"),
    ("手机", "电子产品"), ("充电", "电子产品"), ("耳机", "电子产品"), ("电脑", "电子产品"),
    ("数据线", "电子产品"), ("网线", "电子产品"), ("连接线", "电子产品"), ("电池", "电子产品"),
    ("相机", "电子产品"), ("平板", "电子产品"), ("遥控", "电子产品"),
    ("螺丝", "工具"), ("扳手", "工具"), ("锤", "工具"), ("钳", "工具"), ("胶带", "工具"),
    ("碗", "厨房用品"), ("筷", "厨房用品"), ("锅", "厨房用品"), ("勺", "厨房用品"), ("盘子", "厨房用品"),
    ("药", "药品"), ("创可贴", "药品"), ("体温计", "药品"),
    ("奖杯", "纪念品"), ("纪念", "纪念品"), ("明信片", "纪念品"),
)

CONTAINER_TYPE_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("衣柜", "衣橱"), "wardrobe"),
    (("书架", "架"), "shelf"),
    (("抽屉",), "drawer"),
    (("盒", "箱"), "box"),
)

ROOM_TYPE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("客厅", "living"), ("起居室", "living"),
    ("主卧", "bedroom"), ("次卧", "bedroom"), ("卧室", "bedroom"), ("儿童房", "bedroom"),
    ("厨房", "kitchen"),
    ("卫生间", "bathroom"), ("洗手间", "bathroom"), ("浴室", "bathroom"),
    ("阳台", "balcony"),
    ("书房", "study"),
    ("餐厅", "dining"), ("饭厅", "dining"),
    ("储藏室", "storage"), ("储物间", "storage"), ("杂物间", "storage"), ("衣帽间", "storage"),
    ("房间", "living"),
)


def guess_category(name: str) -> str:
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in name:
            return category
    return CATEGORY_OTHER


def infer_container_type(name: str) -> str:
    for keywords, container_type in CONTAINER_TYPE_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return container_type
    return DEFAULT_CONTAINER_TYPE


def infer_room_type(name: str) -> Optional[str]:
    """Room type for names that read as a room ("阳台", "主卧"), else ``None``."""

    for keyword, room_type in ROOM_TYPE_KEYWORDS:
        if name.endswith(keyword):
            return room_type
    return None


def _first_room_in(text: str, locations: Sequence[Location]) -> Optional[str]:
    for name in room_names(locations):
        if name and name in text:
            return name
    return None


def _strip_locations(text: str, matched: Sequence[Location]) -> str:
    remaining = text
    for loc in matched:
        remaining = remaining.replace(loc.name, "", 1)
    return remaining


def _split(segment: str, pattern: re.Pattern, max_length: int) -> List[str]:
    names: List[str] = []
    for token in pattern.split(segment):
        token = token.strip()
        if token and len(token) <= max_length:
            names.append(token)
    return names


def detect_quantity(text: str) -> int:
    match = _EXPLICIT_COUNT_PATTERN.search(text)
    if match:
        return min(max(int(match.group(1)), 1), MAX_FURNITURE_QUANTITY)
    for numeral, value in CN_NUMERALS.items():
        if f"{numeral}个" in text or f"{numeral}件" in text:
            return min(value, MAX_FURNITURE_QUANTITY)
    return 1


# ============================================================
# 分支：复合 / 删除 / 放入 / 添加家具
# ============================================================
def _parse_compound(text: str, locations: Sequence[Location]) -> List[Action]:
    cabinet_match = _COMPOUND_CABINET_PATTERN.search(text)
    items_match = _COMPOUND_ITEMS_PATTERN.search(text)
    if not cabinet_match or not items_match:
        return []

    raw_name = cabinet_match.group(1).strip()
    cabinet_name = _STORAGE_PREFIX_PATTERN.sub("", raw_name).strip() or raw_name
    cabinet_name = _LEADING_COUNT_PATTERN.sub("", cabinet_name).strip() or cabinet_name

    actions: List[Action] = [
        AddCabinet(
            name=cabinet_name,
            type_hint=infer_container_type(cabinet_name),
            parent_room=_first_room_in(text, locations),
        )
    ]
    for token in _split(items_match.group(1), _LIST_SPLIT_PATTERN, MAX_ITEM_NAME_LENGTH):
        name = _ITEM_TAIL_PATTERN.sub("", token).strip()
        if not name:
            continue
        actions.append(
            AddItem(name=name, category=guess_category(name), quantity=1, location_name=cabinet_name)
        )
    return actions


def _parse_delete(text: str, matched: Sequence[Location], best: Location) -> List[Action]:
    remaining = _DELETE_NOISE_PATTERN.sub("", _strip_locations(text, matched)).strip()
    if not remaining:
        return []
    return [
        DeleteItem(name=name, location_name=best.name)
        for name in _split(remaining, _LIST_SPLIT_PATTERN, len(remaining))
    ]


def _parse_place(text: str, matched: Sequence[Location], best: Location) -> List[Action]:
    remaining = _PLACE_NOISE_PATTERN.sub(" ", _strip_locations(text, matched)).strip()
    actions: List[Action] = []
    for token in _split(remaining, _PLACE_SPLIT_PATTERN, MAX_ITEM_NAME_LENGTH):
        name = _TRAILING_PARTICLE_PATTERN.sub("", _LEADING_PARTICLE_PATTERN.sub("", token)).strip()
        if name:
            actions.append(
                AddItem(name=name, category=guess_category(name), quantity=1, location_name=best.name)
            )
    return actions


def _parse_furniture(text: str, locations: Sequence[Location]) -> List[Action]:
    target_room = _first_room_in(text, locations)
    quantity = detect_quantity(text)

    remaining = text
    for name in room_names(locations):
        if name:
            remaining = remaining.replace(name, "", 1)
    remaining = _FURNITURE_NOISE_PATTERN.sub("", remaining).strip()

    actions: List[Action] = []
    for base_name in _split(remaining, _LIST_SPLIT_PATTERN, MAX_FURNITURE_NAME_LENGTH):
        names = [f"{base_name}{i + 1}" for i in range(quantity)] if quantity > 1 else [base_name]
        room_type = infer_room_type(base_name)
        for name in names:
            if room_type is not None:
                actions.append(AddRoom(name=name, room_type=room_type))
            else:
                actions.append(
                    AddCabinet(
                        name=name,
                        type_hint=infer_container_type(base_name),
                        parent_room=target_room,
                    )
                )
    return actions


def local_parse_intent(text: str, locations: Sequence[Location]) -> List[Action]:
    """Deterministic fallback parser. Returns ``[]`` when nothing actionable is found."""

    if not text:
        return []

    is_place = bool(_PLACE_PATTERN.search(text))
    is_furniture = bool(_FURNITURE_PATTERN.search(text))
    is_delete = bool(_DELETE_PATTERN.search(text))

    if not (is_place or is_furniture or is_delete):
        return []

    if is_place and is_furniture:
        actions = _parse_compound(text, locations)
        if actions:
            logger.info("[LocalIntent] compound: %s", actions)
            return actions

    matched = find_all_locations(text, locations)
    best = find_best_location(text, locations)

    if is_delete and best is not None:
        actions = _parse_delete(text, matched, best)
        if actions:
            logger.info("[LocalIntent] delete_item: %s", actions)
            return actions

    # "帮我在客厅添加书架" mentions a helper word but places nothing.
    skip_place = is_furniture and not _STRONG_PLACE_PATTERN.search(text)
    if is_place and best is not None and not skip_place:
        actions = _parse_place(text, matched, best)
        if actions:
            logger.info("[LocalIntent] add_item: %s", actions)
            return actions

    if is_furniture:
        actions = _parse_furniture(text, locations)
        if actions:
            logger.info("[LocalIntent] add_cabinet/add_room: %s", actions)
            return actions

    return []
