# backend/homebox/core/intent/remote_parser.py
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, Optional, Sequence

from homebox.core.ai import ai_settings
from homebox.core.ai.llm_client import ChatCompletionError, ChatMessage, build_messages, request_completion

from .actions import Action, actions_from_payloads
from .locations import Location, build_hierarchy, location_names

logger = logging.getLogger(__name__)

Transport = Callable[[List[ChatMessage]], str]

# ============================================================
# Prompt：只允许输出 JSON 数组
# ============================================================
INTENT_RULES = """
操作类型（action）:
- add_cabinet: 添加收纳家具。字段: name, type(wardrobe/shelf/drawer/box/cabinet), parentRoom
- add_room: 添加房间。字段: name, type(living/bedroom/kitchen/bathroom/balcony/study/dining/storage)
- add_item: 记录物品放在哪里。字段: name, category(衣物/电子产品/工具/书籍/厨房用品/药品/纪念品/其他), quantity, locationName
- delete_item: 删除物品。字段: name, locationName

规则:
1. locationName / parentRoom 必须与"所有位置名"中的某一项完全相同，或者与同一数组里 add_cabinet / add_room 的 name 完全相同。
2. 同一说法既可能指房间也可能指其中的收纳点时，选收纳点。"书房的柜子" → locationName="柜子"（如果存在）。
3. 中文数字: 一=1, 两=2, 二=2, 三=3, 四=4, 五=5。
4. "放到/放在/放进/存到/收到/放着" 等 = add_item。
5. "添加/新增/创建/加入/加个" + 家具 = add_cabinet。
6. "删除/移除/去掉/删掉" = delete_item。
7. 复合指令（既新建家具又放物品）: 先输出 add_cabinet，再输出 add_item，locationName 等于新建收纳的 name。
8. "里面/进去" 指代前面提到的收纳点。
9. name 不要带 "收纳-" 前缀，直接写家具名，例如 "置物柜1"。
10. 查询、闲聊、建议类的话不改变任何东西 → []。
11. 只输出 JSON 数组，不要任何解释文字。
"""

FEW_SHOTS = """
示例:
"杂物收纳柜中放着湿纸巾和口罩，帮我记录"
[{"action":"add_item","name":"湿纸巾","category":"其他","quantity":1,"locationName":"杂物收纳柜"},{"action":"add_item","name":"口罩","category":"其他","quantity":1,"locationName":"杂物收纳柜"}]

"一次性内衣裤放到了书房的柜子里"
[{"action":"add_item","name":"一次性内衣裤","category":"衣物","quantity":1,"locationName":"柜子"}]

"在书房里加入置物柜1，帮我把网络连接线放到里面"
[{"action":"add_cabinet","name":"置物柜1","type":"shelf","parentRoom":"书房"},{"action":"add_item","name":"网络连接线","category":"电子产品","quantity":1,"locationName":"置物柜1"}]

"在客厅添加两个衣柜"
[{"action":"add_cabinet","name":"衣柜1","type":"wardrobe","parentRoom":"客厅"},{"action":"add_cabinet","name":"衣柜2","type":"wardrobe","parentRoom":"客厅"}]

"新增一个阳台"
[{"action":"add_room","name":"阳台","type":"balcony"}]

"把书房的PS5删掉"
[{"action":"delete_item","name":"PS5","locationName":"书房"}]

"家里有什么？"
[]
"""


def build_intent_prompt(locations: Sequence[Location]) -> str:
    hierarchy = build_hierarchy(locations) or "(空)"
    all_names = ", ".join(location_names(locations))
    return (
        "你是 HomeBox 的 JSON 意图解析器。分析用户的中文指令，返回 JSON 数组。\n\n"
        f"位置层级（房间 → [收纳点]）:\n{hierarchy}\n"
        f"所有位置名: [{all_names}]\n"
        f"{INTENT_RULES}{FEW_SHOTS}"
    )


# ============================================================
# 模型输出 → JSON 数组
# ============================================================
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def extract_json_array(raw: Optional[str]) -> Optional[List[Any]]:
    """Best-effort recovery of a JSON array from a free-text model reply.

    Code fences are stripped, then the widest ``[...]`` span is decoded.
    Returns ``None`` when no array can be recovered.
    """

    if not raw:
        return None
    cleaned = _FENCE_PATTERN.sub("", raw).replace("```", "").strip()
    match = _ARRAY_PATTERN.search(cleaned)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except (json.JSONDecodeError, ValueError):
        return None
    return parsed if isinstance(parsed, list) else None


def _default_transport(messages: List[ChatMessage]) -> str:
    return request_completion(
        messages,
        temperature=ai_settings.INTENT_TEMPERATURE,
        max_tokens=ai_settings.INTENT_MAX_TOKENS,
    )


def parse_intent_with_ai(
    text: str,
    locations: Sequence[Location],
    *,
    transport: Optional[Transport] = None,
) -> List[Action]:
    """Ask the hosted model for actions. Never raises; any failure gives ``[]``."""

    if not text or not text.strip():
        return []
    if transport is None:
        if ai_settings.ai_disabled():
            logger.info("[IntentAI] remote parsing disabled, skipping")
            return []
        transport = _default_transport

    try:
        messages = build_messages(build_intent_prompt(locations), text)
        raw = transport(messages)
    except ChatCompletionError as exc:
        logger.warning("[IntentAI] request failed: %s", exc)
        return []
    except Exception as exc:  # noqa: BLE001 - the fallback contract covers every failure
        logger.warning("[IntentAI] unexpected transport failure: %s", exc)
        return []

    logger.debug("[IntentAI] raw reply: %s", raw)
    payloads = extract_json_array(raw if isinstance(raw, str) else None)
    if payloads is None:
        logger.warning("[IntentAI] reply did not contain a JSON array")
        return []

    actions = actions_from_payloads(payloads)
    if len(actions) != len(payloads):
        logger.info("[IntentAI] dropped %d invalid entries", len(payloads) - len(actions))
    logger.info("[IntentAI] parsed %d actions", len(actions))
    return actions
