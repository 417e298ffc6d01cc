"""Traditional → simplified Chinese character folding.

Location names are stored in simplified script, so user text is folded
character by character before any matching happens. Only characters that
actually differ between the two scripts are listed; everything else passes
through untouched. No value in the table is itself a key, which keeps the
mapping idempotent.
"""

from __future__ import annotations

from typing import Dict, Optional

T2S: Dict[str, str] = {
    "書": "书", "櫃": "柜", "廳": "厅", "間": "间", "陽": "阳", "臺": "台",
    "衛": "卫", "廚": "厨", "臥": "卧", "層": "层", "幫": "帮", "東": "东",
    "記": "记", "錄": "录", "備": "备", "裡": "里", "裏": "里", "雜": "杂",
    "櫥": "橱", "電": "电", "視": "视", "頭": "头", "動": "动", "點": "点",
    "號": "号", "個": "个", "兩": "两", "內": "内", "褲": "裤", "這": "这",
    "對": "对", "應": "应", "進": "进", "從": "从", "們": "们", "還": "还",
    "與": "与", "機": "机", "開": "开", "關": "关", "紙": "纸", "濕": "湿",
    "買": "买", "賣": "卖", "請": "请", "讓": "让", "說": "说", "話": "话",
    "見": "见", "現": "现", "發": "发", "問": "问", "題": "题", "經": "经",
    "過": "过", "時": "时", "區": "区", "處": "处", "網": "网", "絡": "络",
    "線": "线", "連": "连", "總": "总", "積": "积", "納": "纳", "導": "导",
    "團": "团", "設": "设", "當": "当", "變": "变", "換": "换", "僅": "仅",
    "縣": "县", "樓": "楼", "報": "报", "刪": "删", "鍋": "锅", "筆": "笔",
    "藥": "药", "襪": "袜", "圍": "围", "腦": "脑", "錶": "表", "鐘": "钟",
    "燈": "灯", "屜": "屉", "創": "创", "貼": "贴", "將": "将", "數": "数",
    "據": "据", "條": "条", "張": "张", "隻": "只", "雙": "双", "塊": "块",
    "儲": "储", "廁": "厕", "淨": "净", "戶": "户", "門": "门", "臉": "脸",
    "盤": "盘", "髮": "发", "風": "风", "車": "车", "鑰": "钥", "證": "证",
    "護": "护", "錢": "钱", "擺": "摆", "裝": "装", "衝": "冲",
}


def to_simplified(text: Optional[str]) -> str:
    """Fold traditional characters in ``text`` to their simplified form."""

    if not text:
        return ""
    return "".join(T2S.get(ch, ch) for ch in text)
