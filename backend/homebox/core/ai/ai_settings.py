"""Shared HomeBox AI configuration."""

from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()

API_KEY = (
    os.getenv("HOMEBOX_AI_API_KEY")
    or os.getenv("OPENROUTER_API_KEY")
    or os.getenv("OPENAI_API_KEY", "")
)
BASE_URL = os.getenv("HOMEBOX_AI_BASE_URL", "https://openrouter.ai/api/v1")
MODEL = os.getenv("HOMEBOX_AI_MODEL", "stepfun/step-3.5-flash:free")
APP_TITLE = os.getenv("HOMEBOX_AI_APP_TITLE", "HomeBox-Intent")

AI_CONNECT_TIMEOUT = float(os.getenv("HOMEBOX_AI_CONNECT_TIMEOUT", "6.0"))
AI_READ_TIMEOUT = float(os.getenv("HOMEBOX_AI_READ_TIMEOUT", "20.0"))

INTENT_MAX_TOKENS = int(os.getenv("HOMEBOX_INTENT_MAX_TOKENS", "600"))
INTENT_TEMPERATURE = float(os.getenv("HOMEBOX_INTENT_TEMPERATURE", "0.05"))


def ai_disabled() -> bool:
    """True when the remote parser must not be called at all."""

    flag = os.getenv("HOMEBOX_AI_DISABLE", "").strip().lower()
    if flag in {"1", "true", "yes", "on"}:
        return True
    return not API_KEY
