# backend/homebox/core/ai/llm_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from homebox.core.ai import ai_settings

logger = logging.getLogger(__name__)

ChatMessage = Dict[str, str]


class ChatCompletionError(RuntimeError):
    """Raised when the hosted model cannot produce a usable reply."""


def build_messages(system_prompt: str, user_text: str) -> List[ChatMessage]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_text},
    ]


def _headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {ai_settings.API_KEY}" if ai_settings.API_KEY else "",
        "Content-Type": "application/json",
        "X-Title": ai_settings.APP_TITLE,
    }


def request_completion(
    messages: List[ChatMessage],
    *,
    temperature: float,
    max_tokens: int,
    model: Optional[str] = None,
) -> str:
    """Send one non-streamed chat completion and return the message content.

    A single attempt is made. Every failure mode (timeout, transport error,
    non-2xx status, unexpected body) surfaces as ``ChatCompletionError`` so
    callers only need to handle one exception type.
    """

    payload: Dict[str, Any] = {
        "model": model or ai_settings.MODEL,
        "messages": messages,
        "stream": False,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }

    try:
        resp = requests.post(
            f"{ai_settings.BASE_URL}/chat/completions",
            headers=_headers(),
            json=payload,
            timeout=(ai_settings.AI_CONNECT_TIMEOUT, ai_settings.AI_READ_TIMEOUT),
        )
        resp.raise_for_status()
        body = resp.json()
        content = body["choices"][0]["message"]["content"]
    except requests.Timeout as exc:
        raise ChatCompletionError(f"timeout: {exc}") from exc
    except requests.RequestException as exc:
        status = getattr(exc.response, "status_code", "?")
        raise ChatCompletionError(f"http error (status={status}): {exc}") from exc
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ChatCompletionError(f"unexpected response body: {exc}") from exc

    if not isinstance(content, str):
        raise ChatCompletionError("message content is not text")
    return content.strip()
