# backend/homebox/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homebox.api.assistant_api import router as assistant_router
from homebox.api.inventory_api import router as inventory_router
from homebox.core.ai import ai_settings

logger = logging.getLogger(__name__)


# -----------------------------
# App 初始化
# -----------------------------
app = FastAPI(title="HomeBox · 收纳助手意图解析")


# -----------------------------
# CORS（允许前端调用）
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# 注册路由
# -----------------------------
app.include_router(assistant_router, tags=["Assistant"])
app.include_router(inventory_router, tags=["Inventory"])

logger.info(">>> HomeBox loaded: ASSISTANT + INVENTORY (remote AI %s)",
            "off" if ai_settings.ai_disabled() else "on")


# -----------------------------
# Home / 状态
# -----------------------------
@app.get("/")
def home():
    return {
        "status": "running",
        "ai_enabled": not ai_settings.ai_disabled(),
        "routes": [
            "/assistant/parse",
            "/assistant/execute",
            "/assistant/reply-context",
            "/inventory/snapshot",
            "/inventory/locations",
        ],
    }
