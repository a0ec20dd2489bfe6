# app/api/router.py
from fastapi import APIRouter

# 匯入所有已定義的 endpoint 模組
from .endpoints import client_config, health, wine

# === 主路由（路徑與 Cloud Functions 名稱一致） ===
api_router = APIRouter()

# 酒標辨識 / 酒瓶圖片搜尋（需登入）
api_router.include_router(wine.router)

# 系統健康檢查
api_router.include_router(health.router, tags=["health"])

# 前端靜態設定
api_router.include_router(client_config.router, tags=["config"])
