from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings

router = APIRouter()

# 任何 method 都回報（OPTIONS 由 CORS middleware 處理）
@router.api_route(
    "/health",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"],
    summary="Health check",
)
async def health(settings: Settings = Depends(get_settings)):
    # 只回報設定是否存在，不打上游、不需登入
    return {
        "status": "ok",
        "openaiConfigured": settings.openai_configured,
        "googleConfigured": settings.google_configured,
    }
