# app/main.py
from fastapi import FastAPI
from loguru import logger

from app.core.config import Settings, settings as default_settings
from app.core.logging import setup_logging
from app.core.errors import register_cors, register_error_handlers
from app.api.router import api_router

# Monitoring
import sentry_sdk
from prometheus_fastapi_instrumentator import Instrumentator


def _validate_secrets(settings: Settings) -> None:
    """
    部署前安全檢查：prod/staging/preview 使用 local 驗證時，不允許短或空的金鑰。
    """
    env = (settings.ENV or "").lower()
    if env in {"prod", "production", "staging", "preview"} and settings.AUTH_PROVIDER == "local":
        if not settings.SECRET_KEY or len(settings.SECRET_KEY) < 32:
            raise RuntimeError(
                f"Insecure config for SECRET_KEY in ENV={settings.ENV}. "
                "Please set a strong key via environment variables."
            )


def create_app(settings: Settings = default_settings) -> FastAPI:
    setup_logging(settings)

    # 基本安全檢查
    _validate_secrets(settings)

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

    # ---- Sentry 初始化（未設定 SENTRY_DSN 就略過）----
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            environment=settings.SENTRY_ENV,
            send_default_pii=False,
        )

    # ---- Prometheus /metrics ----
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    # 統一錯誤處理 + CORS（所有回應都帶 header，OPTIONS 直接 204）
    register_error_handlers(app)
    register_cors(app)

    app.include_router(api_router)

    logger.info(
        "Application initialized env={} openai={} google={}",
        settings.ENV,
        settings.openai_configured,
        settings.google_configured,
    )
    return app


# Uvicorn 進入點
app = create_app()
