# app/core/config.py
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === App Info ===
    APP_NAME: str = "The Cork Functions"
    ENV: str = os.getenv("ENV", "dev")
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # === OpenAI（酒標辨識） ===
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_MAX_TOKENS: int = 1000

    # === Google Custom Search（酒瓶圖片） ===
    GOOGLE_API_KEY: str = ""
    GOOGLE_CX: str = ""
    GOOGLE_SEARCH_URL: str = "https://www.googleapis.com/customsearch/v1"

    # === Auth ===
    # firebase：正式環境用 Firebase ID Token
    # local：本機開發 / 測試用 HS256 JWT
    AUTH_PROVIDER: str = "firebase"
    FIREBASE_PROJECT_ID: Optional[str] = None
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change_this_to_a_long_random_string")
    JWT_ALGORITHM: str = "HS256"
    LOCAL_TOKEN_EXPIRE_MINUTES: int = 60

    # === Client config（給前端讀的靜態設定） ===
    CLIENT_FIREBASE_API_KEY: str = ""
    CLIENT_FIREBASE_PROJECT_ID: str = "the-cork-claude"
    CLIENT_FIREBASE_DATABASE_URL: str = (
        "https://the-cork-claude-default-rtdb.europe-west1.firebasedatabase.app"
    )
    CLIENT_FIREBASE_MESSAGING_SENDER_ID: str = ""
    CLIENT_FIREBASE_APP_ID: str = ""
    CLIENT_FIREBASE_MEASUREMENT_ID: str = ""
    FUNCTIONS_REGION: str = "us-central1"
    FUNCTIONS_BASE_URL: Optional[str] = None

    # === Observability（Sentry） ===
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENV: str = os.getenv("SENTRY_ENV", "dev")
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @field_validator("AUTH_PROVIDER", mode="before")
    @classmethod
    def _normalize_provider(cls, v: str) -> str:
        v = (v or "firebase").strip().lower()
        if v not in ("firebase", "local"):
            raise ValueError(f"Unsupported AUTH_PROVIDER: {v}")
        return v

    @property
    def openai_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    @property
    def google_configured(self) -> bool:
        # key 與 cx 缺一不可
        return bool(self.GOOGLE_API_KEY and self.GOOGLE_CX)

    @property
    def functions_base_url(self) -> str:
        if self.FUNCTIONS_BASE_URL:
            return self.FUNCTIONS_BASE_URL.rstrip("/")
        return f"https://{self.FUNCTIONS_REGION}-{self.CLIENT_FIREBASE_PROJECT_ID}.cloudfunctions.net"


@lru_cache
def get_settings() -> Settings:
    """行程啟動時載入一次；handler 透過 Depends(get_settings) 取得同一份設定。"""
    return Settings()


settings = get_settings()
