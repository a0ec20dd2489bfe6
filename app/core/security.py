# app/core/security.py
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import firebase_admin
from firebase_admin import auth as firebase_auth
from jose import jwt, JWTError
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings
from app.schemas.auth import Principal

BEARER_PREFIX = "Bearer "
NO_TOKEN = "Unauthorized - No token provided"
INVALID_TOKEN = "Unauthorized - Invalid token"


class AuthError(Exception):
    """驗證失敗；message 為對外訊息，cause 只寫進 log。"""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


# === Header ===
def parse_bearer(authorization: Optional[str]) -> str:
    """取出 'Bearer ' 之後的 token；沒帶或格式不對 -> AuthError(NO_TOKEN)。"""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError(NO_TOKEN)
    return authorization[len(BEARER_PREFIX):]


# === Firebase ===
_firebase_app: Optional[firebase_admin.App] = None
# 驗證在 threadpool 執行，初始化需上鎖
_firebase_lock = threading.Lock()


def _get_firebase_app(settings: Settings) -> firebase_admin.App:
    """Lazy 初始化 Firebase Admin（每個行程一次，thread-safe）。"""
    global _firebase_app
    if _firebase_app is not None:
        return _firebase_app
    with _firebase_lock:
        if _firebase_app is None:
            try:
                _firebase_app = firebase_admin.get_app()
            except ValueError:
                options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
                _firebase_app = firebase_admin.initialize_app(options=options)
    return _firebase_app


def _verify_firebase(token: str, settings: Settings) -> Principal:
    decoded = firebase_auth.verify_id_token(token, app=_get_firebase_app(settings))
    return Principal(uid=decoded["uid"], email=decoded.get("email"), claims=decoded)


# === Local JWT（開發 / 測試） ===
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_local_token(
    settings: Settings,
    uid: str,
    email: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    簽發本機用 ID token（HS256, SECRET_KEY）。
    claims 與 Firebase ID token 對齊：sub / uid / email / iat / exp。
    """
    claims: Dict[str, Any] = {
        "sub": uid,
        "uid": uid,
        "jti": str(uuid4()),
        "iat": int(_now_utc().timestamp()),
        "exp": _now_utc() + timedelta(minutes=expires_minutes or settings.LOCAL_TOKEN_EXPIRE_MINUTES),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _verify_local(token: str, settings: Settings) -> Principal:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    uid = payload.get("uid") or payload.get("sub")
    if not uid:
        raise JWTError("Token has no subject.")
    return Principal(uid=str(uid), email=payload.get("email"), claims=payload)


# === Verify ===
async def verify_id_token(token: str, settings: Settings) -> Principal:
    """
    交給身分服務驗證；任何失敗（過期、格式錯、偽造）統一轉成 AuthError(INVALID_TOKEN)。
    firebase-admin 是同步 API（會抓公鑰），丟到 threadpool 執行。
    """
    try:
        if settings.AUTH_PROVIDER == "local":
            return _verify_local(token, settings)
        return await run_in_threadpool(_verify_firebase, token, settings)
    except Exception as e:
        raise AuthError(INVALID_TOKEN, cause=e) from e


async def verify_bearer(authorization: Optional[str], settings: Settings) -> Principal:
    """Authorization header -> Principal；失敗一律 AuthError。"""
    token = parse_bearer(authorization)
    return await verify_id_token(token, settings)
