from typing import Optional

from fastapi import Depends, Header, status
from loguru import logger

from app.core.config import Settings, get_settings
from app.core.errors import ApiError
from app.core.security import AuthError, verify_bearer
from app.schemas.auth import Principal


async def get_current_principal(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """
    付費上游（OpenAI / Google）前的身分檢查：
      1️⃣ 必須是 'Bearer <token>'，否則 401 No token provided
      2️⃣ token 交給身分服務驗證，失敗 401 Invalid token（原因只寫 log）
    """
    try:
        return await verify_bearer(authorization, settings)
    except AuthError as e:
        if e.cause is not None:
            logger.warning("Auth error: {!r}", e.cause)
        raise ApiError(status.HTTP_401_UNAUTHORIZED, e.message)
