from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

class Principal(BaseModel):
    """驗證成功後的身分；只用來放行，不回傳給前端。"""
    uid: str
    email: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict)
