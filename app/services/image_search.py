# app/services/image_search.py
from __future__ import annotations

from typing import Optional

import httpx

from app.core.config import Settings

# 特定酒種的搜尋關鍵字；其他酒種用 "<type> wine"
TYPE_KEYWORDS = {
    "rosé": "rosé wine",
    "sparkling": "sparkling wine champagne",
    "dessert": "dessert wine",
}


def type_keyword(wine_type: Optional[str]) -> str:
    wine_type = wine_type or ""
    if wine_type in TYPE_KEYWORDS:
        return TYPE_KEYWORDS[wine_type]
    return f"{wine_type} wine" if wine_type else "wine"


def build_search_query(query: str, wine_type: Optional[str] = None) -> str:
    """'<query> <type keyword> bottle'，加上酒種讓圖片更準。"""
    return f"{query} {type_keyword(wine_type)} bottle"


def search_params(search_query: str, settings: Settings) -> dict:
    return {
        "key": settings.GOOGLE_API_KEY,
        "cx": settings.GOOGLE_CX,
        "q": search_query,
        "searchType": "image",
        "num": 1,
        "imgType": "photo",
    }


async def search_first_image(
    search_query: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[str]:
    """
    呼叫 Google Custom Search（只取第一張圖）。
    有結果回傳 items[0].link，沒有則 None；HTTP 錯誤直接拋出。
    """
    async with httpx.AsyncClient(transport=transport) as client:
        r = await client.get(settings.GOOGLE_SEARCH_URL, params=search_params(search_query, settings))
        r.raise_for_status()
        data = r.json()

    items = data.get("items") or []
    if items:
        return items[0].get("link")
    return None
