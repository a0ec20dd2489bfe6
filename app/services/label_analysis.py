# app/services/label_analysis.py
from __future__ import annotations

import json
import re
from typing import Any, Optional

from openai import AsyncOpenAI

from app.core.config import Settings

DATA_URI_PREFIX = "data:image/jpeg;base64,"

LABEL_PROMPT = """Analyze this wine label image and extract the following information in JSON format:
{
    "name": "wine name",
    "producer": "producer/house name",
    "year": year as number or null,
    "region": "region, country",
    "grape": "grape variety/varieties",
    "type": "red/white/rosé/sparkling/dessert",
    "characteristics": {
        "boldness": 1-5,
        "tannins": 1-5,
        "acidity": 1-5
    },
    "notes": "brief tasting notes or description",
    "estimatedPrice": "estimated price range in euros"
}

If you cannot determine a value, use null. For type, make your best guess based on the wine name/region.
Only respond with the JSON, no other text."""

# 貪婪比對：第一個 { 到最後一個 }
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def to_data_uri(image: str) -> str:
    """已是 data: URI 就原樣回傳，否則當作 JPEG base64 補上前綴。"""
    return image if image.startswith("data:") else f"{DATA_URI_PREFIX}{image}"


def extract_json_object(text: str) -> Any:
    """
    從模型的自由文字回覆取出 JSON 物件。
    先找 {...} 子字串（容忍模型加的說明文字或 code fence），找不到才整段 parse。
    失敗時拋 json.JSONDecodeError（ValueError）。
    """
    m = _JSON_OBJECT_RE.search(text)
    if m:
        return json.loads(m.group(0))
    return json.loads(text)


def build_messages(image_url: str) -> list[dict]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": LABEL_PROMPT},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    ]


async def request_label_analysis(
    image_base64: str,
    settings: Settings,
    client: Optional[AsyncOpenAI] = None,
) -> str:
    """送一次 chat completion，回傳模型的文字回覆（可能為空字串）。"""
    own_client = client is None
    if own_client:
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    try:
        response = await client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=build_messages(to_data_uri(image_base64)),
            max_tokens=settings.OPENAI_MAX_TOKENS,
        )
        return response.choices[0].message.content or ""
    finally:
        if own_client:
            await client.close()
