from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class WineAnalysisRequest(BaseModel):
    # 可選：缺值時由 endpoint 回 400 "No image provided"
    image_base64: Optional[str] = Field(
        None,
        alias="imageBase64",
        description="base64 image, or a full data: URI",
    )

    model_config = ConfigDict(populate_by_name=True)


class Characteristics(BaseModel):
    boldness: Optional[int] = Field(None, ge=1, le=5)
    tannins: Optional[int] = Field(None, ge=1, le=5)
    acidity: Optional[int] = Field(None, ge=1, le=5)


class WineRecord(BaseModel):
    """
    模型回覆的目標結構（只作文件用途）。
    實際回應直接透傳模型的 JSON，不經過這個 model 驗證。
    """
    name: Optional[str] = None
    producer: Optional[str] = None
    year: Optional[int] = None
    region: Optional[str] = None
    grape: Optional[str] = None
    type: Optional[str] = Field(None, description="red / white / rosé / sparkling / dessert")
    characteristics: Optional[Characteristics] = None
    notes: Optional[str] = None
    estimatedPrice: Optional[str] = None


class WineAnalysisResponse(BaseModel):
    success: bool = True
    data: Any


class ImageSearchRequest(BaseModel):
    query: Optional[str] = None
    type: Optional[str] = None


class ImageSearchResult(BaseModel):
    success: bool = True
    imageUrl: Optional[str] = None
    message: Optional[str] = None
