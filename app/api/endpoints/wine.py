# app/api/endpoints/wine.py
from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from loguru import logger

from app.core.config import Settings, get_settings
from app.core.deps import get_current_principal
from app.core.errors import ApiError
from app.schemas.auth import Principal
from app.schemas.wine import (
    ImageSearchRequest,
    ImageSearchResult,
    WineAnalysisRequest,
    WineAnalysisResponse,
)
from app.services.image_search import build_search_query, search_first_image
from app.services.label_analysis import extract_json_object, request_label_analysis

router = APIRouter(tags=["wine"])


# ===========================================
# OpenAI Vision：酒標辨識
# ===========================================
@router.post("/analyzeWineLabel", response_model=WineAnalysisResponse, summary="Analyze a wine label image")
async def analyze_wine_label(
    payload: Optional[WineAnalysisRequest] = Body(None),
    principal: Principal = Depends(get_current_principal),
    settings: Settings = Depends(get_settings),
):
    if not settings.openai_configured:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "OpenAI API not configured")

    image_base64 = payload.image_base64 if payload else None
    if not image_base64:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No image provided")

    try:
        content = await request_label_analysis(image_base64, settings)
    except Exception as e:
        logger.exception("OpenAI error: {}", e)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to analyze image", message=str(e))

    try:
        wine_data = extract_json_object(content)
    except ValueError as e:
        # raw 保留給前端除錯
        logger.error("JSON parse error: {}", e)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to parse wine data", raw=content)

    return WineAnalysisResponse(success=True, data=wine_data)


# ===========================================
# Google Image Search：找酒瓶照片
# ===========================================
@router.post(
    "/searchWineImage",
    response_model=ImageSearchResult,
    response_model_exclude_unset=True,
    summary="Find a bottle image for a wine",
)
async def search_wine_image(
    payload: Optional[ImageSearchRequest] = Body(None),
    principal: Principal = Depends(get_current_principal),
    settings: Settings = Depends(get_settings),
):
    if not settings.google_configured:
        # 不算錯誤：前端會改用使用者自己拍的照片
        return ImageSearchResult(success=True, imageUrl=None, message="Google Image Search not configured")

    query = payload.query if payload else None
    if not query:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No search query provided")

    search_query = build_search_query(query, payload.type)
    try:
        image_url = await search_first_image(search_query, settings)
    except Exception as e:
        logger.exception("Google search error: {}", e)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to search images", message=str(e))

    if image_url:
        return ImageSearchResult(success=True, imageUrl=image_url)
    return ImageSearchResult(success=True, imageUrl=None, message="No images found")
