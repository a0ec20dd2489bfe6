from fastapi import APIRouter, Depends

from app.core.client_config import ClientConfig, build_client_config
from app.core.config import Settings, get_settings

router = APIRouter()

@router.get("/clientConfig", response_model=ClientConfig, summary="Static client configuration")
async def client_config(settings: Settings = Depends(get_settings)):
    return build_client_config(settings)
