from fastapi import APIRouter, Depends

from portfolio_hub.api.dependencies import get_settings
from portfolio_hub.config.settings import Settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint for serverless platforms"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }
