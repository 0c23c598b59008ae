"""Health check route"""

from fastapi import APIRouter, Depends

from api.responses import HealthResponse
from app.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/health-check", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint"""
    return HealthResponse(status="ok", service=settings.app_name, version=settings.app_version)
