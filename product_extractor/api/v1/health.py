"""Health and version endpoints"""
from fastapi import APIRouter, Depends, Request
from ...core.config import Settings, get_settings


router = APIRouter()


@router.get("/health")
async def health(request: Request, settings: Settings = Depends(get_settings)):
    """Liveness check; reports whether the extraction pipeline is wired."""
    return {
        "ok": True,
        "version": settings.app_version,
        "extractor_ready": getattr(request.app.state, "extraction_service", None) is not None,
    }


@router.get("/version")
async def version(settings: Settings = Depends(get_settings)):
    """Version and defaults info"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "provider": "groq",
        "model": settings.model_id,
        "max_retries": settings.max_retries
    }
