"""Versioned API router registration."""

from fastapi import APIRouter

from .health import router as health_router
from .extract import router as extract_router


def create_v1_router() -> APIRouter:
    """Create and configure v1 API router"""
    router = APIRouter(prefix="/v1")

    router.include_router(health_router, tags=["health"])
    router.include_router(extract_router, tags=["extraction"])

    return router
