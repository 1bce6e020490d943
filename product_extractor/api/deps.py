"""Request-scoped dependencies"""
from typing import Optional
from fastapi import Request
from ..services.extraction_service import ExtractionService


def get_extraction_service(request: Request) -> Optional[ExtractionService]:
    """Get extraction service from app state; None when config is incomplete"""
    return getattr(request.app.state, "extraction_service", None)
