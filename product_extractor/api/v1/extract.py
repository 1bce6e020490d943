"""Product extraction endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request

from ...api.deps import get_extraction_service
from ...core.errors import ConfigError
from ...core.logging import get_logger
from ...models.extraction import ExtractionRequest, ExtractionResult
from ...services.extraction_service import ExtractionService

router = APIRouter()
logger = get_logger(__name__)


@router.post("/extract", response_model=ExtractionResult)
async def extract_product(
    payload: ExtractionRequest,
    request: Request,
    extraction_service: Optional[ExtractionService] = Depends(get_extraction_service),
) -> dict:
    if extraction_service is None:
        raise ConfigError("Extraction service is not configured; set GROQ_API_KEY")

    result = await extraction_service.extract(payload.input_text)

    logger.info(
        "extract_request_served",
        input_chars=len(payload.input_text),
        request_id=getattr(request.state, "request_id", "unknown"),
    )
    return result.model_dump()
