"""Extraction service: prompt -> model -> parsed product record."""

from __future__ import annotations

import time
from typing import Optional

import httpx

from ..core.config import Settings, get_settings
from ..core.errors import ParseError
from ..core.logging import get_logger
from ..models.extraction import ExtractionRequest, ExtractionResult
from ..prompts.prompt import build_messages
from ..providers.groq import GroqProvider
from .model_client import ModelClient
from .output_processing import parse_completion
from .validation import ValidationService

logger = get_logger(__name__)


class ExtractionService:
    """Coordinates prompt construction, the model call and output parsing."""

    def __init__(self, model_client: ModelClient, validation: Optional[ValidationService] = None) -> None:
        self.model_client = model_client
        self.validation = validation or ValidationService()

    async def extract(self, input_text: str) -> ExtractionResult:
        request = ExtractionRequest(input_text=input_text)
        start = time.perf_counter()

        completion = await self.model_client.complete(build_messages(request.input_text))

        try:
            result = parse_completion(completion, self.validation)
        except ParseError as exc:
            logger.warning(
                "extraction_parse_failed",
                error=exc.message,
                issues=exc.errors,
                completion_chars=len(completion),
            )
            raise

        logger.info(
            "extraction_completed",
            model=self.model_client.config.model_id,
            feature_count=len(result.features),
            latency_ms=int((time.perf_counter() - start) * 1000),
        )
        return result


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_seconds))


def build_service(settings: Settings, http_client: httpx.AsyncClient) -> ExtractionService:
    """Wire config, provider and client together; fails fast on bad config."""
    config = settings.model_config_for_client()
    provider = GroqProvider(settings.require_api_key(), http_client)
    return ExtractionService(ModelClient(config, provider))


async def extract_product(input_text: str, settings: Optional[Settings] = None) -> ExtractionResult:
    """One-shot extraction owning its own HTTP client."""
    settings = settings or get_settings()
    async with build_http_client(settings) as http_client:
        service = build_service(settings, http_client)
        return await service.extract(input_text)
