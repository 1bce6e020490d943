"""Model client: one logical completion request with bounded retries."""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from ..core.errors import ExhaustedRetriesError, TransientNetworkError
from ..core.logging import get_logger
from ..models.extraction import ChatMessage, ModelConfig
from ..prompts.prompt import build_prompt
from ..providers.base import LLMProvider, LLMRawResponse, PromptPacket

logger = get_logger(__name__)


class ModelClient:
    """Sends a message list to a provider, retrying transient failures."""

    def __init__(self, config: ModelConfig, provider: LLMProvider) -> None:
        self.config = config
        self.provider = provider

    def _packet(self, messages: List[ChatMessage]) -> PromptPacket:
        return build_prompt(messages, self.config, self.provider.capabilities())

    def _backoff(self, attempt: int) -> float:
        return self.config.retry_backoff_seconds * (2 ** (attempt - 1))

    async def generate(self, messages: List[ChatMessage]) -> LLMRawResponse:
        packet = self._packet(messages)
        attempts = self.config.max_retries + 1
        last_error: Optional[TransientNetworkError] = None

        for attempt in range(1, attempts + 1):
            start = time.perf_counter()
            logger.debug(
                "model_request_attempt",
                provider=self.provider.name,
                model=self.config.model_id,
                attempt=attempt,
                max_attempts=attempts,
            )
            try:
                response = await self.provider.generate(packet)
            except TransientNetworkError as exc:
                last_error = exc
                if attempt == attempts:
                    break
                delay = self._backoff(attempt)
                logger.warning(
                    "model_request_retry",
                    provider=self.provider.name,
                    model=self.config.model_id,
                    attempt=attempt,
                    status_code=exc.status_code,
                    error=exc.message,
                    retry_in_s=delay,
                )
                if delay > 0:
                    await asyncio.sleep(delay)
                continue

            logger.info(
                "model_request_completed",
                provider=self.provider.name,
                model=response.model,
                attempt=attempt,
                finish_reason=response.finish_reason,
                latency_ms=int((time.perf_counter() - start) * 1000),
            )
            return response

        logger.error(
            "model_request_exhausted",
            provider=self.provider.name,
            model=self.config.model_id,
            attempts=attempts,
            error=str(last_error),
        )
        raise ExhaustedRetriesError(attempts=attempts, last_error=last_error) from last_error

    async def complete(self, messages: List[ChatMessage]) -> str:
        """Return the raw completion text for ``messages``."""
        response = await self.generate(messages)
        return response.content
