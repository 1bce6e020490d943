import json
from typing import Iterable, List, Union

import pytest

from product_extractor.core.config import Settings
from product_extractor.models.extraction import ModelConfig
from product_extractor.providers.base import (
    LLMProvider,
    LLMRawResponse,
    PromptPacket,
    ProviderCapabilities,
)
from product_extractor.services.extraction_service import ExtractionService
from product_extractor.services.model_client import ModelClient

SPEEDSTER = {
    "name": "Kees Van Der Westen Speedster",
    "price": 14499,
    "features": [
        "dual boilers for brewing and steaming",
        "PID temperature control",
        "pre-infusion system",
        "lever operation",
    ],
}


class StubProvider(LLMProvider):
    """Replays scripted outcomes: strings become completions, exceptions are raised."""

    name = "stub"

    def __init__(self, outcomes: Iterable[Union[str, BaseException]]) -> None:
        super().__init__(api_key="stub")
        self.outcomes = list(outcomes)
        self.packets: List[PromptPacket] = []

    async def generate(self, prompt: PromptPacket) -> LLMRawResponse:  # type: ignore[override]
        self.packets.append(prompt)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return LLMRawResponse(content=outcome, model=prompt.model, provider=self.name, finish_reason="stop")

    def capabilities(self) -> ProviderCapabilities:  # type: ignore[override]
        return ProviderCapabilities(supports_plain_json=True)

    async def list_models(self):  # type: ignore[override]
        return []


def make_config(**overrides) -> ModelConfig:
    values = {
        "model_id": "llama-3.3-70b-versatile",
        "temperature": 0.7,
        "max_retries": 2,
        "retry_backoff_seconds": 0.0,
    }
    values.update(overrides)
    return ModelConfig(**values)


def make_service(outcomes, **config_overrides) -> ExtractionService:
    provider = StubProvider(outcomes)
    return ExtractionService(ModelClient(make_config(**config_overrides), provider))


@pytest.fixture()
def speedster_json() -> str:
    return json.dumps(SPEEDSTER)


@pytest.fixture()
def settings(monkeypatch) -> Settings:
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    return Settings(_env_file=None, groq_api_key="gsk_test", retry_backoff_seconds=0.0)
