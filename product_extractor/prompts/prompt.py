"""Prompt builders for product extraction."""

from __future__ import annotations

from typing import List, Optional

from ..models.extraction import ChatMessage, ModelConfig
from ..providers.base import PromptPacket, ProviderCapabilities

SYSTEM_PROMPT = """Extract product details into JSON with this structure:
{
  "name": "product name here",
  "price": number_here_without_currency_symbol,
  "features": ["feature1", "feature2", "feature3"]
}
"name" is a string, "price" is a number and "features" is an array of strings.
Return only the JSON object."""

SAMPLE_DESCRIPTION = """The Kees Van Der Westen Speedster is a high-end, single-group espresso machine known for its precision, performance,
and industrial design. Handcrafted in the Netherlands, it features dual boilers for brewing and steaming, PID temperature control for
consistency, and a unique pre-infusion system to enhance flavor extraction. Designed for enthusiasts and professionals, it offers
customizable aesthetics, exceptional thermal stability, and intuitive operation via a lever system. The pricing is approximatelyt $14,499
depending on the retailer and customization options."""


def build_messages(input_text: str) -> List[ChatMessage]:
    """Return the [system, user] pair; the user content is the input verbatim."""

    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=input_text),
    ]


def build_prompt(
    messages: List[ChatMessage],
    config: ModelConfig,
    capabilities: Optional[ProviderCapabilities] = None,
) -> PromptPacket:
    response_format = None
    if config.json_mode and capabilities is not None and capabilities.supports_plain_json:
        response_format = {"type": "json_object"}

    return PromptPacket(
        messages=list(messages),
        model=config.model_id,
        temperature=config.temperature,
        max_tokens=config.max_output_tokens,
        response_format=response_format,
        timeout=config.request_timeout_seconds,
    )
