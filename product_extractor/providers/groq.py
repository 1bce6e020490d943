"""Groq provider implementation"""
import httpx
from typing import Any, Dict, List
from ..core.errors import (
    ConfigError,
    MalformedResponseError,
    ParseError,
    ProviderError,
    TransientNetworkError,
)
from .base import (
    LLMProvider,
    PromptPacket,
    LLMRawResponse,
    ProviderCapabilities,
    ModelDescriptor
)

# Retried alongside every 5xx.
_RETRYABLE_STATUS = {408, 409, 429}


class GroqProvider(LLMProvider):
    """Groq API provider (OpenAI-compatible)"""

    name = "groq"
    BASE_URL = "https://api.groq.com/openai/v1/chat/completions"
    MODELS_URL = "https://api.groq.com/openai/v1/models"

    def __init__(self, api_key: str, http_client: httpx.AsyncClient):
        if not api_key or not api_key.strip():
            raise ConfigError("GROQ_API_KEY is not set")
        super().__init__(api_key.strip())
        self.http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    async def generate(self, prompt: PromptPacket) -> LLMRawResponse:
        """Generate completion using Groq API"""
        response = await self._send("POST", self.BASE_URL, json=prompt.to_chat_body(), timeout=prompt.timeout)

        try:
            data = response.json()
            choice = data["choices"][0]
            message_content = choice["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(
                "Groq response did not contain a completion",
                status_code=response.status_code,
                details={"body": response.text[:500]},
            ) from exc

        if message_content is None:
            raise MalformedResponseError(
                "Groq response carried an empty completion",
                status_code=response.status_code,
                details={"finish_reason": choice.get("finish_reason")},
            )

        return LLMRawResponse(
            content=self._coerce_message_content(message_content),
            model=data.get("model", prompt.model),
            provider=self.name,
            finish_reason=choice.get("finish_reason"),
            usage=data.get("usage")
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one request and translate failures into the error taxonomy."""
        try:
            response = await self.http_client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as exc:
            raise TransientNetworkError(f"Groq request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransientNetworkError(f"Groq connection failed: {exc}") from exc

        status = response.status_code
        if status in (401, 403):
            raise ConfigError("Groq rejected the API key", details={"status_code": status})
        if status in _RETRYABLE_STATUS or status >= 500:
            raise TransientNetworkError(
                f"Groq returned HTTP {status}",
                status_code=status,
                details={"body": response.text[:500]},
            )
        if status >= 400:
            self._raise_for_rejected_generation(response)
            raise ProviderError(
                f"Groq returned HTTP {status}",
                status_code=status,
                details={"body": response.text[:500]},
            )
        return response

    @staticmethod
    def _raise_for_rejected_generation(response: httpx.Response) -> None:
        """In JSON mode Groq answers 400 when the completion is not bare JSON."""
        try:
            error = response.json().get("error") or {}
        except (ValueError, AttributeError):
            return
        if not isinstance(error, dict) or error.get("code") != "json_validate_failed":
            return
        raise ParseError(
            "Groq JSON mode rejected the completion",
            raw_text=str(error.get("failed_generation") or ""),
        )

    @staticmethod
    def _coerce_message_content(message_content: Any) -> str:
        """Groq mirrors OpenAI responses; normalise to text."""

        if isinstance(message_content, list):
            fragments = []
            for part in message_content:
                if isinstance(part, dict) and "text" in part:
                    fragments.append(part["text"])
            if fragments:
                return "".join(fragments)

        if isinstance(message_content, str):
            return message_content

        return str(message_content)

    def capabilities(self) -> ProviderCapabilities:
        """Groq supports plain JSON mode"""
        return ProviderCapabilities(supports_plain_json=True)

    async def list_models(self) -> List[ModelDescriptor]:
        """Fetch active Groq models from API"""
        response = await self._send("GET", self.MODELS_URL, timeout=10.0)
        try:
            entries = response.json().get("data", [])
        except (ValueError, AttributeError) as exc:
            raise MalformedResponseError("Groq model list was not valid JSON") from exc

        models = []
        for model_data in entries:
            if not model_data.get("active", True):
                continue

            model_id = model_data.get("id", "")
            family = "unknown"
            for known in ("llama", "mixtral", "gemma", "qwen"):
                if known in model_id.lower():
                    family = known
                    break

            models.append(ModelDescriptor(
                id=model_id,
                family=family,
                context_window=model_data.get("context_window"),
                notes=f"Groq {model_id}"
            ))

        models.sort(key=lambda m: (m.family, m.id))
        return models
