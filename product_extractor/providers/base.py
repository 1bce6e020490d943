"""Provider interface and the request/response models it exchanges."""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict

from ..models.extraction import ChatMessage


class PromptPacket(BaseModel):
    """One chat-completion request, independent of the wire format"""
    model_config = ConfigDict(protected_namespaces=())

    messages: List[ChatMessage]
    model: str
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    response_format: Optional[Dict[str, Any]] = None
    timeout: float = 60.0

    def to_chat_body(self) -> Dict[str, Any]:
        """OpenAI-style chat-completions body; unset options are omitted."""
        body: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.model_dump() for message in self.messages],
            "temperature": self.temperature,
        }
        if self.max_tokens is not None:
            body["max_tokens"] = self.max_tokens
        if self.response_format:
            body["response_format"] = self.response_format
        return body


class LLMRawResponse(BaseModel):
    """Completion text plus the envelope metadata worth logging"""
    content: str
    model: str
    provider: str
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


class ModelDescriptor(BaseModel):
    id: str
    family: str
    context_window: Optional[int] = None
    notes: Optional[str] = None


class ProviderCapabilities(BaseModel):
    # JSON mode: the endpoint can be asked to return a bare JSON object.
    supports_plain_json: bool = True


class LLMProvider(ABC):
    """A hosted model reachable with an API key"""

    name = "base"

    def __init__(self, api_key: str):
        self.api_key = api_key

    @abstractmethod
    async def generate(self, prompt: PromptPacket) -> LLMRawResponse:
        """Return the completion for ``prompt`` or raise from core.errors"""
        raise NotImplementedError()

    @abstractmethod
    def capabilities(self) -> ProviderCapabilities:
        raise NotImplementedError()

    @abstractmethod
    async def list_models(self) -> List[ModelDescriptor]:
        raise NotImplementedError()
