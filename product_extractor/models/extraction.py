"""Request, message, config and result models for product extraction."""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class ExtractionRequest(BaseModel):
    """Payload accepted by the extraction endpoint."""

    model_config = ConfigDict(frozen=True)

    input_text: str


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user"]
    content: str


class ModelConfig(BaseModel):
    """Process-wide model parameters, built once from Settings."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str = Field(min_length=1)
    temperature: float = Field(ge=0.0, le=1.0)
    max_output_tokens: Optional[int] = Field(default=None, ge=1)
    max_retries: int = Field(default=2, ge=0)
    retry_backoff_seconds: float = Field(default=0.5, ge=0.0)
    request_timeout_seconds: float = Field(default=60.0, gt=0.0)
    json_mode: bool = False


class ExtractionResult(BaseModel):
    """Structured product record. Unknown keys from the model are kept as-is."""

    model_config = ConfigDict(extra="allow")

    name: StrictStr
    price: Union[StrictInt, StrictFloat]
    features: List[StrictStr]
