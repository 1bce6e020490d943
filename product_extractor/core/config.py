"""Application configuration via pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.extraction import ModelConfig
from .errors import ConfigError


def _config_error(message: str, exc: ValidationError) -> ConfigError:
    return ConfigError(
        message,
        details={"errors": [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]},
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", protected_namespaces=()
    )

    app_name: str = "product-extractor"
    app_version: str = "1.0.0"

    groq_api_key: Optional[str] = None

    model_id: str = "llama-3.3-70b-versatile"
    temperature: float = 0.7
    max_output_tokens: Optional[int] = None
    max_retries: int = 2
    retry_backoff_seconds: float = 0.5
    request_timeout_seconds: float = 60.0
    json_mode: bool = False

    log_level: str = "INFO"
    log_json: bool = True

    def model_config_for_client(self) -> ModelConfig:
        """Freeze the tunable model parameters into a ModelConfig."""
        try:
            return ModelConfig(
                model_id=self.model_id,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
                max_retries=self.max_retries,
                retry_backoff_seconds=self.retry_backoff_seconds,
                request_timeout_seconds=self.request_timeout_seconds,
                json_mode=self.json_mode,
            )
        except ValidationError as exc:
            raise _config_error("Invalid model configuration", exc) from exc

    def require_api_key(self) -> str:
        if not self.groq_api_key or not self.groq_api_key.strip():
            raise ConfigError("GROQ_API_KEY is not set")
        return self.groq_api_key.strip()


def load_settings(**overrides: Any) -> Settings:
    """Build Settings from env/.env plus overrides; bad values raise ConfigError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise _config_error("Invalid settings", exc) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
