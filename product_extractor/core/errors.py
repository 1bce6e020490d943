"""Exception taxonomy for the extraction pipeline."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ExtractorError(Exception):
    """Base error carrying a stable code and structured details"""

    code = "EXTRACTOR_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(ExtractorError):
    """Missing or invalid credential / configuration. Never retried."""

    code = "CONFIG_ERROR"


class ProviderError(ExtractorError):
    """The inference service rejected the request."""

    code = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class TransientNetworkError(ProviderError):
    """Connection failure, timeout, throttling or 5xx. Safe to retry."""

    code = "TRANSIENT_NETWORK_ERROR"


class MalformedResponseError(ProviderError):
    """Response envelope did not carry a completion."""

    code = "MALFORMED_RESPONSE"


class ExhaustedRetriesError(ProviderError):
    code = "EXHAUSTED_RETRIES"

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        details: Dict[str, Any] = {"attempts": attempts}
        if last_error is not None:
            details["last_error"] = str(last_error)
        super().__init__(
            f"Model request failed after {attempts} attempt(s)",
            status_code=getattr(last_error, "status_code", None),
            details=details,
        )


class ParseError(ExtractorError):
    """Completion text did not yield a complete, well-typed result."""

    code = "PARSE_ERROR"

    def __init__(self, message: str, raw_text: str, errors: Optional[List[Dict[str, str]]] = None):
        self.raw_text = raw_text
        self.errors = errors or []
        super().__init__(message, details={"raw_text": raw_text, "errors": self.errors})
