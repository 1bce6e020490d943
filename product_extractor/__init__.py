"""Structured product extraction over a hosted chat-completion model."""

from .models.extraction import ExtractionResult
from .services.extraction_service import ExtractionService, extract_product

__version__ = "1.0.0"
__all__ = ["ExtractionResult", "ExtractionService", "extract_product", "__version__"]
