"""Application lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import get_settings
from .core.errors import ConfigError
from .core.logging import get_logger
from .services.extraction_service import build_http_client, build_service

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("application_startup", model=settings.model_id)

    http_client = build_http_client(settings)
    app.state.http_client = http_client

    try:
        app.state.extraction_service = build_service(settings, http_client)
    except ConfigError as exc:
        # The service still answers health checks; /v1/extract reports the problem.
        logger.warning("extraction_service_unavailable", error=exc.message)
        app.state.extraction_service = None

    try:
        yield
    finally:
        logger.info("application_shutdown")
        await http_client.aclose()
