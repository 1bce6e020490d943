"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = True, stream: Optional[TextIO] = None) -> None:
    """Render structlog events through stdlib logging onto ``stream`` (stdout by default)."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, stream=stream or sys.stdout, format="%(message)s")

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
