"""Error envelope and exception handlers"""
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from ..core.errors import (
    ConfigError,
    ExhaustedRetriesError,
    ExtractorError,
    MalformedResponseError,
    ParseError,
    ProviderError,
)


logger = structlog.get_logger(__name__)


# Most specific first; the first isinstance match wins.
_STATUS_BY_ERROR = (
    (ConfigError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ExhaustedRetriesError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (MalformedResponseError, status.HTTP_502_BAD_GATEWAY),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
    (ParseError, status.HTTP_502_BAD_GATEWAY),
)


def status_for(exc: ExtractorError) -> int:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_id(request: Request) -> str:
    return request.state.request_id if hasattr(request.state, "request_id") else "unknown"


def create_error_response(
    code: str,
    message: str,
    request_id: str,
    details: Optional[Dict[str, Any]] = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": request_id,
                "details": jsonable_encoder(details or {})
            }
        }
    )


async def extractor_error_handler(request: Request, exc: ExtractorError) -> JSONResponse:
    """Handle pipeline errors"""
    request_id = _request_id(request)
    status_code = status_for(exc)

    logger.error(
        "extractor_error",
        code=exc.code,
        message=exc.message,
        request_id=request_id,
        path=request.url.path
    )

    details = dict(exc.details)
    if isinstance(exc, ConfigError):
        # Config details stay server-side.
        details = {}

    return create_error_response(
        code=exc.code,
        message=exc.message,
        request_id=request_id,
        details=details,
        status_code=status_code
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors"""
    request_id = _request_id(request)

    logger.warning(
        "validation_error",
        errors=exc.errors(),
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        request_id=request_id,
        details={"errors": exc.errors()},
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions"""
    request_id = _request_id(request)

    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="HTTP_ERROR",
        message=str(exc.detail),
        request_id=request_id,
        status_code=exc.status_code
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    request_id = _request_id(request)

    logger.error(
        "unhandled_exception",
        exc_info=exc,
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="INTERNAL_ERROR",
        message="An internal error occurred",
        request_id=request_id,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
