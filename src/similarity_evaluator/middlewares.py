"""FastAPI middleware for request/response processing and error handling.

Middleware Components:
    - logging_middleware: Logs all requests/responses with timing metrics
    - error_handling_middleware: Catches exceptions and converts to proper HTTP responses

The error handling middleware maps application exceptions to HTTP status codes:
    - ConfigurationError → 400 Bad Request (invalid threshold or provider settings)
    - UsageError → 400 Bad Request (malformed evaluation request)
    - DegenerateVectorError → 422 Unprocessable Entity (zero or mismatched embeddings)
    - EmbeddingProviderError → 502 Bad Gateway (embedding backend failed)
    - SimilarityEvaluatorError → 500 Internal Server Error (general errors)

Both middleware functions are registered in main.py using app.middleware("http").
"""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from .exceptions import (
    ConfigurationError,
    DegenerateVectorError,
    EmbeddingProviderError,
    SimilarityEvaluatorError,
    UsageError,
)
from .schemas.responses import ErrorResponse

logger = logging.getLogger(__name__)


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log all incoming requests and outgoing responses with performance timing.

    Adds an ``X-Process-Time`` header (milliseconds) to every response.

    Args:
        request: The incoming HTTP request.
        call_next: Async function that passes the request to the next handler.

    Returns:
        The response from the endpoint, with the X-Process-Time header set.
    """
    start_time = time.time()

    logger.info(
        "Request started",
        extra={
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else None,
        },
    )

    response = await call_next(request)

    duration_ms = int((time.time() - start_time) * 1000)

    logger.info(
        "Request completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )

    response.headers["X-Process-Time"] = str(duration_ms)

    return response


def _error_response(status_code: int, error: SimilarityEvaluatorError) -> JSONResponse:
    body = ErrorResponse(error=type(error).__name__, message=error.message, details=error.details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def error_handling_middleware(request: Request, call_next: Callable) -> Response:
    """Catch exceptions from endpoints and convert to proper HTTP error responses.

    Error Response Format:
        {
            "error": "ZeroVectorError",       # Exception class name
            "message": "Vector A is zero.",   # Exception's message field
            "details": {"length": 384},       # Exception's details dict
            "timestamp": "2026-01-01T00:00:00"
        }

    Unexpected exceptions are logged with their traceback and returned as a
    generic 500 without internal details.
    """
    try:
        return await call_next(request)
    except (ConfigurationError, UsageError) as e:
        logger.warning(f"Invalid request: {e.message}", extra={"details": e.details})
        return _error_response(status.HTTP_400_BAD_REQUEST, e)
    except DegenerateVectorError as e:
        logger.warning(f"Degenerate embedding: {e.message}", extra={"details": e.details})
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, e)
    except EmbeddingProviderError as e:
        logger.error(f"Embedding provider failed: {e.message}", extra={"details": e.details})
        return _error_response(status.HTTP_502_BAD_GATEWAY, e)
    except SimilarityEvaluatorError as e:
        logger.error(f"Application error: {e.message}", extra={"details": e.details})
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        body = ErrorResponse(
            error="InternalServerError",
            message="An unexpected error occurred",
            details={"error_type": type(e).__name__},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )
