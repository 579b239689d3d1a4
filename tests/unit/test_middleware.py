"""Unit tests for FastAPI middleware.

Tests the middleware layer including:
- Logging middleware (request/response logging, timing)
- Error handling middleware (exception to HTTP mapping)
"""

import json
import logging

import pytest
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from unittest.mock import MagicMock

from similarity_evaluator.middlewares import (
    logging_middleware,
    error_handling_middleware
)
from similarity_evaluator.exceptions import (
    ConfigurationError,
    EmbeddingProviderError,
    SimilarityEvaluatorError,
    UsageError,
    VectorDimensionMismatchError,
    ZeroVectorError,
)


class TestLoggingMiddleware:
    """Test logging middleware functionality."""

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self):
        """Logging middleware adds X-Process-Time header."""
        request = MagicMock(spec=Request)
        request.method = "POST"
        request.url.path = "/api/v1/evaluate"
        request.client.host = "127.0.0.1"

        async def mock_call_next(req):
            return Response(content="test", status_code=200)

        response = await logging_middleware(request, mock_call_next)

        assert "X-Process-Time" in response.headers
        assert response.headers["X-Process-Time"].isdigit()

    @pytest.mark.asyncio
    async def test_logs_request_and_response(self, caplog):
        """Logging middleware logs request start and completion."""
        caplog.set_level(logging.INFO)

        request = MagicMock(spec=Request)
        request.method = "GET"
        request.url.path = "/health"
        request.client = None

        async def mock_call_next(req):
            return Response(content="ok", status_code=200)

        await logging_middleware(request, mock_call_next)

        assert "Request started" in caplog.text
        assert "Request completed" in caplog.text


class TestErrorHandlingMiddleware:
    """Test error handling middleware functionality."""

    async def _call(self, error):
        request = MagicMock(spec=Request)

        async def mock_call_next(req):
            raise error

        return await error_handling_middleware(request, mock_call_next)

    @pytest.mark.asyncio
    async def test_usage_error_mapping(self):
        """UsageError is mapped to 400 Bad Request."""
        response = await self._call(UsageError("No data list should be supplied.", {"data_list_size": 2}))

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        body = json.loads(response.body.decode())
        assert body["error"] == "UsageError"
        assert body["message"] == "No data list should be supplied."
        assert body["details"]["data_list_size"] == 2

    @pytest.mark.asyncio
    async def test_configuration_error_mapping(self):
        """ConfigurationError is mapped to 400 Bad Request."""
        response = await self._call(ConfigurationError("Minimum cosine similarity cannot be 2.0."))

        assert response.status_code == 400
        body = json.loads(response.body.decode())
        assert body["error"] == "ConfigurationError"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error_class", [ZeroVectorError, VectorDimensionMismatchError])
    async def test_degenerate_vector_mapping(self, error_class):
        """Degenerate vectors are mapped to 422."""
        response = await self._call(error_class("Vector B is zero.", {"length": 384}))

        assert response.status_code == 422
        body = json.loads(response.body.decode())
        assert body["error"] == error_class.__name__
        assert body["details"]["length"] == 384

    @pytest.mark.asyncio
    async def test_embedding_provider_error_mapping(self):
        """EmbeddingProviderError is mapped to 502 Bad Gateway."""
        response = await self._call(EmbeddingProviderError("Embedding request failed", {"model": "m"}))

        assert response.status_code == 502
        body = json.loads(response.body.decode())
        assert body["error"] == "EmbeddingProviderError"
        assert body["details"]["model"] == "m"

    @pytest.mark.asyncio
    async def test_generic_app_error_mapping(self):
        """SimilarityEvaluatorError is mapped to 500."""
        response = await self._call(SimilarityEvaluatorError("Generic error"))

        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body["error"] == "SimilarityEvaluatorError"
        assert body["details"] == {}

    @pytest.mark.asyncio
    async def test_unexpected_exception_mapping(self):
        """Unexpected exceptions are mapped to 500 with generic message."""
        response = await self._call(ValueError("Unexpected error"))

        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body["error"] == "InternalServerError"
        assert "unexpected error occurred" in body["message"].lower()
        assert body["details"]["error_type"] == "ValueError"

    @pytest.mark.asyncio
    async def test_successful_request_passthrough(self):
        """Successful requests pass through without modification."""
        request = MagicMock(spec=Request)
        expected_response = Response(content="success", status_code=200)

        async def mock_call_next(req):
            return expected_response

        response = await error_handling_middleware(request, mock_call_next)

        assert response == expected_response
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_error_body_matches_error_response_schema(self):
        """Error bodies validate against ErrorResponse and carry a timestamp."""
        from similarity_evaluator.schemas.responses import ErrorResponse

        response = await self._call(ZeroVectorError("Vector A is zero.", {"length": 2}))

        body = json.loads(response.body.decode())
        parsed = ErrorResponse.model_validate(body)
        assert parsed.error == "ZeroVectorError"
        assert parsed.details == {"length": 2}
        assert "timestamp" in body
