"""Similarity evaluation API endpoints.

Endpoints:
    POST /api/v1/evaluate - Score an actual text against an expected text

The endpoint embeds both texts with the shared embedding provider, computes
their cosine similarity, and applies the requested (or configured) threshold.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..config import Settings, get_settings
from ..dependencies import EmbeddingProviderDep
from ..evaluator import EvaluationRequest, SimilarityEvaluator
from ..exceptions import DegenerateVectorError, EmbeddingProviderError
from ..schemas.requests import EvaluateRequest
from ..schemas.responses import EvaluateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["evaluate"])


@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Score semantic similarity",
    description="Embed expected and actual text and compare them by cosine similarity",
    responses={
        200: {"description": "Evaluation completed"},
        422: {"description": "Invalid threshold or degenerate embedding"},
        502: {"description": "Embedding provider failed"},
    }
)
def evaluate(
    body: EvaluateRequest,
    provider: EmbeddingProviderDep,
    settings: Settings = Depends(get_settings),
) -> EvaluateResponse:
    """Evaluate an actual text against an expected text.

    Args:
        body: Texts to compare and optional threshold
        provider: Injected embedding provider
        settings: Application settings (default threshold)

    Returns:
        EvaluateResponse with score and verdict

    Raises:
        HTTPException: 422 for degenerate embeddings, 502 when the embedding
            provider fails
    """
    minimum_similarity = (
        body.minimum_similarity
        if body.minimum_similarity is not None
        else settings.minimum_similarity
    )
    evaluator = SimilarityEvaluator(provider, minimum_similarity)

    try:
        result = evaluator.evaluate(EvaluationRequest(body.expected_text, body.actual_text))

    except DegenerateVectorError as e:
        logger.warning(f"Degenerate embedding: {e.message}", extra={"details": e.details})
        raise HTTPException(
            status_code=422,
            detail=f"Cosine similarity is undefined for these texts: {e.message}"
        )

    except EmbeddingProviderError as e:
        logger.error(f"Embedding provider failed: {e.message}", extra={"details": e.details})
        raise HTTPException(
            status_code=502,
            detail="Embedding provider unavailable. Please try again later."
        )

    logger.info(f"Evaluated texts: score={result.score:.4f}, passed={result.passed}")

    return EvaluateResponse(
        passed=result.passed,
        score=result.score,
        minimum_similarity=evaluator.minimum_similarity,
        model=getattr(provider, "model", "unknown"),
    )
