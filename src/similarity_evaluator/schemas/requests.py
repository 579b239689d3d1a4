"""Request schemas for API endpoints."""

from pydantic import BaseModel, Field


class EvaluateRequest(BaseModel):
    """Request to score an actual text against an expected text."""

    expected_text: str = Field(..., description="Reference answer")
    actual_text: str = Field(..., description="Response produced by the model under test")
    minimum_similarity: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Pass threshold (uses the configured default if omitted)",
    )
