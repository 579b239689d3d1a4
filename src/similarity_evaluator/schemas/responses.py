"""Response schemas for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class EvaluateResponse(BaseModel):
    """Similarity score and verdict for one evaluation."""

    passed: bool = Field(..., description="Whether score >= minimum_similarity")
    score: float = Field(..., description="Cosine similarity of the two embeddings")
    minimum_similarity: float = Field(..., description="Threshold applied")
    model: str = Field(..., description="Embedding model used")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str
    environment: str
    embedding_model: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict = Field(default_factory=dict, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
