"""Custom exceptions for the similarity evaluator."""


class SimilarityEvaluatorError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SimilarityEvaluatorError):
    """Raised when an evaluator or provider is constructed with invalid settings."""

    pass


class UsageError(SimilarityEvaluatorError):
    """Raised when an evaluation request is malformed."""

    pass


class DegenerateVectorError(SimilarityEvaluatorError):
    """Raised when cosine similarity is undefined for the given vectors."""

    pass


class VectorDimensionMismatchError(DegenerateVectorError):
    """Raised when two vectors do not have the same length."""

    pass


class ZeroVectorError(DegenerateVectorError):
    """Raised when a vector has zero magnitude."""

    pass


class EmbeddingProviderError(SimilarityEvaluatorError):
    """Raised when an embedding provider fails to produce embeddings."""

    pass
