"""Semantic similarity evaluation of LLM responses.

The evaluator embeds an expected text and an actual (model-generated) text,
computes the cosine similarity of the two embeddings, and passes the response
when the similarity reaches a minimum threshold.

Degenerate embeddings (zero vectors, mismatched lengths) raise a
DegenerateVectorError subclass instead of an assertion, so a single bad
request (e.g. an empty string that embeds to zero) can be handled by the caller.
"""

from dataclasses import dataclass
import logging
import math
from typing import Any, List, Optional

from .exceptions import ConfigurationError, EmbeddingProviderError, UsageError
from .services.embeddings import EmbeddingProvider
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationRequest:
    """Expected and actual text to compare.

    Attributes:
        expected_text: Reference answer
        actual_text: Response produced by the model under test
        data_list: Auxiliary reference items; must be empty for this evaluator
    """
    expected_text: str
    actual_text: str
    data_list: Optional[List[Any]] = None

    def __post_init__(self):
        """Validate text fields."""
        for name in ("expected_text", "actual_text"):
            if not isinstance(getattr(self, name), str):
                raise UsageError(
                    f"{name} must be a string",
                    details={"field": name, "type": type(getattr(self, name)).__name__}
                )


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a similarity evaluation."""
    passed: bool
    score: float


class SimilarityEvaluator:
    """Evaluator comparing expected and actual text by embedding cosine similarity.

    Examples:
        >>> provider = create_embedding_provider()
        >>> evaluator = SimilarityEvaluator(provider, 0.8)
        >>> result = evaluator.evaluate_texts("The capital of France is Paris",
        ...                                   "Paris is the French capital")
        >>> if not result.passed:
        ...     print(f"Too dissimilar: {result.score:.3f}")

        >>> # Report-only mode (default threshold of -1.0 always passes)
        >>> SimilarityEvaluator(provider).evaluate(EvaluationRequest("a", "b")).passed
        True
    """

    def __init__(self, embedding_provider: EmbeddingProvider, minimum_similarity: float = -1.0):
        """Initialize the evaluator.

        Args:
            embedding_provider: Provider used to embed both texts
            minimum_similarity: Minimum cosine similarity for a pass, in [-1.0, 1.0].
                The default of -1.0 passes every evaluation and only reports the score.

        Raises:
            ConfigurationError: If the provider is missing or the threshold is out of range
        """
        if embedding_provider is None:
            raise ConfigurationError("Embedding provider cannot be None.")
        if math.isnan(minimum_similarity) or abs(minimum_similarity) > 1.0:
            raise ConfigurationError(
                f"Minimum cosine similarity cannot be {minimum_similarity}.",
                details={"minimum_similarity": minimum_similarity}
            )
        self._embedding_provider = embedding_provider
        self._minimum_similarity = float(minimum_similarity)

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        return self._embedding_provider

    @property
    def minimum_similarity(self) -> float:
        return self._minimum_similarity

    def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """Evaluate the similarity between expected and actual text.

        Args:
            request: Texts to compare

        Returns:
            EvaluationResult with the cosine similarity and pass/fail verdict

        Raises:
            UsageError: If the request carries a data list
            EmbeddingProviderError: If the provider returns the wrong number of vectors
            DegenerateVectorError: If an embedding is zero or the lengths differ
        """
        if request.data_list is not None and len(request.data_list) > 0:
            raise UsageError(
                "No data list should be supplied.",
                details={"data_list_size": len(request.data_list)}
            )

        # Single batched call keeps both texts on the same model configuration
        embeddings = self._embedding_provider.embed_batch(
            [request.expected_text, request.actual_text]
        )
        if len(embeddings) != 2:
            raise EmbeddingProviderError(
                f"Expected 2 embeddings, got {len(embeddings)}",
                details={"count": len(embeddings)}
            )
        expected_embedding, actual_embedding = embeddings[0], embeddings[1]

        score = cosine_similarity(expected_embedding, actual_embedding)
        passed = score >= self._minimum_similarity

        logger.debug(
            f"Similarity {score:.4f} vs minimum {self._minimum_similarity:.4f}: "
            f"{'pass' if passed else 'fail'}"
        )
        return EvaluationResult(passed=passed, score=score)

    def evaluate_texts(self, expected_text: str, actual_text: str) -> EvaluationResult:
        """Evaluate two texts directly."""
        return self.evaluate(EvaluationRequest(expected_text, actual_text))
