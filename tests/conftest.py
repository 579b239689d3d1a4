"""Pytest configuration and shared fixtures."""

import pytest

from similarity_evaluator.config import Settings
from similarity_evaluator.services.embeddings import EmbeddingProvider


class StaticEmbeddingProvider(EmbeddingProvider):
    """Test double returning fixed vectors for known texts."""

    def __init__(self, vectors: dict, model: str = "static-test-model"):
        super().__init__(model)
        self.vectors = vectors
        self.calls = []

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        return [self.vectors[text] for text in texts]


@pytest.fixture
def mock_settings():
    """Create a mock Settings instance for testing."""
    return Settings(
        embedding_provider="sentence-transformers",
        embedding_model="all-MiniLM-L6-v2",
        minimum_similarity=-1.0,
    )


@pytest.fixture
def static_provider():
    """Provider mapping "foo" to [1, 0] and "bar" to [0, 1]."""
    return StaticEmbeddingProvider({
        "foo": [1.0, 0.0],
        "bar": [0.0, 1.0],
        "foo again": [2.0, 0.0],
        "diagonal": [1.0, 1.0],
        "opposite": [-1.0, 0.0],
        "": [0.0, 0.0],
    })
