"""Embedding providers that turn text into fixed-length vectors.

The evaluator consumes embeddings through the small ``EmbeddingProvider``
interface, so the backing model can be swapped without touching the scoring
logic.

Key Features:
- Abstract interface for local and remote embedding models
- Sentence Transformers support for local inference (no API key required)
- OpenAI-compatible HTTP support (OpenAI, Ollama, vLLM, ...)
- One batched call per evaluation, order preserved
- Library and network failures wrapped in EmbeddingProviderError
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import logging

import requests
from sentence_transformers import SentenceTransformer

from similarity_evaluator.exceptions import ConfigurationError, EmbeddingProviderError

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_MODEL = "all-MiniLM-L6-v2"
DEFAULT_OPENAI_MODEL = "text-embedding-3-small"

# Loaded models keyed by model name (loading takes seconds, reuse across providers)
_EMBEDDING_MODELS: Dict[str, SentenceTransformer] = {}


def get_embedding_model(model_name: str = DEFAULT_LOCAL_MODEL) -> SentenceTransformer:
    """Get or load a shared SentenceTransformer instance.

    Args:
        model_name: HuggingFace model for sentence embeddings

    Returns:
        Cached SentenceTransformer for the given model name
    """
    model = _EMBEDDING_MODELS.get(model_name)
    if model is None:
        logger.info(f"Loading embedding model: {model_name}")
        model = SentenceTransformer(model_name)
        _EMBEDDING_MODELS[model_name] = model
    return model


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers."""

    def __init__(self, model: str):
        """Initialize provider.

        Args:
            model: Embedding model identifier
        """
        self.model = model

    @abstractmethod
    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """Embed several texts in one call.

        Args:
            texts: Texts to embed

        Returns:
            One vector per input text, in input order

        Raises:
            EmbeddingProviderError: If the embeddings cannot be produced
        """
        pass

    def embed(self, text: str) -> List[float]:
        """Embed a single text."""
        return self.embed_batch([text])[0]


class SentenceTransformerEmbeddingProvider(EmbeddingProvider):
    """Embedding provider running a Sentence Transformers model locally."""

    def __init__(
        self,
        model: str = DEFAULT_LOCAL_MODEL,
        embedding_model: Optional[SentenceTransformer] = None
    ):
        """Initialize the local provider.

        Args:
            model: HuggingFace model name (e.g., "all-MiniLM-L6-v2")
            embedding_model: Pre-loaded model (optional, skips the shared cache)
        """
        super().__init__(model)
        self._embedding_model = embedding_model

    @property
    def embedding_model(self) -> SentenceTransformer:
        """Model used for encoding, loaded lazily on first use."""
        if self._embedding_model is None:
            self._embedding_model = get_embedding_model(self.model)
        return self._embedding_model

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        try:
            embeddings = self.embedding_model.encode(list(texts), convert_to_numpy=True)
        except Exception as e:
            logger.error(f"Sentence Transformers encoding failed ({self.model}): {e}")
            raise EmbeddingProviderError(
                f"Failed to embed {len(texts)} texts with {self.model}",
                details={"model": self.model, "error": str(e)}
            ) from e

        return [row.tolist() for row in embeddings]


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embedding provider calling an OpenAI-compatible ``/embeddings`` endpoint.

    Works with the OpenAI API as well as servers that mimic it, such as
    Ollama (``http://localhost:11434/v1``) or vLLM.
    """

    def __init__(
        self,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str = "https://api.openai.com/v1",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """Initialize the HTTP provider.

        Args:
            model: Embedding model name understood by the server
            base_url: API base URL, without the trailing ``/embeddings``
            api_key: Bearer token (optional for local servers)
            timeout: Request timeout in seconds
            session: Custom requests session (creates a new one if None)
        """
        super().__init__(model)
        self.endpoint = base_url.rstrip("/") + "/embeddings"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        payload = {"model": self.model, "input": list(texts)}

        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            logger.error(f"Embedding request to {self.endpoint} failed: {e}")
            raise EmbeddingProviderError(
                f"Embedding request failed for model {self.model}",
                details={"endpoint": self.endpoint, "error": str(e)}
            ) from e
        except ValueError as e:
            raise EmbeddingProviderError(
                "Embedding response is not valid JSON",
                details={"endpoint": self.endpoint, "error": str(e)}
            ) from e

        return self._parse_response(body, expected=len(texts))

    def _parse_response(self, body: dict, expected: int) -> List[List[float]]:
        """Extract vectors from an embeddings response, ordered by ``index``."""
        try:
            items = sorted(body["data"], key=lambda item: item.get("index", 0))
            vectors = [[float(x) for x in item["embedding"]] for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise EmbeddingProviderError(
                "Malformed embedding response",
                details={"endpoint": self.endpoint, "error": str(e)}
            ) from e

        if len(vectors) != expected:
            raise EmbeddingProviderError(
                f"Expected {expected} embeddings, got {len(vectors)}",
                details={"endpoint": self.endpoint, "model": self.model}
            )
        return vectors


def create_embedding_provider(
    provider: str = "sentence-transformers",
    model: Optional[str] = None,
    **kwargs
) -> EmbeddingProvider:
    """Factory function to create an embedding provider.

    Args:
        provider: "sentence-transformers" (alias "local") or "openai"
        model: Model name (uses provider default if None)
        **kwargs: Additional arguments passed to the provider constructor

    Returns:
        Configured EmbeddingProvider instance

    Raises:
        ConfigurationError: If provider is unsupported

    Examples:
        >>> provider = create_embedding_provider()  # local all-MiniLM-L6-v2
        >>> provider = create_embedding_provider("openai", api_key="sk-...")
        >>> provider = create_embedding_provider(
        ...     "openai", model="nomic-embed-text", base_url="http://localhost:11434/v1"
        ... )
    """
    provider = provider.lower()

    if provider in ("sentence-transformers", "local"):
        return SentenceTransformerEmbeddingProvider(
            model=model or DEFAULT_LOCAL_MODEL,
            **kwargs
        )
    elif provider == "openai":
        return OpenAIEmbeddingProvider(
            model=model or DEFAULT_OPENAI_MODEL,
            **kwargs
        )
    else:
        raise ConfigurationError(
            f"Unsupported embedding provider: {provider}. "
            f"Supported providers: 'sentence-transformers', 'openai'",
            details={"provider": provider}
        )
