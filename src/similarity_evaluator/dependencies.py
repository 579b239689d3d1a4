"""FastAPI dependency injection for shared services.

The embedding provider is expensive to build (the local provider loads a
Sentence Transformers model), so it is created once from settings and reused
across all requests. Evaluators are cheap and are built per request, since
each request may carry its own threshold.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from .config import get_settings
from .services.embeddings import EmbeddingProvider, create_embedding_provider


@lru_cache()
def get_embedding_provider() -> EmbeddingProvider:
    """Get or create the shared embedding provider.

    Returns:
        EmbeddingProvider configured from application settings
    """
    settings = get_settings()
    if settings.embedding_provider == "openai":
        return create_embedding_provider(
            "openai",
            model=settings.embedding_model,
            base_url=settings.embedding_api_base_url,
            api_key=settings.embedding_api_key,
            timeout=settings.embedding_timeout_seconds,
        )
    return create_embedding_provider(settings.embedding_provider, model=settings.embedding_model)


# Type alias for dependency injection
EmbeddingProviderDep = Annotated[EmbeddingProvider, Depends(get_embedding_provider)]
