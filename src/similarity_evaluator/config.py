"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = "Similarity Evaluator"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Embeddings
    embedding_provider: Literal["sentence-transformers", "openai"] = "sentence-transformers"
    embedding_model: str = "all-MiniLM-L6-v2"
    embedding_api_base_url: str = "https://api.openai.com/v1"
    embedding_api_key: str | None = None
    embedding_timeout_seconds: float = 30.0

    # Evaluation
    minimum_similarity: float = -1.0  # -1.0 reports the score without gating

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 1

    @field_validator("minimum_similarity")
    @classmethod
    def validate_minimum_similarity(cls, v: float) -> float:
        """Reject thresholds outside the cosine similarity range."""
        if not -1.0 <= v <= 1.0:
            raise ValueError(f"minimum_similarity must be between -1.0 and 1.0, got {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
