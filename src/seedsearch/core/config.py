"""Application settings for seedsearch."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from SEEDSEARCH_* env vars or a .env file."""

    model_config = SettingsConfigDict(env_prefix="SEEDSEARCH_", env_file=".env", extra="ignore")

    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    # API
    api_title: str = "Seedsearch API"
    api_version: str = "0.1.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Data
    dataset_path: str = "data/companies.json"
    search_terms_path: str = "config/search_terms.yaml"

    # Embeddings
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_device: str = "cpu"
    embedding_max_chars: int = Field(5000, gt=0)
    embedding_timeout_seconds: float = Field(5.0, gt=0)
    embeddings_enabled: bool = True

    # Relevance gate
    min_similarity: float = Field(0.4, ge=0.0, le=1.0)
    min_keyword_length: int = Field(3, ge=1)
    searchable_text: Literal["description", "full"] = "description"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
