"""
API Dependencies.

Dependency injection for FastAPI services.
"""

import logging
from functools import lru_cache

from seedsearch.core.config import Settings, get_settings
from seedsearch.search import CompanySearchService, EmbeddingService, create_search_service, vector

logger = logging.getLogger(__name__)


# =============================================================================
# Settings
# =============================================================================


@lru_cache
def get_api_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# =============================================================================
# Search Services
# =============================================================================


def get_embedding_service() -> EmbeddingService:
    """Get the shared embedding service (one model per process)."""
    return vector.get_embedding_service()


@lru_cache
def get_search_service() -> CompanySearchService:
    """Get search service over the configured dataset."""
    settings = get_api_settings()
    logger.info("Initializing search service from %s", settings.dataset_path)
    provider = get_embedding_service() if settings.embeddings_enabled else None
    return create_search_service(settings, embedding_provider=provider)


# =============================================================================
# Cleanup
# =============================================================================


def clear_caches() -> None:
    """Clear all LRU caches (for testing)."""
    get_api_settings.cache_clear()
    vector.get_embedding_service.cache_clear()
    get_search_service.cache_clear()
