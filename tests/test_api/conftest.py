"""Fixtures for API tests."""

from unittest.mock import Mock

import numpy as np
import pytest
from fastapi.testclient import TestClient

from api.deps import get_embedding_service, get_search_service
from api.main import app
from seedsearch.search import CompanySearchService, EmbeddingService, SearchPipeline
from tests.stubs import StubEmbedder


@pytest.fixture
def search_service(sample_companies) -> CompanySearchService:
    """Service over the sample companies with a stub query embedder."""
    pipeline = SearchPipeline(StubEmbedder(default=[0.0, 0.0, 1.0]))
    return CompanySearchService(sample_companies, pipeline)


@pytest.fixture
def embedding_service() -> EmbeddingService:
    """EmbeddingService with a mocked model."""
    service = EmbeddingService(model_name="test-model", max_chars=50)
    service._model = Mock()
    service._model.encode.return_value = np.array([[0.6, 0.8]])
    return service


@pytest.fixture
def client(search_service: CompanySearchService, embedding_service: EmbeddingService):
    """FastAPI TestClient fixture with services overridden."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    app.dependency_overrides[get_embedding_service] = lambda: embedding_service
    yield TestClient(app)
    app.dependency_overrides.clear()
