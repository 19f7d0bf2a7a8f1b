"""Company Search Service for seedsearch."""

import logging
from collections.abc import Sequence
from pathlib import Path

from seedsearch.catalog.importers import CompanyImporter
from seedsearch.catalog.schemas import Company, FilterSet
from seedsearch.catalog.sorting import SortOrder, default_sort, filter_companies, sort_companies, unique_values
from seedsearch.core.config import Settings, get_settings
from seedsearch.search.models import SearchOutcome
from seedsearch.search.pipeline import GateSettings, SearchPipeline
from seedsearch.search.synonyms import resolve_search_terms
from seedsearch.search.vector import EmbeddingProvider, EmbeddingService

logger = logging.getLogger(__name__)

FILTER_FIELDS = ("category", "cohort", "location")

class CompanySearchService:
    """Holds the read-only dataset and runs searches over it."""

    def __init__(self, companies: Sequence[Company] = (), pipeline: SearchPipeline | None = None):
        self._companies: tuple[Company, ...] = tuple(companies)
        self.pipeline = pipeline or SearchPipeline()

    @property
    def companies(self) -> tuple[Company, ...]: return self._companies

    def load_companies(self, companies: Sequence[Company]) -> int:
        self._companies = tuple(companies)
        return len(self._companies)

    def _order(self, results: list[Company], query: str, sort_by: str | None, order: SortOrder | str | None) -> list[Company]:
        default_key, default_order = default_sort(query)
        return sort_companies(results, sort_by or default_key, order or default_order)

    def search(self, query: str, filters: FilterSet | None = None, sort_by: str | None = None,
               order: SortOrder | str | None = None) -> SearchOutcome:
        outcome = self.pipeline.run(self._companies, query, filters)
        outcome.results = self._order(outcome.results, query, sort_by, order)
        return outcome

    async def asearch(self, query: str, filters: FilterSet | None = None, sort_by: str | None = None,
                      order: SortOrder | str | None = None) -> SearchOutcome:
        outcome = await self.pipeline.arun(self._companies, query, filters)
        outcome.results = self._order(outcome.results, query, sort_by, order)
        return outcome

    def browse(self, filters: FilterSet | None = None, sort_by: str = "name",
               order: SortOrder | str = SortOrder.ASC) -> list[Company]:
        return sort_companies(filter_companies(self._companies, filters), sort_by, order)

    def filter_options(self) -> dict[str, list[str]]:
        return {f: unique_values(self._companies, f) for f in FILTER_FIELDS}

def create_search_service(settings: Settings | None = None, embedding_provider: EmbeddingProvider | None = None) -> CompanySearchService:
    """Wire a service from settings: dataset, search terms, embedder, gate."""
    s = settings or get_settings()
    batch = CompanyImporter(strict=False).import_file(Path(s.dataset_path))
    synonyms, exclusions = resolve_search_terms(s.search_terms_path)

    if embedding_provider is None and s.embeddings_enabled:
        embedding_provider = EmbeddingService(model_name=s.embedding_model, device=s.embedding_device, max_chars=s.embedding_max_chars)

    pipeline = SearchPipeline(
        embedding_provider=embedding_provider,
        synonyms=synonyms,
        exclusions=exclusions,
        gate=GateSettings(min_similarity=s.min_similarity, min_keyword_length=s.min_keyword_length),
        embedding_timeout=s.embedding_timeout_seconds,
        max_query_chars=s.embedding_max_chars,
        searchable_text=s.searchable_text,
    )
    logger.info("Search service ready with %d companies", batch.count)
    return CompanySearchService(batch.companies, pipeline)
