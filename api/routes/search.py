"""
Search Router.

Endpoints for hybrid company search, browsing and filter options.
"""

import logging
import time

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_search_service
from seedsearch.catalog import Company, FilterSet, SortOrder
from seedsearch.search import CompanySearchService, MatchSource

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================


class SearchRequest(BaseModel):
    """Query plus filter selections."""

    query: str = Field("", description="Free-text query; blank lists every company")
    filters: FilterSet = Field(default_factory=FilterSet)
    sort_by: str | None = Field(None, description="Company field; defaults to relevance or name")
    sort_order: SortOrder | None = None


class CompanyDTO(BaseModel):
    """Company as returned to clients (no embedding)."""

    id: str
    name: str
    website: str
    description: str
    category: str
    cohort: str
    location: str
    tags: list[str] = []
    crunchbase_link: str = ""
    google_search_link: str = ""
    has_podcast_content: bool = False
    podcast_search_link: str | None = None
    similarity: float | None = None
    match: str | None = None

    @classmethod
    def from_company(cls, company: Company, match: MatchSource | None = None) -> "CompanyDTO":
        return cls(
            **company.model_dump(exclude={"embedding"}),
            match=match.value if match else None,
        )


class SearchResponse(BaseModel):
    """Ordered search results."""

    query: str
    total: int
    semantic_enabled: bool
    warnings: list[str] = []
    results: list[CompanyDTO]
    search_time_ms: float


class FilterOptionsResponse(BaseModel):
    categories: list[str]
    cohorts: list[str]
    locations: list[str]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/search", response_model=SearchResponse)
async def search_companies(
    request: SearchRequest,
    service: CompanySearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Hybrid search over the portfolio.

    Embedding failures degrade to keyword-only scoring and are reported in
    `warnings`; they never fail the request.
    """
    start_time = time.perf_counter()

    outcome = await service.asearch(
        request.query,
        request.filters,
        sort_by=request.sort_by,
        order=request.sort_order,
    )
    if outcome.warnings:
        logger.warning("Search degraded for %r: %s", request.query, "; ".join(outcome.warnings))

    return SearchResponse(
        query=outcome.query,
        total=outcome.total,
        semantic_enabled=outcome.semantic_enabled,
        warnings=outcome.warnings,
        results=[CompanyDTO.from_company(c, outcome.sources.get(c.id)) for c in outcome.results],
        search_time_ms=(time.perf_counter() - start_time) * 1000,
    )


@router.get("/companies", response_model=list[CompanyDTO])
async def list_companies(
    category: str | None = None,
    cohort: str | None = None,
    location: str | None = None,
    podcast_only: bool = False,
    term: str | None = None,
    sort_by: str = "name",
    sort_order: SortOrder = SortOrder.ASC,
    service: CompanySearchService = Depends(get_search_service),
) -> list[CompanyDTO]:
    """Browse companies with filters, no scoring."""
    filters = FilterSet(category=category, cohort=cohort, location=location, podcast_only=podcast_only, term=term)
    companies = service.browse(filters, sort_by=sort_by, order=sort_order)
    return [CompanyDTO.from_company(c) for c in companies]


@router.get("/filters", response_model=FilterOptionsResponse)
async def filter_options(
    service: CompanySearchService = Depends(get_search_service),
) -> FilterOptionsResponse:
    """Distinct values for the filter dropdowns."""
    options = service.filter_options()
    return FilterOptionsResponse(
        categories=options["category"],
        cohorts=options["cohort"],
        locations=options["location"],
    )
