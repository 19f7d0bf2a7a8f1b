"""
Search module for seedsearch.

Hybrid lexical + embedding search over the portfolio-company dataset.
"""

from seedsearch.search.models import (
    FusionTier,
    MatchSource,
    ScoreBreakdown,
    SearchOutcome,
    SearchableText,
    SearchQuery,
)
from seedsearch.search.pipeline import DEFAULT_GATE, GateSettings, SearchPipeline, validate_query
from seedsearch.search.scoring import DEFAULT_WEIGHTS, RelevanceScorer, ScoringWeights, text_match_score
from seedsearch.search.service import CompanySearchService, create_search_service
from seedsearch.search.synonyms import (
    ExclusionList,
    ExclusionRule,
    SynonymExpander,
    load_search_terms,
    resolve_search_terms,
)
from seedsearch.search.vector import (
    EmbeddingProvider,
    EmbeddingService,
    batch_similarity,
    cosine_similarity,
    get_embedding_service,
    normalize,
)

__all__ = [
    # Models
    "FusionTier",
    "MatchSource",
    "ScoreBreakdown",
    "SearchOutcome",
    "SearchableText",
    "SearchQuery",
    # Vector
    "cosine_similarity",
    "normalize",
    "batch_similarity",
    "EmbeddingProvider",
    "EmbeddingService",
    "get_embedding_service",
    # Scoring
    "RelevanceScorer",
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "text_match_score",
    # Synonyms
    "SynonymExpander",
    "ExclusionList",
    "ExclusionRule",
    "load_search_terms",
    "resolve_search_terms",
    # Pipeline
    "SearchPipeline",
    "GateSettings",
    "DEFAULT_GATE",
    "validate_query",
    # Service
    "CompanySearchService",
    "create_search_service",
]
