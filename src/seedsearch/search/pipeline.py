"""
Search Pipeline for seedsearch.

Scores every company against a query with lexical + semantic fusion, keeps
the ones that pass the relevance gate, adds exact-phrase fallbacks and
applies the filter set.
"""

import asyncio
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Any

import numpy as np

from seedsearch.catalog.schemas import Company, FilterSet
from seedsearch.catalog.sorting import filter_companies
from seedsearch.core.constants import MAX_QUERY_CHARS
from seedsearch.core.exceptions import EmbeddingUnavailableError, InvalidInputError
from seedsearch.search.models import MatchSource, SearchableText, SearchOutcome, SearchQuery
from seedsearch.search.scoring import RelevanceScorer
from seedsearch.search.synonyms import ExclusionList, SynonymExpander
from seedsearch.search.vector import EmbeddingProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class GateSettings:
    """Primary-set admission: score floor plus keyword corroboration."""
    min_similarity: float = 0.4
    min_keyword_length: int = 3


DEFAULT_GATE = GateSettings()


def validate_query(query: Any, max_chars: int = MAX_QUERY_CHARS) -> SearchQuery:
    """
    Boundary check for a raw query.

    Raises:
        InvalidInputError: If the query is not a string or is too long
    """
    if not isinstance(query, str):
        raise InvalidInputError(f"Query must be a string, got {type(query).__name__}")
    if len(query.strip()) > max_chars:
        raise InvalidInputError(f"Query too long. Maximum {max_chars} characters allowed.")
    return SearchQuery.from_text(query)


def _check_vector(vector: Any) -> list[float]:
    try:
        arr = np.asarray(vector, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise EmbeddingUnavailableError(f"Invalid embedding response format: {e}") from e
    if arr.ndim != 1 or arr.size == 0 or not np.all(np.isfinite(arr)):
        raise EmbeddingUnavailableError("Invalid embedding response format")
    return arr.tolist()


def dataset_dimension(companies: Sequence[Company]) -> int | None:
    """Embedding length of the first company that has one."""
    return next((len(c.embedding) for c in companies if c.embedding), None)


class SearchPipeline:
    """
    Query -> scored, gated, filtered candidate list.

    Steps:
    1. Normalise and validate the query
    2. Fetch the query embedding (optional, failures degrade to lexical-only)
    3. Score every company on its searchable text (description, or name +
       description + category + tags)
    4. Relevance gate: score floor + keyword/synonym match, minus exclusions
    5. Exact-phrase fallback for the rest
    6. Filter
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider | None = None,
        scorer: RelevanceScorer | None = None,
        synonyms: SynonymExpander | None = None,
        exclusions: ExclusionList | None = None,
        gate: GateSettings | None = None,
        embedding_timeout: float | None = 5.0,
        max_query_chars: int = MAX_QUERY_CHARS,
        searchable_text: SearchableText | str = SearchableText.DESCRIPTION,
    ):
        self.embeddings = embedding_provider
        self.scorer = scorer or RelevanceScorer()
        self.synonyms = synonyms if synonyms is not None else SynonymExpander()
        self.exclusions = exclusions if exclusions is not None else ExclusionList()
        self.gate = gate or DEFAULT_GATE
        self.embedding_timeout = embedding_timeout
        self.max_query_chars = max_query_chars
        self.searchable_text = SearchableText(searchable_text)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def search(self, companies: Sequence[Company], query: str, filters: FilterSet | None = None) -> list[Company]:
        return self.run(companies, query, filters).results

    def run(self, companies: Sequence[Company], query: str, filters: FilterSet | None = None) -> SearchOutcome:
        q = validate_query(query, self.max_query_chars)
        if q.is_blank:
            return self._unscored(companies, q, filters)

        warnings: list[str] = []
        embedding = self._embed_sync(q, warnings)
        return self._rank(companies, q, filters, embedding, warnings)

    async def asearch(self, companies: Sequence[Company], query: str, filters: FilterSet | None = None) -> list[Company]:
        return (await self.arun(companies, query, filters)).results

    async def arun(self, companies: Sequence[Company], query: str, filters: FilterSet | None = None) -> SearchOutcome:
        q = validate_query(query, self.max_query_chars)
        if q.is_blank:
            return self._unscored(companies, q, filters)

        warnings: list[str] = []
        embedding = await self._embed_async(q, warnings)
        return self._rank(companies, q, filters, embedding, warnings)

    # -------------------------------------------------------------------------
    # Embedding round-trip
    # -------------------------------------------------------------------------

    def _embed_sync(self, q: SearchQuery, warnings: list[str]) -> list[float] | None:
        if self.embeddings is None:
            return None
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self.embeddings.embed, q.text)
            return _check_vector(future.result(timeout=self.embedding_timeout))
        except FutureTimeout:
            return self._degrade(warnings, f"Embedding timed out after {self.embedding_timeout}s")
        except (EmbeddingUnavailableError, InvalidInputError) as e:
            return self._degrade(warnings, str(e))
        except Exception as e:
            return self._degrade(warnings, f"Embedding provider failed: {e}")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    async def _embed_async(self, q: SearchQuery, warnings: list[str]) -> list[float] | None:
        if self.embeddings is None:
            return None
        try:
            vector = await asyncio.wait_for(asyncio.to_thread(self.embeddings.embed, q.text), timeout=self.embedding_timeout)
            return _check_vector(vector)
        except asyncio.TimeoutError:
            return self._degrade(warnings, f"Embedding timed out after {self.embedding_timeout}s")
        except (EmbeddingUnavailableError, InvalidInputError) as e:
            return self._degrade(warnings, str(e))
        except Exception as e:
            return self._degrade(warnings, f"Embedding provider failed: {e}")

    @staticmethod
    def _degrade(warnings: list[str], message: str) -> None:
        logger.warning("Semantic scoring disabled for this query: %s", message)
        warnings.append(message)
        return None

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    def _unscored(self, companies: Sequence[Company], q: SearchQuery, filters: FilterSet | None) -> SearchOutcome:
        results = filter_companies((c.with_similarity(None) for c in companies), filters)
        return SearchOutcome(query=q.text, results=results)

    def text_of(self, company: Company) -> str:
        if self.searchable_text is SearchableText.FULL:
            return company.full_text()
        return company.description

    def has_keyword_match(self, q: SearchQuery, text: str) -> bool:
        """True if a long-enough query word, or one of its synonyms, occurs in the text."""
        text = text.lower()
        for word in q.keywords(self.gate.min_keyword_length):
            if word in text:
                return True
            synonyms = self.synonyms.expand(word) or self.synonyms.expand(q.text)
            if any(s in text for s in synonyms):
                return True
        return False

    def passes_gate(self, q: SearchQuery, company: Company) -> bool:
        if company.similarity is None or company.similarity < self.gate.min_similarity:
            return False
        if self.exclusions.is_excluded(q.text, company.name):
            logger.debug("Excluded %s for query '%s'", company.name, q.text)
            return False
        return self.has_keyword_match(q, self.text_of(company))

    def _rank(
        self,
        companies: Sequence[Company],
        q: SearchQuery,
        filters: FilterSet | None,
        query_embedding: list[float] | None,
        warnings: list[str],
    ) -> SearchOutcome:
        dimension = dataset_dimension(companies)
        if query_embedding is not None and dimension is not None and len(query_embedding) != dimension:
            query_embedding = self._degrade(
                warnings, f"Query embedding has {len(query_embedding)} dimensions, dataset uses {dimension}"
            )

        scored = [
            c.with_similarity(self.scorer.score(q.text, self.text_of(c), query_embedding, c.embedding))
            for c in companies
        ]

        primary: list[Company] = []
        fallback: list[Company] = []
        seen: set[str] = set()
        for c in scored:
            if c.id not in seen and self.passes_gate(q, c):
                primary.append(c)
                seen.add(c.id)
        # primary scores win; fallback only adds companies not seen yet
        for c in scored:
            if c.id not in seen and q.text in self.text_of(c).lower():
                fallback.append(c)
                seen.add(c.id)

        sources = {c.id: MatchSource.PRIMARY for c in primary}
        sources.update((c.id, MatchSource.FALLBACK) for c in fallback)

        results = filter_companies(primary + fallback, filters)
        logger.debug("Query '%s': %d primary, %d fallback, %d after filters", q.text, len(primary), len(fallback), len(results))

        return SearchOutcome(
            query=q.text,
            results=results,
            semantic_enabled=query_embedding is not None,
            primary_count=len(primary),
            fallback_count=len(fallback),
            sources={c.id: sources[c.id] for c in results},
            warnings=warnings,
        )
