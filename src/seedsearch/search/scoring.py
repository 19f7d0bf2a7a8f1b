"""Relevance Scoring for seedsearch."""

import logging
from dataclasses import dataclass

from seedsearch.core.exceptions import DimensionMismatchError
from seedsearch.search.models import FusionTier, ScoreBreakdown
from seedsearch.search.vector import VectorLike, cosine_similarity

logger = logging.getLogger(__name__)

@dataclass(slots=True, frozen=True)
class ScoringWeights:
    """Immutable constants for tiered lexical/semantic fusion."""
    strong_text_threshold: float = 0.8
    strong_semantic_boost: float = 0.2
    partial_text_weight: float = 0.7
    partial_semantic_weight: float = 0.3
    semantic_only_weight: float = 0.8

DEFAULT_WEIGHTS = ScoringWeights()


def text_match_score(query: str, text: str) -> float:
    """
    Lexical score in [0, 1].

    1.0 when the whole query is a substring of the text. Otherwise the share
    of query words that contain, or are contained in, some text word.
    """
    q, t = query.strip().lower(), text.lower()
    if not q:
        return 0.0
    if q in t:
        return 1.0

    query_words, text_words = q.split(), t.split()
    if not query_words:
        return 0.0
    matched = sum(1 for w in query_words if any(w in tw or tw in w for tw in text_words))
    return matched / len(query_words)


class RelevanceScorer:
    """Fuses a lexical score with embedding similarity for one query/text pair."""

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or DEFAULT_WEIGHTS

    def semantic_score(self, query_embedding: VectorLike | None, record_embedding: VectorLike | None) -> float:
        if query_embedding is None or record_embedding is None:
            return 0.0
        if len(query_embedding) == 0 or len(record_embedding) == 0:
            return 0.0
        try:
            similarity = cosine_similarity(query_embedding, record_embedding)
        except DimensionMismatchError as e:
            logger.debug("Ignoring embedding: %s", e)
            return 0.0
        return min(1.0, max(0.0, similarity))

    def fuse(self, text_score: float, semantic_score: float) -> tuple[float, FusionTier]:
        w = self.weights
        if text_score >= w.strong_text_threshold:
            return min(1.0, text_score + w.strong_semantic_boost * semantic_score), FusionTier.STRONG_TEXT
        if text_score > 0:
            return w.partial_text_weight * text_score + w.partial_semantic_weight * semantic_score, FusionTier.PARTIAL_TEXT
        return w.semantic_only_weight * semantic_score, FusionTier.SEMANTIC_ONLY

    def score_detail(self, query: str, text: str, query_embedding: VectorLike | None = None,
                     record_embedding: VectorLike | None = None) -> ScoreBreakdown:
        text_score = text_match_score(query, text or "")
        semantic = self.semantic_score(query_embedding, record_embedding)
        final, tier = self.fuse(text_score, semantic)
        return ScoreBreakdown(text_score, semantic, final, tier)

    def score(self, query: str, text: str, query_embedding: VectorLike | None = None,
              record_embedding: VectorLike | None = None) -> float:
        return self.score_detail(query, text, query_embedding, record_embedding).final_score
