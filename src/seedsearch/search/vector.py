"""
Vector Module (Dense Side).
Cosine similarity helpers and the sentence-transformers embedding provider.
"""
import logging
import threading
from collections.abc import Sequence
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

import numpy as np

from seedsearch.core.config import get_settings
from seedsearch.core.constants import MAX_QUERY_CHARS
from seedsearch.core.exceptions import DimensionMismatchError, EmbeddingUnavailableError, InvalidInputError

logger = logging.getLogger(__name__)

VectorLike = Sequence[float] | np.ndarray


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine of the angle between two vectors.

    Returns 0.0 for empty or zero-magnitude input. Negative values are
    returned as-is; clamping is up to the caller.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatchError(va.shape[0], vb.shape[0])
    if va.shape[0] == 0:
        return 0.0

    magnitude = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if magnitude == 0.0:
        return 0.0
    return float(np.dot(va, vb) / magnitude)


def normalize(v: VectorLike) -> np.ndarray:
    """Scale to unit length; zero vectors come back unchanged."""
    arr = np.asarray(v, dtype=np.float64)
    magnitude = float(np.linalg.norm(arr))
    return arr if magnitude == 0.0 else arr / magnitude


def batch_similarity(query: VectorLike, candidates: Sequence[VectorLike]) -> list[float]:
    """cosine_similarity of `query` against each candidate, in input order."""
    return [cosine_similarity(query, c) for c in candidates]


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Anything that turns text into a fixed-length vector."""

    def embed(self, text: str) -> Sequence[float]: ...


class EmbeddingService:
    """Local sentence-transformers embedder with a per-text cache."""

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        device: str = "cpu",
        max_chars: int = MAX_QUERY_CHARS,
    ):
        self.model_name = model_name
        self.device = device
        self.max_chars = max_chars
        self._model = None
        self._model_lock = threading.Lock()
        self._cache: dict[str, list[float]] = {}

    @property
    def model(self) -> Any:
        if self._model is not None:
            return self._model
        with self._model_lock:
            if self._model is None:
                logger.info("Loading embedding model: %s", self.model_name)
                try:
                    from sentence_transformers import SentenceTransformer
                    self._model = SentenceTransformer(self.model_name, device=self.device)
                except Exception as e:
                    raise EmbeddingUnavailableError(f"Failed to load embedding model {self.model_name}: {e}") from e
        return self._model

    def validate_text(self, text: Any) -> str:
        if not isinstance(text, str):
            raise InvalidInputError("Text parameter is required and must be a string")
        text = text.strip()
        if not text:
            raise InvalidInputError("Text parameter is required and must not be empty")
        if len(text) > self.max_chars:
            raise InvalidInputError(f"Text too long. Maximum {self.max_chars} characters allowed.")
        return text

    def embed(self, text: str) -> list[float]:
        text = self.validate_text(text)
        if text in self._cache:
            return self._cache[text]

        model = self.model
        try:
            vector = model.encode([text], convert_to_numpy=True, normalize_embeddings=True)[0]
        except Exception as e:
            raise EmbeddingUnavailableError(f"Failed to generate embedding: {e}") from e

        embedding = [float(x) for x in np.asarray(vector).ravel()]
        self._cache[text] = embedding
        return embedding

    def is_available(self) -> bool:
        try:
            self.model
        except EmbeddingUnavailableError as e:
            logger.warning("Embedding model unavailable: %s", e)
            return False
        return True

    def clear_cache(self) -> None:
        self._cache.clear()


@lru_cache
def get_embedding_service() -> EmbeddingService:
    s = get_settings()
    return EmbeddingService(model_name=s.embedding_model, device=s.embedding_device, max_chars=s.embedding_max_chars)
