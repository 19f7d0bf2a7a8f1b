"""
Exception hierarchy for seedsearch.

SeedSearchError (base)
├── DimensionMismatchError   vectors of unequal length
├── EmbeddingUnavailableError  provider failure / timeout / bad response
├── InvalidInputError        rejected at the pipeline or API boundary
├── DatasetError             dataset file missing or invalid
└── SearchTermsError         synonym / exclusion table malformed
"""


class SeedSearchError(Exception):
    """Base exception for all seedsearch errors."""


class DimensionMismatchError(SeedSearchError, ValueError):
    """Raised when two vectors of different length are compared."""

    def __init__(self, left: int, right: int):
        self.left, self.right = left, right
        super().__init__(f"Vector dimensions differ: {left} != {right}")


class EmbeddingUnavailableError(SeedSearchError):
    """Embedding provider failed, timed out or returned a malformed vector."""


class InvalidInputError(SeedSearchError, ValueError):
    """Input rejected before any scoring work begins."""


class DatasetError(SeedSearchError):
    """Company dataset could not be loaded."""


class SearchTermsError(SeedSearchError):
    """Synonym or exclusion configuration could not be parsed."""
