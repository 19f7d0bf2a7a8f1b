import logging
from dataclasses import dataclass, field
from enum import Enum

from seedsearch.catalog.schemas import Company

logger = logging.getLogger(__name__)

class FusionTier(str, Enum):
    STRONG_TEXT = "strong_text"; PARTIAL_TEXT = "partial_text"; SEMANTIC_ONLY = "semantic_only"

class SearchableText(str, Enum):
    DESCRIPTION = "description"; FULL = "full"

class MatchSource(str, Enum):
    PRIMARY = "primary"; FALLBACK = "fallback"

@dataclass(slots=True, frozen=True)
class SearchQuery:
    raw: str
    text: str
    words: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, raw: str) -> "SearchQuery":
        text = raw.strip().lower()
        return cls(raw=raw, text=text, words=tuple(text.split()))

    @property
    def is_blank(self) -> bool: return not self.text

    def keywords(self, min_length: int) -> list[str]:
        return [w for w in self.words if len(w) >= min_length]

@dataclass(slots=True, frozen=True)
class ScoreBreakdown:
    text_score: float
    semantic_score: float
    final_score: float
    tier: FusionTier

@dataclass(slots=True)
class SearchOutcome:
    query: str
    results: list[Company] = field(default_factory=list)
    semantic_enabled: bool = False
    primary_count: int = 0
    fallback_count: int = 0
    sources: dict[str, MatchSource] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    @property
    def total(self) -> int: return len(self.results)
