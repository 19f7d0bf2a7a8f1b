"""
Company schemas for seedsearch.

The dataset snapshot uses camelCase keys for link fields; both the aliases
and the field names are accepted on input.
"""

import logging
from numbers import Real
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class Company(BaseModel):
    """
    A portfolio company.

    `similarity` is only set on copies returned by a search; the loaded
    dataset always has it as None.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    website: str = ""
    description: str = ""
    category: str = ""
    cohort: str = ""
    location: str = ""
    tags: list[str] = Field(default_factory=list)

    crunchbase_link: str = Field("", alias="crunchbaseLink")
    google_search_link: str = Field("", alias="googleSearchLink")
    has_podcast_content: bool = Field(False, alias="hasStartupsForRestOfUsContent")
    podcast_search_link: str | None = Field(None, alias="startupsForRestOfUsSearchLink")

    similarity: float | None = None
    embedding: list[float] | None = Field(None, repr=False)

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v

    @field_validator(
        "name", "website", "description", "category", "cohort", "location",
        "crunchbase_link", "google_search_link", mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if isinstance(v, (list, tuple, set)):
            return [str(t) for t in v if t is not None and str(t).strip()]
        return []

    @field_validator("has_podcast_content", mode="before")
    @classmethod
    def _none_to_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("embedding", mode="before")
    @classmethod
    def _coerce_embedding(cls, v: Any) -> list[float] | None:
        if v is None:
            return None
        if hasattr(v, "tolist"):
            v = v.tolist()
        if not isinstance(v, (list, tuple)) or not v:
            return None
        if not all(isinstance(x, Real) and not isinstance(x, bool) for x in v):
            logger.debug("Dropping malformed embedding (%d items)", len(v))
            return None
        return [float(x) for x in v]

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def with_similarity(self, score: float | None) -> "Company":
        """Copy of this company carrying a per-search score."""
        return self.model_copy(update={"similarity": score})

    def full_text(self) -> str:
        """Name, description, category and tags joined for broad matching."""
        return " ".join(p for p in (self.name, self.description, self.category, *self.tags) if p)


class CompanyBatch(BaseModel):
    """Validated dataset snapshot plus import metadata."""

    companies: list[Company] = Field(default_factory=list)
    source_file: str | None = None
    embedding_dimension: int | None = None
    skipped_rows: int = 0
    dropped_embeddings: int = 0

    @property
    def count(self) -> int:
        return len(self.companies)

    @property
    def with_embeddings(self) -> int:
        return sum(1 for c in self.companies if c.has_embedding)


class FilterSet(BaseModel):
    """Conjunctive filter selections. Blank strings mean "no filter"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str | None = None
    cohort: str | None = None
    location: str | None = None
    podcast_only: bool = Field(False, alias="showPodcastOnly")
    term: str | None = None

    @field_validator("category", "cohort", "location", "term", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("podcast_only", mode="before")
    @classmethod
    def _podcast_none(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def is_empty(self) -> bool:
        return not (self.category or self.cohort or self.location or self.podcast_only or self.term)
