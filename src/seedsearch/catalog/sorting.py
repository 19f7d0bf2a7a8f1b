"""
Sort / filter / grouping helpers over company collections.

Used both on the raw dataset (browse mode) and on search results.
Missing values sort as the smallest value: first ascending, last descending.
"""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from functools import cmp_to_key
from numbers import Real
from typing import Any

from seedsearch.catalog.schemas import Company, FilterSet
from seedsearch.core.constants import UNKNOWN_GROUP
from seedsearch.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


SIMILARITY_KEY = "similarity"
SORTABLE_FIELDS: frozenset[str] = frozenset(
    name for name in Company.model_fields if name != "embedding"
)


def _field_value(company: Company, key: str) -> Any:
    if key == SIMILARITY_KEY:
        return company.similarity if company.similarity is not None else 0.0
    return getattr(company, key)


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def _as_text(v: Any) -> str:
    if isinstance(v, (list, tuple)):
        return ", ".join(str(x) for x in v).casefold()
    return str(v).casefold()


def _compare(a: Any, b: Any) -> int:
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    sa, sb = _as_text(a), _as_text(b)
    return (sa > sb) - (sa < sb)


def sort_companies(
    companies: Iterable[Company],
    key: str = SIMILARITY_KEY,
    order: SortOrder | str = SortOrder.DESC,
) -> list[Company]:
    """
    Sort by a Company field with type-aware comparison.

    Strings compare case-insensitively, numbers numerically, lists by their
    joined lowercase text. The sort is stable, and descending order is the
    exact reverse of ascending order when keys are distinct.

    Raises:
        InvalidInputError: If `key` or `order` is unknown
    """
    if key not in SORTABLE_FIELDS:
        raise InvalidInputError(f"Cannot sort by '{key}'. Sortable fields: {', '.join(sorted(SORTABLE_FIELDS))}")
    try:
        order = SortOrder(order)
    except ValueError as e:
        raise InvalidInputError(f"Sort order must be 'asc' or 'desc', got {order!r}") from e

    cmp = cmp_to_key(lambda x, y: _compare(_field_value(x, key), _field_value(y, key)))
    return sorted(companies, key=cmp, reverse=order is SortOrder.DESC)


def default_sort(query: str | None) -> tuple[str, SortOrder]:
    """Relevance order for a real query, alphabetical otherwise."""
    if query and query.strip():
        return SIMILARITY_KEY, SortOrder.DESC
    return "name", SortOrder.ASC


def matches_filters(company: Company, filters: FilterSet) -> bool:
    if filters.category and company.category != filters.category:
        return False
    if filters.cohort and company.cohort != filters.cohort:
        return False
    if filters.location and filters.location.lower() not in company.location.lower():
        return False
    if filters.term:
        term = filters.term.lower()
        fields = [company.name, company.description, *company.tags, company.category, company.location]
        if not any(term in f.lower() for f in fields):
            return False
    if filters.podcast_only and not company.has_podcast_content:
        return False
    return True


def filter_companies(companies: Iterable[Company], filters: FilterSet | None = None) -> list[Company]:
    """Keep companies matching every set criterion, in input order."""
    if filters is None or filters.is_empty:
        return list(companies)
    return [c for c in companies if matches_filters(c, filters)]


def unique_values(companies: Iterable[Company], field: str) -> list[str]:
    """Distinct non-empty values of `field`, list fields flattened, sorted."""
    if field not in SORTABLE_FIELDS:
        raise InvalidInputError(f"Unknown field '{field}'")

    values: set[str] = set()
    for company in companies:
        value = getattr(company, field)
        if not value:
            continue
        items: Sequence[Any] = value if isinstance(value, (list, tuple)) else [value]
        values.update(str(v) for v in items if v is not None)
    return sorted(values)


def group_by_field(companies: Iterable[Company], field: str) -> dict[str, list[Company]]:
    if field not in SORTABLE_FIELDS:
        raise InvalidInputError(f"Unknown field '{field}'")

    groups: dict[str, list[Company]] = {}
    for company in companies:
        value = getattr(company, field)
        groups.setdefault(str(value) if value else UNKNOWN_GROUP, []).append(company)
    return groups
