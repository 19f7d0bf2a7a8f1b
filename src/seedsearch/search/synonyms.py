"""
Synonym and exclusion tables for the relevance gate.

Both tables are curated data. Defaults live in seedsearch.core.constants and
can be replaced by a YAML file of the form:

    synonyms:
      ecommerce: [ecommerce, e-commerce, online store]
    exclusions:
      - term: real estate
        names: [cobalt intelligence]
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from seedsearch.core.constants import DEFAULT_EXCLUSIONS, DEFAULT_SYNONYMS
from seedsearch.core.exceptions import SearchTermsError

logger = logging.getLogger(__name__)


class SynonymExpander:
    """Exact-key lookup from a lowercase term to its equivalence class."""

    def __init__(self, table: Mapping[str, Iterable[str]] | None = None):
        source = DEFAULT_SYNONYMS if table is None else table
        self._table: dict[str, frozenset[str]] = {
            str(k).strip().lower(): frozenset(str(t).strip().lower() for t in v if str(t).strip())
            for k, v in source.items()
        }

    def expand(self, term: str) -> frozenset[str]:
        return self._table.get(term.strip().lower(), frozenset())

    def __contains__(self, term: str) -> bool:
        return term.strip().lower() in self._table

    def __len__(self) -> int:
        return len(self._table)


@dataclass(slots=True, frozen=True)
class ExclusionRule:
    term: str
    names: frozenset[str]

    def applies(self, query_text: str, company_name: str) -> bool:
        return self.term in query_text and company_name.strip().lower() in self.names


class ExclusionList:
    """Named companies kept out of primary results for queries containing a term."""

    def __init__(self, rules: Mapping[str, Iterable[str]] | Iterable[ExclusionRule] | None = None):
        if rules is None:
            rules = DEFAULT_EXCLUSIONS
        if isinstance(rules, Mapping):
            rules = [
                ExclusionRule(str(term).strip().lower(), frozenset(str(n).strip().lower() for n in names))
                for term, names in rules.items()
            ]
        self.rules: list[ExclusionRule] = list(rules)

    def is_excluded(self, query_text: str, company_name: str) -> bool:
        return any(rule.applies(query_text, company_name) for rule in self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def _parse_exclusions(data: Any, source: Path) -> list[ExclusionRule]:
    if isinstance(data, dict):
        data = [{"term": k, "names": v} for k, v in data.items()]
    if not isinstance(data, list):
        raise SearchTermsError(f"'exclusions' must be a list or mapping in {source}")

    rules = []
    for entry in data:
        if not isinstance(entry, dict) or "term" not in entry:
            raise SearchTermsError(f"Invalid exclusion entry in {source}: {entry!r}")
        names = entry.get("names") or []
        if isinstance(names, str):
            names = [names]
        rules.append(ExclusionRule(str(entry["term"]).strip().lower(), frozenset(str(n).strip().lower() for n in names)))
    return rules


def load_search_terms(path: Path) -> tuple[SynonymExpander, ExclusionList]:
    """
    Load synonym and exclusion tables from YAML.

    A missing section falls back to the built-in defaults.

    Raises:
        SearchTermsError: If the file is unreadable or malformed
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise SearchTermsError(f"Failed to load {path}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise SearchTermsError(f"Unexpected format in {path}")

    synonyms = data.get("synonyms")
    if synonyms is not None and not isinstance(synonyms, dict):
        raise SearchTermsError(f"'synonyms' must be a mapping in {path}")
    if synonyms and not all(isinstance(v, list) for v in synonyms.values()):
        raise SearchTermsError(f"Every synonym entry must be a list in {path}")

    expander = SynonymExpander(synonyms)
    exclusions = ExclusionList(_parse_exclusions(data["exclusions"], path)) if data.get("exclusions") is not None else ExclusionList()

    logger.info("Loaded %d synonym classes and %d exclusion rules from %s", len(expander), len(exclusions), path)
    return expander, exclusions


def resolve_search_terms(path: Path | str | None) -> tuple[SynonymExpander, ExclusionList]:
    """YAML tables if `path` exists, otherwise the defaults."""
    if path is not None and Path(path).is_file():
        return load_search_terms(Path(path))
    if path is not None:
        logger.warning("Search terms file %s not found, using built-in tables", path)
    return SynonymExpander(), ExclusionList()
