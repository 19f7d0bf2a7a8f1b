"""
Pytest configuration and shared fixtures for seedsearch tests.
"""

import json
import math
from pathlib import Path
from typing import Any

import pytest

from seedsearch.catalog.schemas import Company
from tests.stubs import FailingEmbedder, StubEmbedder


# =============================================================================
# Embedding Stubs
# =============================================================================


@pytest.fixture
def stub_embedder() -> StubEmbedder:
    return StubEmbedder()


@pytest.fixture
def failing_embedder() -> FailingEmbedder:
    return FailingEmbedder()


@pytest.fixture
def near_outreach_vector() -> list[float]:
    """Unit vector with cosine 0.9 to the Outboundly embedding."""
    return [0.9, math.sqrt(1 - 0.81), 0.0]


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_company_dicts() -> list[dict[str, Any]]:
    """Companies in dataset (camelCase) form with 3-dim embeddings."""
    return [
        {
            "id": "1",
            "name": "Outboundly",
            "description": "Helps teams manage cold outreach",
            "category": "Sales",
            "website": "https://outboundly.example.com",
            "cohort": "Fall 2021",
            "location": "Austin, TX",
            "tags": ["sales", "email"],
            "crunchbaseLink": "https://crunchbase.example.com/outboundly",
            "googleSearchLink": "https://google.example.com/?q=outboundly",
            "hasStartupsForRestOfUsContent": True,
            "startupsForRestOfUsSearchLink": "https://podcast.example.com/?s=outboundly",
            "embedding": [1.0, 0.0, 0.0],
        },
        {
            "id": "2",
            "name": "Shelfwise",
            "description": "Inventory forecasting for ecommerce brands",
            "category": "E-commerce",
            "website": "https://shelfwise.example.com",
            "cohort": "Spring 2022",
            "location": "Denver, CO",
            "tags": ["ecommerce", "inventory"],
            "hasStartupsForRestOfUsContent": False,
            "embedding": [0.0, 1.0, 0.0],
        },
        {
            "id": "3",
            "name": "Keyhold",
            "description": "Property management software for residential landlords",
            "category": "Real Estate",
            "website": "https://keyhold.example.com",
            "cohort": "Fall 2021",
            "location": "Remote",
            "tags": ["proptech"],
            "embedding": [0.0, 0.0, 1.0],
        },
        {
            "id": "4",
            "name": "Cobalt Intelligence",
            "description": "Business verification data for lenders and property management",
            "category": "Fintech",
            "website": "https://cobalt.example.com",
            "cohort": "Spring 2022",
            "location": "Boise, ID",
            "tags": ["data"],
            "embedding": [0.0, 0.0, 1.0],
        },
        {
            "id": "5",
            "name": "Rosterly",
            "description": "Human resources scheduling for hourly workforce",
            "category": "HR",
            "website": "https://rosterly.example.com",
            "cohort": "Americas 2023",
            "location": "Austin, TX",
            "tags": ["hr", "scheduling"],
            "hasStartupsForRestOfUsContent": True,
        },
        {
            "id": "6",
            "name": "Hirewell",
            "description": "Lightweight hr tools for small teams",
            "category": "HR",
            "website": "https://hirewell.example.com",
            "cohort": "Fall 2021",
            "location": "Toronto, Canada",
            "tags": None,
        },
    ]


@pytest.fixture
def sample_companies(sample_company_dicts: list[dict]) -> list[Company]:
    return [Company.model_validate(d) for d in sample_company_dicts]


@pytest.fixture
def sample_json_file(tmp_path: Path, sample_company_dicts: list[dict]) -> Path:
    path = tmp_path / "companies.json"
    path.write_text(json.dumps(sample_company_dicts), encoding="utf-8")
    return path


@pytest.fixture
def sample_terms_file(tmp_path: Path) -> Path:
    path = tmp_path / "search_terms.yaml"
    path.write_text(
        """
synonyms:
  crm: [crm, customer relationship, pipeline]
exclusions:
  - term: crm
    names: [Outboundly]
""",
        encoding="utf-8",
    )
    return path
