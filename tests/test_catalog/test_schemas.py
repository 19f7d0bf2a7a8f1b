"""Tests for Company and FilterSet schemas."""

import numpy as np
import pytest
from pydantic import ValidationError

from seedsearch.catalog.schemas import Company, FilterSet


class TestCompany:
    """Tests for the Company model."""

    def test_camel_case_aliases(self, sample_company_dicts):
        company = Company.model_validate(sample_company_dicts[0])

        assert company.crunchbase_link == "https://crunchbase.example.com/outboundly"
        assert company.has_podcast_content is True
        assert company.podcast_search_link.endswith("outboundly")

    def test_field_names_accepted(self):
        company = Company(id="1", has_podcast_content=True, crunchbase_link="x")

        assert company.has_podcast_content
        assert company.crunchbase_link == "x"

    def test_missing_fields_default_to_empty(self):
        company = Company.model_validate({"id": 7, "description": None, "tags": None})

        assert company.id == "7"
        assert company.description == ""
        assert company.category == ""
        assert company.tags == []
        assert company.similarity is None
        assert not company.has_embedding

    def test_tags_from_string(self):
        company = Company(id="1", tags="sales, email,,crm")

        assert company.tags == ["sales", "email", "crm"]

    @pytest.mark.parametrize("bad", ["not a vector", [], ["a", "b"], [True, False], {"x": 1}])
    def test_malformed_embedding_dropped(self, bad):
        assert Company(id="1", embedding=bad).embedding is None

    def test_numpy_embedding_accepted(self):
        company = Company(id="1", embedding=np.array([0.5, 0.25]))

        assert company.embedding == [0.5, 0.25]

    def test_id_required(self):
        with pytest.raises(ValidationError):
            Company.model_validate({"name": "Nameless"})

    def test_frozen(self):
        company = Company(id="1")
        with pytest.raises(ValidationError):
            company.name = "changed"

    def test_with_similarity_copies(self):
        company = Company(id="1", name="A")
        scored = company.with_similarity(0.7)

        assert scored.similarity == 0.7
        assert company.similarity is None

    def test_full_text(self, sample_companies):
        text = sample_companies[0].full_text()

        assert text == "Outboundly Helps teams manage cold outreach Sales sales email"


class TestFilterSet:
    """Tests for FilterSet."""

    def test_empty(self):
        assert FilterSet().is_empty

    def test_blank_strings_are_no_filter(self):
        assert FilterSet(category="  ", location="").is_empty

    def test_original_podcast_key(self):
        assert FilterSet.model_validate({"showPodcastOnly": True}).podcast_only

    def test_podcast_none(self):
        assert FilterSet.model_validate({"podcast_only": None}).podcast_only is False
