"""Tests for sort/filter/grouping utilities."""

import pytest

from seedsearch.catalog.schemas import Company, FilterSet
from seedsearch.catalog.sorting import (
    SortOrder,
    default_sort,
    filter_companies,
    group_by_field,
    sort_companies,
    unique_values,
)
from seedsearch.core.exceptions import InvalidInputError


def names(companies: list[Company]) -> list[str]:
    return [c.name for c in companies]


class TestSortCompanies:
    """Tests for sort_companies."""

    def test_strings_case_insensitive(self):
        companies = [Company(id="1", name="beta"), Company(id="2", name="Alpha"), Company(id="3", name="gamma")]

        assert names(sort_companies(companies, "name", SortOrder.ASC)) == ["Alpha", "beta", "gamma"]

    def test_descending_is_reverse_of_ascending(self, sample_companies):
        asc = sort_companies(sample_companies, "name", "asc")
        desc = sort_companies(sample_companies, "name", "desc")

        assert names(desc) == list(reversed(names(asc)))

    def test_numbers_numeric(self):
        companies = [Company(id=str(i), similarity=s) for i, s in enumerate([0.5, 0.05, 1.0])]

        result = sort_companies(companies, "similarity", SortOrder.DESC)

        assert [c.similarity for c in result] == [1.0, 0.5, 0.05]

    def test_missing_similarity_counts_as_zero(self):
        companies = [Company(id="a"), Company(id="b", similarity=0.3), Company(id="c", similarity=-0.1)]

        result = sort_companies(companies, "similarity", SortOrder.ASC)

        assert [c.id for c in result] == ["c", "a", "b"]

    def test_missing_values_first_ascending_last_descending(self):
        companies = [
            Company(id="a", podcast_search_link="https://b"),
            Company(id="b"),
            Company(id="c", podcast_search_link="https://a"),
        ]

        asc = sort_companies(companies, "podcast_search_link", SortOrder.ASC)
        desc = sort_companies(companies, "podcast_search_link", SortOrder.DESC)

        assert [c.id for c in asc] == ["b", "c", "a"]
        assert [c.id for c in desc] == ["a", "c", "b"]

    def test_lists_by_joined_text(self):
        companies = [Company(id="1", tags=["Saas", "b2b"]), Company(id="2", tags=["analytics"]), Company(id="3")]

        result = sort_companies(companies, "tags", SortOrder.ASC)

        assert [c.id for c in result] == ["3", "2", "1"]

    def test_stable_for_equal_keys(self):
        companies = [Company(id="1", cohort="Fall 2021"), Company(id="2", cohort="fall 2021"), Company(id="3", cohort="A")]

        result = sort_companies(companies, "cohort", SortOrder.ASC)

        assert [c.id for c in result] == ["3", "1", "2"]

    def test_unknown_key_raises(self, sample_companies):
        with pytest.raises(InvalidInputError):
            sort_companies(sample_companies, "embedding")
        with pytest.raises(InvalidInputError):
            sort_companies(sample_companies, "founders")

    def test_unknown_order_raises(self, sample_companies):
        with pytest.raises(InvalidInputError):
            sort_companies(sample_companies, "name", "sideways")

    def test_does_not_mutate_input(self, sample_companies):
        before = names(sample_companies)
        sort_companies(sample_companies, "name", SortOrder.DESC)

        assert names(sample_companies) == before


class TestDefaultSort:
    def test_query_sorts_by_relevance(self):
        assert default_sort("outreach") == ("similarity", SortOrder.DESC)

    def test_blank_query_sorts_by_name(self):
        assert default_sort("  ") == ("name", SortOrder.ASC)
        assert default_sort(None) == ("name", SortOrder.ASC)


class TestFilterCompanies:
    """Tests for filter_companies."""

    def test_category_exact(self, sample_companies):
        result = filter_companies(sample_companies, FilterSet(category="HR"))

        assert {c.category for c in result} == {"HR"}
        assert filter_companies(sample_companies, FilterSet(category="hr")) == []

    def test_cohort_exact(self, sample_companies):
        result = filter_companies(sample_companies, FilterSet(cohort="Spring 2022"))

        assert names(result) == ["Shelfwise", "Cobalt Intelligence"]

    def test_location_substring_case_insensitive(self, sample_companies):
        assert names(filter_companies(sample_companies, FilterSet(location="austin"))) == ["Outboundly", "Rosterly"]

    def test_podcast_only(self, sample_companies):
        assert names(filter_companies(sample_companies, FilterSet(podcast_only=True))) == ["Outboundly", "Rosterly"]

    def test_term_searches_several_fields(self, sample_companies):
        assert names(filter_companies(sample_companies, FilterSet(term="PROPTECH"))) == ["Keyhold"]
        assert names(filter_companies(sample_companies, FilterSet(term="hirewell"))) == ["Hirewell"]

    def test_criteria_intersect(self, sample_companies):
        hr = filter_companies(sample_companies, FilterSet(category="HR"))
        austin = filter_companies(sample_companies, FilterSet(location="Austin"))
        both = filter_companies(sample_companies, FilterSet(category="HR", location="Austin"))

        assert names(both) == ["Rosterly"]
        assert set(names(both)) == set(names(hr)) & set(names(austin))

    def test_no_filters_keeps_everything(self, sample_companies):
        assert filter_companies(sample_companies) == sample_companies
        assert filter_companies(sample_companies, FilterSet()) == sample_companies


class TestUniqueValues:
    """Tests for unique_values."""

    def test_dedupes_and_sorts(self):
        companies = [Company(id="1", category="AI"), Company(id="2", category="AI"), Company(id="3", category="Fintech")]

        assert unique_values(companies, "category") == ["AI", "Fintech"]

    def test_skips_empty(self):
        companies = [Company(id="1", category=""), Company(id="2", category="SaaS")]

        assert unique_values(companies, "category") == ["SaaS"]

    def test_flattens_lists(self, sample_companies):
        assert unique_values(sample_companies, "tags") == [
            "data", "ecommerce", "email", "hr", "inventory", "proptech", "sales", "scheduling",
        ]

    def test_stringifies(self, sample_companies):
        assert unique_values(sample_companies, "has_podcast_content") == ["True"]

    def test_unknown_field_raises(self, sample_companies):
        with pytest.raises(InvalidInputError):
            unique_values(sample_companies, "founders")


class TestGroupByField:
    """Tests for group_by_field."""

    def test_groups(self, sample_companies):
        groups = group_by_field(sample_companies, "cohort")

        assert names(groups["Fall 2021"]) == ["Outboundly", "Keyhold", "Hirewell"]
        assert len(groups["Spring 2022"]) == 2

    def test_empty_values_unknown(self):
        groups = group_by_field([Company(id="1"), Company(id="2", location="Remote")], "location")

        assert set(groups) == {"Unknown", "Remote"}
