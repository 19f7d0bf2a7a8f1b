"""
Catalog module for seedsearch.

Company schema, dataset import, and sort/filter utilities.
"""

from seedsearch.catalog.importers import CompanyImporter, FileFormat, detect_format
from seedsearch.catalog.schemas import Company, CompanyBatch, FilterSet
from seedsearch.catalog.sorting import (
    SortOrder,
    default_sort,
    filter_companies,
    group_by_field,
    sort_companies,
    unique_values,
)

__all__ = [
    # Schemas
    "Company",
    "CompanyBatch",
    "FilterSet",
    # Importer
    "CompanyImporter",
    "FileFormat",
    "detect_format",
    # Sorting
    "SortOrder",
    "default_sort",
    "filter_companies",
    "group_by_field",
    "sort_companies",
    "unique_values",
]
