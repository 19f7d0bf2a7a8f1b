"""
Dataset Importers for seedsearch.

Loads the static company snapshot from JSON, CSV or Parquet and validates
it against the Company schema.
"""

import json
import logging
from collections import Counter
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

import polars as pl
from pydantic import ValidationError

from seedsearch.catalog.schemas import Company, CompanyBatch
from seedsearch.core.exceptions import DatasetError

logger = logging.getLogger(__name__)


# =============================================================================
# File Format Detection
# =============================================================================


class FileFormat(str, Enum):
    """Supported dataset formats."""

    JSON = "json"
    CSV = "csv"
    PARQUET = "parquet"


EXTENSION_FORMAT_MAP: dict[str, FileFormat] = {
    ".json": FileFormat.JSON,
    ".csv": FileFormat.CSV,
    ".parquet": FileFormat.PARQUET,
    ".pq": FileFormat.PARQUET,
}


def detect_format(file_path: Path) -> FileFormat:
    """
    Detect file format from extension.

    Raises:
        DatasetError: If format is not supported
    """
    suffix = file_path.suffix.lower()
    file_format = EXTENSION_FORMAT_MAP.get(suffix)

    if file_format is None:
        supported = ", ".join(EXTENSION_FORMAT_MAP.keys())
        raise DatasetError(
            f"Unsupported file format '{suffix}' for {file_path}. "
            f"Supported extensions: {supported}"
        )

    return file_format


# =============================================================================
# Loaders
# =============================================================================


def load_json(file_path: Path) -> list[dict[str, Any]]:
    """
    Load a JSON array of company objects.

    A top-level object with a "companies" list is accepted as well.

    Raises:
        DatasetError: If the file is unreadable or has the wrong shape
    """
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(f"Failed to load JSON file {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("companies")
    if not isinstance(data, list):
        raise DatasetError(f"Expected a list of companies in {file_path}")
    return [row for row in data if isinstance(row, dict)]


def load_csv(file_path: Path) -> list[dict[str, Any]]:
    """
    Load CSV rows. Tags are expected as a comma-separated string.

    Raises:
        DatasetError: If loading fails
    """
    try:
        df = pl.read_csv(file_path, infer_schema_length=0)
    except Exception as e:
        raise DatasetError(f"Failed to load CSV file {file_path}: {e}. Check file encoding and format.") from e
    return list(df.iter_rows(named=True))


def load_parquet(file_path: Path) -> list[dict[str, Any]]:
    try:
        df = pl.read_parquet(file_path)
    except Exception as e:
        raise DatasetError(f"Failed to load Parquet file {file_path}: {e}") from e
    return list(df.iter_rows(named=True))


FORMAT_LOADERS: dict[FileFormat, Callable[[Path], list[dict[str, Any]]]] = {
    FileFormat.JSON: load_json,
    FileFormat.CSV: load_csv,
    FileFormat.PARQUET: load_parquet,
}


# =============================================================================
# Main Importer
# =============================================================================


def enforce_embedding_dimension(companies: list[Company]) -> tuple[list[Company], int | None, int]:
    """
    Keep one embedding length per dataset.

    The most common length wins; other embeddings are dropped so those
    companies fall back to lexical scoring.

    Returns:
        (companies, dimension, number of embeddings dropped)
    """
    dims = Counter(len(c.embedding) for c in companies if c.embedding)
    if not dims:
        return companies, None, 0

    dimension = dims.most_common(1)[0][0]
    dropped = 0
    result = []
    for c in companies:
        if c.embedding and len(c.embedding) != dimension:
            logger.warning("Dropping %d-dim embedding for %s (dataset uses %d)", len(c.embedding), c.id, dimension)
            c = c.model_copy(update={"embedding": None})
            dropped += 1
        result.append(c)
    return result, dimension, dropped


class CompanyImporter:
    """
    Imports the company snapshot and validates it against the schema.

    In non-strict mode invalid rows are skipped with a warning.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._validation_errors: list[str] = []

    @property
    def validation_errors(self) -> list[str]:
        return self._validation_errors.copy()

    def load(self, file_path: Path | str) -> list[dict[str, Any]]:
        """
        Load raw rows from file.

        Raises:
            DatasetError: If file not found or loading fails
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise DatasetError(f"Dataset not found: {file_path}. Check path and permissions.")

        file_format = detect_format(file_path)
        logger.debug("Loading %s dataset: %s", file_format.value, file_path)
        return FORMAT_LOADERS[file_format](file_path)

    def validate(self, rows: list[dict[str, Any]], source_file: str | None = None) -> CompanyBatch:
        """
        Validate raw rows into a CompanyBatch.

        Raises:
            DatasetError: In strict mode on the first invalid row, or when
                every row is invalid
        """
        self._validation_errors = []
        companies: list[Company] = []

        for row_idx, row in enumerate(rows):
            try:
                companies.append(Company.model_validate(row))
            except ValidationError as e:
                self._validation_errors.append(f"Row {row_idx}: {e.error_count()} validation errors")
                logger.warning("Validation failed for row %d: %s", row_idx, e.errors()[:3])
                if self.strict:
                    raise DatasetError(
                        f"Validation failed at row {row_idx}: {e}. Set strict=False to skip invalid records."
                    ) from e

        if self._validation_errors and not companies:
            raise DatasetError(f"All {len(rows)} records failed validation. Check data format and schema.")
        if self._validation_errors:
            logger.warning("%d of %d records failed validation. Skipped.", len(self._validation_errors), len(rows))

        companies, dimension, dropped = enforce_embedding_dimension(companies)
        return CompanyBatch(
            companies=companies,
            source_file=source_file,
            embedding_dimension=dimension,
            skipped_rows=len(self._validation_errors),
            dropped_embeddings=dropped,
        )

    def import_file(self, file_path: Path | str) -> CompanyBatch:
        file_path = Path(file_path)
        batch = self.validate(self.load(file_path), source_file=str(file_path))
        logger.info(
            "Loaded %d companies from %s (%d with embeddings, dim=%s)",
            batch.count, file_path, batch.with_embeddings, batch.embedding_dimension,
        )
        return batch
