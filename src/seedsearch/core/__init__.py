# src/seedsearch/core/__init__.py
from seedsearch.core.config import Settings, get_settings
from seedsearch.core.exceptions import SeedSearchError

__all__ = ["Settings", "get_settings", "SeedSearchError"]
