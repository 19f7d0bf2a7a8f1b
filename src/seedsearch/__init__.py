"""seedsearch - hybrid search over a startup-portfolio dataset."""

__version__ = "0.1.0"
