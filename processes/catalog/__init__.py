"""Catalog persistence: items, thresholds and run history."""

from .store import CatalogStore

__all__ = ["CatalogStore"]
