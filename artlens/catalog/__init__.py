"""Catalog reconciliation: string normalization, fuzzy cascade matching, category inference."""

from artlens.catalog.categories import UNKNOWN_CATEGORY, map_period_to_category
from artlens.catalog.matcher import CatalogMatcher
from artlens.catalog.models import CatalogEntry, CatalogTranslation
from artlens.catalog.normalize import normalize

__all__ = [
    "UNKNOWN_CATEGORY",
    "CatalogEntry",
    "CatalogMatcher",
    "CatalogTranslation",
    "map_period_to_category",
    "normalize",
]
