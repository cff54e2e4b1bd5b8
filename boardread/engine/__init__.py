"""Deterministic billboard geometry, catalog and site scoring."""

from boardread.engine.catalog import BillboardCatalog, catalog, generate_metadata
from boardread.engine.geometry import compute_thresholds
from boardread.engine.site_scoring import score_location

__all__ = [
    "BillboardCatalog",
    "catalog",
    "compute_thresholds",
    "generate_metadata",
    "score_location",
]
