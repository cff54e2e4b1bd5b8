"""FastAPI dependency injection."""

from __future__ import annotations

from boardread.config import settings
from boardread.engine.catalog import BillboardCatalog, catalog
from boardread.llm.client import RemoteAnalyzer, get_vision_response


def get_settings():
    return settings


def get_catalog() -> BillboardCatalog:
    return catalog


def get_analyzer() -> RemoteAnalyzer:
    return get_vision_response
