"""API response models."""

from __future__ import annotations

from pydantic import BaseModel

from boardread.models.billboard import AnalysisContext, BillboardLocation


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    catalog_size: int = 0
    llm_configured: bool = False


class LocationDetail(BaseModel):
    location: BillboardLocation
    context: AnalysisContext
