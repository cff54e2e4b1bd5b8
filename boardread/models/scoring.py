"""Site scoring output models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MarketPosition = Literal["Premium Value", "Good Value", "Fair Value", "Budget Option"]


class ROIBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    daily_impressions: int
    monthly_cost: float
    cpm: float
    market_position: MarketPosition


class LocationScore(BaseModel):
    """Weighted sub-scores plus composite scores for one site.

    ``total_score`` is ``round()`` of the four stored sub-scores, so the
    additivity holds exactly for the values a caller sees.
    """

    model_config = ConfigDict(frozen=True)

    location_id: str
    speed_score: float = Field(ge=0, le=30)
    distance_score: float = Field(ge=0, le=25)
    size_score: float = Field(ge=0, le=20)
    cost_score: float = Field(ge=0, le=25)
    total_score: int = Field(ge=0, le=100)
    roi_score: int = Field(ge=20, le=95)
    readability_score: int = Field(ge=20, le=100)
    suitability_score: int = Field(ge=20, le=100)
    roi_breakdown: ROIBreakdown


class LocationRecommendations(BaseModel):
    speed_recommendation: str
    location_insight: str
    creative_strategy: str


class LocationInsights(BaseModel):
    location_id: str
    traffic_type: Literal["Business", "Residential", "Mixed"]
    audience: Literal["Young Professional", "Family", "Mixed"]
    competition_level: Literal["High", "Medium", "Low"]
    recommendations: LocationRecommendations
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
