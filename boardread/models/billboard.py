"""Billboard site reference data and the per-request context derived from it."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard", "extreme"]
RoadCategory = Literal["urban", "arterial", "highway", "expressway"]


class BillboardLocation(BaseModel):
    """A physical billboard site from the static catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    location_name: str
    address_landmark: str = ""
    latitude: float | None = None
    longitude: float | None = None
    road_name: str = ""
    highway_designation: str | None = None
    district: str = ""
    board_type: str = "Billboard"
    format: str = "Static"
    approx_width_m: float | None = None
    approx_height_m: float | None = None
    distance_from_road_m: float | None = None
    traffic_direction_visibility: str = ""
    speed_limit_kmh: str = ""  # e.g. "100–120", "80", "Varies"
    road_type: str = ""
    lighting: str = "TBD"
    ownership_management: str = ""
    rental_rate_omr_month: str | None = None
    current_advertisers: str | None = None
    readability_difficulty: Difficulty | None = None


class SpeedContext(BaseModel):
    kmh: float
    mph: int
    category: RoadCategory


class VisibilityFactors(BaseModel):
    lighting: Literal["excellent", "good", "fair", "poor"]
    traffic_flow: Literal["unidirectional", "bidirectional", "complex"]
    obstruction: Literal["none", "minimal", "moderate", "significant"]


class BusinessIntelligence(BaseModel):
    rental_rate: float | None = None
    impressions_per_month: int = 0
    cost_per_thousand_impressions: float = 0.0
    competitor_presence: list[str] = Field(default_factory=list)


class AnalysisContext(BaseModel):
    """Derived per request from a BillboardLocation; discarded afterwards."""

    viewing_distance: float
    speed: SpeedContext
    visibility: VisibilityFactors
    business: BusinessIntelligence


class BillboardMetadata(BaseModel):
    location: BillboardLocation
    context: AnalysisContext


class GeometryThresholds(BaseModel):
    """Legibility thresholds for one (distance, board size, speed) combination."""

    model_config = ConfigDict(frozen=True)

    # Effective inputs after default substitution
    distance_m: float
    board_width_m: float
    board_height_m: float
    speed_kmh: float

    speed_factor: float
    min_font_height_m: float
    min_font_height_px: int  # against a 400 px design height
    min_font_height_in: float
    min_font_height_cm: int
    headline_height_pct: int
    viewing_time_s: float
    max_word_count: int
    required_contrast_ratio: float
