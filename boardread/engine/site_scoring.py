"""Weighted site scoring for candidate billboard locations.

Fully synchronous and deterministic: the same location always yields the
same LocationScore. No model calls.
"""

from __future__ import annotations

from boardread.engine.catalog import (
    average_speed,
    is_bidirectional,
    is_digital,
    rental_rate_or_default,
    viewing_distance,
)
from boardread.engine.geometry import DEFAULT_BOARD_HEIGHT_M, DEFAULT_BOARD_WIDTH_M
from boardread.models.billboard import BillboardLocation
from boardread.models.scoring import LocationScore, MarketPosition, ROIBreakdown

SPEED_MAX = 30.0
DISTANCE_MAX = 25.0
SIZE_MAX = 20.0
COST_MAX = 25.0

BASELINE_AREA_M2 = 70.0
BENCHMARK_CPM_OMR = 0.12  # Oman market: 0.08-0.15 OMR

# Road type -> daily vehicle volume
_DAILY_TRAFFIC_BY_ROAD: dict[str, int] = {
    "Expressway": 45_000,
    "Urban motorway": 35_000,
    "Inter-urban arterial": 25_000,
    "Urban arterial": 20_000,
    "Urban street": 15_000,
    "District arterials": 18_000,
    "Mixed-use district streets": 12_000,
}
_DEFAULT_DAILY_TRAFFIC = 20_000


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def speed_score(avg_speed_kmh: float) -> float:
    return _clamp(SPEED_MAX - (avg_speed_kmh - 30) * 0.3, 0, SPEED_MAX)


def distance_score(distance_m: float) -> float:
    return _clamp(DISTANCE_MAX - (distance_m - 20) * 0.2, 0, DISTANCE_MAX)


def size_score(width_m: float, height_m: float) -> float:
    return _clamp((width_m * height_m / BASELINE_AREA_M2) * SIZE_MAX, 0, SIZE_MAX)


def cost_score(rental_rate: float) -> float:
    return _clamp(COST_MAX - (rental_rate - 1000) * 0.01, 0, COST_MAX)


def _market_position(roi: int) -> MarketPosition:
    if roi >= 80:
        return "Premium Value"
    if roi >= 60:
        return "Good Value"
    if roi >= 40:
        return "Fair Value"
    return "Budget Option"


def calculate_roi(location: BillboardLocation) -> tuple[int, ROIBreakdown]:
    """ROI score (20-95) from estimated CPM against the market benchmark."""
    base_traffic = _DAILY_TRAFFIC_BY_ROAD.get(location.road_type, _DEFAULT_DAILY_TRAFFIC)

    avg = average_speed(location)
    speed_factor = 1.3 if avg >= 100 else 1.15 if avg >= 80 else 1.0
    direction_factor = 2.0 if is_bidirectional(location) else 1.0

    daily = round(base_traffic * speed_factor * direction_factor)
    monthly_cost = float(rental_rate_or_default(location))
    cpm = monthly_cost / (daily * 30) * 1000

    roi = int(_clamp(round((BENCHMARK_CPM_OMR / cpm) * 85), 20, 95))
    return roi, ROIBreakdown(
        daily_impressions=daily,
        monthly_cost=monthly_cost,
        cpm=round(cpm, 4),
        market_position=_market_position(roi),
    )


def calculate_readability(location: BillboardLocation) -> int:
    score = 50

    avg = average_speed(location)
    if avg <= 50:
        score += 25
    elif avg <= 80:
        score += 15
    elif avg <= 100:
        score += 5
    else:
        score -= 10

    distance = viewing_distance(location)
    if distance <= 30:
        score += 20
    elif distance <= 60:
        score += 10
    elif distance > 100:
        score -= 15

    area = (location.approx_width_m or DEFAULT_BOARD_WIDTH_M) * (
        location.approx_height_m or DEFAULT_BOARD_HEIGHT_M
    )
    if area >= 100:
        score += 15
    elif area >= 70:
        score += 10
    else:
        score += 5

    lighting = location.lighting.lower()
    if "digital" in lighting or "backlit" in lighting:
        score += 10

    return int(_clamp(score, 20, 100))


def calculate_suitability(location: BillboardLocation) -> int:
    score = 50

    road = location.road_type.lower()
    if "expressway" in road:
        score += 20
    elif "motorway" in road or "highway" in road:
        score += 15
    elif "arterial" in road:
        score += 10
    else:
        score += 5

    if is_digital(location):
        score += 15

    owner = location.ownership_management.lower()
    if "jcdecaux" in owner or "mediaone" in owner:
        score += 10

    if is_bidirectional(location):
        score += 10

    district = location.district.lower()
    if "cbd" in district or "business" in district:
        score += 10

    return int(_clamp(score, 20, 100))


def score_location(location: BillboardLocation) -> LocationScore:
    speed = speed_score(average_speed(location))
    distance = distance_score(viewing_distance(location))
    size = size_score(
        location.approx_width_m or DEFAULT_BOARD_WIDTH_M,
        location.approx_height_m or DEFAULT_BOARD_HEIGHT_M,
    )
    cost = cost_score(rental_rate_or_default(location))
    roi, breakdown = calculate_roi(location)

    return LocationScore(
        location_id=location.id,
        speed_score=speed,
        distance_score=distance,
        size_score=size,
        cost_score=cost,
        total_score=round(speed + distance + size + cost),
        roi_score=roi,
        readability_score=calculate_readability(location),
        suitability_score=calculate_suitability(location),
        roi_breakdown=breakdown,
    )
