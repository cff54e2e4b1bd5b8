"""GET /api/locations: billboard catalog, site scores and insights."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from boardread.dependencies import get_catalog
from boardread.engine.catalog import (
    BillboardCatalog,
    average_speed,
    generate_metadata,
    viewing_distance,
)
from boardread.engine.geometry import compute_thresholds
from boardread.engine.site_insights import location_insights
from boardread.engine.site_scoring import score_location
from boardread.models.billboard import BillboardLocation, Difficulty, GeometryThresholds
from boardread.models.responses import LocationDetail
from boardread.models.scoring import LocationInsights, LocationScore

router = APIRouter(prefix="/locations")


def _get_location(location_id: str, catalog: BillboardCatalog) -> BillboardLocation:
    location = catalog.lookup(location_id)
    if location is None:
        raise HTTPException(status_code=404, detail=f"Unknown location id: {location_id}")
    return location


@router.get("", response_model=list[BillboardLocation])
async def list_locations(
    q: str = "",
    difficulty: Difficulty | None = None,
    min_roi: int | None = Query(None, ge=0, le=100),
    catalog: BillboardCatalog = Depends(get_catalog),
) -> list[BillboardLocation]:
    results = catalog.search(q)
    if difficulty is not None:
        allowed = {loc.id for loc in catalog.by_difficulty(difficulty)}
        results = [loc for loc in results if loc.id in allowed]
    if min_roi is not None:
        allowed = {loc.id for loc in catalog.by_min_roi(min_roi)}
        results = [loc for loc in results if loc.id in allowed]
    return results


@router.get("/{location_id}", response_model=LocationDetail)
async def get_location(
    location_id: str, catalog: BillboardCatalog = Depends(get_catalog)
) -> LocationDetail:
    metadata = generate_metadata(_get_location(location_id, catalog))
    return LocationDetail(location=metadata.location, context=metadata.context)


@router.get("/{location_id}/score", response_model=LocationScore)
async def get_location_score(
    location_id: str, catalog: BillboardCatalog = Depends(get_catalog)
) -> LocationScore:
    return score_location(_get_location(location_id, catalog))


@router.get("/{location_id}/insights", response_model=LocationInsights)
async def get_location_insights(
    location_id: str, catalog: BillboardCatalog = Depends(get_catalog)
) -> LocationInsights:
    return location_insights(_get_location(location_id, catalog))


@router.get("/{location_id}/thresholds", response_model=GeometryThresholds)
async def get_location_thresholds(
    location_id: str,
    distance: float | None = Query(None, gt=0),
    catalog: BillboardCatalog = Depends(get_catalog),
) -> GeometryThresholds:
    location = _get_location(location_id, catalog)
    return compute_thresholds(
        distance or viewing_distance(location),
        location.approx_width_m,
        location.approx_height_m,
        average_speed(location),
    )
