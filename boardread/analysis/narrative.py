"""Location-aware text used when the model supplies none of its own."""

from __future__ import annotations

from boardread.engine.catalog import is_bidirectional, is_digital
from boardread.engine.geometry import (
    DEFAULT_BOARD_HEIGHT_M,
    DEFAULT_BOARD_WIDTH_M,
    FONT_HEIGHT_COEFF,
    max_word_count,
    viewing_time_seconds,
)
from boardread.models.billboard import BillboardMetadata

NO_METADATA_ISSUE = "Unable to analyze without billboard specifications"


def _required_height_cm(distance: float, board_height: float | None, factor: float) -> int:
    return round(distance / (board_height or DEFAULT_BOARD_HEIGHT_M) * factor * FONT_HEIGHT_COEFF * 100)


def _distance(metadata: BillboardMetadata) -> float:
    return metadata.location.distance_from_road_m or metadata.context.viewing_distance


def location_issues(metadata: BillboardMetadata | None, kind: str) -> list[str]:
    """Placeholder issues for ``kind`` in {"critical", "minor", "wins"}.

    An empty list is a valid answer: nothing about the site suggests one.
    """
    if metadata is None:
        return [NO_METADATA_ISSUE]

    site = metadata.location
    distance = _distance(metadata)
    speed = metadata.context.speed.kmh
    issues: list[str] = []

    if kind == "critical":
        if speed >= 100:
            issues.append(
                f"Font size insufficient for {speed:g} km/h highway speeds on {site.road_name} - "
                f"minimum {_required_height_cm(distance, site.approx_height_m, 1.6)}cm height required"
            )
        lighting = site.lighting.lower()
        if lighting == "tbd" or "street" in lighting:
            issues.append(
                f"Inadequate lighting for {site.road_type} - requires enhanced contrast ratio "
                "of 5.0:1+ for visibility"
            )
        if is_bidirectional(site):
            issues.append(
                f"Bidirectional traffic on {site.road_name} requires symmetric layout design "
                "for visibility from both directions"
            )
    elif kind == "minor":
        if "forecourt" in site.board_type.lower():
            issues.append(
                "Forecourt location allows for more detailed messaging - current design may be "
                "oversimplified for a captive audience"
            )
        if is_digital(site):
            issues.append(
                f"Digital format capabilities underused - consider animation or rotating "
                f"messages for {site.location_name}"
            )
    else:
        issues.append(
            f"Optimize for {distance:g}m viewing distance on {site.road_name} by increasing main "
            f"text to {_required_height_cm(distance, site.approx_height_m, 1.3)}cm height"
        )
        issues.append(
            f"Enhance contrast for {site.lighting} lighting conditions typical of the "
            f"{site.district} area"
        )
        if is_bidirectional(site):
            issues.append(
                "Leverage bidirectional traffic with a centered layout for maximum exposure"
            )
    return issues


def regional_considerations(metadata: BillboardMetadata | None) -> str:
    if metadata is None:
        return "MENA market considerations unavailable without location data"
    site = metadata.location
    speed = metadata.context.speed
    words = "maximum simplicity with 3-4 words only" if speed.kmh >= 100 else "moderate complexity with 6-8 words maximum"
    return (
        f"For {site.location_name} in {site.district}: Arabic must be the primary script "
        f"(Ordinance 25/93) and cover at least 60% of the face. {site.road_name} needs enhanced "
        f"contrast for desert lighting. {speed.category.capitalize()} roads in Oman typically "
        f"require {words}."
    )


def _performance_level(score: int) -> str:
    if score >= 80:
        return "excellent"
    if score >= 65:
        return "good"
    if score >= 50:
        return "adequate"
    return "poor"


def synthesized_analysis(
    score: int, location: str, distance: float, speed: float, metadata: BillboardMetadata | None
) -> str:
    """Multi-paragraph readability narrative derived from a score and the site."""
    site = metadata.location if metadata else None
    name = site.location_name if site else location
    width = (site.approx_width_m if site else None) or DEFAULT_BOARD_WIDTH_M
    height = (site.approx_height_m if site else None) or DEFAULT_BOARD_HEIGHT_M
    road = site.road_name if site and site.road_name else "this road"
    lighting = site.lighting if site else "outdoor"
    board_type = site.board_type if site else "billboard"

    if score >= 75:
        sizing = "well-optimized"
    elif score >= 60:
        sizing = "adequate but improvable"
    else:
        sizing = "insufficient"
    factor = 1.6 if speed > 100 else 1.2
    min_cm = _required_height_cm(distance, height, factor)
    if speed > 100:
        typography = f"Highway viewing at {speed:g} km/h requires bold sans-serif fonts at least {min_cm}cm tall."
    else:
        typography = f"Viewing at {speed:g} km/h allows more detailed typography, at least {min_cm}cm tall."

    contrast = "good" if score >= 70 else "moderate" if score >= 50 else "poor"
    complexity = "well-balanced" if score >= 75 else "moderate" if score >= 60 else "excessive"
    view_s = viewing_time_seconds(width, speed)
    headroom = 100 - score
    potential = "significant" if headroom >= 20 else "moderate" if headroom >= 10 else "limited"

    paragraphs = [
        f"Billboard readability analysis for {name}",
        f"Overall performance: {_performance_level(score).upper()} ({score}/100)",
        f"Typography: for this {width:g}m x {height:g}m {board_type}, font sizing appears "
        f"{sizing} for {distance:g}m viewing distance on {road}. {typography}",
        f"Contrast: the color scheme gives {contrast} contrast for {lighting} viewing conditions; "
        "at least 4.5:1 is needed.",
        f"Layout: design complexity is {complexity}. The board is in view for about "
        f"{view_s:.1f}s, enough for at most {max_word_count(view_s)} words.",
        f"Improvement potential: {potential}; priority fixes could raise message effectiveness "
        f"by about {min(50, round(headroom * 0.6))}%.",
    ]
    return "\n\n".join(paragraphs)
