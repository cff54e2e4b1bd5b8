"""Deterministic stand-in result when the vision model is unavailable.

Scores are seeded from ``string_hash31(file_name + location)`` so the same
upload at the same place always gets the same answer, and different uploads
spread across the range instead of collapsing to one number.
"""

from __future__ import annotations

import logging
import math

from boardread.analysis.hashing import string_hash31
from boardread.analysis.narrative import location_issues, regional_considerations, synthesized_analysis
from boardread.engine.geometry import DEFAULT_BOARD_HEIGHT_M, DEFAULT_DISTANCE_M, DEFAULT_SPEED_KMH
from boardread.models.analysis import AnalysisResult, DistanceCurve
from boardread.models.billboard import BillboardMetadata

logger = logging.getLogger(__name__)

FALLBACK_RANGE = (25, 90)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def fallback_score(seed: int, distance: float, speed: float) -> int:
    base = 45 + seed % 35
    if distance > 120:
        base -= 8
    elif distance < 80:
        base += 5
    if speed > 100:
        base -= 10
    elif speed < 60:
        base += 8
    return int(_clamp(base, *FALLBACK_RANGE))


def fallback_categories(score: int, seed: int) -> dict[str, int]:
    def cat(weight: float, jitter: int) -> int:
        return int(_clamp(math.floor(score * weight) + jitter, 5, 25))

    return {
        "font_score": cat(0.25, seed % 5 - 2),
        "contrast_score": cat(0.24, seed % 6 - 3),
        "layout_score": cat(0.26, seed % 4 - 1),
        "cta_score": cat(0.25, seed % 5 - 2),
    }


def fallback_curve(score: int, distance: float) -> DistanceCurve:
    if distance == 100:
        mid = score
    else:
        mid = max(score - abs(distance - 100) * 0.3, 25)
    return DistanceCurve(
        at_50m=min(score + 12, 95),
        at_100m=mid,
        at_150m=max(score - 18, 25),
    )


def _critical_issues(score: int, distance: float, speed: float, metadata: BillboardMetadata | None) -> list[str]:
    site = metadata.location if metadata else None
    road = site.road_name if site and site.road_name else "this road"
    lighting = site.lighting if site else "outdoor"
    height = (site.approx_height_m if site else None) or DEFAULT_BOARD_HEIGHT_M

    issues: list[str] = []
    if score < 50:
        issues.append(
            f"Primary message elements do not meet minimum size requirements for {distance:g}m "
            f"viewing distance on {road} - likely unreadable at {speed:g} km/h"
        )
        issues.append(
            f"Visual contrast insufficient (estimated below 2:1) for {lighting} lighting conditions"
        )
        if speed > 100:
            issues.append(
                f"Design does not meet viewing requirements for {speed:g} km/h - requires "
                "comprehensive redesign"
            )
    elif score < 70:
        required = round(distance / height * 1.3 * 0.15 * 100)
        issues.append(
            f"Primary message elements should be at least {required}cm tall for viewing at "
            f"{distance:g}m on {road}"
        )
        issues.append(f"Visual contrast should reach at least 4.5:1 for {lighting} conditions")
    return issues


def _minor_issues(score: int) -> list[str]:
    issues: list[str] = []
    if score < 80:
        issues.append("Layout complexity could be reduced for faster message comprehension")
        issues.append("Visual hierarchy could be enhanced for better information flow")
    if score < 60:
        issues.append("Too many competing visual elements - simplify design focus")
        issues.append("Primary action or message should be more prominent in layout")
    return issues


def _quick_wins(score: int, location: str, distance: float, speed: float, metadata: BillboardMetadata | None) -> list[str]:
    wins: list[str] = []
    if score < 75:
        if metadata is not None:
            wins.extend(location_issues(metadata, "wins"))
        else:
            required = round(distance / DEFAULT_BOARD_HEIGHT_M * 1.4 * 0.15 * 100)
            wins.append(f"Increase primary text to at least {required}cm for {distance:g}m viewing")
    place = location.lower()
    if "oman" in place or "muscat" in place or metadata is not None:
        wins.append("Make Arabic the primary script, covering at least 60% of visible content")
    limit = 4 if speed >= 100 else 6 if speed >= 80 else 8
    wins.append(f"Keep total content to {limit} words or fewer for {speed:g} km/h viewing")
    return wins


def synthesize_fallback(
    file_name: str,
    location: str,
    distance: float | None,
    metadata: BillboardMetadata | None = None,
    cause: str = "vision model unavailable",
) -> AnalysisResult:
    """Build a reproducible result from the upload name, location and site data."""
    seed = string_hash31((file_name or "") + (location or ""))
    actual_distance = (
        (metadata.location.distance_from_road_m if metadata else None)
        or distance
        or DEFAULT_DISTANCE_M
    )
    speed = metadata.context.speed.kmh if metadata else DEFAULT_SPEED_KMH

    score = fallback_score(seed, actual_distance, speed)
    site_name = metadata.location.location_name if metadata else "generic"
    logger.info("Fallback score %d for %r at %s (%s)", score, file_name, site_name, cause)

    return AnalysisResult(
        overall_score=score,
        **fallback_categories(score, seed),
        distance_analysis=fallback_curve(score, actual_distance),
        critical_issues=_critical_issues(score, actual_distance, speed, metadata),
        minor_issues=_minor_issues(score),
        quick_wins=_quick_wins(score, location or "", actual_distance, speed, metadata),
        issues_synthesized=True,
        detailed_analysis=synthesized_analysis(score, location, actual_distance, speed, metadata),
        visual_description="Visual analysis unavailable, score estimated from location data",
        actual_text_content="Text content analysis unavailable",
        color_analysis="Color analysis unavailable",
        regional_notes=regional_considerations(metadata),
        source="fallback",
        api_note=f"Fallback analysis using {site_name} billboard data; cause: {cause}",
    )
