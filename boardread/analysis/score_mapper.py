"""Map an accepted model response onto the fixed AnalysisResult schema.

The model reports a 0-10 overall score; everything else (category scores,
distance curve, issue lists) is derived from it and from whatever signals
the response carries. Explicit values from the model win over derived ones.
"""

from __future__ import annotations

import re

from boardread.analysis.narrative import location_issues, regional_considerations
from boardread.models.analysis import (
    CATEGORY_RANGE,
    OVERALL_RANGE,
    AnalysisCandidate,
    AnalysisResult,
    Compliance,
    DistanceCurve,
    ReadabilityMetrics,
    Recommendation,
    clamp_score,
)
from boardread.models.billboard import BillboardMetadata

_RATIO_RE = re.compile(r"(\d+(?:\.\d+)?)")

CRITICAL_PRIORITIES = frozenset({"CRITICAL", "HIGH"})


def _cat(value: float) -> int:
    return clamp_score(value, *CATEGORY_RANGE)


def parse_contrast_ratio(value: str | float | None) -> float | None:
    """'21:1' -> 21.0, 4.5 -> 4.5, unparseable -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _RATIO_RE.search(value)
    return float(match.group(1)) if match else None


def contrast_adjusted(ratio: float, base: float) -> float:
    if ratio >= 7.0:
        return min(25, base + 5)
    if ratio >= 4.5:
        return min(25, base + 2)
    if ratio >= 3.0:
        return max(10, base - 5)
    return max(5, base - 10)


def layout_adjusted(metrics: ReadabilityMetrics, base: float) -> float:
    words = metrics.word_count or 0
    limit = metrics.max_recommended_words or 10
    if metrics.compliant is not False and words <= limit:
        return min(25, base + 5)
    if words <= limit * 1.2:
        return min(25, base)
    if words <= limit * 1.5:
        return max(10, base - 5)
    return max(5, base - 10)


def category_scores(candidate: AnalysisCandidate, score10: float) -> dict[str, int]:
    base = score10 * 2.5
    metrics = candidate.readability_metrics
    visual = candidate.visual_analysis
    text = candidate.text_content

    if candidate.font_score is not None:
        font = candidate.font_score
    elif metrics is not None and metrics.compliant:
        font = min(25, base + 3)
    else:
        font = max(5, base - 5)

    ratio = parse_contrast_ratio(visual.contrast_ratio) if visual else None
    if candidate.contrast_score is not None:
        contrast = candidate.contrast_score
    elif ratio is not None:
        contrast = contrast_adjusted(ratio, base)
    else:
        contrast = base

    if candidate.layout_score is not None:
        layout = candidate.layout_score
    elif metrics is not None and metrics.word_count and metrics.max_recommended_words:
        layout = layout_adjusted(metrics, base)
    else:
        layout = base

    if candidate.cta_score is not None:
        cta = candidate.cta_score
    elif text is not None and text.cta:
        cta = min(25, base + 2)
    else:
        cta = max(5, base - 3)

    return {
        "font_score": _cat(font),
        "contrast_score": _cat(contrast),
        "layout_score": _cat(layout),
        "cta_score": _cat(cta),
    }


def distance_curve(candidate: AnalysisCandidate, overall: int) -> DistanceCurve:
    supplied = candidate.distance_analysis

    def pick(key: str, legacy: float | None, derived: float) -> float:
        value = supplied.get(f"{key}_simulation", supplied.get(key))
        if value is None:
            value = legacy
        return derived if value is None else value

    return DistanceCurve(
        at_50m=pick("50m", candidate.distance_50m, overall + 10),
        at_100m=pick("100m", candidate.distance_100m, overall),
        at_150m=pick("150m", candidate.distance_150m, overall - 15),
    )


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out = []
    for item in items:
        key = item.strip()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return out


def _describe(rec: Recommendation, with_impact: bool = True) -> str:
    text = f"{rec.issue}: {rec.action}" if rec.issue else rec.action
    if with_impact and rec.expected_impact:
        text += f" (Impact: {rec.expected_impact})"
    return text


def split_recommendations(candidate: AnalysisCandidate) -> tuple[list[str], list[str], list[str]]:
    critical, minor, wins = [], [], []
    for rec in candidate.recommendations:
        if rec.priority in CRITICAL_PRIORITIES:
            critical.append(_describe(rec))
        elif rec.priority == "MEDIUM":
            minor.append(_describe(rec, with_impact=False))
        elif rec.priority == "LOW":
            wins.append(f"{rec.action} ({rec.expected_impact})" if rec.expected_impact else rec.action)

    if candidate.assessment is not None:
        critical.extend(candidate.assessment.critical_issues)
    critical.extend(candidate.critical_issues)
    return _dedupe(critical), _dedupe(minor), _dedupe(wins)


def build_detailed_analysis(candidate: AnalysisCandidate, raw_text: str) -> str:
    parts: list[str] = []

    tc = candidate.text_content
    if tc is not None:
        line = f"Text Content: {tc.headline or ''}"
        if tc.body:
            line += f" - {tc.body}"
        if tc.cta:
            line += f" | CTA: {tc.cta}"
        parts.append(line)

    rm = candidate.readability_metrics
    if rm is not None:
        view = f"{rm.viewing_time_seconds:.1f}s" if rm.viewing_time_seconds is not None else "unknown"
        parts.append(
            f"Readability: {rm.word_count} words (max {rm.max_recommended_words}), "
            f"{view} viewing time, {'Compliant' if rm.compliant else 'Non-compliant'}"
        )

    va = candidate.visual_analysis
    if va is not None:
        parts.append(
            f"Visual: {va.font_style or 'Unknown font'}, headline "
            f"{va.headline_font_inches if va.headline_font_inches is not None else 'N/A'}\" tall, "
            f"clutter score {va.clutter_score if va.clutter_score is not None else 'N/A'}/10"
        )

    if candidate.assessment is not None:
        parts.append(f"Assessment: Score {candidate.assessment.overall_score}/10")
        if candidate.assessment.critical_issues:
            parts.append("Issues: " + "; ".join(candidate.assessment.critical_issues))

    if candidate.detailed_analysis:
        parts.append(candidate.detailed_analysis)

    return "\n\n".join(parts) if parts else raw_text


def build_color_analysis(candidate: AnalysisCandidate) -> str | None:
    va = candidate.visual_analysis
    if va is None:
        return None
    parts = []
    if va.text_color:
        parts.append(f"Text: {va.text_color}")
    if va.background_color:
        parts.append(f"Background: {va.background_color}")
    if va.contrast_ratio:
        parts.append(f"Contrast: {va.contrast_ratio}")
    return ", ".join(parts) or None


def _text_content(candidate: AnalysisCandidate) -> str:
    tc = candidate.text_content
    if tc is not None:
        pieces = [p for p in (tc.headline, tc.body, tc.cta) if p]
        if pieces:
            return " | ".join(pieces)
        if tc.all_text_elements:
            return " ".join(tc.all_text_elements)
    return candidate.actual_text_content or "Text content not detected"


def build_compliance(candidate: AnalysisCandidate) -> Compliance:
    aa = candidate.arabic_analysis
    detected = aa.arabic_detected if aa and aa.arabic_detected is not None else candidate.arabic_text_detected
    if candidate.cultural_compliance:
        status = candidate.cultural_compliance
    elif aa and aa.compliance_status:
        status = aa.compliance_status
    elif aa and aa.ordinance_compliant is not None:
        status = "compliant" if aa.ordinance_compliant else "non_compliant"
    else:
        status = "needs_review"
    return Compliance(
        arabic_detected=bool(detected),
        arabic_is_primary=aa.arabic_is_primary if aa else None,
        cultural_compliance=status,
    )


def map_candidate(
    candidate: AnalysisCandidate,
    metadata: BillboardMetadata | None = None,
    raw_text: str = "",
) -> AnalysisResult:
    """Build the stable result from an accepted candidate."""
    score10 = candidate.score_0_to_10 or 0.0
    overall = clamp_score(score10 * 10, *OVERALL_RANGE)

    critical, minor, wins = split_recommendations(candidate)
    synthesized = False
    if not critical:
        critical, synthesized = location_issues(metadata, "critical"), True
    if not minor:
        minor, synthesized = location_issues(metadata, "minor"), True
    if not wins:
        wins, synthesized = location_issues(metadata, "wins"), True

    return AnalysisResult(
        overall_score=overall,
        **category_scores(candidate, score10),
        distance_analysis=distance_curve(candidate, overall),
        critical_issues=critical,
        minor_issues=minor,
        quick_wins=wins,
        issues_synthesized=synthesized,
        detailed_analysis=build_detailed_analysis(candidate, raw_text),
        visual_description=(
            candidate.detailed_visual_description
            or candidate.visual_description
            or "Visual content analysis unavailable"
        ),
        actual_text_content=_text_content(candidate),
        color_analysis=(
            build_color_analysis(candidate) or candidate.color_analysis or "Color analysis unavailable"
        ),
        regional_notes=candidate.mena_considerations or regional_considerations(metadata),
        compliance=build_compliance(candidate),
        source="model",
    )
