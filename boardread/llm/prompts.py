"""System prompt and per-location context prompt for billboard analysis."""

from __future__ import annotations

from boardread.engine.catalog import average_speed
from boardread.engine.geometry import (
    DEFAULT_DISTANCE_M,
    PRIMARY_SCRIPT_MIN_SHARE,
    compute_thresholds,
    primary_script_area_m2,
)
from boardread.models.billboard import BillboardLocation

# Violation -> maximum overall score on the 0-10 scale
SCORE_CEILINGS: dict[str, float] = {
    "no_arabic": 4.5,
    "font_below_minimum": 5.5,
    "contrast_below_minimum": 6.0,
    "arabic_not_primary": 6.5,
    "word_count_above_maximum": 6.5,
}

_ORDINANCE = """Oman Ordinance 25/93, Article 8:
"The main language of the advertisement shall be literary Arabic"
"The English language may be used provided that it is next to the Arabic language\""""

_SYSTEM_TEMPLATE = """You are an expert billboard readability analyst specializing in outdoor advertising for highway viewing conditions, with expertise in MENA market compliance.

TASK: Analyze the uploaded billboard image and give a SPECIFIC readability assessment.

Describe EXACTLY what you see, not generic observations.

EXTRACT & DESCRIBE:
1. Text content: copy EXACTLY every word you see. Never paraphrase.
   Example: "ANNUAL SOCCER TOURNAMENT", not "tournament advertisement".
2. Visual elements: describe the actual images and graphics.
3. Colors: identify actual colors with estimated hex codes ("#FFFFFF text on #000000 background").
4. Layout: actual positioning and hierarchy.
5. Font sizes: estimate in inches from the billboard proportions.

=== ARABIC TEXT DETECTION (MANDATORY, OMAN LAW) ===
""" + _ORDINANCE + """

Detection process:
1. Scan the whole image for Arabic script.
2. Classify every text element as Arabic, English or Other.
3. Decide whether Arabic is LARGER and MORE PROMINENT than other languages, and whether English sits directly next to it.

Compliance:
- COMPLIANT: Arabic is the primary language.
- PARTIAL: Arabic present but not dominant.
- VIOLATION: no Arabic text.

Score ceilings:
- No Arabic text detected -> overall_score at most {no_arabic}/10.
- Arabic present but not primary -> overall_score at most {arabic_not_primary}/10.
- Arabic primary -> may score up to 10/10.

=== OUTPUT FORMAT ===
Return ONLY valid JSON with this structure:

{{
  "text_content": {{
    "headline": "exact headline text",
    "body": "exact body text",
    "cta": "exact call-to-action",
    "all_text_elements": ["every", "text", "element"]
  }},
  "visual_analysis": {{
    "headline_font_inches": 10.0,
    "body_font_inches": 4.5,
    "font_style": "Bold sans-serif headline, regular sans-serif body",
    "text_color": "#FFFFFF",
    "background_color": "#000000",
    "accent_colors": ["#FF6B00"],
    "clutter_score": 7,
    "contrast_ratio": "21:1",
    "design_elements": ["each visual element you see"]
  }},
  "arabic_analysis": {{
    "arabic_detected": false,
    "arabic_is_primary": false,
    "english_positioned_next_to_arabic": false,
    "ordinance_compliant": false,
    "compliance_status": "critical_violation_no_arabic"
  }},
  "readability_metrics": {{
    "word_count": 12,
    "viewing_time_seconds": 2.8,
    "max_recommended_words": 7,
    "compliant": false
  }},
  "assessment": {{
    "overall_score": 4.5,
    "critical_issues": ["specific issue citing actual content and measurements"],
    "scores_breakdown": {{
      "font_clarity": 5,
      "color_contrast": 8,
      "layout_simplicity": 4,
      "cta_effectiveness": 6,
      "arabic_compliance": 0
    }}
  }},
  "recommendations": [
    {{
      "priority": "CRITICAL | HIGH | MEDIUM | LOW",
      "issue": "what is wrong, with measurements",
      "action": "concrete change, e.g. increase headline from 10in to 16in",
      "expected_impact": "expected effect on readability or compliance"
    }}
  ],
  "detailed_visual_description": "full description of the creative as seen"
}}

overall_score is on a 0-10 scale. Any field you cannot determine may be omitted.

RULES:
1. Always check for Arabic text.
2. If there is no Arabic, overall_score MUST be at most {no_arabic}/10 and the first critical issue MUST state the legal violation.
3. Be specific with measurements: "headline is 10 inches, requires 16 inches", not "font too small".
4. Reference actual content: "the ANNUAL SOCCER TOURNAMENT headline", not "the headline".
5. Use exact colors and exact word counts.
6. Recommendations must be actionable steps.
7. Do not default to a middling score. Score what you see."""


def get_system_prompt() -> str:
    return _SYSTEM_TEMPLATE.format(**SCORE_CEILINGS)


def _fmt(value: float) -> str:
    return f"{value:g}"


def build_context_prompt(location: BillboardLocation | None, distance: float | None) -> str:
    """Location-specific constraints with every threshold stated numerically.

    Without a location the geometry defaults apply, so the prompt still
    carries concrete numbers.
    """
    if location is not None:
        speed = average_speed(location)
        view_distance = location.distance_from_road_m or distance
        width, height = location.approx_width_m, location.approx_height_m
    else:
        speed = None
        view_distance = distance
        width = height = None

    t = compute_thresholds(view_distance or DEFAULT_DISTANCE_M, width, height, speed)
    area = t.board_width_m * t.board_height_m
    primary_area = primary_script_area_m2(t.board_width_m, t.board_height_m)

    lines = ["=== LOCATION CONTEXT ==="]
    if location is not None:
        lines += [
            f"Location: {location.location_name}",
            f"Road: {location.road_name or 'Not specified'} ({location.road_type or 'unknown type'})",
            f"District: {location.district or 'Not specified'}",
            f"Highway: {location.highway_designation or 'Not specified'}",
            f"Traffic direction: {location.traffic_direction_visibility or 'Not specified'}",
            f"Lighting: {location.lighting}",
        ]
    else:
        lines.append("Location: not specified (standard roadside assumptions)")
    lines += [
        f"Billboard size: {_fmt(t.board_width_m)}m x {_fmt(t.board_height_m)}m ({area:.1f} m2)",
        f"Viewing distance: {_fmt(t.distance_m)}m",
        f"Speed: {_fmt(t.speed_kmh)} km/h ({round(t.speed_kmh * 0.621371)} mph)",
        "Region: Oman (MENA market)",
        "",
        "=== REQUIREMENTS FOR THIS LOCATION ===",
        f"1. MINIMUM HEADLINE SIZE: {t.min_font_height_in:.1f} inches "
        f"({t.min_font_height_m:.2f} m, {t.min_font_height_px} px on a 400 px design height)",
        f"2. MAXIMUM WORD COUNT: {t.max_word_count} words "
        f"(viewing time {t.viewing_time_s:.1f} s at {_fmt(t.speed_kmh)} km/h, 2.5 words/s)",
        f"3. CONTRAST RATIO: at least {t.required_contrast_ratio:.1f}:1",
        f"4. ARABIC PRIMARY SCRIPT: Arabic must occupy at least "
        f"{round(PRIMARY_SCRIPT_MIN_SHARE * 100)}% of the face ({primary_area:.1f} m2) "
        f"and be larger than any other language. " + _ORDINANCE.replace("\n", " "),
        f"5. HEADLINE HEIGHT: at least {t.headline_height_pct}% of board height",
        "",
        "=== SCORE CEILINGS (0-10 scale) ===",
        f"Headline below {t.min_font_height_in:.1f} inches -> at most {SCORE_CEILINGS['font_below_minimum']}",
        f"More than {t.max_word_count} words -> at most {SCORE_CEILINGS['word_count_above_maximum']}",
        f"Contrast below {t.required_contrast_ratio:.1f}:1 -> at most {SCORE_CEILINGS['contrast_below_minimum']}",
        f"No Arabic text -> at most {SCORE_CEILINGS['no_arabic']}",
        f"Arabic not primary -> at most {SCORE_CEILINGS['arabic_not_primary']}",
        "Multiple violations -> the LOWEST applicable ceiling.",
        "",
        "Flag every violation in assessment.critical_issues with the measured value and the required value.",
    ]
    return "\n".join(lines)


def build_prompts(location: BillboardLocation | None, distance: float | None) -> tuple[str, str]:
    """(system, user) prompt pair for one analysis request."""
    return get_system_prompt(), build_context_prompt(location, distance)


def get_all_templates() -> dict[str, str]:
    """Return the fixed prompts keyed by name."""
    return {
        "system": get_system_prompt(),
        "default_context": build_context_prompt(None, DEFAULT_DISTANCE_M),
    }
