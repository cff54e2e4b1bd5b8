"""Model response (untrusted) and analysis result (stable) models."""

from __future__ import annotations

import math
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_validator,
)

Source = Literal["model", "salvage", "fallback"]

OVERALL_RANGE = (20, 100)
CATEGORY_RANGE = (5, 25)
DISTANCE_RANGE = (20, 95)


def clamp_score(value: Any, lo: int, hi: int) -> int:
    """Round and clamp a numeric score; non-numeric input lands on the floor."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return lo
    if number != number:  # NaN
        return lo
    return max(lo, min(hi, round(number)))


# ---------- Wire schema (what the vision model is asked to return) ----------

# Side fields degrade to None (or an empty container) when the model sends
# the wrong type; only the overall score is validated strictly.


def _or_none(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


def _whole_number(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value):
        return round(value)
    return value


def _text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None and not isinstance(item, (dict, list))]


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _records(value: Any) -> list:
    if isinstance(value, dict):
        return [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


LooseFloat = Annotated[float | None, WrapValidator(_or_none)]
LooseInt = Annotated[int | None, BeforeValidator(_whole_number), WrapValidator(_or_none)]
LooseBool = Annotated[bool | None, WrapValidator(_or_none)]
LooseStr = Annotated[str | None, BeforeValidator(_text), WrapValidator(_or_none)]
TextList = Annotated[list[str], BeforeValidator(_text_list)]
LooseDict = Annotated[dict[str, Any], BeforeValidator(_mapping)]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class TextContent(_Lenient):
    headline: LooseStr = None
    body: LooseStr = None
    cta: LooseStr = None
    all_text_elements: TextList = Field(default_factory=list)


class VisualAnalysis(_Lenient):
    headline_font_inches: LooseFloat = None
    body_font_inches: LooseFloat = None
    font_style: LooseStr = None
    text_color: LooseStr = None
    background_color: LooseStr = None
    accent_colors: TextList = Field(default_factory=list)
    clutter_score: LooseFloat = None
    contrast_ratio: Annotated[str | float | None, WrapValidator(_or_none)] = None
    design_elements: TextList = Field(default_factory=list)


class ArabicAnalysis(_Lenient):
    arabic_detected: LooseBool = None
    arabic_is_primary: LooseBool = None
    english_positioned_next_to_arabic: LooseBool = None
    ordinance_compliant: LooseBool = Field(
        default=None,
        validation_alias=AliasChoices("ordinance_compliant", "ordinance_25_93_compliant"),
    )
    compliance_status: LooseStr = None


class ReadabilityMetrics(_Lenient):
    word_count: LooseInt = None
    viewing_time_seconds: LooseFloat = None
    max_recommended_words: LooseInt = None
    compliant: LooseBool = None


class Assessment(_Lenient):
    overall_score: float | None = None
    critical_issues: TextList = Field(default_factory=list)
    scores_breakdown: LooseDict = Field(default_factory=dict)


class Recommendation(_Lenient):
    priority: str = "MEDIUM"
    issue: str = ""
    action: str = ""
    expected_impact: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> str:
        return str(v or "MEDIUM").strip().upper()

    @field_validator("issue", "action", "expected_impact", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)


class AnalysisCandidate(_Lenient):
    """Parsed model response. Every field may be absent."""

    text_content: Annotated[TextContent | None, WrapValidator(_or_none)] = None
    visual_analysis: Annotated[VisualAnalysis | None, WrapValidator(_or_none)] = None
    arabic_analysis: Annotated[ArabicAnalysis | None, WrapValidator(_or_none)] = None
    readability_metrics: Annotated[ReadabilityMetrics | None, WrapValidator(_or_none)] = None
    assessment: Annotated[Assessment | None, WrapValidator(_or_none)] = None
    recommendations: Annotated[list[Recommendation], BeforeValidator(_records)] = Field(default_factory=list)

    # Legacy flat fields still emitted by some responses
    overall_score: float | None = None
    critical_issues: TextList = Field(default_factory=list)
    actual_text_content: LooseStr = None
    detailed_analysis: LooseStr = None
    visual_description: LooseStr = None
    detailed_visual_description: LooseStr = None
    color_analysis: LooseStr = None
    mena_considerations: LooseStr = None
    cultural_compliance: LooseStr = None
    arabic_text_detected: LooseBool = None
    distance_analysis: LooseDict = Field(default_factory=dict)
    distance_50m: LooseFloat = None
    distance_100m: LooseFloat = None
    distance_150m: LooseFloat = None
    font_score: LooseFloat = None
    contrast_score: LooseFloat = None
    layout_score: LooseFloat = None
    cta_score: LooseFloat = None

    @property
    def score_0_to_10(self) -> float | None:
        """Overall score on the model's 0-10 scale, wherever it was reported."""
        if self.assessment is not None and self.assessment.overall_score is not None:
            return self.assessment.overall_score
        return self.overall_score

    @property
    def has_text_content(self) -> bool:
        tc = self.text_content
        return tc is not None and bool(tc.headline or tc.body or tc.cta or tc.all_text_elements)

    @property
    def has_legacy_text(self) -> bool:
        return bool(self.actual_text_content or self.detailed_analysis or self.visual_description)


# ---------- Stable output contract ----------


class DistanceCurve(BaseModel):
    """Readability at three viewing distances; never increases with distance."""

    model_config = ConfigDict(frozen=True)

    at_50m: int
    at_100m: int
    at_150m: int

    @model_validator(mode="before")
    @classmethod
    def _clamp_monotonic(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lo, hi = DISTANCE_RANGE
        near = clamp_score(data.get("at_50m"), lo, hi)
        mid = min(clamp_score(data.get("at_100m"), lo, hi), near)
        far = min(clamp_score(data.get("at_150m"), lo, hi), mid)
        return {"at_50m": near, "at_100m": mid, "at_150m": far}


class Compliance(BaseModel):
    model_config = ConfigDict(frozen=True)

    arabic_detected: bool = False
    arabic_is_primary: bool | None = None
    cultural_compliance: str = "needs_review"


class AnalysisResult(BaseModel):
    """Numeric analysis of one creative. Ranges hold whatever the input was."""

    model_config = ConfigDict(frozen=True)

    overall_score: int
    font_score: int
    contrast_score: int
    layout_score: int
    cta_score: int
    distance_analysis: DistanceCurve

    critical_issues: list[str] = Field(default_factory=list)
    minor_issues: list[str] = Field(default_factory=list)
    quick_wins: list[str] = Field(default_factory=list)
    issues_synthesized: bool = False

    detailed_analysis: str = ""
    visual_description: str = ""
    actual_text_content: str = ""
    color_analysis: str = ""
    regional_notes: str | None = None
    compliance: Compliance | None = None

    source: Source = "model"
    api_note: str | None = None

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp_overall(cls, v: Any) -> int:
        return clamp_score(v, *OVERALL_RANGE)

    @field_validator("font_score", "contrast_score", "layout_score", "cta_score", mode="before")
    @classmethod
    def _clamp_category(cls, v: Any) -> int:
        return clamp_score(v, *CATEGORY_RANGE)

    @property
    def is_fallback(self) -> bool:
        return self.source != "model"
