"""Quality gate for parsed model responses.

Checks run in order and the first rejection wins. The gate is a heuristic:
it misses some boilerplate replies and will reject a genuine score that
happens to fall inside the lazy band.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from boardread.config import settings
from boardread.models.analysis import AnalysisCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Verdict:
    accepted: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> Verdict:
        return cls(True)

    @classmethod
    def reject(cls, reason: str) -> Verdict:
        return cls(False, reason)


class QualityCheck(Protocol):
    name: str

    def __call__(self, candidate: AnalysisCandidate, raw_text: str) -> Verdict: ...


class StructureCheck:
    """An overall score plus some evidence the model looked at the image."""

    name = "structure"

    def __call__(self, candidate: AnalysisCandidate, raw_text: str) -> Verdict:
        if candidate.score_0_to_10 is None:
            return Verdict.reject("missing overall_score")
        has_assessment = (
            candidate.assessment is not None and candidate.assessment.overall_score is not None
        )
        if not (has_assessment or candidate.has_text_content or candidate.has_legacy_text):
            return Verdict.reject("missing assessment block and text content")
        return Verdict.accept()


class ScaleCheck:
    """The overall score must be on the 0-10 scale the prompt asks for."""

    name = "scale"

    def __call__(self, candidate: AnalysisCandidate, raw_text: str) -> Verdict:
        score = candidate.score_0_to_10
        if score is not None and not 0 <= score <= 10:
            return Verdict.reject(f"overall_score {score:g} outside the 0-10 scale")
        return Verdict.accept()


@dataclass
class GenericScoreCheck:
    """Reject scores inside the band models fall back to when they don't look."""

    low: float
    high: float
    name: str = "generic_score"

    def __call__(self, candidate: AnalysisCandidate, raw_text: str) -> Verdict:
        score = candidate.score_0_to_10
        if score is not None and score != 0 and self.low <= score <= self.high:
            return Verdict.reject(f"generic score {score:g} in [{self.low:g}, {self.high:g}]")
        return Verdict.accept()


class MetricsCheck:
    name = "metrics"

    def __call__(self, candidate: AnalysisCandidate, raw_text: str) -> Verdict:
        metrics = candidate.readability_metrics
        if metrics is None:
            return Verdict.accept()
        if metrics.word_count is None or metrics.viewing_time_seconds is None:
            return Verdict.reject("readability_metrics missing word_count or viewing_time_seconds")
        return Verdict.accept()


def default_checks() -> list[QualityCheck]:
    return [
        StructureCheck(),
        ScaleCheck(),
        GenericScoreCheck(settings.generic_band_low, settings.generic_band_high),
        MetricsCheck(),
    ]


class ResponseValidator:
    def __init__(self, checks: Sequence[QualityCheck] | None = None) -> None:
        self.checks = list(checks) if checks is not None else default_checks()

    def validate(self, candidate: AnalysisCandidate, raw_text: str = "") -> Verdict:
        for check in self.checks:
            verdict = check(candidate, raw_text)
            if not verdict.accepted:
                logger.info("Response rejected by %s: %s", check.name, verdict.reason)
                return verdict
        return Verdict.accept()
