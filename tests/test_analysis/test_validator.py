"""Tests for the response quality gate."""

from __future__ import annotations

from boardread.analysis.validator import (
    GenericScoreCheck,
    MetricsCheck,
    ResponseValidator,
    ScaleCheck,
    StructureCheck,
    Verdict,
)
from boardread.models.analysis import AnalysisCandidate


def _candidate(data: dict) -> AnalysisCandidate:
    return AnalysisCandidate.model_validate(data)


class TestGenericBand:
    def test_rejects_bare_7_2(self, generic_response):
        verdict = ResponseValidator().validate(_candidate(generic_response))
        assert not verdict.accepted
        assert "generic" in verdict.reason

    def test_band_edges_inclusive(self):
        check = GenericScoreCheck(7.0, 7.5)
        assert not check(_candidate({"overall_score": 7.0}), "").accepted
        assert not check(_candidate({"overall_score": 7.5}), "").accepted
        assert check(_candidate({"overall_score": 6.9}), "").accepted
        assert check(_candidate({"overall_score": 7.6}), "").accepted

    def test_zero_is_not_generic(self):
        assert GenericScoreCheck(0.0, 7.5)(_candidate({"overall_score": 0}), "").accepted

    def test_genuine_score_rejected_even_with_content(self, good_response):
        # Accepted tradeoff: a real 7.2 looks like a lazy one
        good_response["assessment"]["overall_score"] = 7.2
        assert not ResponseValidator().validate(_candidate(good_response)).accepted

    def test_tunable_band(self):
        validator = ResponseValidator([GenericScoreCheck(6.0, 6.5)])
        assert validator.validate(_candidate({"overall_score": 7.2})).accepted
        assert not validator.validate(_candidate({"overall_score": 6.2})).accepted


class TestStructure:
    def test_missing_score(self):
        verdict = StructureCheck()(_candidate({"text_content": {"headline": "SALE"}}), "")
        assert verdict == Verdict(False, "missing overall_score")

    def test_flat_score_needs_text(self):
        assert not StructureCheck()(_candidate({"overall_score": 5}), "").accepted
        assert StructureCheck()(
            _candidate({"overall_score": 5, "actual_text_content": "BIG SALE"}), ""
        ).accepted

    def test_assessment_block_is_enough(self):
        assert StructureCheck()(_candidate({"assessment": {"overall_score": 5}}), "").accepted

    def test_structure_runs_before_band(self):
        verdict = ResponseValidator().validate(_candidate({"overall_score": 7.2}))
        assert "missing assessment" in verdict.reason


class TestMetrics:
    def test_incomplete_metrics(self):
        data = {"assessment": {"overall_score": 5}, "readability_metrics": {"word_count": 8}}
        verdict = MetricsCheck()(_candidate(data), "")
        assert not verdict.accepted

    def test_absent_metrics_ok(self):
        assert MetricsCheck()(_candidate({"assessment": {"overall_score": 5}}), "").accepted


def test_good_response_accepted(good_response):
    assert ResponseValidator().validate(_candidate(good_response)) == Verdict.accept()


def test_first_rejection_wins():
    calls = []

    class Recording:
        def __init__(self, name, accept):
            self.name, self.accept = name, accept

        def __call__(self, candidate, raw_text):
            calls.append(self.name)
            return Verdict.accept() if self.accept else Verdict.reject(self.name)

    validator = ResponseValidator([Recording("a", True), Recording("b", False), Recording("c", False)])
    assert validator.validate(_candidate({})).reason == "b"
    assert calls == ["a", "b"]


class TestScale:
    def test_hundred_point_score_rejected(self, good_response):
        good_response["assessment"]["overall_score"] = 45
        verdict = ResponseValidator().validate(_candidate(good_response))
        assert not verdict.accepted
        assert "0-10 scale" in verdict.reason

    def test_scale_edges(self):
        check = ScaleCheck()
        assert check(_candidate({"overall_score": 0}), "").accepted
        assert check(_candidate({"overall_score": 10}), "").accepted
        assert not check(_candidate({"overall_score": 10.5}), "").accepted
        assert not check(_candidate({"overall_score": -1}), "").accepted
