"""Tests for the deterministic fallback result."""

from __future__ import annotations

from boardread.analysis.fallback import (
    fallback_categories,
    fallback_curve,
    fallback_score,
    synthesize_fallback,
)
from boardread.analysis.hashing import string_hash31


class TestScore:
    def test_base_range(self):
        assert fallback_score(0, 100, 80) == 45
        assert fallback_score(34, 100, 80) == 79
        assert fallback_score(35, 100, 80) == 45

    def test_far_and_fast(self):
        assert fallback_score(0, 150, 110) == 27

    def test_near_and_slow(self):
        assert fallback_score(0, 50, 40) == 58
        assert fallback_score(34, 50, 40) == 90

    def test_always_clamped(self):
        for seed in range(0, 200, 7):
            for distance in (20, 100, 200):
                for speed in (30, 80, 130):
                    assert 25 <= fallback_score(seed, distance, speed) <= 90


def test_categories():
    assert fallback_categories(60, 0) == {
        "font_score": 13,
        "contrast_score": 11,
        "layout_score": 14,
        "cta_score": 13,
    }


class TestCurve:
    def test_at_100m(self):
        curve = fallback_curve(60, 100)
        assert (curve.at_50m, curve.at_100m, curve.at_150m) == (72, 60, 42)

    def test_off_100m(self):
        curve = fallback_curve(60, 150)
        assert (curve.at_50m, curve.at_100m, curve.at_150m) == (72, 45, 42)

    def test_far_distance_stays_monotonic(self):
        curve = fallback_curve(80, 300)
        assert curve.at_50m >= curve.at_100m >= curve.at_150m


class TestSynthesize:
    def test_stable_for_same_upload(self):
        first = synthesize_fallback("ad.jpg", "Sultan Qaboos", 100)
        second = synthesize_fallback("ad.jpg", "Sultan Qaboos", 100)
        assert first == second
        assert first.overall_score == 45 + string_hash31("ad.jpgSultan Qaboos") % 35

    def test_provenance(self):
        result = synthesize_fallback("ad.jpg", "Sultan Qaboos", 100, cause="provider returned 503")
        assert result.source == "fallback"
        assert result.is_fallback
        assert result.issues_synthesized
        assert "provider returned 503" in result.api_note
        assert "generic" in result.api_note

    def test_uses_site_data(self, highway_metadata):
        result = synthesize_fallback("ad.jpg", "Sultan Qaboos", 150, highway_metadata)
        seed = string_hash31("ad.jpgSultan Qaboos")
        assert result.overall_score == max(25, 45 + seed % 35 - 18)
        assert highway_metadata.location.location_name in result.api_note
        assert "Sultan Qaboos Highway corridor" in result.detailed_analysis

    def test_ranges(self):
        for name in ("a.jpg", "b.jpg", "c.png", "poster.webp", "ad.jpg"):
            result = synthesize_fallback(name, "Muscat", 120)
            assert 25 <= result.overall_score <= 90
            for value in (result.font_score, result.contrast_score, result.layout_score, result.cta_score):
                assert 5 <= value <= 25
            curve = result.distance_analysis
            assert 20 <= curve.at_150m <= curve.at_100m <= curve.at_50m <= 95

    def test_never_raises_on_odd_input(self):
        result = synthesize_fallback("", "", None)
        assert result.source == "fallback"
