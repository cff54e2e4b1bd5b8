"""Tests for qualitative site insights."""

from __future__ import annotations

from boardread.engine.catalog import catalog
from boardread.engine.site_insights import (
    audience_estimate,
    competition_level,
    location_insights,
    pros_and_cons,
    traffic_type,
)


class TestClassification:
    def test_business_district(self):
        cbd = catalog.lookup("1")
        assert traffic_type(cbd) == "Business"
        assert audience_estimate(cbd) == "Young Professional"

    def test_residential_district(self):
        khuwair = catalog.lookup("9")
        assert traffic_type(khuwair) == "Residential"
        # 80 km/h is too fast for the family profile
        assert audience_estimate(khuwair) == "Mixed"

    def test_competition(self, highway_site, community_site):
        assert competition_level(highway_site) == "High"
        assert competition_level(catalog.lookup("3")) == "Medium"
        assert competition_level(community_site) == "Low"


class TestProsCons:
    def test_highway(self, highway_site):
        pros, cons = pros_and_cons(highway_site)
        assert "Bidirectional traffic doubles exposure" in pros
        assert "Premium highway location with high visibility" in pros
        assert "High speed requires simple, bold messaging" in cons
        assert "High competition may reduce message impact" in cons

    def test_forecourt(self):
        pros, cons = pros_and_cons(catalog.lookup("7"))
        assert "Captive audience at service stations" in pros
        assert "Limited to fuel station customers" in cons
        assert "Digital format allows dynamic content updates" in pros


def test_location_insights(community_site):
    insights = location_insights(community_site)
    assert insights.location_id == "5"
    assert insights.traffic_type == "Mixed"
    assert insights.competition_level == "Low"
    assert insights.recommendations.location_insight.startswith("Luxury lifestyle")
    assert insights.recommendations.speed_recommendation.startswith("Low-speed location")
    assert "Digital format" in insights.recommendations.speed_recommendation
    assert "Low speed allows detailed message reading" in insights.pros


def test_every_site_has_insights():
    for location in catalog.all():
        insights = location_insights(location)
        assert insights.recommendations.creative_strategy
        assert insights.pros or insights.cons
