"""Shared test fixtures."""

from __future__ import annotations

import io
import json

import pytest
from PIL import Image

from boardread.engine.catalog import catalog, generate_metadata
from boardread.errors import TransportError
from boardread.models.billboard import BillboardLocation


def make_image(size=(96, 48), fmt="JPEG", color="white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


SAMPLE_JPEG = make_image()

GOOD_RESPONSE = {
    "text_content": {
        "headline": "ANNUAL SOCCER TOURNAMENT",
        "body": "23 MAY 2024 | 8 PM",
        "cta": "WWW.REALLYGREATSITE.COM",
        "all_text_elements": ["ANNUAL", "SOCCER", "TOURNAMENT", "23 MAY 2024", "8 PM"],
    },
    "visual_analysis": {
        "headline_font_inches": 10.0,
        "font_style": "Bold sans-serif",
        "text_color": "#FFFFFF",
        "background_color": "#000000",
        "clutter_score": 7,
        "contrast_ratio": "21:1",
    },
    "arabic_analysis": {
        "arabic_detected": False,
        "arabic_is_primary": False,
        "ordinance_25_93_compliant": False,
        "compliance_status": "critical_violation_no_arabic",
    },
    "readability_metrics": {
        "word_count": 12,
        "viewing_time_seconds": 2.8,
        "max_recommended_words": 7,
        "compliant": False,
    },
    "assessment": {
        "overall_score": 4.5,
        "critical_issues": ["LEGAL VIOLATION: No Arabic text present"],
    },
    "recommendations": [
        {
            "priority": "CRITICAL",
            "issue": "No Arabic text",
            "action": "Add an Arabic headline above the English one",
            "expected_impact": "Legal compliance",
        },
        {
            "priority": "MEDIUM",
            "issue": "Competing logos",
            "action": "Remove flame effects",
            "expected_impact": "Cleaner focal point",
        },
        {
            "priority": "LOW",
            "issue": "URL",
            "action": "Replace URL with a QR code",
            "expected_impact": "Fewer words",
        },
    ],
    "detailed_visual_description": "Black background with two club shields and white headline.",
}

# Boilerplate answer inside the lazy 7.0-7.5 band with nothing to back it up
GENERIC_RESPONSE = {"assessment": {"overall_score": 7.2}}


def make_analyzer(*replies):
    """Fake RemoteAnalyzer returning ``replies`` in order (last one repeats).

    A reply that is an exception instance is raised instead of returned.
    The returned callable exposes ``calls`` for assertions.
    """

    async def analyzer(image: bytes, system_prompt: str, user_prompt: str) -> str:
        index = min(analyzer.calls, len(replies) - 1)
        analyzer.calls += 1
        analyzer.prompts.append((system_prompt, user_prompt))
        reply = replies[index]
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply

    analyzer.calls = 0
    analyzer.prompts = []
    return analyzer


@pytest.fixture
def sample_jpeg() -> bytes:
    return SAMPLE_JPEG


@pytest.fixture
def good_response() -> dict:
    return json.loads(json.dumps(GOOD_RESPONSE))


@pytest.fixture
def generic_response() -> dict:
    return dict(GENERIC_RESPONSE)


@pytest.fixture
def highway_site() -> BillboardLocation:
    """Sultan Qaboos Road, bidirectional, 100-120 km/h."""
    return catalog.lookup("2")


@pytest.fixture
def expressway_site() -> BillboardLocation:
    return catalog.lookup("12")


@pytest.fixture
def community_site() -> BillboardLocation:
    """Al Mouj low-speed digital network."""
    return catalog.lookup("5")


@pytest.fixture
def highway_metadata(highway_site):
    return generate_metadata(highway_site)


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("provider returned 503")
