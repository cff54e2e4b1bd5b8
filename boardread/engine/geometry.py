"""Legibility thresholds derived from billboard geometry and traffic speed.

Required letter height scales linearly with the distance-to-board-height
ratio, penalized by a speed step factor. Viewing time is how long the board
stays in a driver's forward cone; word budget follows a ~2.5 words/second
reading rate.

All functions are pure. Non-positive or missing inputs are replaced by the
documented defaults below rather than raising.
"""

from __future__ import annotations

import math

from boardread.models.billboard import GeometryThresholds

DEFAULT_BOARD_WIDTH_M = 14.0
DEFAULT_BOARD_HEIGHT_M = 5.0
DEFAULT_SPEED_KMH = 80.0
DEFAULT_DISTANCE_M = 100.0

FONT_HEIGHT_COEFF = 0.15  # metres of letter height per unit distance/height ratio
DESIGN_HEIGHT_PX = 400  # artwork height convention for pixel conversion
INCHES_PER_METRE = 39.37
WORDS_PER_SECOND = 2.5
MIN_WORD_COUNT = 3

# Primary-script (Arabic) share of the board face, Ordinance 25/93
PRIMARY_SCRIPT_MIN_SHARE = 0.6


def _positive(value: float | None, default: float) -> float:
    if value is None or not value > 0:
        return default
    return float(value)


def speed_factor(speed_kmh: float) -> float:
    """Step penalty: faster traffic needs proportionally larger text."""
    if speed_kmh <= 50:
        return 1.0
    if speed_kmh <= 80:
        return 1.3
    if speed_kmh <= 100:
        return 1.6
    return 2.0


def minimum_font_height_m(
    distance_m: float | None,
    board_height_m: float | None,
    speed_kmh: float | None,
) -> float:
    distance = _positive(distance_m, DEFAULT_DISTANCE_M)
    height = _positive(board_height_m, DEFAULT_BOARD_HEIGHT_M)
    speed = _positive(speed_kmh, DEFAULT_SPEED_KMH)
    return (distance / height) * speed_factor(speed) * FONT_HEIGHT_COEFF


def font_height_px(font_height_m: float, board_height_m: float | None) -> int:
    height = _positive(board_height_m, DEFAULT_BOARD_HEIGHT_M)
    return round((font_height_m / height) * DESIGN_HEIGHT_PX)


def viewing_time_seconds(board_width_m: float | None, speed_kmh: float | None) -> float:
    width = _positive(board_width_m, DEFAULT_BOARD_WIDTH_M)
    speed = _positive(speed_kmh, DEFAULT_SPEED_KMH)
    return (width * 2) / (speed / 3.6)


def max_word_count(viewing_time_s: float) -> int:
    return max(MIN_WORD_COUNT, math.floor(viewing_time_s * WORDS_PER_SECOND))


def required_contrast_ratio(distance_m: float | None, speed_kmh: float | None) -> float:
    """WCAG AA baseline, raised for fast or distant viewing."""
    distance = _positive(distance_m, DEFAULT_DISTANCE_M)
    speed = _positive(speed_kmh, DEFAULT_SPEED_KMH)
    fast = speed > 100
    far = distance > 100
    if fast and far:
        return 7.0
    if speed > 80 or far:
        return 5.0
    return 4.5


def primary_script_area_m2(board_width_m: float | None, board_height_m: float | None) -> float:
    width = _positive(board_width_m, DEFAULT_BOARD_WIDTH_M)
    height = _positive(board_height_m, DEFAULT_BOARD_HEIGHT_M)
    return width * height * PRIMARY_SCRIPT_MIN_SHARE


def compute_thresholds(
    distance_m: float | None,
    board_width_m: float | None,
    board_height_m: float | None,
    speed_kmh: float | None,
) -> GeometryThresholds:
    distance = _positive(distance_m, DEFAULT_DISTANCE_M)
    width = _positive(board_width_m, DEFAULT_BOARD_WIDTH_M)
    height = _positive(board_height_m, DEFAULT_BOARD_HEIGHT_M)
    speed = _positive(speed_kmh, DEFAULT_SPEED_KMH)

    font_m = minimum_font_height_m(distance, height, speed)
    view_s = viewing_time_seconds(width, speed)

    return GeometryThresholds(
        distance_m=distance,
        board_width_m=width,
        board_height_m=height,
        speed_kmh=speed,
        speed_factor=speed_factor(speed),
        min_font_height_m=round(font_m, 4),
        min_font_height_px=font_height_px(font_m, height),
        min_font_height_in=round(font_m * INCHES_PER_METRE, 1),
        min_font_height_cm=round(font_m * 100),
        headline_height_pct=round(font_m / height * 100),
        viewing_time_s=round(view_s, 2),
        max_word_count=max_word_count(view_s),
        required_contrast_ratio=required_contrast_ratio(distance, speed),
    )
