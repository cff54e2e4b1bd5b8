"""Static Muscat billboard catalog and per-request AnalysisContext derivation.

The catalog is built once at import time from frozen models and is safe for
unsynchronized concurrent reads.
"""

from __future__ import annotations

import logging
import re

from boardread.models.billboard import (
    AnalysisContext,
    BillboardLocation,
    BillboardMetadata,
    BusinessIntelligence,
    RoadCategory,
    SpeedContext,
    VisibilityFactors,
)

logger = logging.getLogger(__name__)

DEFAULT_RENTAL_RATE_OMR = 2000
DEFAULT_SPEED_RANGE = (50, 50)

_SPEED_RE = re.compile(r"(\d+)(?:\s*[–-]\s*(\d+))?")
_NUMBER_RE = re.compile(r"(\d+)")

# Road type -> typical viewing distance (m) when the site has no measured one
_VIEWING_DISTANCE_BY_ROAD: dict[str, float] = {
    "expressway": 150,
    "urban motorway": 100,
    "inter-urban arterial": 80,
    "urban arterial": 60,
    "urban street": 40,
    "district arterials": 50,
    "mixed-use district streets": 30,
}
_DEFAULT_VIEWING_DISTANCE = 75.0

# Road type -> base monthly impressions
_MONTHLY_IMPRESSIONS_BY_ROAD: dict[str, int] = {
    "expressway": 500_000,
    "urban motorway": 300_000,
    "inter-urban arterial": 200_000,
    "urban arterial": 150_000,
    "urban street": 80_000,
    "district arterials": 100_000,
    "mixed-use district streets": 60_000,
}
_DEFAULT_MONTHLY_IMPRESSIONS = 100_000

_KNOWN_OPERATORS = {
    "mediaone": "MediaOne",
    "jcdecaux": "JCDecaux",
    "mubashir": "Mubashir",
    "oomco": "OOMCO",
    "omran": "OMRAN",
}


_MUSCAT_SITES: list[dict] = [
    {
        "id": "1",
        "location_name": "Darsait / CBD main highway (towards Seeb)",
        "address_landmark": "Sultan Qaboos Rd corridor near CBD/Darsait",
        "road_name": "Sultan Qaboos Road",
        "highway_designation": "N5 (Route 1)",
        "district": "Darsait / CBD",
        "board_type": "Billboard",
        "format": "Static (likely illuminated)",
        "traffic_direction_visibility": "East → West (toward Seeb)",
        "speed_limit_kmh": "100–120",
        "road_type": "Urban motorway",
        "lighting": "TBD",
        "ownership_management": "MediaOne",
        "readability_difficulty": "hard",
    },
    {
        "id": "2",
        "location_name": "Sultan Qaboos Highway corridor – reference site",
        "address_landmark": "Airport → Ghala/Azaiba/Al Khuwair/Madina Qaboos/Qurum",
        "latitude": 23.59012,
        "longitude": 58.37613,
        "road_name": "Sultan Qaboos Road",
        "highway_designation": "N5 (Route 1)",
        "district": "Multiple",
        "board_type": "Billboard",
        "format": "Static",
        "traffic_direction_visibility": "Bidirectional",
        "speed_limit_kmh": "100–120",
        "road_type": "Urban motorway",
        "lighting": "TBD",
        "ownership_management": "Multiple operators (JCDecaux exclusivity)",
        "readability_difficulty": "hard",
    },
    {
        "id": "3",
        "location_name": "Quriyat–Amerat Highway – reference site",
        "address_landmark": "Quriyat ↔ Al Amerat corridor",
        "road_name": "Quriyat–Amerat Highway",
        "district": "Al Amerat",
        "board_type": "Billboard",
        "format": "Static",
        "traffic_direction_visibility": "Bidirectional",
        "speed_limit_kmh": "80–100",
        "road_type": "Inter-urban arterial",
        "lighting": "TBD",
        "ownership_management": "MediaOne",
        "readability_difficulty": "medium",
    },
    {
        "id": "4",
        "location_name": "Muscat Municipality roadside & street furniture network",
        "address_landmark": "Across Muscat Governorate",
        "road_name": "Multiple city arterials",
        "district": "Multiple",
        "board_type": "Roadside / Street Furniture",
        "format": "Classic & Digital",
        "traffic_direction_visibility": "Varies",
        "speed_limit_kmh": "Varies",
        "road_type": "Urban arterials & streets",
        "lighting": "Varies",
        "ownership_management": "JCDecaux Oman (exclusive roadside)",
        "readability_difficulty": "easy",
    },
    {
        "id": "5",
        "location_name": "Al Mouj Muscat (The Wave) – community DOOH",
        "address_landmark": "Marina, retail promenades, internal boulevards",
        "road_name": "Al Mouj internal roads",
        "district": "Al Mawaleh North / Al Hail North area",
        "board_type": "DOOH network",
        "format": "Digital screens",
        "traffic_direction_visibility": "Pedestrian & low-speed vehicular",
        "speed_limit_kmh": "30–50",
        "road_type": "Mixed-use district streets",
        "lighting": "Digital backlit",
        "ownership_management": "Mubashir (with Al Mouj)",
        "readability_difficulty": "easy",
    },
    {
        "id": "6",
        "location_name": "Oman Convention & Exhibition Centre / Madinat Al-Irfan",
        "address_landmark": "OCEC campus near Muscat International Airport",
        "road_name": "OCEC internal roads / Airport heights",
        "district": "Madinat Al-Irfan",
        "board_type": "DOOH & billboards",
        "format": "Digital & static",
        "traffic_direction_visibility": "Campus/internal arterials",
        "speed_limit_kmh": "30–60",
        "road_type": "District arterials",
        "lighting": "Digital backlit / illuminated static",
        "ownership_management": "Mubashir (network partner); OMRAN (asset owner)",
        "readability_difficulty": "easy",
    },
    {
        "id": "7",
        "location_name": "OOMCO – Ruwi Valley Service Station",
        "address_landmark": "Ruwi Valley OOMCO station",
        "road_name": "Ruwi Valley Road",
        "district": "Ruwi / CBD",
        "board_type": "Forecourt digital",
        "format": "Digital (DOOH)",
        "traffic_direction_visibility": "Forecourt traffic",
        "speed_limit_kmh": "60–80",
        "road_type": "Urban arterial",
        "lighting": "Digital",
        "ownership_management": "Oman Oil Marketing (OOMCO)",
        "readability_difficulty": "medium",
    },
    {
        "id": "8",
        "location_name": "OOMCO – Amerat Heights Service Station",
        "address_landmark": "Amerat Heights OOMCO station",
        "road_name": "Al Amerat corridor",
        "district": "Al Amerat",
        "board_type": "Forecourt digital",
        "format": "Digital (DOOH)",
        "traffic_direction_visibility": "Forecourt traffic",
        "speed_limit_kmh": "80",
        "road_type": "Urban arterial",
        "lighting": "Digital",
        "ownership_management": "Oman Oil Marketing (OOMCO)",
        "readability_difficulty": "medium",
    },
    {
        "id": "9",
        "location_name": "OOMCO – Al Khuwair 33 Service Station",
        "address_landmark": "Al Khuwair 33 OOMCO station",
        "latitude": 23.5847,
        "longitude": 58.432,
        "road_name": "Al Khuwair 33",
        "district": "Al Khuwair",
        "board_type": "Forecourt digital",
        "format": "Digital (DOOH)",
        "traffic_direction_visibility": "Forecourt traffic",
        "speed_limit_kmh": "80",
        "road_type": "Urban street",
        "lighting": "Digital",
        "ownership_management": "Oman Oil Marketing (OOMCO)",
        "readability_difficulty": "medium",
    },
    {
        "id": "10",
        "location_name": "OOMCO – Azaiba Service Station",
        "address_landmark": "Azaiba OOMCO station",
        "latitude": 23.585613,
        "longitude": 58.38108,
        "road_name": "Azaiba",
        "district": "Azaiba",
        "board_type": "Forecourt digital",
        "format": "Digital (DOOH)",
        "traffic_direction_visibility": "Forecourt traffic",
        "speed_limit_kmh": "80",
        "road_type": "Urban arterial",
        "lighting": "Digital",
        "ownership_management": "Oman Oil Marketing (OOMCO)",
        "readability_difficulty": "medium",
    },
    {
        "id": "11",
        "location_name": "OOMCO – Wadi Hatat / Wadi Adai Service Stations",
        "address_landmark": "Wadi Hatat (and Twin) OOMCO stations",
        "latitude": 23.47314,
        "longitude": 58.49451,
        "road_name": "Wadi Adai–Ruwi link",
        "district": "Wadi Adai / Ruwi",
        "board_type": "Forecourt digital",
        "format": "Digital (DOOH)",
        "traffic_direction_visibility": "Forecourt traffic",
        "speed_limit_kmh": "80",
        "road_type": "Urban arterial",
        "lighting": "Digital",
        "ownership_management": "Oman Oil Marketing (OOMCO)",
        "readability_difficulty": "medium",
    },
    {
        "id": "12",
        "location_name": "Muscat Expressway corridor – reference site",
        "address_landmark": "Muscat Expressway segment (Halban connector)",
        "latitude": 23.564436,
        "longitude": 58.206192,
        "road_name": "Muscat Expressway",
        "district": "Halban / West Muscat",
        "board_type": "Billboard",
        "format": "Static",
        "traffic_direction_visibility": "Bidirectional",
        "speed_limit_kmh": "120",
        "road_type": "Expressway",
        "lighting": "TBD",
        "ownership_management": "Likely JCDecaux (roadside)",
        "readability_difficulty": "extreme",
    },
]


# ---------- Field parsing ----------


def parse_speed_limit(speed_limit: str | None) -> tuple[int, int]:
    """'100–120' -> (100, 120); '80' -> (80, 80); unparseable -> (50, 50)."""
    match = _SPEED_RE.search(speed_limit or "")
    if not match:
        return DEFAULT_SPEED_RANGE
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    return low, high


def average_speed(location: BillboardLocation) -> float:
    low, high = parse_speed_limit(location.speed_limit_kmh)
    return (low + high) / 2


def parse_rental_rate(rate: str | None) -> int | None:
    if not rate:
        return None
    match = _NUMBER_RE.search(rate.replace(",", ""))
    return int(match.group(1)) if match else None


def rental_rate_or_default(location: BillboardLocation) -> int:
    return parse_rental_rate(location.rental_rate_omr_month) or DEFAULT_RENTAL_RATE_OMR


def estimate_viewing_distance(road_type: str) -> float:
    return _VIEWING_DISTANCE_BY_ROAD.get(road_type.lower(), _DEFAULT_VIEWING_DISTANCE)


def viewing_distance(location: BillboardLocation) -> float:
    return location.distance_from_road_m or estimate_viewing_distance(location.road_type)


def is_bidirectional(location: BillboardLocation) -> bool:
    return "bidirectional" in location.traffic_direction_visibility.lower()


def is_digital(location: BillboardLocation) -> bool:
    return "digital" in location.format.lower()


# ---------- Categorization ----------


def categorize_road_type(road_type: str) -> RoadCategory:
    kind = road_type.lower()
    if "expressway" in kind:
        return "expressway"
    if "motorway" in kind or "highway" in kind:
        return "highway"
    if "arterial" in kind:
        return "arterial"
    return "urban"


def categorize_lighting(lighting: str) -> str:
    light = lighting.lower()
    if "digital" in light or "backlit" in light:
        return "excellent"
    if "illuminated" in light:
        return "good"
    if light in ("tbd", "varies"):
        return "fair"
    return "poor"


def categorize_traffic_flow(visibility: str) -> str:
    vis = visibility.lower()
    if "bidirectional" in vis:
        return "bidirectional"
    if "varies" in vis or "campus" in vis or "forecourt" in vis:
        return "complex"
    return "unidirectional"


def estimate_obstruction(board_type: str, road_type: str) -> str:
    if "forecourt" in board_type.lower():
        return "moderate"
    if "expressway" in road_type.lower():
        return "none"
    return "minimal"


def estimate_monthly_impressions(location: BillboardLocation) -> int:
    impressions = float(
        _MONTHLY_IMPRESSIONS_BY_ROAD.get(
            " ".join(location.road_type.lower().split()), _DEFAULT_MONTHLY_IMPRESSIONS
        )
    )
    if is_digital(location):
        impressions *= 1.3
    if is_bidirectional(location):
        impressions *= 1.8
    return round(impressions)


def calculate_cpm(location: BillboardLocation) -> float:
    """Cost per thousand monthly impressions, in OMR."""
    impressions = estimate_monthly_impressions(location)
    return round(rental_rate_or_default(location) / impressions * 1000, 2)


def identify_competitors(ownership: str) -> list[str]:
    owner = ownership.lower()
    return [name for key, name in _KNOWN_OPERATORS.items() if key in owner]


def build_analysis_context(location: BillboardLocation) -> AnalysisContext:
    avg = average_speed(location)
    return AnalysisContext(
        viewing_distance=viewing_distance(location),
        speed=SpeedContext(
            kmh=avg,
            mph=round(avg * 0.621371),
            category=categorize_road_type(location.road_type),
        ),
        visibility=VisibilityFactors(
            lighting=categorize_lighting(location.lighting),
            traffic_flow=categorize_traffic_flow(location.traffic_direction_visibility),
            obstruction=estimate_obstruction(location.board_type, location.road_type),
        ),
        business=BusinessIntelligence(
            rental_rate=parse_rental_rate(location.rental_rate_omr_month),
            impressions_per_month=estimate_monthly_impressions(location),
            cost_per_thousand_impressions=calculate_cpm(location),
            competitor_presence=identify_competitors(location.ownership_management),
        ),
    )


def generate_metadata(location: BillboardLocation) -> BillboardMetadata:
    return BillboardMetadata(location=location, context=build_analysis_context(location))


# ---------- Catalog ----------


class BillboardCatalog:
    """Read-only lookup over a fixed set of sites."""

    def __init__(self, locations: list[BillboardLocation] | tuple[BillboardLocation, ...]) -> None:
        self._locations = tuple(locations)
        self._by_id = {loc.id: loc for loc in self._locations}

    def __len__(self) -> int:
        return len(self._locations)

    def all(self) -> list[BillboardLocation]:
        return list(self._locations)

    def lookup(self, location_id: str) -> BillboardLocation | None:
        return self._by_id.get(location_id)

    def search(self, query: str) -> list[BillboardLocation]:
        term = query.strip().lower()
        if not term:
            return self.all()
        return [
            loc
            for loc in self._locations
            if term in loc.location_name.lower()
            or term in loc.address_landmark.lower()
            or term in loc.road_name.lower()
            or term in loc.district.lower()
            or term in loc.board_type.lower()
        ]

    def by_difficulty(self, difficulty: str) -> list[BillboardLocation]:
        return [loc for loc in self._locations if loc.readability_difficulty == difficulty]

    def by_min_roi(self, min_score: int) -> list[BillboardLocation]:
        from boardread.engine.site_scoring import calculate_roi

        return [loc for loc in self._locations if calculate_roi(loc)[0] >= min_score]


def _load_default_catalog() -> BillboardCatalog:
    locations = [BillboardLocation.model_validate(site) for site in _MUSCAT_SITES]
    logger.debug("Loaded %d catalog sites", len(locations))
    return BillboardCatalog(locations)


catalog = _load_default_catalog()
