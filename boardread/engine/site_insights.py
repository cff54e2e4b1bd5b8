"""Qualitative site insights: audience, competition, creative guidance."""

from __future__ import annotations

from boardread.engine.catalog import average_speed, is_bidirectional, is_digital
from boardread.models.billboard import BillboardLocation
from boardread.models.scoring import LocationInsights, LocationRecommendations


def traffic_type(location: BillboardLocation) -> str:
    road = location.road_name.lower()
    district = location.district.lower()
    landmark = location.address_landmark.lower()

    if (
        "business" in road
        or "cbd" in district
        or "business" in landmark
        or "commercial" in landmark
        or "ocec" in location.location_name.lower()
    ):
        return "Business"

    if any(k in district for k in ("qurum", "azaiba", "al khuwair", "residential")) or (
        "residential" in landmark
    ):
        return "Residential"

    return "Mixed"


def audience_estimate(location: BillboardLocation) -> str:
    avg = average_speed(location)
    kind = traffic_type(location)
    if avg >= 80 and kind == "Business":
        return "Young Professional"
    if avg <= 60 and kind == "Residential":
        return "Family"
    return "Mixed"


def competition_level(location: BillboardLocation) -> str:
    owner = location.ownership_management.lower()
    if "multiple" in owner or "exclusive" in owner or "sultan qaboos" in location.road_name.lower():
        return "High"
    if "jcdecaux" in owner or "mediaone" in owner:
        return "Medium"
    return "Low"


def _speed_recommendation(location: BillboardLocation, avg: float) -> str:
    if avg > 100:
        text = (
            "High-speed location: Use large fonts (minimum 200px), maximum contrast colors, "
            "and limit to 6 words or less. Bold sans-serif fonts read best at highway speed."
        )
    elif avg >= 60:
        text = (
            "Medium-speed location: Use clear fonts (minimum 150px), good contrast, "
            "and keep messaging concise (8-10 words maximum)."
        )
    else:
        text = (
            "Low-speed location: Detailed messaging acceptable. Smaller fonts (100px+) "
            "and more text elements work as viewers have more time to read."
        )

    board = location.board_type.lower()
    if "dooh" in board or is_digital(location):
        text += " Digital format: consider animation, video or rotating messages."
    if "forecourt" in board:
        text += " Captive audience: product details, QR codes and promotions work well here."
    return text


def _location_insight(location: BillboardLocation) -> str:
    road = location.road_type.lower()
    district = location.district.lower()
    landmark = location.address_landmark.lower()

    if "expressway" in road:
        return (
            "Premium expressway location: maximum reach with high-income demographics. "
            "Requires simple, bold messaging. Strong for brand awareness campaigns."
        )
    if "cbd" in district or "business" in district or "business" in landmark:
        return (
            "Business district location: professional weekday audience. Suits B2B, "
            "financial services and corporate messaging. Peaks during rush hours."
        )
    if any(k in district for k in ("qurum", "azaiba", "al khuwair")):
        return (
            "Residential area location: family-oriented demographics. Suits consumer "
            "products, family services and lifestyle brands. Weekend traffic matters."
        )
    if "airport" in landmark or "ocec" in landmark:
        return (
            "Tourism/business hub: mixed international and local audience. Bilingual "
            "Arabic/English content recommended."
        )
    if "marina" in landmark or "al mouj" in landmark:
        return (
            "Luxury lifestyle location: affluent leisure audience. Suits premium brands, "
            "real estate and luxury services. Pedestrian-friendly."
        )
    return (
        "Mixed-use location: diverse audience. Flexible messaging suits general "
        "consumer brands and services."
    )


def _creative_strategy(location: BillboardLocation, avg: float) -> str:
    kind = traffic_type(location)
    audience = audience_estimate(location)
    if kind == "Business" and audience == "Young Professional":
        return (
            "Target young professionals: modern design, tech-forward messaging and "
            "professional color schemes with career-focused benefits."
        )
    if kind == "Residential" and audience == "Family":
        return (
            "Target families: warm colors, family imagery and benefit-focused messaging "
            "around safety and value, respecting Arabic cultural values."
        )
    if avg >= 100:
        return (
            "Highway strategy: bold, simple design with maximum contrast, minimal text "
            "and a strong call-to-action. Brand recognition over detail."
        )
    return (
        "Balanced strategy: combine brand awareness with information. Clear hierarchy, "
        "readable fonts and color choices suited to MENA market preferences."
    )


def recommendations(location: BillboardLocation) -> LocationRecommendations:
    avg = average_speed(location)
    return LocationRecommendations(
        speed_recommendation=_speed_recommendation(location, avg),
        location_insight=_location_insight(location),
        creative_strategy=_creative_strategy(location, avg),
    )


def pros_and_cons(location: BillboardLocation) -> tuple[list[str], list[str]]:
    pros: list[str] = []
    cons: list[str] = []

    avg = average_speed(location)
    if avg <= 60:
        pros.append("Low speed allows detailed message reading")
    elif avg >= 100:
        cons.append("High speed requires simple, bold messaging")

    if is_bidirectional(location):
        pros.append("Bidirectional traffic doubles exposure")
    else:
        cons.append("Unidirectional traffic limits audience reach")

    if is_digital(location):
        pros.append("Digital format allows dynamic content updates")
    else:
        cons.append("Static format limits creative flexibility")

    competition = competition_level(location)
    if competition == "Low":
        pros.append("Low competition area with better visibility")
    elif competition == "High":
        cons.append("High competition may reduce message impact")

    if "sultan qaboos" in location.road_name.lower():
        pros.append("Premium highway location with high visibility")

    if "forecourt" in location.board_type.lower():
        pros.append("Captive audience at service stations")
        cons.append("Limited to fuel station customers")

    return pros, cons


def location_insights(location: BillboardLocation) -> LocationInsights:
    pros, cons = pros_and_cons(location)
    return LocationInsights(
        location_id=location.id,
        traffic_type=traffic_type(location),
        audience=audience_estimate(location),
        competition_level=competition_level(location),
        recommendations=recommendations(location),
        pros=pros,
        cons=cons,
    )
