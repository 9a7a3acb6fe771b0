"""
District Classifier: maps a site's context to a commercial-location archetype.

Rules are evaluated as a fixed-priority decision list; the first rule that
fires wins.

    1. COLLEGE_CAMPUS     : college-town flag set AND ("university" or
                            "college" in the address, or "university" in a
                            nearby business name).
    2. HISTORIC_DOWNTOWN  : downtown signal score >= 3, or a downtown address
                            keyword on a lot under 0.5 acre.
                            Score = 3 (address keyword) + 2 (boutique-style
                            business nearby) + 1 (lot < 0.5 acre)
                                    + 1 (more than 15 nearby businesses).
    3. HIGHWAY_CORRIDOR   : highway keyword in the address OR VPD >= 25,000.
    4. SUBURBAN_RETAIL    : lot size known and >= 1 acre.
    5. NEIGHBORHOOD       : default.

Each archetype carries a hand-authored allow list and deny list of category
ids. Deny lists gate the suitability ranker and recommendation generator.
Some ids in these lists (``fast_casual``, ``convenience_store``,
``hotel_midscale``) have no catalog entry and therefore never match; they are
kept verbatim so the lists stay reviewable against the published rules.

All matching is case-insensitive plain substring search.
"""

from __future__ import annotations

from typing import Optional, Sequence

from site_analyzer.models.results import DistrictProfile
from site_analyzer.models.site import NearbyBusiness, SiteContext
from site_analyzer.taxonomy.site_taxonomy import DistrictType

# ── Keyword tables ─────────────────────────────────────────────────────────────

DOWNTOWN_KEYWORDS: tuple[str, ...] = (
    "downtown", "main st", "main street", "historic",
    "town square", "court square", "city center", "old town",
)

DOWNTOWN_BUSINESS_INDICATORS: tuple[str, ...] = (
    "boutique", "gallery", "antique", "cafe", "bistro",
    "tavern", "brewery", "bookstore", "salon",
)

HIGHWAY_KEYWORDS: tuple[str, ...] = (
    "highway", "hwy", "interstate", "i-", "exit", "frontage",
)

COLLEGE_ADDRESS_KEYWORDS: tuple[str, ...] = ("university", "college")
COLLEGE_BUSINESS_KEYWORD = "university"

SMALL_LOT_ACRES = 0.5
SUBURBAN_LOT_ACRES = 1.0
HIGH_DENSITY_BUSINESS_COUNT = 15
HIGHWAY_VPD = 25_000
DOWNTOWN_SCORE_THRESHOLD = 3

# ── Curated downtown archetypes ────────────────────────────────────────────────

DOWNTOWN_BUSINESSES: dict[str, tuple[str, ...]] = {
    "dining": (
        "Farm-to-table Restaurant", "Craft Brewery/Brewpub", "Wine Bar", "Tapas Bar",
        "Upscale Bistro", "Artisan Pizza", "Specialty Coffee Roaster", "Brunch Spot",
        "Cocktail Lounge", "Rooftop Bar", "Fine Dining",
    ),
    "retail": (
        "Boutique Clothing", "Art Gallery", "Antique Shop", "Bookstore",
        "Gift Shop", "Jewelry Store", "Home Decor", "Specialty Food Market",
        "Flower Shop", "Record/Vinyl Shop",
    ),
    "services": (
        "Upscale Salon/Spa", "Yoga/Pilates Studio", "Boutique Fitness",
        "Co-working Space", "Photography Studio", "Law Office", "Architecture Firm",
    ),
    "entertainment": (
        "Live Music Venue", "Comedy Club", "Theater", "Escape Room",
        "Axe Throwing", "Board Game Cafe",
    ),
}


def downtown_business_options() -> list[str]:
    """All curated downtown archetypes: dining, retail, services, entertainment."""
    return [name for group in DOWNTOWN_BUSINESSES.values() for name in group]


# ── Per-archetype profiles ─────────────────────────────────────────────────────

_COLLEGE_CAMPUS = DistrictProfile(
    type=DistrictType.COLLEGE_CAMPUS,
    description="College campus area - student-focused retail and dining",
    appropriate_categories=(
        "college_town_fast_casual", "college_town_coffee", "college_town_late_night",
        "college_town_services", "college_town_entertainment", "fast_food_premium",
        "coffee_premium", "fast_casual",
    ),
    inappropriate_categories=(
        "big_box", "car_dealership_new", "car_dealership_used", "truck_stop",
        "discount_retail", "financial_services",
    ),
)

_HISTORIC_DOWNTOWN = DistrictProfile(
    type=DistrictType.HISTORIC_DOWNTOWN,
    description="Historic downtown district - boutique retail, dining, and specialty shops",
    appropriate_categories=(
        "coffee_premium", "coffee_value", "fast_casual", "casual_dining_premium",
        "retail_premium", "bank", "medical", "fitness",
    ),
    inappropriate_categories=(
        "gas_station", "discount_retail", "big_box", "truck_stop", "car_wash_express",
        "car_wash_full", "car_dealership_new", "car_dealership_used", "fast_food_value",
        "financial_services", "auto_service", "convenience_store",
    ),
)

_HIGHWAY_CORRIDOR = DistrictProfile(
    type=DistrictType.HIGHWAY_CORRIDOR,
    description="Highway corridor - high visibility, drive-thru friendly, travel services",
    appropriate_categories=(
        "gas_station", "fast_food_value", "fast_food_premium", "convenience_store",
        "hotel_budget", "hotel_midscale", "truck_stop", "auto_service", "car_wash_express",
    ),
    inappropriate_categories=("retail_premium", "fitness_premium"),
)

# Empty allow list: every category is welcome.
_SUBURBAN_RETAIL = DistrictProfile(
    type=DistrictType.SUBURBAN_RETAIL,
    description="Suburban retail corridor - diverse mix of retail and services",
    appropriate_categories=(),
    inappropriate_categories=("truck_stop",),
)

_NEIGHBORHOOD = DistrictProfile(
    type=DistrictType.NEIGHBORHOOD,
    description="Neighborhood commercial - local services and convenience",
    appropriate_categories=(
        "coffee_value", "coffee_premium", "fast_food_value", "fast_food_premium",
        "convenience_store", "pharmacy", "medical", "bank", "fitness",
    ),
    inappropriate_categories=(
        "big_box", "truck_stop", "car_dealership_new", "car_dealership_used",
    ),
)

DISTRICT_PROFILES: dict[DistrictType, DistrictProfile] = {
    p.type: p
    for p in (
        _COLLEGE_CAMPUS, _HISTORIC_DOWNTOWN, _HIGHWAY_CORRIDOR,
        _SUBURBAN_RETAIL, _NEIGHBORHOOD,
    )
}


# ── Signals ────────────────────────────────────────────────────────────────────

def downtown_score(
    address: str,
    nearby_businesses: Sequence[NearbyBusiness],
    lot_size_acres: Optional[float],
) -> int:
    """Weighted downtown-likelihood score (0-7)."""
    address_lower = address.lower()
    names = " ".join(b.name.lower() for b in nearby_businesses)
    types = " ".join(b.type.lower() for b in nearby_businesses)

    score = 0
    if any(kw in address_lower for kw in DOWNTOWN_KEYWORDS):
        score += 3
    if any(ind in names or ind in types for ind in DOWNTOWN_BUSINESS_INDICATORS):
        score += 2
    if lot_size_acres is not None and lot_size_acres < SMALL_LOT_ACRES:
        score += 1
    if len(nearby_businesses) > HIGH_DENSITY_BUSINESS_COUNT:
        score += 1
    return score


def classify_district(
    address: str,
    nearby_businesses: Sequence[NearbyBusiness],
    lot_size_acres: Optional[float],
    vpd: Optional[int],
    is_college_town: bool,
) -> DistrictProfile:
    """Classify a site into one of the five district archetypes.

    Args:
        address:           Free-text street address.
        nearby_businesses: Businesses within the scanning radius.
        lot_size_acres:    Lot size, or ``None`` when unknown.
        vpd:               Estimated vehicles per day, or ``None``.
        is_college_town:   Demographics college-town flag.

    Returns:
        The shared, immutable ``DistrictProfile`` for the winning archetype.
    """
    address_lower = address.lower()
    names = " ".join(b.name.lower() for b in nearby_businesses)
    small_lot = lot_size_acres is not None and lot_size_acres < SMALL_LOT_ACRES

    if is_college_town and (
        any(kw in address_lower for kw in COLLEGE_ADDRESS_KEYWORDS)
        or COLLEGE_BUSINESS_KEYWORD in names
    ):
        return _COLLEGE_CAMPUS

    has_downtown_address = any(kw in address_lower for kw in DOWNTOWN_KEYWORDS)
    score = downtown_score(address, nearby_businesses, lot_size_acres)
    if score >= DOWNTOWN_SCORE_THRESHOLD or (has_downtown_address and small_lot):
        return _HISTORIC_DOWNTOWN

    if any(kw in address_lower for kw in HIGHWAY_KEYWORDS) or (
        vpd is not None and vpd >= HIGHWAY_VPD
    ):
        return _HIGHWAY_CORRIDOR

    if lot_size_acres is not None and lot_size_acres >= SUBURBAN_LOT_ACRES:
        return _SUBURBAN_RETAIL

    return _NEIGHBORHOOD


def classify_site(site: SiteContext) -> DistrictProfile:
    """Convenience wrapper: classify a ``SiteContext``."""
    return classify_district(
        address=site.address,
        nearby_businesses=site.nearby_businesses,
        lot_size_acres=site.lot_size_acres,
        vpd=site.vpd,
        is_college_town=bool(site.demographics and site.demographics.is_college_town),
    )
