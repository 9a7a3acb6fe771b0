"""
Recommendation Generator: concrete brand names for a site, best first.

Candidates are collected from three sources, each with an internal priority:

    1. Downtown seeds (historic downtown only): curated archetypes not
       already present nearby, priority 12.
    2. Catalog categories not excluded by the district, where
       VPD >= 0.7 * min and (lot unknown or lot >= category min):
         priority = 10 (VPD >= ideal) | 7 (VPD >= min) | 4 (otherwise)
                    +3 income match / -2 mismatch
                    +1 lot >= ideal
       The first few example brands not already nearby are emitted.
    3. The demographic profile's preferred businesses not already nearby,
       priority 12, unless a lot-size heuristic says the brand cannot fit.

Candidates are stable-sorted by priority descending, deduplicated
case-insensitively (first occurrence wins) and truncated. Only names are
returned; the priorities are an internal ordering device.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from site_analyzer.analysis.district import downtown_business_options
from site_analyzer.config import RecommendationConfig
from site_analyzer.models.requirements import CategoryRequirement
from site_analyzer.models.results import DistrictProfile
from site_analyzer.models.site import Demographics, NearbyBusiness
from site_analyzer.recommendations.brand_matching import filter_existing
from site_analyzer.recommendations.suitability import (
    MARGINAL_TRAFFIC_FACTOR,
    effective_income_tier,
)
from site_analyzer.taxonomy.site_taxonomy import DistrictType

SEED_PRIORITY = 12

# Brand-name fragment lists (lower-case substring match) → minimum lot in acres
# a preferred business needs before it is recommended.
BIG_BOX_NAMES: tuple[str, ...] = (
    "walmart", "target", "costco", "home depot", "lowes", "best buy", "kohls",
)
PREMIUM_RETAIL_NAMES: tuple[str, ...] = (
    "tj maxx", "ross", "marshalls", "homegoods", "whole foods", "trader joe",
)
FITNESS_NAMES: tuple[str, ...] = (
    "planet fitness", "la fitness", "lifetime", "crunch", "gold",
)

LOT_HEURISTICS: tuple[tuple[tuple[str, ...], float], ...] = (
    (BIG_BOX_NAMES, 8.0),
    (PREMIUM_RETAIL_NAMES, 1.5),
    (FITNESS_NAMES, 1.0),
)


@dataclass
class _Candidate:
    """One recommendation candidate before sorting.

    Attributes:
        name:     Brand or business archetype name.
        priority: Internal ordering score (higher is better).
        reason:   Short explanation, kept for debugging.
    """

    name: str
    priority: int
    reason: str


def fits_lot(business: str, lot_size_acres: Optional[float]) -> bool:
    """False when a name heuristic implies a minimum lot above ``lot_size_acres``."""
    if lot_size_acres is None:
        return True
    lowered = business.lower()
    for fragments, min_acres in LOT_HEURISTICS:
        if lot_size_acres < min_acres and any(f in lowered for f in fragments):
            return False
    return True


def category_priority(
    vpd: int,
    category: CategoryRequirement,
    income_matches: bool,
    lot_size_acres: Optional[float],
) -> int:
    if vpd >= category.ideal_vpd:
        priority = 10
    elif vpd >= category.min_vpd:
        priority = 7
    else:
        priority = 4

    priority += 3 if income_matches else -2

    if lot_size_acres is not None and lot_size_acres >= category.lot_size_ideal:
        priority += 1
    return priority


def _downtown_candidates(
    nearby_businesses: Sequence[NearbyBusiness],
    limit: int,
) -> list[_Candidate]:
    available = filter_existing(downtown_business_options(), nearby_businesses)
    return [
        _Candidate(name, SEED_PRIORITY, "Ideal for historic downtown district")
        for name in available[:limit]
    ]


def _category_candidates(
    vpd: int,
    nearby_businesses: Sequence[NearbyBusiness],
    demographics: Optional[Demographics],
    lot_size_acres: Optional[float],
    district: Optional[DistrictProfile],
    catalog: Mapping[str, CategoryRequirement],
    brands_per_category: int,
) -> list[_Candidate]:
    tier = effective_income_tier(demographics)
    candidates: list[_Candidate] = []
    for category_id, category in catalog.items():
        if district is not None and district.excludes(category_id):
            continue
        if vpd < category.min_vpd * MARGINAL_TRAFFIC_FACTOR:
            continue
        if lot_size_acres is not None and lot_size_acres < category.lot_size_min:
            continue

        priority = category_priority(
            vpd, category, tier in category.income_preferences, lot_size_acres
        )
        available = filter_existing(category.example_brands, nearby_businesses)
        for brand in available[:brands_per_category]:
            candidates.append(
                _Candidate(brand, priority, f"VPD supports {category.display_name} concept")
            )
    return candidates


def _preferred_candidates(
    demographics: Optional[Demographics],
    nearby_businesses: Sequence[NearbyBusiness],
    lot_size_acres: Optional[float],
    already: Sequence[_Candidate],
    limit: int,
) -> list[_Candidate]:
    if demographics is None or not demographics.preferred_businesses:
        return []

    seen = {c.name.lower() for c in already}
    profile = demographics.consumer_profile_type or "local"
    candidates: list[_Candidate] = []
    for business in filter_existing(demographics.preferred_businesses, nearby_businesses)[:limit]:
        if business.lower() in seen:
            continue
        if not fits_lot(business, lot_size_acres):
            continue
        seen.add(business.lower())
        candidates.append(
            _Candidate(business, SEED_PRIORITY, f"Matches {profile} consumer profile")
        )
    return candidates


def generate_recommendations(
    vpd: int,
    nearby_businesses: Sequence[NearbyBusiness],
    demographics: Optional[Demographics],
    lot_size_acres: Optional[float],
    district: Optional[DistrictProfile],
    catalog: Mapping[str, CategoryRequirement],
    config: Optional[RecommendationConfig] = None,
) -> list[str]:
    """Produce the top brand recommendations for a site.

    Args:
        vpd:               Estimated vehicles per day.
        nearby_businesses: Businesses near the site.
        demographics:      Demographic profile, or ``None`` (the middle
                           income tier is then assumed).
        lot_size_acres:    Lot size, or ``None`` when unknown.
        district:          District profile, or ``None``.
        catalog:           Id-indexed category catalog.
        config:            List-size settings; defaults when ``None``.

    Returns:
        Up to ``config.max_recommendations`` distinct names, best first.
    """
    cfg = config or RecommendationConfig()

    candidates: list[_Candidate] = []
    if district is not None and district.type == DistrictType.HISTORIC_DOWNTOWN:
        candidates.extend(_downtown_candidates(nearby_businesses, cfg.downtown_seed_limit))

    candidates.extend(
        _category_candidates(
            vpd, nearby_businesses, demographics, lot_size_acres, district, catalog,
            cfg.brands_per_category,
        )
    )
    candidates.extend(
        _preferred_candidates(
            demographics, nearby_businesses, lot_size_acres, candidates,
            cfg.preferred_business_limit,
        )
    )

    candidates.sort(key=lambda c: c.priority, reverse=True)

    names: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        key = candidate.name.lower()
        if key in seen:
            continue
        seen.add(key)
        names.append(candidate.name)
        if len(names) >= cfg.max_recommendations:
            break
    return names
