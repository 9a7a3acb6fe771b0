"""
Suitability Ranker: scores every business category in the catalog for a site.

Per category (skipped entirely when the district excludes it, or when it is a
value-oriented category in an upper-middle / high income area):

    1. Base score from VPD position
         VPD >= ideal             → 10
         min <= VPD < ideal       → round(5 + 5 * (VPD - min) / (ideal - min))
         0.7*min <= VPD < min     → round(3 + 2 * VPD / min)
         VPD < 0.7*min            → round(3 * VPD / min)
    2. Income adjustment (only when demographics are present)
         tier in preferences → +2 (cap 10), otherwise → -3 (floor 1)
    3. Lot-size adjustment (only when the lot size is known)
         lot >= ideal → +1 (cap 10); lot >= min → none;
         lot < min    → -min(8, round(10 * (min - lot) / min)) (floor 1),
                        and the shortfall is flagged.
    4. Brand saturation
         every example brand already nearby → -3 (floor 1), flagged;
         otherwise the number of competitors nearby is reported.

The final score is clamped to [1, 10]. Results are sorted by score
descending; ties keep catalog order.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from site_analyzer.catalog.categories import VALUE_CATEGORIES
from site_analyzer.models.requirements import CategoryRequirement
from site_analyzer.models.results import DistrictProfile, SuitabilityResult
from site_analyzer.models.site import Demographics, NearbyBusiness
from site_analyzer.recommendations.brand_matching import split_existing
from site_analyzer.taxonomy.site_taxonomy import (
    DEFAULT_INCOME_TIER,
    HIGH_INCOME_TIERS,
    IncomeTier,
)
from site_analyzer.utils.numeric import clamp, round_half_up

MARGINAL_TRAFFIC_FACTOR = 0.7
MAX_LOT_PENALTY = 8
INCOME_MATCH_BONUS = 2
INCOME_MISMATCH_PENALTY = 3
SATURATION_PENALTY = 3


def effective_income_tier(demographics: Optional[Demographics]) -> IncomeTier:
    """Demographics tier, or the middle tier when demographics are absent."""
    return demographics.income_tier if demographics else DEFAULT_INCOME_TIER


def base_traffic_score(vpd: int, category: CategoryRequirement) -> tuple[int, str]:
    """Step 1: VPD-position score and its reasoning fragment."""
    vpd_text = f"{vpd:,}"
    if vpd >= category.ideal_vpd:
        return 10, f"Excellent traffic - VPD of {vpd_text} exceeds ideal threshold"
    if vpd >= category.min_vpd:
        span = category.ideal_vpd - category.min_vpd
        score = round_half_up(5 + 5 * (vpd - category.min_vpd) / span)
        return score, f"Good traffic - VPD of {vpd_text} meets threshold"
    if vpd >= category.min_vpd * MARGINAL_TRAFFIC_FACTOR:
        score = round_half_up(3 + 2 * vpd / category.min_vpd)
        return score, f"Marginal traffic - VPD of {vpd_text} is below ideal"
    score = round_half_up(3 * vpd / category.min_vpd)
    return score, f"Low traffic - VPD of {vpd_text} below threshold"


def lot_size_penalty(lot_size_acres: float, lot_size_min: float) -> int:
    """Points subtracted for a lot below the category minimum (0-8)."""
    if lot_size_acres >= lot_size_min:
        return 0
    shortfall = (lot_size_min - lot_size_acres) / lot_size_min
    return min(MAX_LOT_PENALTY, round_half_up(shortfall * 10))


def score_category(
    category: CategoryRequirement,
    vpd: int,
    nearby_businesses: Sequence[NearbyBusiness],
    demographics: Optional[Demographics],
    lot_size_acres: Optional[float],
) -> SuitabilityResult:
    """Score a single category for a site (steps 1-4 above)."""
    score, reasoning = base_traffic_score(vpd, category)

    if demographics is not None:
        tier = demographics.income_tier
        if tier in category.income_preferences:
            score = min(10, score + INCOME_MATCH_BONUS)
            reasoning += f". Demographics match - {tier} income area is ideal for this concept"
        else:
            score = max(1, score - INCOME_MISMATCH_PENALTY)
            prefers = "/".join(category.income_preferences)
            reasoning += (
                f". Demographics mismatch - {tier} income area may not be optimal "
                f"(prefers {prefers})"
            )

    lot_size_issue: Optional[str] = None
    if lot_size_acres is not None:
        if lot_size_acres >= category.lot_size_ideal:
            score = min(10, score + 1)
            reasoning += f". Lot size ({lot_size_acres:.2f} acres) is ideal for this concept"
        elif lot_size_acres >= category.lot_size_min:
            reasoning += f". Lot size ({lot_size_acres:.2f} acres) meets minimum requirements"
        else:
            penalty = lot_size_penalty(lot_size_acres, category.lot_size_min)
            score = max(1, score - penalty)
            lot_size_issue = (
                f"LOT TOO SMALL: Need {category.lot_size_min:g} acres min, "
                f"site has ~{lot_size_acres:.2f} acres"
            )
            reasoning += f". {lot_size_issue}"

    remaining, competing = split_existing(category.example_brands, nearby_businesses)
    saturated = not remaining
    if saturated:
        score = max(1, score - SATURATION_PENALTY)
        reasoning += ". Market saturated - all major brands present."
    elif competing:
        reasoning += f". {len(competing)} competitor(s) nearby."

    return SuitabilityResult(
        category_id=category.category_id,
        category_name=category.display_name,
        score=int(clamp(score, 1, 10)),
        reasoning=reasoning,
        remaining_brands=remaining,
        competing_brands=competing,
        lot_size_issue=lot_size_issue,
        market_saturated=saturated,
    )


def rank_categories(
    vpd: int,
    nearby_businesses: Sequence[NearbyBusiness],
    demographics: Optional[Demographics],
    lot_size_acres: Optional[float],
    district: Optional[DistrictProfile],
    catalog: Mapping[str, CategoryRequirement],
) -> list[SuitabilityResult]:
    """Score and rank every eligible category in ``catalog``.

    Args:
        vpd:               Estimated vehicles per day.
        nearby_businesses: Businesses near the site.
        demographics:      Demographic profile, or ``None``.
        lot_size_acres:    Lot size, or ``None`` when unknown.
        district:          District profile whose deny list is honoured,
                           or ``None`` to consider every category.
        catalog:           Id-indexed category catalog.

    Returns:
        ``SuitabilityResult`` list sorted by score descending.
    """
    tier = effective_income_tier(demographics)
    high_income = tier in HIGH_INCOME_TIERS

    results: list[SuitabilityResult] = []
    for category_id, category in catalog.items():
        if district is not None and district.excludes(category_id):
            continue
        if high_income and category_id in VALUE_CATEGORIES:
            continue
        results.append(
            score_category(category, vpd, nearby_businesses, demographics, lot_size_acres)
        )

    results.sort(key=lambda r: r.score, reverse=True)
    return results
