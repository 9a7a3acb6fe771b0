"""
Feasibility Scorer: overall 0-10 site score from four sub-scores.

Score formula
-------------
    overall = round_half_up(
        traffic_score        * 0.35
        + demographics_score * 0.25
        + competition_score  * 0.20
        + access_score       * 0.20
    )

Each sub-score defaults to 5 (with an explanatory "not available" detail)
when its source data is absent, so the scorer never fails.

Sub-scores
----------
traffic (from VPD):
    >=30k → 10, >=20k → 9, >=15k → 8, >=10k → 6, >=5k → 4, else 2.

access (from road type, only when traffic data exists):
    "Major"/"Motorway" → default + 2 (capped at 10),
    "Secondary" → 6, anything else → 4.

demographics:
    income component + employment bonus + population bonus, rounded, <= 10.
    College towns use an enrollment curve because census income understates
    student spending (>=25% → 8, >=15% → 7.5, else 7) and a flat 0.5
    employment bonus. Other areas use an income curve (>=85k → 9,
    >=65k → 8, >=50k → 7, >=35k → 5, else 4) and a tiered employment bonus
    (>=95% → 1, >=90% → 0.5). Population bonus: >=5000 → 1, >=2000 → 0.5.

competition (from nearby businesses):
    5-20 businesses with >=3 distinct types → 9; 3-30 → 7; >30 → 5; <3 → 4.
    +1 (capped at 10) when a national anchor tenant is nearby.

Six-factor variant
------------------
``calculate_extended_feasibility`` adds environmental screening and sales
comps, reweights to 0.25/0.20/0.15/0.15/0.15/0.10 and scores a major
road 9 for access.

environmental:
    round(screening score / 10), minus penalties (high flood 2, moderate
    flood 1, wetlands 1, brownfields 1, Superfund 2), clamped to 0-10.

market (from comparable sales):
    >=5 comps → 8, >=3 → 7, else 5; +2 when the average is >= $200/sqft,
    +1 when >= $150/sqft, capped at 10.
"""

from __future__ import annotations

from typing import Optional, Sequence

from site_analyzer.models.results import (
    ExtendedFeasibilityBreakdown,
    ExtendedFeasibilityDetails,
    ExtendedFeasibilityScore,
    FeasibilityBreakdown,
    FeasibilityDetails,
    FeasibilityScore,
)
from site_analyzer.models.site import (
    Demographics,
    EnvironmentalRisk,
    MarketComp,
    NearbyBusiness,
    TrafficInfo,
)
from site_analyzer.taxonomy.site_taxonomy import RiskLevel, rating_for_score
from site_analyzer.utils.numeric import round_half_up

DEFAULT_SUB_SCORE = 5

WEIGHT_TRAFFIC = 0.35
WEIGHT_DEMOGRAPHICS = 0.25
WEIGHT_COMPETITION = 0.20
WEIGHT_ACCESS = 0.20

MAJOR_ROAD_ACCESS = min(10, DEFAULT_SUB_SCORE + 2)

# Six-factor variant.
EXTENDED_WEIGHTS: dict[str, float] = {
    "traffic": 0.25,
    "demographics": 0.20,
    "competition": 0.15,
    "access": 0.15,
    "environmental": 0.15,
    "market": 0.10,
}
EXTENDED_MAJOR_ROAD_ACCESS = min(10, 7 + 2)

# Substring-matched against lower-cased business names.
ANCHOR_TENANTS: tuple[str, ...] = (
    "walmart", "target", "costco", "home depot", "lowes", "publix", "kroger",
)

# (min VPD, score, detail template), highest band first.
_TRAFFIC_BANDS: tuple[tuple[int, int, str], ...] = (
    (30_000, 10, "Excellent traffic: {vpd} VPD supports all business types"),
    (20_000, 9, "Very high traffic: {vpd} VPD ideal for most retail"),
    (15_000, 8, "High traffic: {vpd} VPD supports drive-thru concepts"),
    (10_000, 6, "Moderate traffic: {vpd} VPD suitable for quick service"),
    (5_000, 4, "Low-moderate traffic: {vpd} VPD limits options"),
)


def score_traffic(traffic: Optional[TrafficInfo]) -> tuple[int, str]:
    if traffic is None:
        return DEFAULT_SUB_SCORE, "No traffic data available"
    vpd = traffic.estimated_vpd
    for floor, score, template in _TRAFFIC_BANDS:
        if vpd >= floor:
            return score, template.format(vpd=f"{vpd:,}")
    return 2, f"Low traffic: {vpd:,} VPD - local service only"


def score_access(
    traffic: Optional[TrafficInfo],
    major_road_score: int = MAJOR_ROAD_ACCESS,
) -> tuple[int, str]:
    if traffic is None:
        return DEFAULT_SUB_SCORE, "Unable to assess access"
    road = traffic.road_type
    if "Major" in road or "Motorway" in road:
        return major_road_score, f"{road} with high visibility"
    if "Secondary" in road:
        return 6, f"{road} - good local access"
    return 4, f"{road} - limited visibility"


def _income_component(demo: Demographics) -> float:
    if demo.is_college_town:
        enrollment = demo.college_enrollment_percent or 0.0
        if enrollment >= 25:
            return 8.0
        if enrollment >= 15:
            return 7.5
        return 7.0

    income = demo.median_household_income
    if income >= 85_000:
        return 9.0
    if income >= 65_000:
        return 8.0
    if income >= 50_000:
        return 7.0
    if income >= 35_000:
        return 5.0
    return 4.0


def _employment_bonus(demo: Demographics) -> float:
    if demo.is_college_town:
        return 0.5
    employment = demo.employment_rate
    if employment is None:
        return 0.0
    if employment >= 95:
        return 1.0
    if employment >= 90:
        return 0.5
    return 0.0


def _population_bonus(population: int) -> float:
    if population >= 5_000:
        return 1.0
    if population >= 2_000:
        return 0.5
    return 0.0


def score_demographics(demo: Optional[Demographics]) -> tuple[int, str]:
    if demo is None:
        return DEFAULT_SUB_SCORE, "No demographics data available"

    raw = _income_component(demo) + _employment_bonus(demo) + _population_bonus(demo.population)
    score = min(10, round_half_up(raw))

    income = f"${demo.median_household_income:,.0f}"
    population = f"{demo.population:,}"
    if demo.is_college_town:
        enrollment = demo.college_enrollment_percent or 0
        detail = (
            f"College Town market ({enrollment:g}% students) - Strong student spending "
            f"power despite {income} census income, {population} pop"
        )
    else:
        profile = demo.consumer_profile_type or "General"
        employed = (
            f"{demo.employment_rate:g}% employed"
            if demo.employment_rate is not None
            else "employment N/A"
        )
        detail = f"{profile} market - {income} median income, {population} pop, {employed}"
    return score, detail


def has_anchor_tenant(nearby_businesses: Sequence[NearbyBusiness]) -> bool:
    return any(
        anchor in b.name.lower()
        for b in nearby_businesses
        for anchor in ANCHOR_TENANTS
    )


def score_competition(nearby_businesses: Sequence[NearbyBusiness]) -> tuple[int, str]:
    if not nearby_businesses:
        return DEFAULT_SUB_SCORE, "No nearby business data"

    count = len(nearby_businesses)
    unique_types = len({b.type or "Other" for b in nearby_businesses})

    if 5 <= count <= 20 and unique_types >= 3:
        score = 9
        detail = (
            f"Healthy mix: {count} businesses, {unique_types} categories "
            "- proven commercial area"
        )
    elif 3 <= count <= 30:
        score = 7
        detail = f"Good activity: {count} businesses nearby - established area"
    elif count > 30:
        score = 5
        detail = f"High density: {count} businesses - competitive market"
    else:
        score = 4
        detail = f"Limited activity: Only {count} businesses - unproven area"

    if has_anchor_tenant(nearby_businesses):
        score = min(10, score + 1)
        detail += " + anchor tenant present"
    return score, detail


def weighted_overall(traffic: int, demographics: int, competition: int, access: int) -> int:
    """Half-up-rounded weighted sum of the four sub-scores."""
    return round_half_up(
        traffic * WEIGHT_TRAFFIC
        + demographics * WEIGHT_DEMOGRAPHICS
        + competition * WEIGHT_COMPETITION
        + access * WEIGHT_ACCESS
    )


def calculate_feasibility(
    traffic: Optional[TrafficInfo],
    demographics: Optional[Demographics],
    nearby_businesses: Sequence[NearbyBusiness],
) -> FeasibilityScore:
    """Compute the overall feasibility score for a site.

    Never raises on missing inputs; each absent source contributes the
    default sub-score of 5.

    Args:
        traffic:           Traffic estimate, or ``None``.
        demographics:      Demographic profile, or ``None``.
        nearby_businesses: Businesses near the site (may be empty).

    Returns:
        A frozen ``FeasibilityScore``.
    """
    traffic_score, traffic_detail = score_traffic(traffic)
    access_score, access_detail = score_access(traffic)
    demo_score, demo_detail = score_demographics(demographics)
    comp_score, comp_detail = score_competition(nearby_businesses)

    overall = weighted_overall(traffic_score, demo_score, comp_score, access_score)

    return FeasibilityScore(
        overall=overall,
        breakdown=FeasibilityBreakdown(
            traffic_score=traffic_score,
            demographics_score=demo_score,
            competition_score=comp_score,
            access_score=access_score,
        ),
        details=FeasibilityDetails(
            traffic=traffic_detail,
            demographics=demo_detail,
            competition=comp_detail,
            access=access_detail,
        ),
        rating=rating_for_score(overall),
    )


# ── Six-factor variant ────────────────────────────────────────────────────────


def score_environmental(risk: Optional[EnvironmentalRisk]) -> tuple[int, str]:
    """Screening score / 10, less 2 for high flood risk or Superfund and 1 for
    moderate flood risk, wetlands or brownfields; clamped to 0-10."""
    if risk is None:
        return DEFAULT_SUB_SCORE, "No environmental data available"

    score = round_half_up(risk.overall_risk_score / 10)
    factors: list[str] = []
    penalties: list[tuple[bool, int, str]] = [
        (risk.flood_risk == RiskLevel.HIGH, 2, "High flood risk"),
        (risk.flood_risk == RiskLevel.MEDIUM, 1, "Moderate flood risk"),
        (risk.wetlands_present, 1, "Wetlands present"),
        (
            risk.brownfields_present, 1,
            f"{risk.brownfield_count or 1} brownfield site(s) nearby",
        ),
        (
            risk.superfund_present, 2,
            f"{risk.superfund_count or 1} Superfund site(s) nearby",
        ),
    ]
    for applies, penalty, label in penalties:
        if applies:
            factors.append(label)
            score = max(0, score - penalty)
    score = min(10, score)

    shown = f"{risk.overall_risk_score:g}"
    if not factors:
        return score, f"Low environmental risk ({shown}/100) - Clear for development"
    return score, f"Environmental concerns: {', '.join(factors)} (Risk: {shown}/100)"


def score_market(comps: Sequence[MarketComp]) -> tuple[int, str]:
    if not comps:
        return DEFAULT_SUB_SCORE, "No market comp data available"

    count = len(comps)
    avg = sum(c.price_per_sqft for c in comps) / count
    sales = f"{count} recent sales, avg ${round_half_up(avg)}/sqft"
    if count >= 5:
        score, detail = 8, f"Strong market: {sales}"
    elif count >= 3:
        score, detail = 7, f"Good market: {sales}"
    else:
        score, detail = 5, f"Limited data: {sales}"

    if avg >= 200:
        score = min(10, score + 2)
        detail += " - Premium market"
    elif avg >= 150:
        score = min(10, score + 1)
        detail += " - Strong market"
    return score, detail


def calculate_extended_feasibility(
    traffic: Optional[TrafficInfo],
    demographics: Optional[Demographics],
    nearby_businesses: Sequence[NearbyBusiness],
    environmental: Optional[EnvironmentalRisk],
    market_comps: Sequence[MarketComp],
) -> ExtendedFeasibilityScore:
    """Six-factor feasibility: the four core sub-scores plus environmental
    screening and sales comps.

    Traffic, demographics and competition score exactly as in
    ``calculate_feasibility``. Access credits a major road or motorway with
    9 instead of 7. Missing environmental or comp data scores 5.
    """
    scores: dict[str, int] = {}
    details: dict[str, str] = {}
    scores["traffic"], details["traffic"] = score_traffic(traffic)
    scores["access"], details["access"] = score_access(traffic, EXTENDED_MAJOR_ROAD_ACCESS)
    scores["demographics"], details["demographics"] = score_demographics(demographics)
    scores["competition"], details["competition"] = score_competition(nearby_businesses)
    scores["environmental"], details["environmental"] = score_environmental(environmental)
    scores["market"], details["market"] = score_market(market_comps)

    overall = round_half_up(sum(scores[k] * w for k, w in EXTENDED_WEIGHTS.items()))

    return ExtendedFeasibilityScore(
        overall=overall,
        breakdown=ExtendedFeasibilityBreakdown(
            **{f"{name}_score": value for name, value in scores.items()}
        ),
        details=ExtendedFeasibilityDetails(**details),
        rating=rating_for_score(overall),
    )
