"""
Retailer Matcher: scores and gates every actively-expanding retailer.

Score formula
-------------
    match_score = round_half_up(100 * earned / applicable)

where each factor contributes ``weight * credit`` to ``earned`` and its
weight to ``applicable``. A factor whose site input is unknown is left out
of both sums (its weight is omitted, not zeroed):

    factor        weight   applicable when
    lot size        30     lot size known
    traffic         25     VPD known
    demographics    25     always
    region          20     always (0.5 credit when the state is unknown)

Credits
-------
lot size:     1.0 if min <= lot <= 1.5 * max; 0.6 if lot >= 0.8 * min;
              else 0.2.
traffic:      1.0 if VPD >= ideal; 0.7 if >= min; 0.3 if >= 0.7 * min; else 0.
demographics: sum of three partials
              tier        0.4 if the tier is preferred, else 0.1
              income      0.3 within [min, max] when min is defined,
                          0.2 when the retailer has no min bound,
                          0.1 when outside the band
              population  0.3 if >= min, 0.15 if >= 0.7 * min, else 0
region:       1.0 if expanding nationally, in one of the site's region
              groups or in its state; else 0.2.

Hard disqualifications (the retailer is skipped, never scored)
--------------------------------------------------------------
- lot < 0.5 * retailer minimum lot
- value-oriented retailer on an upper-middle / high income site
- premium-oriented retailer on a low income site
- median income > 1.3 * retailer max, or < 0.7 * retailer min
- final score below ``min_match_score`` (30 by default)

Qualifying retailers are sorted by score descending (ties keep dataset
order) and truncated to ``max_results``; ``total_matches`` counts every
qualifier before truncation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from site_analyzer.catalog.regions import NATIONAL, region_groups_for_state
from site_analyzer.config import MatcherConfig
from site_analyzer.models.requirements import RetailerRequirement
from site_analyzer.models.results import (
    FactorMatch,
    RetailerMatchDetails,
    RetailerMatchResult,
    RetailerMatchSummary,
)
from site_analyzer.models.site import SiteContext
from site_analyzer.taxonomy.site_taxonomy import (
    HIGH_INCOME_TIERS,
    LOW_INCOME_TIERS,
    IncomeTier,
)
from site_analyzer.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

LOT_WEIGHT = 30
TRAFFIC_WEIGHT = 25
DEMOGRAPHICS_WEIGHT = 25
REGION_WEIGHT = 20

LOT_MAX_STRETCH = 1.5
LOT_CLOSE_FACTOR = 0.8
LOT_DISQUALIFY_FACTOR = 0.5
TRAFFIC_MARGINAL_FACTOR = 0.7
INCOME_CEILING_FACTOR = 1.3
INCOME_FLOOR_FACTOR = 0.7
POPULATION_CLOSE_FACTOR = 0.7
DEMOGRAPHICS_MATCH_THRESHOLD = 0.5


class Disqualified(Exception):
    """Raised internally when a retailer fails a hard gate."""


@dataclass(frozen=True)
class RetailerSiteFacts:
    """The subset of site facts the matcher reads.

    Attributes:
        lot_size_acres: Lot size, or ``None`` when unknown.
        vpd:            Vehicles per day, or ``None``.
        median_income:  Median household income, or ``None``.
        income_tier:    Income tier, or ``None``.
        population:     Trade-area population, or ``None``.
        state_code:     USPS state code, or ``None``.
    """

    lot_size_acres: Optional[float] = None
    vpd: Optional[int] = None
    median_income: Optional[float] = None
    income_tier: Optional[IncomeTier] = None
    population: Optional[int] = None
    state_code: Optional[str] = None

    @classmethod
    def from_site(cls, site: SiteContext, state_code: Optional[str]) -> "RetailerSiteFacts":
        demo = site.demographics
        return cls(
            lot_size_acres=site.lot_size_acres,
            vpd=site.vpd,
            median_income=demo.median_household_income if demo else None,
            income_tier=demo.income_tier if demo else None,
            population=demo.population if demo else None,
            state_code=state_code,
        )


@dataclass
class _Tally:
    """Running weighted credit for one retailer."""

    earned: float = 0.0
    applicable: int = 0
    notes: dict[str, FactorMatch] = field(default_factory=dict)

    def add(self, factor: str, weight: int, credit: float, matches: bool, note: str) -> None:
        self.earned += weight * credit
        self.applicable += weight
        self.notes[factor] = FactorMatch(matches=matches, note=note)

    @property
    def score(self) -> int:
        return round_half_up(100 * self.earned / self.applicable)


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _score_lot(retailer: RetailerRequirement, lot: float, tally: _Tally) -> None:
    lo, hi = retailer.min_lot_size, retailer.max_lot_size
    if lo <= lot <= hi * LOT_MAX_STRETCH:
        tally.add("lot_size", LOT_WEIGHT, 1.0, True,
                  f"{lo:g}-{hi:g} acres needed, site has {lot:.1f} acres")
    elif lot >= lo * LOT_CLOSE_FACTOR:
        tally.add("lot_size", LOT_WEIGHT, 0.6, True,
                  f"Site is slightly small ({lot:.1f} vs {lo:g} min)")
    else:
        if lot < lo * LOT_DISQUALIFY_FACTOR:
            raise Disqualified(f"lot {lot:.2f} < half of {lo:g} acre minimum")
        tally.add("lot_size", LOT_WEIGHT, 0.2, False,
                  f"Site too small: needs {lo:g}+ acres, has {lot:.1f}")


def _score_traffic(retailer: RetailerRequirement, vpd: int, tally: _Tally) -> None:
    if vpd >= retailer.ideal_vpd:
        tally.add("traffic", TRAFFIC_WEIGHT, 1.0, True,
                  f"Excellent: {vpd:,} VPD (ideal is {retailer.ideal_vpd:,}+)")
    elif vpd >= retailer.min_vpd:
        tally.add("traffic", TRAFFIC_WEIGHT, 0.7, True,
                  f"Good: {vpd:,} VPD meets minimum of {retailer.min_vpd:,}")
    elif vpd >= retailer.min_vpd * TRAFFIC_MARGINAL_FACTOR:
        tally.add("traffic", TRAFFIC_WEIGHT, 0.3, False,
                  f"Below ideal: {vpd:,} VPD (needs {retailer.min_vpd:,}+)")
    else:
        tally.add("traffic", TRAFFIC_WEIGHT, 0.0, False,
                  f"Insufficient: {vpd:,} VPD (needs {retailer.min_vpd:,}+)")


def _tier_partial(retailer: RetailerRequirement, tier: IncomeTier, notes: list[str]) -> float:
    if tier in retailer.income_preference:
        notes.append(f"Income level ({tier}) matches target")
        return 0.4
    if retailer.is_value_oriented and tier in HIGH_INCOME_TIERS:
        raise Disqualified(f"value-oriented retailer in {tier} income area")
    if retailer.is_premium_oriented and tier in LOW_INCOME_TIERS:
        raise Disqualified(f"premium-oriented retailer in {tier} income area")
    notes.append(f"Income level ({tier}) may not be ideal")
    return 0.1


def _income_partial(retailer: RetailerRequirement, income: float, notes: list[str]) -> float:
    lo, hi = retailer.min_median_income, retailer.max_median_income
    if hi is not None and income > hi * INCOME_CEILING_FACTOR:
        raise Disqualified(f"median income {income:,.0f} > 1.3x max {hi:,.0f}")
    if lo is not None and income < lo * INCOME_FLOOR_FACTOR:
        raise Disqualified(f"median income {income:,.0f} < 0.7x min {lo:,.0f}")

    if lo is not None and income < lo:
        notes.append(f"Income below minimum ({_money(income)} vs {_money(lo)})")
        return 0.1
    if hi is not None and income > hi:
        notes.append(f"Income above target ({_money(income)} vs {_money(hi)} max)")
        return 0.1
    if lo is not None:
        return 0.3
    return 0.2


def _population_partial(retailer: RetailerRequirement, population: int, notes: list[str]) -> float:
    needed = retailer.min_population
    if population >= needed:
        notes.append(f"Population ({population:,}) meets minimum")
        return 0.3
    if population >= needed * POPULATION_CLOSE_FACTOR:
        notes.append(f"Population slightly below target ({population:,} vs {needed:,})")
        return 0.15
    notes.append(f"Population too low ({population:,} vs {needed:,} needed)")
    return 0.0


def _score_demographics(
    retailer: RetailerRequirement, site: RetailerSiteFacts, tally: _Tally
) -> None:
    notes: list[str] = []
    credit = 0.0
    if site.income_tier is not None:
        credit += _tier_partial(retailer, site.income_tier, notes)
    if site.median_income is not None:
        credit += _income_partial(retailer, site.median_income, notes)
    if site.population is not None:
        credit += _population_partial(retailer, site.population, notes)

    tally.add(
        "demographics",
        DEMOGRAPHICS_WEIGHT,
        credit,
        credit >= DEMOGRAPHICS_MATCH_THRESHOLD,
        "; ".join(notes) or "Demographics data not available",
    )


def _score_region(
    retailer: RetailerRequirement, state_code: Optional[str], tally: _Tally
) -> None:
    regions = retailer.expansion_regions
    targeting = ", ".join(regions)
    if not state_code:
        tally.add("region", REGION_WEIGHT, 0.5, False, "Location data not available")
        return

    site_regions = region_groups_for_state(state_code)
    if any(r == NATIONAL or r in site_regions or r == state_code for r in regions):
        note = (
            "Expanding nationally"
            if NATIONAL in regions
            else f"Actively targeting: {targeting}"
        )
        tally.add("region", REGION_WEIGHT, 1.0, True, note)
    else:
        tally.add("region", REGION_WEIGHT, 0.2, False,
                  f"Not currently expanding in this region (targeting: {targeting})")


def format_investment(
    total_min: Optional[float], total_max: Optional[float]
) -> Optional[str]:
    """Format an investment range as ``"$1.2M - $2.5M"``; ``None`` if incomplete."""
    if not total_min or not total_max:
        return None
    return f"${total_min / 1_000_000:.1f}M - ${total_max / 1_000_000:.1f}M"


def match_retailer(
    retailer: RetailerRequirement,
    site: RetailerSiteFacts,
    min_match_score: int = 30,
) -> Optional[RetailerMatchResult]:
    """Score one retailer against the site.

    Returns:
        A ``RetailerMatchResult``, or ``None`` when the retailer is
        disqualified by a hard gate or scores below ``min_match_score``.
    """
    tally = _Tally()
    try:
        if site.lot_size_acres is not None:
            _score_lot(retailer, site.lot_size_acres, tally)
        if site.vpd is not None:
            _score_traffic(retailer, site.vpd, tally)
        _score_demographics(retailer, site, tally)
    except Disqualified as exc:
        logger.debug("Retailer %s disqualified: %s", retailer.retailer_id, exc)
        return None
    _score_region(retailer, site.state_code, tally)

    score = tally.score
    if score < min_match_score:
        logger.debug(
            "Retailer %s disqualified: score %d < %d",
            retailer.retailer_id, score, min_match_score,
        )
        return None

    tally.notes.setdefault("lot_size", FactorMatch(note="Lot size not available"))
    tally.notes.setdefault("traffic", FactorMatch(note="Traffic data not available"))
    details = RetailerMatchDetails(
        lot_size=tally.notes["lot_size"],
        traffic=tally.notes["traffic"],
        demographics=tally.notes["demographics"],
        region=tally.notes["region"],
    )

    return RetailerMatchResult(
        retailer_id=retailer.retailer_id,
        name=retailer.name,
        category=retailer.category,
        match_score=score,
        match_details=details,
        actively_expanding=retailer.actively_expanding,
        franchise_available=retailer.franchise_available,
        corporate_only=retailer.corporate_only,
        franchise_fee=retailer.franchise_fee,
        total_investment=format_investment(
            retailer.total_investment_min, retailer.total_investment_max
        ),
        expansion_regions=retailer.expansion_regions,
        notes=retailer.notes,
    )


def match_retailers(
    retailers: Iterable[RetailerRequirement],
    site: RetailerSiteFacts,
    config: Optional[MatcherConfig] = None,
) -> RetailerMatchSummary:
    """Match every actively-expanding retailer against the site.

    Args:
        retailers: Retailer records (typically a ``RetailerDataset``).
        site:      Site facts read by the matcher.
        config:    Result limit and score cut-off; defaults when ``None``.

    Returns:
        ``RetailerMatchSummary`` with at most ``config.max_results`` matches
        sorted by score descending, and the pre-truncation count.
    """
    cfg = config or MatcherConfig()

    matches: list[RetailerMatchResult] = []
    for retailer in retailers:
        if not retailer.actively_expanding:
            continue
        result = match_retailer(retailer, site, cfg.min_match_score)
        if result is not None:
            matches.append(result)

    matches.sort(key=lambda m: m.match_score, reverse=True)
    return RetailerMatchSummary(
        matches=matches[: cfg.max_results],
        total_matches=len(matches),
    )
