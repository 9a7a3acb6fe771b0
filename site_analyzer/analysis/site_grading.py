"""
Site Grader: A-F report card for a site, optionally for one business type.

Five factors are each valued 0-100 and graded (>=90 A, >=80 B, >=70 C,
>=60 D, else F):

  traffic          VPD against the business type's min/ideal band
                   (15k/25k when no type is given). >=ideal → 95; between
                   min and ideal interpolates 75-100; 70%-100% of min
                   interpolates 60-75; below that 60 * vpd / (0.7 * min),
                   floored at 40. No VPD → 70.
  access           70 base; +15 for 3+ curb cuts, +10 for 2; +10 for two
                   road frontages; +10 corner (-5 when the type wants a
                   corner); +5 highway (-10 when the type needs trucks).
  competition      by nearby-business count: 0 → 65, <=5 → 80, <=15 → 90,
                   <=30 → 75, more → 60; -10 when more than three
                   businesses sit within half a mile.
  demographics     70 base; income +15/+10/+5/0/-5 at 100k/75k/50k/35k;
                   population +15/+10/+5 at 50k/25k/10k. Neither known → 70.
  site conditions  80 base; lot +10 at 2 ac, +5 at 1 ac, -10 under 0.5 ac;
                   flood high -20, medium -10, low +5; commercial zoning +5.

All factors cap at 100. The overall value is

    round_half_up(0.30*traffic + 0.20*access + 0.15*competition
                  + 0.20*demographics + 0.15*site_conditions)

Grades use the unrounded factor value; the stored value is rounded.

Suggested uses, concerns, strengths, market gaps and key takeaways are
derived from the same inputs. Nothing here reads configuration or logs.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from site_analyzer.catalog.business_types import get_business_type
from site_analyzer.models.requirements import BusinessTypeRequirement
from site_analyzer.models.results import FactorGrade, SiteGrade
from site_analyzer.models.site import NearbyBusiness, SiteAccess, SiteContext
from site_analyzer.taxonomy.site_taxonomy import LetterGrade, RiskLevel, grade_for_value
from site_analyzer.utils.numeric import round_half_up

DEFAULT_MIN_VPD = 15_000
DEFAULT_IDEAL_VPD = 25_000
NEUTRAL_VALUE = 70

WEIGHTS: dict[str, float] = {
    "traffic": 0.30,
    "access": 0.20,
    "competition": 0.15,
    "demographics": 0.20,
    "site_conditions": 0.15,
}

CLOSE_COMPETITOR_MILES = 0.5
MAX_SUGGESTED_USES = 8
MAX_TAKEAWAYS = 5

# (factor, value below which it is a concern, concern text)
_CONCERN_RULES: tuple[tuple[str, int, str], ...] = (
    ("traffic", 70, "Traffic volume below typical retail thresholds"),
    ("access", 70, "Access configuration may limit customer convenience"),
    ("competition", 65, "High competition or unproven market"),
    ("demographics", 70, "Demographics may limit target customer base"),
    ("site_conditions", 70, "Site conditions require additional due diligence"),
)

STRENGTH_THRESHOLD = 85
_STRENGTH_LABELS: tuple[tuple[str, str], ...] = (
    ("traffic", "Excellent traffic volume"),
    ("access", "Superior access and visibility"),
    ("competition", "Proven commercial market"),
    ("demographics", "Strong demographic profile"),
    ("site_conditions", "Favorable site conditions"),
)

# (type keywords, name keywords, gap reported above this many nearby, text)
_SERVICE_GAPS: tuple[tuple[tuple[str, ...], tuple[str, ...], int, str], ...] = (
    (("grocery", "supermarket"), (), 5, "No grocery store within search radius"),
    (("pharmacy", "drugstore"), (), 5, "No pharmacy nearby"),
    (("bank",), (), 10, "No bank/financial services"),
    (("coffee",), ("starbucks",), 8, "No coffee shop"),
    (("gas", "fuel"), (), 10, "No gas station/convenience"),
)

_ZONING_TOKEN_RE = re.compile(r"[A-Z]+")


def _factor(raw: float, insight: str, recommendation: str) -> FactorGrade:
    capped = min(100.0, raw)
    return FactorGrade(
        grade=grade_for_value(capped),
        value=round_half_up(capped),
        insight=insight,
        recommendation=recommendation,
    )


def _thousands(value: float) -> str:
    return f"{round_half_up(value / 1000)}K"


# ── Factors ───────────────────────────────────────────────────────────────────


def score_traffic_fit(
    vpd: Optional[int],
    requirement: Optional[BusinessTypeRequirement] = None,
) -> FactorGrade:
    if vpd is None:
        return _factor(
            NEUTRAL_VALUE,
            "Traffic data not available",
            "Obtain official traffic counts from DOT for accurate assessment",
        )

    min_vpd = requirement.min_vpd if requirement else DEFAULT_MIN_VPD
    ideal_vpd = requirement.ideal_vpd if requirement else DEFAULT_IDEAL_VPD
    label = requirement.description if requirement else None

    if vpd >= ideal_vpd:
        value = 95.0
        insight = f"Excellent traffic: {vpd:,} VPD exceeds ideal threshold of {ideal_vpd:,}"
        rec = (
            f"Strong traffic supports {label} use" if label
            else "Suitable for high-traffic retail, QSR, or drive-thru concepts"
        )
    elif vpd >= min_vpd:
        value = 75 + 25 * (vpd - min_vpd) / (ideal_vpd - min_vpd)
        insight = f"Good traffic: {vpd:,} VPD meets minimum of {min_vpd:,}"
        rec = (
            f"Traffic adequate for {label}, but not ideal" if label
            else "Consider concepts with lower traffic requirements or destination-based models"
        )
    elif vpd >= min_vpd * 0.7:
        value = 60 + 15 * (vpd - min_vpd * 0.7) / (min_vpd * 0.3)
        insight = f"Below ideal: {vpd:,} VPD (needs {min_vpd:,}+)"
        rec = (
            f"Traffic may be insufficient for typical {label}" if label
            else "Better suited for destination concepts or service businesses"
        )
    else:
        value = max(40.0, 60 * vpd / (min_vpd * 0.7))
        insight = f"Low traffic: {vpd:,} VPD significantly below threshold"
        rec = "Consider office, medical, or destination-based uses"
    return _factor(value, insight, rec)


def score_access_fit(
    access: SiteAccess,
    requirement: Optional[BusinessTypeRequirement] = None,
) -> FactorGrade:
    value = 70
    insights: list[str] = []
    recs: list[str] = []

    points = access.access_point_count
    if points >= 3:
        value += 15
        insights.append(f"{points} access points - excellent ingress/egress")
    elif points == 2:
        value += 10
        insights.append("Dual access points - good traffic flow")
    elif points == 1:
        insights.append("Single access point")
        if requirement and requirement.multiple_access_preferred:
            recs.append("Consider shared access agreement with adjacent parcel")

    if access.road_count >= 2:
        value += 10
        insights.append(f"Frontage on {access.road_count} roads")

    if access.is_corner_lot:
        value += 10
        insights.append("Corner lot with high visibility")
    elif requirement and requirement.corner_preferred:
        value -= 5
        recs.append("Corner location would improve visibility")

    if access.has_highway_access:
        value += 5
        insights.append("Highway visibility/access")
    elif requirement and requirement.truck_access:
        value -= 10
        recs.append("Verify truck access routes for deliveries")

    return _factor(
        value,
        ". ".join(insights) or "Standard access configuration",
        ". ".join(recs) or "Access meets typical requirements",
    )


def find_market_gaps(nearby_businesses: Sequence[NearbyBusiness]) -> list[str]:
    """Everyday services absent from a trade area busy enough to expect them."""
    total = len(nearby_businesses)
    gaps: list[str] = []
    if total == 0:
        gaps.append("Limited commercial development in area")
    for type_keys, name_keys, min_count, text in _SERVICE_GAPS:
        present = any(
            any(k in b.type.lower() for k in type_keys)
            or any(k in b.name.lower() for k in name_keys)
            for b in nearby_businesses
        )
        if not present and total > min_count:
            gaps.append(text)
    return gaps


def score_competition_fit(nearby_businesses: Sequence[NearbyBusiness]) -> FactorGrade:
    total = len(nearby_businesses)
    if total == 0:
        value = 65
        insight = "No nearby businesses detected - unproven market"
        rec = "Conduct market study to validate demand"
    elif total <= 5:
        value = 80
        insight = f"Light commercial activity ({total} businesses nearby)"
        rec = "Opportunity to establish market presence"
    elif total <= 15:
        value = 90
        insight = f"Healthy commercial mix ({total} businesses) - proven market"
        rec = "Area has established customer traffic patterns"
    elif total <= 30:
        value = 75
        insight = f"Competitive market ({total} businesses nearby)"
        rec = "Differentiation strategy important"
    else:
        value = 60
        insight = f"High density commercial area ({total}+ businesses)"
        rec = "Market may be saturated - unique concept required"

    close = sum(
        1 for b in nearby_businesses
        if b.distance is not None and b.distance < CLOSE_COMPETITOR_MILES
    )
    if close > 3:
        value -= 10
        insight += f". {close} direct competitors within 0.5 miles"
    return _factor(value, insight, rec)


def score_demographic_fit(
    median_income: Optional[float],
    population: Optional[int],
) -> FactorGrade:
    if not median_income and not population:
        return _factor(
            NEUTRAL_VALUE,
            "Demographics data not available",
            "Obtain census data for trade area analysis",
        )

    value = 70
    insights: list[str] = []
    recs: list[str] = []

    if median_income:
        income = _thousands(median_income)
        if median_income >= 100_000:
            value += 15
            insights.append(f"Affluent area (${income} median income)")
            recs.append("Supports premium positioning and higher price points")
        elif median_income >= 75_000:
            value += 10
            insights.append(f"Upper-middle income area (${income})")
        elif median_income >= 50_000:
            value += 5
            insights.append(f"Middle income area (${income})")
        elif median_income >= 35_000:
            insights.append(f"Moderate income area (${income})")
            recs.append("Value-oriented concepts perform well")
        else:
            value -= 5
            insights.append(f"Lower income area (${income})")
            recs.append("Focus on value/discount concepts")

    if population:
        people = _thousands(population)
        if population >= 50_000:
            value += 15
            insights.append(f"Strong population base ({people} within trade area)")
        elif population >= 25_000:
            value += 10
            insights.append(f"Good population ({people} in trade area)")
        elif population >= 10_000:
            value += 5
            insights.append(f"Moderate population ({people})")
        else:
            insights.append(f"Limited population base ({people})")
            recs.append("May need to draw from wider trade area")

    return _factor(
        value,
        ". ".join(insights) or "Demographics data limited",
        ". ".join(recs) or "Demographics support standard commercial development",
    )


def classify_zoning(zoning: str) -> Optional[str]:
    """Return ``"commercial"``, ``"mixed"``, ``"industrial"`` or ``None``.

    Zoning codes are matched on the leading letters of each alphabetic
    token, so ``"C-2"`` and ``"CG"`` are commercial and ``"MU-1"`` is mixed.
    """
    upper = zoning.upper()
    tokens = _ZONING_TOKEN_RE.findall(upper)
    if "COMMERCIAL" in upper or any(t.startswith("C") for t in tokens):
        return "commercial"
    if "MIXED" in upper or any(t.startswith("MU") for t in tokens):
        return "mixed"
    if "INDUSTRIAL" in upper or any(t.startswith("I") for t in tokens):
        return "industrial"
    return None


def score_site_conditions(
    lot_size_acres: Optional[float],
    flood_risk: Optional[RiskLevel],
    zoning: Optional[str],
    requirement: Optional[BusinessTypeRequirement] = None,
) -> FactorGrade:
    value = 80
    insights: list[str] = []
    recs: list[str] = []

    if lot_size_acres is not None:
        lot = f"{lot_size_acres:.2f} acres"
        if lot_size_acres >= 2:
            value += 10
            insights.append(f"Large lot ({lot}) - flexible development options")
        elif lot_size_acres >= 1:
            value += 5
            insights.append(f"Standard lot size ({lot})")
        elif lot_size_acres >= 0.5:
            insights.append(f"Compact lot ({lot})")
            recs.append("May limit building footprint or parking")
        else:
            value -= 10
            insights.append(f"Small lot ({lot})")
            recs.append("Limited to smaller footprint concepts")

    if flood_risk == RiskLevel.HIGH:
        value -= 20
        insights.append("High flood risk zone")
        recs.append("Flood insurance required, elevated construction may be needed")
    elif flood_risk == RiskLevel.MEDIUM:
        value -= 10
        insights.append("Moderate flood risk")
        recs.append("Consider flood mitigation measures")
    elif flood_risk == RiskLevel.LOW:
        value += 5
        insights.append("Low flood risk - favorable")

    if zoning:
        kind = classify_zoning(zoning)
        if kind == "commercial":
            value += 5
            insights.append(f"Commercial zoning ({zoning})")
        elif kind == "mixed":
            insights.append(f"Mixed-use zoning ({zoning})")
        elif kind == "industrial":
            insights.append(f"Industrial zoning ({zoning})")
            if requirement and not requirement.truck_access:
                recs.append("Verify permitted uses under industrial zoning")
        else:
            recs.append(f"Verify {zoning} zoning permits intended use")

    return _factor(
        value,
        ". ".join(insights) or "Site conditions appear standard",
        ". ".join(recs) or "No significant site concerns identified",
    )


# ── Narrative lists ───────────────────────────────────────────────────────────


def suggest_uses(
    vpd: Optional[int],
    lot_size_acres: Optional[float],
    median_income: Optional[float],
    nearby_businesses: Sequence[NearbyBusiness],
    is_corner_lot: bool,
) -> list[str]:
    """Up to eight concepts for the site, traffic band first."""
    existing_types = {b.type.lower() for b in nearby_businesses}
    vpd = vpd or 0
    uses: list[str] = []

    if vpd >= 25_000:
        if is_corner_lot:
            uses.append("Drive-Thru QSR")
        uses += ["Fast Casual Restaurant", "Coffee Shop with Drive-Thru"]
        if "gas" not in existing_types:
            uses.append("Gas Station/Convenience")
    elif vpd >= 15_000:
        uses += ["Fast Casual Restaurant", "Retail Strip Center"]
        if "bank" not in existing_types:
            uses.append("Bank Branch")
        uses.append("Medical/Dental Office")
    elif vpd >= 8_000:
        uses += ["Professional Office", "Medical Clinic", "Service Business", "Specialty Retail"]
    else:
        uses += ["Office Building", "Light Industrial", "Warehouse/Distribution", "Self-Storage"]

    if median_income and median_income >= 85_000:
        uses += ["Upscale Dining", "Boutique Retail", "Fitness/Wellness Center"]
    if lot_size_acres and lot_size_acres >= 3:
        uses += ["Multi-Tenant Retail Center", "Hotel/Extended Stay"]

    return list(dict.fromkeys(uses))[:MAX_SUGGESTED_USES]


def list_concerns(factors: dict[str, FactorGrade]) -> list[str]:
    return [text for name, floor, text in _CONCERN_RULES if factors[name].value < floor]


def list_strengths(factors: dict[str, FactorGrade], access: SiteAccess) -> list[str]:
    strengths = [
        label for name, label in _STRENGTH_LABELS
        if factors[name].value >= STRENGTH_THRESHOLD
    ]
    if access.is_corner_lot:
        strengths.append("Corner lot visibility")
    if access.has_highway_access:
        strengths.append("Highway exposure")
    return strengths


def key_takeaways(
    overall_value: int,
    traffic: FactorGrade,
    suggested_uses: Sequence[str],
    concerns: Sequence[str],
) -> list[str]:
    if overall_value >= 80:
        takeaways = ["Site shows strong potential for commercial development"]
    elif overall_value >= 70:
        takeaways = ["Site is viable with appropriate concept selection"]
    elif overall_value >= 60:
        takeaways = ["Site has limitations - careful concept selection required"]
    else:
        takeaways = ["Site faces significant challenges - specialized use recommended"]

    if traffic.value >= STRENGTH_THRESHOLD:
        _, _, volume = traffic.insight.partition(":")
        volume = volume.split(":")[0].strip() or "strong volume"
        takeaways.append(f"High traffic ({volume}) supports retail/restaurant use")
    if suggested_uses:
        takeaways.append(f"Best suited for: {', '.join(suggested_uses[:3])}")
    if concerns:
        takeaways.append(f"Primary concern: {concerns[0]}")
    return takeaways[:MAX_TAKEAWAYS]


def grade_modifier(overall_value: int) -> str:
    """``+`` from 87, none from 83, ``-`` from 77, none below."""
    if overall_value >= 87:
        return "+"
    if overall_value >= 83:
        return ""
    if overall_value >= 77:
        return "-"
    return ""


def summarize(
    grade: LetterGrade,
    requirement: Optional[BusinessTypeRequirement],
    strengths: Sequence[str],
    concerns: Sequence[str],
) -> str:
    first_concern = concerns[0].lower() if concerns else None
    if grade == LetterGrade.A:
        return "Excellent commercial location with strong fundamentals across all metrics"
    if grade == LetterGrade.B:
        label = requirement.description if requirement else "commercial"
        strength = strengths[0].lower() if strengths else "solid fundamentals"
        return f"Strong {label} location with {strength}"
    if grade == LetterGrade.C:
        return (
            "Viable location with opportunities and challenges - "
            f"{first_concern or 'careful planning recommended'}"
        )
    if grade == LetterGrade.D:
        return f"Location has significant limitations - {first_concern or 'specialized use required'}"
    return "Location faces substantial challenges for typical commercial development"


# ── Entry point ───────────────────────────────────────────────────────────────


def grade_site(site: SiteContext, business_type: Optional[str] = None) -> SiteGrade:
    """Grade ``site`` overall, or for ``business_type`` when given.

    Missing inputs grade neutrally: no traffic or demographics → 70, no
    access survey → no curb cuts, frontage, corner or highway credit.

    Raises:
        ValueError: ``business_type`` is not a known type id.
    """
    requirement = get_business_type(business_type) if business_type else None
    access = site.access or SiteAccess()
    demo = site.demographics
    income = demo.median_household_income if demo else None
    population = demo.population if demo else None
    flood_risk = site.environmental.flood_risk if site.environmental else None

    factors = {
        "traffic": score_traffic_fit(site.vpd, requirement),
        "access": score_access_fit(access, requirement),
        "competition": score_competition_fit(site.nearby_businesses),
        "demographics": score_demographic_fit(income, population),
        "site_conditions": score_site_conditions(
            site.lot_size_acres, flood_risk, site.zoning, requirement
        ),
    }
    overall_value = round_half_up(sum(factors[k].value * w for k, w in WEIGHTS.items()))
    overall_grade = grade_for_value(overall_value)

    uses = suggest_uses(
        site.vpd, site.lot_size_acres, income, site.nearby_businesses, access.is_corner_lot
    )
    concerns = list_concerns(factors)
    strengths = list_strengths(factors, access)

    return SiteGrade(
        business_type=business_type or None,
        overall_value=overall_value,
        overall_grade=overall_grade,
        overall_score=f"{overall_grade}{grade_modifier(overall_value)}",
        summary=summarize(overall_grade, requirement, strengths, concerns),
        suggested_uses=uses,
        concerns=concerns,
        strengths=strengths,
        market_gaps=find_market_gaps(site.nearby_businesses),
        key_takeaways=key_takeaways(overall_value, factors["traffic"], uses, concerns),
        **factors,
    )
