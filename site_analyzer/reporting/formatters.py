"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept a ``SiteAnalysis`` (or pieces of one) and return
plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from typing import Mapping, Sequence

from site_analyzer.models.requirements import (
    BusinessProfile,
    BusinessTypeRequirement,
    CategoryRequirement,
    TenantLotRequirement,
)
from site_analyzer.models.results import (
    ExtendedFeasibilityScore,
    FeasibilityScore,
    RetailerMatchSummary,
    SiteAnalysis,
    SiteGrade,
    SuitabilityResult,
    TenantLotFit,
)


def _flag(matches: bool) -> str:
    return "Y" if matches else "-"


# ── Feasibility ───────────────────────────────────────────────────────────────


def format_feasibility(feasibility: FeasibilityScore) -> str:
    b = feasibility.breakdown
    d = feasibility.details
    lines = [
        f"  Overall:       {feasibility.overall}/10  [{feasibility.rating}]",
        f"    Traffic      {b.traffic_score:>2}/10  {d.traffic}",
        f"    Demographics {b.demographics_score:>2}/10  {d.demographics}",
        f"    Competition  {b.competition_score:>2}/10  {d.competition}",
        f"    Access       {b.access_score:>2}/10  {d.access}",
    ]
    return "\n".join(lines)



def format_extended_feasibility(score: ExtendedFeasibilityScore) -> str:
    b = score.breakdown
    d = score.details
    rows = (
        ("Traffic", b.traffic_score, d.traffic),
        ("Demographics", b.demographics_score, d.demographics),
        ("Competition", b.competition_score, d.competition),
        ("Access", b.access_score, d.access),
        ("Environment", b.environmental_score, d.environmental),
        ("Market", b.market_score, d.market),
    )
    lines = [f"  Overall:       {score.overall}/10  [{score.rating}]"]
    lines += [f"    {label:<12} {value:>2}/10  {detail}" for label, value, detail in rows]
    return "\n".join(lines)


# ── Site grade ────────────────────────────────────────────────────────────────


def format_site_grade(grade: SiteGrade) -> str:
    target = f" for {grade.business_type}" if grade.business_type else ""
    lines = [
        f"  Grade{target}: {grade.overall_score}  ({grade.overall_value}/100)",
        f"  {grade.summary}",
    ]
    factors = (
        ("Traffic", grade.traffic),
        ("Access", grade.access),
        ("Competition", grade.competition),
        ("Demographics", grade.demographics),
        ("Site", grade.site_conditions),
    )
    for label, factor in factors:
        lines.append(f"    {label:<12} {factor.grade}  {factor.value:>3}  {factor.insight}")

    for title, items in (
        ("Suggested uses", grade.suggested_uses),
        ("Strengths", grade.strengths),
        ("Concerns", grade.concerns),
        ("Market gaps", grade.market_gaps),
    ):
        if items:
            lines.append(f"  {title}: " + "; ".join(items))
    lines += [f"  * {t}" for t in grade.key_takeaways]
    return "\n".join(lines)


# ── Tenants and business profiles ─────────────────────────────────────────────


def format_lot_tenants(tenants: Sequence[TenantLotRequirement]) -> str:
    if not tenants:
        return "  (no reference tenants for this lot size)"
    header = f"    {'Tenant':<36}  {'Category':<30}  {'Typical':>7}  {'Range':>11}"
    lines = [header, "    " + "-" * (len(header) - 4)]
    for t in tenants:
        span = f"{t.lot_min_acres:g}-{t.lot_max_acres:g}"
        lines.append(
            f"    {t.tenant[:36]:<36}  {t.category[:30]:<30}  "
            f"{t.typical_lot_acres:>7g}  {span:>11}"
        )
    return "\n".join(lines)


def format_tenant_fit(name: str, lot_acres: float, fit: TenantLotFit) -> str:
    if fit.tenant is None:
        return f"  {name}: not in the lot reference"
    verdict = "fits" if fit.fits else "does not fit"
    return f"  {fit.tenant} {verdict} {lot_acres:g} acres ({fit.quality})"


def format_business_profiles(profiles: Sequence[BusinessProfile]) -> str:
    if not profiles:
        return "  (no matching businesses)"
    header = (
        f"    {'Business':<28}  {'Category':<14}  {'Sq ft':>13}  "
        f"{'Lot (ac)':>9}  {'Drive-thru':<14}"
    )
    lines = [header, "    " + "-" * (len(header) - 4)]
    for p in profiles:
        sqft = f"{p.min_sqft:,}-{p.max_sqft:,}"
        lot = (
            f"{p.min_lot_acres:g}-{p.max_lot_acres:g}"
            if p.min_lot_acres is not None and p.max_lot_acres is not None
            else "in-line"
        )
        lines.append(
            f"    {p.name[:28]:<28}  {p.category[:14]:<14}  {sqft:>13}  "
            f"{lot:>9}  {p.drive_through:<14}"
        )
    lines.append(f"    {len(profiles)} businesses")
    return "\n".join(lines)


def format_business_types(types: Mapping[str, BusinessTypeRequirement]) -> str:
    lines = [f"  {'Id':<18}  {'Description':<38}  {'VPD min/ideal':>15}"]
    for tid, t in types.items():
        lines.append(f"  {tid:<18}  {t.description:<38}  {t.min_vpd:>7,}/{t.ideal_vpd:,}")
    return "\n".join(lines)

# ── Suitability ───────────────────────────────────────────────────────────────


def format_suitability_table(results: list[SuitabilityResult], limit: int = 15) -> str:
    """Top ``limit`` categories as a table, with lot-size warnings inline."""
    if not results:
        return "  (no category ranking -- traffic data not available)"

    header = f"    {'#':>3}  {'Category':<32}  {'Score':>5}  {'Open brands':<40}"
    lines = [header, "    " + "-" * (len(header) - 4)]
    for rank, r in enumerate(results[:limit], start=1):
        brands = ", ".join(r.remaining_brands[:3]) or "Market may be saturated"
        lines.append(
            f"    {rank:>3}  {r.category_name[:32]:<32}  {r.score:>5}  {brands[:40]:<40}"
        )
        if r.lot_size_issue:
            lines.append(f"         ! {r.lot_size_issue}")
    if len(results) > limit:
        lines.append(f"    ... {len(results) - limit} more categories")
    return "\n".join(lines)


# ── Retailers ─────────────────────────────────────────────────────────────────


def format_retailer_matches(summary: RetailerMatchSummary) -> str:
    if not summary.matches:
        return "  (no qualifying retailers)"

    header = (
        f"    {'#':>3}  {'Retailer':<24}  {'Category':<16}  {'Score':>5}  "
        f"{'Lot':>3}  {'VPD':>3}  {'Demo':>4}  {'Reg':>3}  {'Investment':<16}"
    )
    lines = [header, "    " + "-" * (len(header) - 4)]
    for rank, m in enumerate(summary.matches, start=1):
        d = m.match_details
        lines.append(
            f"    {rank:>3}  {m.name[:24]:<24}  {m.category[:16]:<16}  {m.match_score:>5}  "
            f"{_flag(d.lot_size.matches):>3}  {_flag(d.traffic.matches):>3}  "
            f"{_flag(d.demographics.matches):>4}  {_flag(d.region.matches):>3}  "
            f"{(m.total_investment or 'n/a'):<16}"
        )
    lines.append(
        f"    Showing {len(summary.matches)} of {summary.total_matches} qualifying retailers"
    )
    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def format_analysis_report(analysis: SiteAnalysis, suitability_limit: int = 15) -> str:
    """Format a complete ``SiteAnalysis`` for the terminal.

    Sections: site header, feasibility breakdown, district, category
    ranking, brand recommendations, retailer matches, then site grade,
    six-factor feasibility and lot tenants when present.
    """
    lot = (
        f"{analysis.lot_size_acres:.2f} acres"
        if analysis.lot_size_acres is not None
        else "unknown"
    )
    lines: list[str] = [
        "",
        "=== Site Analysis ===",
        f"  Address:  {analysis.address or '(none)'}",
        f"  State:    {analysis.state_code or 'unknown'}",
        f"  Lot size: {lot}",
        "",
        "--- Feasibility ---",
        format_feasibility(analysis.feasibility),
        "",
        "--- District ---",
        f"  {analysis.district.type}: {analysis.district.description}",
    ]
    if analysis.district.inappropriate_categories:
        lines.append(
            "  Excluded: " + ", ".join(analysis.district.inappropriate_categories)
        )

    lines += ["", "--- Category Suitability ---",
              format_suitability_table(analysis.suitability, suitability_limit)]

    lines += ["", "--- Recommendations ---"]
    if analysis.recommendations:
        lines += [f"  {i:>2}. {name}" for i, name in enumerate(analysis.recommendations, start=1)]
    else:
        lines.append("  (none)")

    lines += ["", "--- Retailer Matches ---", format_retailer_matches(analysis.retailer_matches)]

    if analysis.site_grade is not None:
        lines += ["", "--- Site Grade ---", format_site_grade(analysis.site_grade)]
    if analysis.extended_feasibility is not None:
        lines += ["", "--- Six-Factor Feasibility ---",
                  format_extended_feasibility(analysis.extended_feasibility)]
    if analysis.lot_size_acres is not None:
        lines += ["", "--- Lot-Size Tenant Fit ---", format_lot_tenants(analysis.lot_tenants)]
    return "\n".join(lines)


def format_category_list(catalog: Mapping[str, CategoryRequirement]) -> str:
    """Catalog listing used by ``list-categories``."""
    header = (
        f"  {'Id':<28}  {'Name':<32}  {'VPD min/ideal':>15}  {'Lot min/ideal':>13}"
    )
    lines = [header, "  " + "-" * (len(header) - 2)]
    for cid, c in catalog.items():
        vpd = f"{c.min_vpd:,}/{c.ideal_vpd:,}"
        lot = f"{c.lot_size_min:g}/{c.lot_size_ideal:g}"
        lines.append(f"  {cid:<28}  {c.display_name[:32]:<32}  {vpd:>15}  {lot:>13}")
    lines.append(f"  {len(catalog)} categories")
    return "\n".join(lines)
