"""
Site taxonomy: income tiers, district archetypes, ratings, grades and the
enumerations used by the tenant and business-profile references.

``IncomeTier`` values are the five bands the upstream demographics
collaborator assigns to a trade area. They are compared by membership only;
no ordering is implied beyond the two constant groups below.

This module has NO imports from any other ``site_analyzer`` package.
"""

from enum import StrEnum


class IncomeTier(StrEnum):
    """Median-household-income band of the trade area."""

    LOW = "low"
    """Roughly $0-35k median household income."""

    MODERATE = "moderate"
    """Roughly $35-55k."""

    MIDDLE = "middle"
    """Roughly $55-85k."""

    UPPER_MIDDLE = "upper-middle"
    """Roughly $85-125k."""

    HIGH = "high"
    """$125k and above."""


HIGH_INCOME_TIERS: frozenset[IncomeTier] = frozenset(
    {IncomeTier.UPPER_MIDDLE, IncomeTier.HIGH}
)
"""Tiers in which value-oriented concepts are excluded outright."""

LOW_INCOME_TIERS: frozenset[IncomeTier] = frozenset({IncomeTier.LOW})
"""Tiers in which premium-oriented retailers are excluded outright."""

DEFAULT_INCOME_TIER = IncomeTier.MIDDLE
"""Assumed tier when no demographics are available."""


class DistrictType(StrEnum):
    """Commercial-context archetype of a site."""

    COLLEGE_CAMPUS = "college_campus"
    HISTORIC_DOWNTOWN = "historic_downtown"
    HIGHWAY_CORRIDOR = "highway_corridor"
    SUBURBAN_RETAIL = "suburban_retail"
    NEIGHBORHOOD = "neighborhood"


class FeasibilityRating(StrEnum):
    """Overall rating bucket for a 0-10 feasibility score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


def rating_for_score(overall: int) -> FeasibilityRating:
    """Map an overall 0-10 score to its rating (>=8, >=6, >=4, else)."""
    if overall >= 8:
        return FeasibilityRating.EXCELLENT
    if overall >= 6:
        return FeasibilityRating.GOOD
    if overall >= 4:
        return FeasibilityRating.FAIR
    return FeasibilityRating.POOR


# ── Site grading ──────────────────────────────────────────────────────────────


class LetterGrade(StrEnum):
    """School-style grade for a 0-100 site factor."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


def grade_for_value(value: float) -> LetterGrade:
    """Map a 0-100 value to its letter (>=90, >=80, >=70, >=60, else F)."""
    if value >= 90:
        return LetterGrade.A
    if value >= 80:
        return LetterGrade.B
    if value >= 70:
        return LetterGrade.C
    if value >= 60:
        return LetterGrade.D
    return LetterGrade.F


class RiskLevel(StrEnum):
    """Flood-zone risk band reported by the environmental collaborator."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Importance(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Tenant and business profiles ─────────────────────────────────────────────


class LotFit(StrEnum):
    """How a lot compares with a tenant's published lot range."""

    IDEAL = "ideal"
    """Within 10% of the tenant's typical lot."""

    ACCEPTABLE = "acceptable"
    TIGHT = "tight"
    """Above the range but within 1.5x the maximum."""

    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"


class DriveThrough(StrEnum):
    REQUIRED = "required"
    PREFERRED = "preferred"
    OPTIONAL = "optional"
    NOT_APPLICABLE = "not_applicable"


class ConstructionPreference(StrEnum):
    NEW_ONLY = "new_only"
    PREFERS_NEW = "prefers_new"
    FLEXIBLE = "flexible"
    PREFERS_CONVERSION = "prefers_conversion"


class SpaceType(StrEnum):
    """Kind of space a business profile will occupy."""

    FREESTANDING = "freestanding"
    PAD_SITE = "pad_site"
    END_CAP = "end_cap"
    INLINE = "inline"
    ANCHOR = "anchor"
    JUNIOR_ANCHOR = "junior_anchor"
    KIOSK = "kiosk"
