"""
Result models produced by the scoring pipeline.

One ``SiteAnalysis`` is returned per request. It bundles:
  - ``DistrictProfile``      - the location archetype and its category gates.
  - ``FeasibilityScore``     - overall 0-10 score with four sub-scores.
  - ``SuitabilityResult``    - one per non-excluded business category.
  - brand recommendations    - plain strings, priority order.
  - ``RetailerMatchSummary`` - up to N qualifying chains plus the total count.
  - ``SiteGrade``            - A-F report card over five factors.
  - ``ExtendedFeasibilityScore`` - six-factor score when environmental or
                               sales-comp data was supplied.
  - lot tenants              - reference tenants whose lot range covers the site.

All models are frozen. List-valued fields are tuples or lists built in a
deterministic order, so ``model_dump_json()`` of two runs over identical
input is byte-identical.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from site_analyzer.models.requirements import TenantLotRequirement
from site_analyzer.taxonomy.site_taxonomy import (
    DistrictType,
    FeasibilityRating,
    LetterGrade,
    LotFit,
)


class DistrictProfile(BaseModel):
    """Commercial-context classification of a site.

    Attributes:
        type: District archetype.
        description: One-line human description.
        appropriate_categories: Category ids favoured in this district; empty
            means "no explicit allow-list".
        inappropriate_categories: Category ids excluded from ranking and
            recommendation in this district.
    """

    model_config = ConfigDict(frozen=True)

    type: DistrictType
    description: str
    appropriate_categories: tuple[str, ...] = ()
    inappropriate_categories: tuple[str, ...] = ()

    def excludes(self, category_id: str) -> bool:
        return category_id in self.inappropriate_categories


class FeasibilityBreakdown(BaseModel):
    """The four 0-10 sub-scores behind the overall feasibility score."""

    model_config = ConfigDict(frozen=True)

    traffic_score: int
    demographics_score: int
    competition_score: int
    access_score: int


class FeasibilityDetails(BaseModel):
    """Human-readable explanation for each sub-score."""

    model_config = ConfigDict(frozen=True)

    traffic: str
    demographics: str
    competition: str
    access: str


class FeasibilityScore(BaseModel):
    """Overall site feasibility.

    ``overall`` is the half-up-rounded weighted sum
    ``0.35*traffic + 0.25*demographics + 0.20*competition + 0.20*access``.
    """

    model_config = ConfigDict(frozen=True)

    overall: int
    breakdown: FeasibilityBreakdown
    details: FeasibilityDetails
    rating: FeasibilityRating

    @field_validator("overall")
    @classmethod
    def validate_overall(cls, v: int) -> int:
        if not 0 <= v <= 10:
            raise ValueError(f"overall must be in [0, 10], got {v}.")
        return v


class SuitabilityResult(BaseModel):
    """How well one business category fits the site.

    Attributes:
        category_id: Catalog id of the category.
        category_name: Display name of the category.
        score: Suitability in [1, 10].
        reasoning: Period-joined explanation of each adjustment applied.
        remaining_brands: Example brands not already present nearby.
        competing_brands: Example brands already present nearby.
        lot_size_issue: Set when the lot is below the category minimum.
        market_saturated: True when every example brand is already nearby.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str
    category_name: str
    score: int
    reasoning: str
    remaining_brands: list[str] = []
    competing_brands: list[str] = []
    lot_size_issue: Optional[str] = None
    market_saturated: bool = False

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 1 <= v <= 10:
            raise ValueError(f"suitability score must be in [1, 10], got {v}.")
        return v


class FactorMatch(BaseModel):
    """Whether one retailer factor matched, with an explanatory note."""

    model_config = ConfigDict(frozen=True)

    matches: bool = False
    note: str = ""


class RetailerMatchDetails(BaseModel):
    """Per-factor breakdown of a retailer match."""

    model_config = ConfigDict(frozen=True)

    lot_size: FactorMatch
    traffic: FactorMatch
    demographics: FactorMatch
    region: FactorMatch


class RetailerMatchResult(BaseModel):
    """A qualifying retailer and how well it fits the site.

    Attributes:
        retailer_id: Dataset id of the retailer.
        name: Chain name.
        category: Chain category label.
        match_score: Weighted fit in [0, 100].
        match_details: Per-factor flags and notes.
        franchise_available: Copied from the dataset.
        corporate_only: Copied from the dataset.
        franchise_fee: Copied from the dataset.
        total_investment: Formatted range, e.g. ``"$1.2M - $2.5M"``.
        expansion_regions: Copied from the dataset.
        notes: Copied from the dataset.
    """

    model_config = ConfigDict(frozen=True)

    retailer_id: str
    name: str
    category: str
    match_score: int
    match_details: RetailerMatchDetails
    actively_expanding: bool = True
    franchise_available: bool = False
    corporate_only: bool = False
    franchise_fee: Optional[float] = None
    total_investment: Optional[str] = None
    expansion_regions: tuple[str, ...] = ()
    notes: Optional[str] = None

    @field_validator("match_score")
    @classmethod
    def validate_match_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"match_score must be in [0, 100], got {v}.")
        return v


class RetailerMatchSummary(BaseModel):
    """Top retailer matches plus the pre-truncation count of qualifiers."""

    model_config = ConfigDict(frozen=True)

    matches: list[RetailerMatchResult] = []
    total_matches: int = 0


class ExtendedFeasibilityBreakdown(FeasibilityBreakdown):
    environmental_score: int
    market_score: int


class ExtendedFeasibilityDetails(FeasibilityDetails):
    environmental: str
    market: str


class ExtendedFeasibilityScore(BaseModel):
    """Six-factor feasibility, used when environmental or sales-comp data exists.

    ``overall`` is the half-up-rounded weighted sum ``0.25*traffic +
    0.20*demographics + 0.15*competition + 0.15*access +
    0.15*environmental + 0.10*market``.
    """

    model_config = ConfigDict(frozen=True)

    overall: int
    breakdown: ExtendedFeasibilityBreakdown
    details: ExtendedFeasibilityDetails
    rating: FeasibilityRating

    @field_validator("overall")
    @classmethod
    def validate_overall(cls, v: int) -> int:
        if not 0 <= v <= 10:
            raise ValueError(f"overall must be in [0, 10], got {v}.")
        return v


class FactorGrade(BaseModel):
    """One graded site factor: letter, 0-100 value and the reasoning behind it."""

    model_config = ConfigDict(frozen=True)

    grade: LetterGrade
    value: int
    insight: str
    recommendation: str


class SiteGrade(BaseModel):
    """Report-card grading of a site, optionally for one business type.

    Attributes:
        business_type: Business type the site was graded for, or ``None``
            for a general commercial grading.
        overall_value: Weighted 0-100 value across the five factors.
        overall_grade: Letter for ``overall_value``.
        overall_score: Letter with a ``+``/``-`` modifier, e.g. ``"B+"``.
        summary: One-sentence verdict.
        traffic, access, competition, demographics, site_conditions:
            The five graded factors.
        suggested_uses: Up to eight concepts that suit the site.
        concerns: Factors graded low enough to need attention.
        strengths: Factors graded high, plus corner and highway exposure.
        market_gaps: Everyday services missing from a busy trade area.
        key_takeaways: Up to five headline bullets.
    """

    model_config = ConfigDict(frozen=True)

    business_type: Optional[str] = None
    overall_value: int
    overall_grade: LetterGrade
    overall_score: str
    summary: str
    traffic: FactorGrade
    access: FactorGrade
    competition: FactorGrade
    demographics: FactorGrade
    site_conditions: FactorGrade
    suggested_uses: list[str] = []
    concerns: list[str] = []
    strengths: list[str] = []
    market_gaps: list[str] = []
    key_takeaways: list[str] = []


class TenantLotFit(BaseModel):
    """Whether a named tenant fits a lot, and how comfortably.

    ``tenant`` is the matched reference name, or ``None`` when the name was
    not found (reported as not fitting, ``too_small``).
    """

    model_config = ConfigDict(frozen=True)

    tenant: Optional[str] = None
    fits: bool
    quality: LotFit


class DriveThroughAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    feasible: bool
    notes: str


class SiteAnalysis(BaseModel):
    """Complete scoring output for one site.

    ``extended_feasibility`` is ``None`` unless the site carries environmental
    screening or sales comps. ``lot_tenants`` is empty when the lot size is
    unknown.

    Narrative text from the generative-AI collaborator is merged by the
    caller; it is deliberately not part of this model.
    """

    model_config = ConfigDict(frozen=True)

    address: str
    state_code: Optional[str] = None
    lot_size_acres: Optional[float] = None
    district: DistrictProfile
    feasibility: FeasibilityScore
    suitability: list[SuitabilityResult] = []
    recommendations: list[str] = []
    retailer_matches: RetailerMatchSummary = RetailerMatchSummary()
    site_grade: Optional[SiteGrade] = None
    extended_feasibility: Optional[ExtendedFeasibilityScore] = None
    lot_tenants: list[TenantLotRequirement] = []
