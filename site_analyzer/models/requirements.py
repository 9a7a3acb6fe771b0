"""
Reference requirement models: business categories, retail chains, business
types, tenant lot sizes and brand real-estate profiles.

``CategoryRequirement`` describes the traffic, income and lot-size
conditions under which a business concept (e.g. "Premium Coffee") thrives,
along with an ordered list of example brands. The catalog of these lives in
``site_analyzer.catalog.categories``.

``RetailerRequirement`` is one chain's published site criteria as held in
the retailer dataset (``config/data/retailers.json``). The dataset is
maintained outside this package; this model is the validation contract for
it.

``BusinessTypeRequirement`` is one of the coarse archetypes the site grader
scores against (``site_analyzer.catalog.business_types``).
``TenantLotRequirement`` and ``BusinessProfile`` are the records of the tenant
lot reference and the brand profile file.

All models are frozen and enforce ``min <= ideal/max`` at construction,
so an inconsistent reference record can never reach the scorers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from site_analyzer.taxonomy.site_taxonomy import (
    ConstructionPreference,
    DriveThrough,
    Importance,
    IncomeTier,
    SpaceType,
)


class CategoryRequirement(BaseModel):
    """Threshold record for one business category.

    Attributes:
        category_id: Stable snake_case identifier, e.g. ``"coffee_premium"``.
        display_name: Human-readable label, e.g. ``"Premium Coffee"``.
        min_vpd: Minimum viable vehicles per day.
        ideal_vpd: VPD at or above which traffic earns full marks.
        income_preferences: Income tiers the concept performs best in.
        lot_size_min: Minimum viable lot size in acres.
        lot_size_ideal: Optimal lot size in acres.
        example_brands: Representative brands, in recommendation order.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str
    display_name: str
    min_vpd: int
    ideal_vpd: int
    income_preferences: tuple[IncomeTier, ...]
    lot_size_min: float
    lot_size_ideal: float
    example_brands: tuple[str, ...]

    @field_validator("category_id")
    @classmethod
    def validate_id_format(cls, v: str) -> str:
        if not v or " " in v or v != v.lower():
            raise ValueError(f"category_id '{v}' must be lowercase with no spaces.")
        return v

    @model_validator(mode="after")
    def validate_thresholds(self) -> "CategoryRequirement":
        if not 0 < self.min_vpd <= self.ideal_vpd:
            raise ValueError(
                f"{self.category_id}: need 0 < min_vpd ({self.min_vpd}) "
                f"<= ideal_vpd ({self.ideal_vpd})."
            )
        if not 0 < self.lot_size_min <= self.lot_size_ideal:
            raise ValueError(
                f"{self.category_id}: need 0 < lot_size_min ({self.lot_size_min}) "
                f"<= lot_size_ideal ({self.lot_size_ideal})."
            )
        if not self.example_brands:
            raise ValueError(f"{self.category_id}: example_brands must not be empty.")
        return self


class RetailerRequirement(BaseModel):
    """Published site criteria for one retail chain.

    Attributes:
        retailer_id: Stable slug, e.g. ``"dutch-bros"``.
        name: Chain name.
        category: Free-text category label (e.g. ``"Coffee"``).
        min_lot_size: Smallest acceptable lot in acres.
        max_lot_size: Largest typical lot in acres.
        min_vpd: Minimum vehicles per day.
        ideal_vpd: Preferred vehicles per day.
        income_preference: Income tiers the chain targets.
        min_median_income: Lower median-income bound, or ``None``.
        max_median_income: Upper median-income bound, or ``None``.
        min_population: Minimum trade-area population.
        expansion_regions: Regions the chain is opening in; ``"National"``,
            a region group name (see ``catalog.regions``) or a state code.
        actively_expanding: Only expanding chains are matched.
        franchise_available: Whether franchising is offered.
        corporate_only: Whether all units are corporate-owned.
        franchise_fee: Initial franchise fee in USD.
        total_investment_min: Low end of total investment in USD.
        total_investment_max: High end of total investment in USD.
        notes: Free-text notes from the dataset maintainer.
    """

    model_config = ConfigDict(frozen=True)

    retailer_id: str
    name: str
    category: str
    min_lot_size: float
    max_lot_size: float
    min_vpd: int
    ideal_vpd: int
    income_preference: tuple[IncomeTier, ...]
    min_median_income: Optional[float] = None
    max_median_income: Optional[float] = None
    min_population: int = 0
    expansion_regions: tuple[str, ...] = ("National",)
    actively_expanding: bool = True
    franchise_available: bool = False
    corporate_only: bool = False
    franchise_fee: Optional[float] = None
    total_investment_min: Optional[float] = None
    total_investment_max: Optional[float] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "RetailerRequirement":
        if self.min_lot_size > self.max_lot_size:
            raise ValueError(
                f"{self.retailer_id}: min_lot_size ({self.min_lot_size}) "
                f"exceeds max_lot_size ({self.max_lot_size})."
            )
        if self.min_vpd > self.ideal_vpd:
            raise ValueError(
                f"{self.retailer_id}: min_vpd ({self.min_vpd}) "
                f"exceeds ideal_vpd ({self.ideal_vpd})."
            )
        if (
            self.min_median_income is not None
            and self.max_median_income is not None
            and self.min_median_income > self.max_median_income
        ):
            raise ValueError(
                f"{self.retailer_id}: min_median_income ({self.min_median_income}) "
                f"exceeds max_median_income ({self.max_median_income})."
            )
        return self

    @property
    def is_value_oriented(self) -> bool:
        """Targets low-income areas and neither upper tier."""
        prefs = set(self.income_preference)
        return (
            IncomeTier.LOW in prefs
            and IncomeTier.UPPER_MIDDLE not in prefs
            and IncomeTier.HIGH not in prefs
        )

    @property
    def is_premium_oriented(self) -> bool:
        """Targets at least one of the two upper tiers."""
        prefs = set(self.income_preference)
        return IncomeTier.UPPER_MIDDLE in prefs or IncomeTier.HIGH in prefs


class BusinessTypeRequirement(BaseModel):
    """Site profile a broad business type needs, used by the site grader.

    Attributes:
        type_id: Short key such as ``"qsr"`` or ``"warehouse"``.
        description: Label used in grading text, e.g. ``"Bank / Financial Services"``.
        min_vpd: Traffic below which the type starts losing points.
        ideal_vpd: Traffic at or above which it earns full marks.
        corner_preferred: A non-corner lot costs access points.
        multiple_access_preferred: A single curb cut earns a recommendation.
        parking_importance: How much on-site parking matters.
        truck_access: Deliveries need truck routes; no highway access costs points.
        visibility_importance: How much road visibility matters.
    """

    model_config = ConfigDict(frozen=True)

    type_id: str
    description: str
    min_vpd: int
    ideal_vpd: int
    corner_preferred: bool = False
    multiple_access_preferred: bool = False
    parking_importance: Importance = Importance.MEDIUM
    truck_access: bool = False
    visibility_importance: Importance = Importance.MEDIUM

    @model_validator(mode="after")
    def validate_traffic(self) -> "BusinessTypeRequirement":
        if not 0 < self.min_vpd < self.ideal_vpd:
            raise ValueError(
                f"{self.type_id}: need 0 < min_vpd ({self.min_vpd}) "
                f"< ideal_vpd ({self.ideal_vpd})."
            )
        return self


class TenantLotRequirement(BaseModel):
    """Published lot and building envelope of one named tenant.

    One row of ``config/data/lot_reference.json``.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    tenant: str
    category: str
    building_sf_min: int
    building_sf_max: int
    typical_lot_acres: float
    lot_min_acres: float
    lot_max_acres: float
    parking_ratio: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_envelope(self) -> "TenantLotRequirement":
        if not self.lot_min_acres <= self.typical_lot_acres <= self.lot_max_acres:
            raise ValueError(
                f"{self.tenant}: need lot_min_acres ({self.lot_min_acres}) <= "
                f"typical_lot_acres ({self.typical_lot_acres}) <= "
                f"lot_max_acres ({self.lot_max_acres})."
            )
        if self.building_sf_min > self.building_sf_max:
            raise ValueError(
                f"{self.tenant}: building_sf_min ({self.building_sf_min}) "
                f"exceeds building_sf_max ({self.building_sf_max})."
            )
        return self


class BusinessProfile(BaseModel):
    """Real-estate profile of one brand: footprint, lot, drive-through and space needs.

    Attributes:
        name: Brand name.
        category: Broad category, e.g. ``"QSR"`` or ``"Grocery"``.
        subcategory: Finer label, e.g. ``"Chicken"``.
        min_sqft: Smallest building the brand opens.
        max_sqft: Largest building the brand opens.
        min_lot_acres: Smallest lot, or ``None`` for in-line concepts.
        max_lot_acres: Largest lot, or ``None``.
        construction_preference: New build vs conversion of an existing space.
        space_types: Kinds of space the brand will take.
        drive_through: Whether a drive-through is required, preferred or optional.
        drive_through_notes: Stacking or lane notes.
        corner_lot_preferred: Ranked first on corner lots.
        highway_visibility: Ranked first on highway-visible sites.
        shopping_center_ok: Will locate inside a shopping center.
        notes: Free-text notes.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    subcategory: Optional[str] = None
    min_sqft: int
    max_sqft: int
    min_lot_acres: Optional[float] = None
    max_lot_acres: Optional[float] = None
    construction_preference: ConstructionPreference = ConstructionPreference.FLEXIBLE
    space_types: tuple[SpaceType, ...] = ()
    drive_through: DriveThrough = DriveThrough.NOT_APPLICABLE
    drive_through_notes: Optional[str] = None
    corner_lot_preferred: bool = False
    highway_visibility: bool = False
    shopping_center_ok: bool = False
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_ranges(self) -> "BusinessProfile":
        if self.min_sqft > self.max_sqft:
            raise ValueError(
                f"{self.name}: min_sqft ({self.min_sqft}) exceeds max_sqft ({self.max_sqft})."
            )
        if (
            self.min_lot_acres is not None
            and self.max_lot_acres is not None
            and self.min_lot_acres > self.max_lot_acres
        ):
            raise ValueError(
                f"{self.name}: min_lot_acres ({self.min_lot_acres}) "
                f"exceeds max_lot_acres ({self.max_lot_acres})."
            )
        return self
