"""
Site input models - the read-only ``SiteContext`` handed to the pipeline.

Every field here is produced upstream by collaborators (geocoder, traffic
estimator, census lookup, places search, lot-size parser, parcel survey,
environmental screening, sales comps). The scoring core never fetches
anything itself; it only reads these values. Any collaborator may fail, so
every input beyond ``address`` is nullable or may be empty, and "absent" is
a normal value downstream.

All models are frozen.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_analyzer.taxonomy.site_taxonomy import IncomeTier, RiskLevel

_DISTANCE_RE = re.compile(r"(\d+(?:\.\d+)?)")


class NearbyBusiness(BaseModel):
    """A business found within the scanning radius of the site.

    Attributes:
        name: Business name as returned by the places search.
        type: Free-text business type (e.g. ``"restaurant"``, ``"Gas Station"``).
        distance: Distance from the site in miles, or ``None`` if unknown.
            Strings such as ``"0.3 mi"`` are accepted and parsed.
        address: Street address, if known.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "Other"
    distance: Optional[float] = None
    address: Optional[str] = None

    @field_validator("distance", mode="before")
    @classmethod
    def parse_distance(cls, v: Any) -> Any:
        if isinstance(v, str):
            match = _DISTANCE_RE.search(v)
            return float(match.group(1)) if match else None
        return v


class TrafficInfo(BaseModel):
    """Traffic estimate for the roads adjacent to the site.

    Attributes:
        estimated_vpd: Estimated vehicles per day.
        road_type: Road classification label, e.g. ``"Major Arterial"``,
            ``"Secondary Road"``, ``"Motorway"``.
    """

    model_config = ConfigDict(frozen=True)

    estimated_vpd: int
    road_type: str = ""

    @field_validator("estimated_vpd")
    @classmethod
    def validate_vpd(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"estimated_vpd must be non-negative, got {v}.")
        return v


class Demographics(BaseModel):
    """Trade-area demographic profile.

    Attributes:
        median_household_income: Median household income in USD.
        income_tier: Income band assigned by the demographics collaborator.
        population: Trade-area population.
        employment_rate: Percent employed (0-100), or ``None``.
        is_college_town: True when a large student population distorts the
            census income figures.
        college_enrollment_percent: Share of population enrolled in college.
        consumer_profile_type: Label of the consumer profile, e.g. ``"Suburban Family"``.
        preferred_businesses: Brands the consumer profile is known to favour.
    """

    model_config = ConfigDict(frozen=True)

    median_household_income: float
    income_tier: IncomeTier
    population: int
    employment_rate: Optional[float] = None
    is_college_town: bool = False
    college_enrollment_percent: Optional[float] = None
    consumer_profile_type: Optional[str] = None
    preferred_businesses: list[str] = []


class SiteAccess(BaseModel):
    """Curb cuts and frontage of the parcel, from the parcel/imagery collaborator.

    Attributes:
        access_point_count: Driveways onto public roads.
        road_count: Roads the parcel fronts.
        is_corner_lot: Parcel sits on an intersection.
        has_highway_access: Parcel is visible from or reachable off a highway.
    """

    model_config = ConfigDict(frozen=True)

    access_point_count: int = Field(default=0, ge=0)
    road_count: int = Field(default=0, ge=0)
    is_corner_lot: bool = False
    has_highway_access: bool = False


class EnvironmentalRisk(BaseModel):
    """Environmental screening result for the parcel.

    Attributes:
        overall_risk_score: 0-100 screening score; higher means fewer
            hazards were found.
        flood_zone: FEMA zone label, e.g. ``"X"`` or ``"AE"``.
        flood_risk: Risk band of that zone, or ``None`` when unmapped.
        wetlands_present: Wetlands on or next to the parcel.
        brownfields_present: Brownfield sites nearby.
        brownfield_count: How many; 0 means "present, count unknown".
        superfund_present: Superfund sites nearby.
        superfund_count: How many; 0 means "present, count unknown".
    """

    model_config = ConfigDict(frozen=True)

    overall_risk_score: float = Field(ge=0, le=100)
    flood_zone: str = ""
    flood_risk: Optional[RiskLevel] = None
    wetlands_present: bool = False
    brownfields_present: bool = False
    brownfield_count: int = Field(default=0, ge=0)
    superfund_present: bool = False
    superfund_count: int = Field(default=0, ge=0)


class MarketComp(BaseModel):
    """One recent comparable commercial sale near the site."""

    model_config = ConfigDict(frozen=True)

    address: str = ""
    price_per_sqft: float = Field(ge=0)
    sale_price: Optional[float] = None
    sale_date: Optional[str] = None
    sqft: Optional[int] = None
    property_type: Optional[str] = None


class SiteContext(BaseModel):
    """Everything known about one candidate site, built once per request.

    Attributes:
        address: Free-text street address.
        latitude: Site latitude, if geocoded.
        longitude: Site longitude, if geocoded.
        nearby_businesses: Businesses within the scanning radius.
        traffic: Traffic estimate, or ``None`` if the lookup failed.
        demographics: Demographic profile, or ``None`` if the lookup failed.
        lot_size_acres: Parsed lot size, or ``None`` when unknown.
        state_code: Two-letter USPS state code; derived from ``address``
            by the orchestrator when omitted.
        access: Curb cuts and frontage, or ``None`` when not surveyed.
        zoning: Zoning code as recorded by the county, e.g. ``"C-2"``.
        environmental: Environmental screening, or ``None``.
        market_comps: Recent comparable sales (may be empty).
    """

    model_config = ConfigDict(frozen=True)

    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    nearby_businesses: list[NearbyBusiness] = []
    traffic: Optional[TrafficInfo] = None
    demographics: Optional[Demographics] = None
    lot_size_acres: Optional[float] = None
    state_code: Optional[str] = None
    access: Optional[SiteAccess] = None
    zoning: Optional[str] = None
    environmental: Optional[EnvironmentalRisk] = None
    market_comps: list[MarketComp] = []

    @field_validator("lot_size_acres")
    @classmethod
    def validate_lot_size(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"lot_size_acres must be non-negative, got {v}.")
        return v

    @field_validator("state_code")
    @classmethod
    def normalize_state_code(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().upper()
        return v or None

    @property
    def vpd(self) -> Optional[int]:
        return self.traffic.estimated_vpd if self.traffic else None
