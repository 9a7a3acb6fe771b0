"""
Shared pytest fixtures for the site analyzer test suite.

Provides:
  - Sample site-input factories (businesses, traffic, demographics, sites).
  - ``catalog``: the shipped category catalog.
  - ``retailer_dataset``: the shipped retailer dataset.
  - ``lot_reference`` / ``business_profiles``: the shipped tenant lot
    reference and business profiles.
  - ``make_retailer``: factory for one-off ``RetailerRequirement`` records.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from site_analyzer.catalog.business_profiles import BusinessProfileCatalog, load_business_profiles
from site_analyzer.catalog.categories import load_category_catalog
from site_analyzer.catalog.lot_reference import LotReference, load_lot_reference
from site_analyzer.catalog.retailer_loader import RetailerDataset, load_retailer_dataset
from site_analyzer.models.requirements import RetailerRequirement
from site_analyzer.models.site import Demographics, NearbyBusiness, SiteContext, TrafficInfo
from site_analyzer.taxonomy.site_taxonomy import IncomeTier

PROJECT_ROOT = Path(__file__).parent.parent
RETAILERS_JSON = PROJECT_ROOT / "config" / "data" / "retailers.json"
LOT_REFERENCE_JSON = PROJECT_ROOT / "config" / "data" / "lot_reference.json"
BUSINESS_PROFILES_JSON = PROJECT_ROOT / "config" / "data" / "business_profiles.json"


# ── Site inputs ───────────────────────────────────────────────────────────────

@pytest.fixture
def suburban_businesses() -> list[NearbyBusiness]:
    """Eight businesses of four types, including a Walmart anchor."""
    return [
        NearbyBusiness(name="Walmart Supercenter", type="Department Store", distance=0.4),
        NearbyBusiness(name="McDonald's", type="Restaurant", distance=0.2),
        NearbyBusiness(name="Starbucks", type="Cafe", distance=0.3),
        NearbyBusiness(name="Shell", type="Gas Station", distance=0.1),
        NearbyBusiness(name="Wendy's", type="Restaurant", distance=0.5),
        NearbyBusiness(name="Great Clips", type="Salon", distance=0.6),
        NearbyBusiness(name="AutoZone", type="Auto Parts", distance=0.7),
        NearbyBusiness(name="Taco Bell", type="Restaurant", distance=0.8),
    ]


@pytest.fixture
def busy_traffic() -> TrafficInfo:
    return TrafficInfo(estimated_vpd=24_000, road_type="Secondary Road")


@pytest.fixture
def middle_demographics() -> Demographics:
    """Middle-income suburban trade area."""
    return Demographics(
        median_household_income=72_000,
        income_tier=IncomeTier.MIDDLE,
        population=45_000,
        employment_rate=94.0,
        consumer_profile_type="Suburban Family",
        preferred_businesses=["Chick-fil-A", "Target", "Olive Garden"],
    )


@pytest.fixture
def sample_site(
    suburban_businesses: list[NearbyBusiness],
    busy_traffic: TrafficInfo,
    middle_demographics: Demographics,
) -> SiteContext:
    """A complete suburban site in Florida."""
    return SiteContext(
        address="4200 Commerce Pkwy, Ocala, FL 34471",
        latitude=29.187,
        longitude=-82.140,
        nearby_businesses=suburban_businesses,
        traffic=busy_traffic,
        demographics=middle_demographics,
        lot_size_acres=1.4,
        state_code="FL",
    )


@pytest.fixture
def bare_site() -> SiteContext:
    """A site where every upstream collaborator failed."""
    return SiteContext(address="Somewhere")


# ── Reference data ────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def catalog():
    return load_category_catalog()


@pytest.fixture(scope="session")
def retailer_dataset() -> RetailerDataset:
    return load_retailer_dataset(RETAILERS_JSON)


@pytest.fixture(scope="session")
def lot_reference() -> LotReference:
    return load_lot_reference(LOT_REFERENCE_JSON)


@pytest.fixture(scope="session")
def business_profiles() -> BusinessProfileCatalog:
    return load_business_profiles(BUSINESS_PROFILES_JSON)


@pytest.fixture
def make_retailer() -> Callable[..., RetailerRequirement]:
    """Factory for a permissive, nationally-expanding retailer; override any field."""

    def _make(**overrides: Any) -> RetailerRequirement:
        fields: dict[str, Any] = {
            "retailer_id": "test-chain",
            "name": "Test Chain",
            "category": "QSR",
            "min_lot_size": 1.0,
            "max_lot_size": 2.0,
            "min_vpd": 15_000,
            "ideal_vpd": 25_000,
            "income_preference": ["moderate", "middle", "upper-middle"],
            "min_median_income": 40_000,
            "max_median_income": 120_000,
            "min_population": 20_000,
            "expansion_regions": ["National"],
            "actively_expanding": True,
            "franchise_available": True,
            "franchise_fee": 35_000,
            "total_investment_min": 1_200_000,
            "total_investment_max": 2_500_000,
        }
        fields.update(overrides)
        return RetailerRequirement.model_validate(fields)

    return _make
