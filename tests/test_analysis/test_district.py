"""
Tests for site_analyzer.analysis.district.

What we test
------------
classify_district() rule priority:
  - College campus requires the college-town flag AND a campus signal.
  - Downtown wins on score >= 3, or on a downtown address with a small lot.
  - Highway corridor on address keyword or VPD >= 25,000.
  - Suburban retail on a lot of at least one acre.
  - Neighborhood otherwise, including when every input is missing.
downtown_score(): each signal's weight.
DISTRICT_PROFILES: one shared profile per archetype with the published gates.
"""

from __future__ import annotations

from site_analyzer.analysis.district import (
    DISTRICT_PROFILES,
    classify_district,
    classify_site,
    downtown_business_options,
    downtown_score,
)
from site_analyzer.models.site import Demographics, NearbyBusiness, SiteContext
from site_analyzer.taxonomy.site_taxonomy import DistrictType, IncomeTier


# ── Helpers ───────────────────────────────────────────────────────────────────

def _classify(
    address: str = "100 Oak Ave",
    businesses: list[NearbyBusiness] | None = None,
    lot: float | None = None,
    vpd: int | None = None,
    college: bool = False,
) -> DistrictType:
    return classify_district(address, businesses or [], lot, vpd, college).type


def _filler(n: int) -> list[NearbyBusiness]:
    return [NearbyBusiness(name=f"Shop {i}", type="Store") for i in range(n)]


# ── Rule priority ─────────────────────────────────────────────────────────────

class TestCollegeCampus:
    def test_flag_and_address(self):
        assert _classify("1 University Ave", college=True) == DistrictType.COLLEGE_CAMPUS

    def test_flag_and_business_name(self):
        businesses = [NearbyBusiness(name="State University Bookstore")]
        assert _classify(businesses=businesses, college=True) == DistrictType.COLLEGE_CAMPUS

    def test_address_without_flag_is_not_campus(self):
        assert _classify("1 College Rd") != DistrictType.COLLEGE_CAMPUS

    def test_flag_without_signal_is_not_campus(self):
        assert _classify("9 Elm St", college=True) == DistrictType.NEIGHBORHOOD

    def test_campus_beats_highway(self):
        got = _classify("1 University Hwy", vpd=40_000, college=True)
        assert got == DistrictType.COLLEGE_CAMPUS


class TestHistoricDowntown:
    def test_address_and_boutique(self):
        businesses = [NearbyBusiness(name="Rosie's Boutique")]
        assert _classify("12 Main Street", businesses) == DistrictType.HISTORIC_DOWNTOWN

    def test_address_and_small_lot(self):
        assert _classify("3 Town Square", lot=0.3) == DistrictType.HISTORIC_DOWNTOWN

    def test_address_keyword_alone_scores_three(self):
        assert _classify("3 Town Square", lot=2.0) == DistrictType.HISTORIC_DOWNTOWN

    def test_boutique_alone_is_not_enough(self):
        businesses = [NearbyBusiness(name="Rosie's Boutique")]
        assert _classify(businesses=businesses, lot=2.0) == DistrictType.SUBURBAN_RETAIL

    def test_business_signals_without_address(self):
        # indicator (2) + small lot (1) = 3
        businesses = [NearbyBusiness(name="Corner Gallery")]
        assert _classify(businesses=businesses, lot=0.2) == DistrictType.HISTORIC_DOWNTOWN

    def test_downtown_beats_highway(self):
        got = _classify("10 Downtown Plaza", lot=0.3, vpd=30_000)
        assert got == DistrictType.HISTORIC_DOWNTOWN


class TestHighwayCorridor:
    def test_address_keyword(self):
        assert _classify("8800 Interstate Dr") == DistrictType.HIGHWAY_CORRIDOR

    def test_vpd_threshold(self):
        assert _classify(vpd=25_000) == DistrictType.HIGHWAY_CORRIDOR

    def test_vpd_just_below(self):
        assert _classify(vpd=24_999) == DistrictType.NEIGHBORHOOD


class TestSuburbanAndNeighborhood:
    def test_one_acre_is_suburban(self):
        assert _classify(lot=1.0) == DistrictType.SUBURBAN_RETAIL

    def test_small_lot_is_neighborhood(self):
        assert _classify(lot=0.9) == DistrictType.NEIGHBORHOOD

    def test_no_data_is_neighborhood(self):
        assert classify_district("", [], None, None, False).type == DistrictType.NEIGHBORHOOD


# ── Signals ───────────────────────────────────────────────────────────────────

class TestDowntownScore:
    def test_zero(self):
        assert downtown_score("9 Elm St", [], None) == 0

    def test_all_signals(self):
        businesses = [NearbyBusiness(name="Art Gallery")] + _filler(15)
        assert downtown_score("1 Historic Row", businesses, 0.2) == 7

    def test_density_needs_more_than_fifteen(self):
        assert downtown_score("x", _filler(15), None) == 0
        assert downtown_score("x", _filler(16), None) == 1

    def test_indicator_matches_type(self):
        assert downtown_score("x", [NearbyBusiness(name="Bean", type="Cafe")], None) == 2


# ── Profiles ──────────────────────────────────────────────────────────────────

class TestProfiles:
    def test_one_per_archetype(self):
        assert set(DISTRICT_PROFILES) == set(DistrictType)

    def test_shared_instances(self):
        first = classify_district("", [], None, None, False)
        second = classify_district("", [], None, None, False)
        assert first is second

    def test_downtown_excludes_gas_and_big_box(self):
        profile = DISTRICT_PROFILES[DistrictType.HISTORIC_DOWNTOWN]
        assert profile.excludes("gas_station")
        assert profile.excludes("big_box")
        assert not profile.excludes("coffee_premium")

    def test_highway_excludes_premium_retail(self):
        profile = DISTRICT_PROFILES[DistrictType.HIGHWAY_CORRIDOR]
        assert profile.inappropriate_categories == ("retail_premium", "fitness_premium")

    def test_suburban_only_excludes_truck_stop(self):
        profile = DISTRICT_PROFILES[DistrictType.SUBURBAN_RETAIL]
        assert profile.appropriate_categories == ()
        assert profile.inappropriate_categories == ("truck_stop",)

    def test_downtown_business_options(self):
        options = downtown_business_options()
        assert options[0] == "Farm-to-table Restaurant"
        assert "Board Game Cafe" in options
        assert len(options) == len(set(options))


class TestClassifySite:
    def test_sample_site_is_suburban(self, sample_site):
        assert classify_site(sample_site).type == DistrictType.SUBURBAN_RETAIL

    def test_college_flag_read_from_demographics(self):
        site = SiteContext(
            address="400 University Blvd, Tuscaloosa, AL 35401",
            demographics=Demographics(
                median_household_income=30_000,
                income_tier=IncomeTier.LOW,
                population=100_000,
                is_college_town=True,
                college_enrollment_percent=30,
            ),
        )
        assert classify_site(site).type == DistrictType.COLLEGE_CAMPUS

    def test_bare_site(self, bare_site):
        assert classify_site(bare_site).type == DistrictType.NEIGHBORHOOD
