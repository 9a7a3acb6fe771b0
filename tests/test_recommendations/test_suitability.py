"""
Tests for site_analyzer.recommendations.suitability.

What we test
------------
base_traffic_score(): the four VPD bands.
score_category():
  - Perfect site scores 10; scores are always within [1, 10].
  - Income match +2 (capped) / mismatch -3.
  - Lot penalty capped at 8 and reported as a lot-size issue.
  - Saturation -3 with an empty remaining-brand list.
rank_categories():
  - District deny list and high-income value exclusion.
  - Descending order; ties keep catalog order.
"""

from __future__ import annotations

import pytest

from site_analyzer.analysis.district import DISTRICT_PROFILES
from site_analyzer.catalog.categories import VALUE_CATEGORIES, get_category
from site_analyzer.models.site import Demographics, NearbyBusiness
from site_analyzer.recommendations.suitability import (
    MAX_LOT_PENALTY,
    base_traffic_score,
    effective_income_tier,
    lot_size_penalty,
    rank_categories,
    score_category,
)
from site_analyzer.taxonomy.site_taxonomy import DistrictType, IncomeTier


# ── Helpers ───────────────────────────────────────────────────────────────────

def _demo(tier: IncomeTier) -> Demographics:
    return Demographics(median_household_income=80_000, income_tier=tier, population=20_000)


COFFEE = get_category("coffee_premium")  # VPD 15k/20k, lot 0.25/0.6


# ── Traffic bands ─────────────────────────────────────────────────────────────

class TestBaseTrafficScore:
    def test_at_ideal(self):
        score, reason = base_traffic_score(20_000, COFFEE)
        assert score == 10
        assert reason == "Excellent traffic - VPD of 20,000 exceeds ideal threshold"

    def test_between_min_and_ideal(self):
        # 5 + 5 * 2500 / 5000 = 7.5
        assert base_traffic_score(17_500, COFFEE)[0] == 8

    def test_at_min(self):
        assert base_traffic_score(15_000, COFFEE)[0] == 5

    def test_marginal(self):
        # 3 + 2 * 12000 / 15000 = 4.6
        assert base_traffic_score(12_000, COFFEE)[0] == 5

    def test_low(self):
        # 3 * 5000 / 15000 = 1.0
        assert base_traffic_score(5_000, COFFEE)[0] == 1

    def test_zero(self):
        assert base_traffic_score(0, COFFEE)[0] == 0


class TestLotSizePenalty:
    def test_no_penalty_at_min(self):
        assert lot_size_penalty(8.0, 8.0) == 0

    def test_capped(self):
        assert lot_size_penalty(0.3, 8.0) == MAX_LOT_PENALTY == 8

    def test_proportional(self):
        # (1.0 - 0.75) / 1.0 * 10 = 2.5 -> 3
        assert lot_size_penalty(0.75, 1.0) == 3


# ── Single category ───────────────────────────────────────────────────────────

class TestScoreCategory:
    def test_premium_retail_perfect_site(self):
        result = score_category(
            get_category("retail_premium"), 32_000, [], _demo(IncomeTier.HIGH), 10.0
        )
        assert result.score == 10
        assert result.lot_size_issue is None
        assert not result.market_saturated

    def test_income_mismatch(self):
        result = score_category(COFFEE, 20_000, [], _demo(IncomeTier.LOW), None)
        assert result.score == 7
        assert "Demographics mismatch - low income area" in result.reasoning

    def test_income_match_reasoning(self):
        result = score_category(COFFEE, 15_000, [], _demo(IncomeTier.HIGH), None)
        assert result.score == 7
        assert "Demographics match - high income area is ideal" in result.reasoning

    def test_no_demographics_no_adjustment(self):
        assert score_category(COFFEE, 15_000, [], None, None).score == 5

    def test_big_box_on_tiny_lot(self):
        result = score_category(
            get_category("big_box"), 40_000, [], _demo(IncomeTier.MIDDLE), 0.3
        )
        # 10, +2 capped at 10, -8 = 2
        assert result.score == 2
        assert result.lot_size_issue == "LOT TOO SMALL: Need 8 acres min, site has ~0.30 acres"
        assert "LOT TOO SMALL" in result.reasoning

    def test_zero_traffic_floor(self):
        result = score_category(get_category("big_box"), 0, [], None, 0.01)
        assert result.score >= 1

    def test_saturated(self):
        nearby = [NearbyBusiness(name=b) for b in COFFEE.example_brands]
        result = score_category(COFFEE, 20_000, nearby, None, None)
        assert result.market_saturated
        assert result.remaining_brands == []
        assert result.competing_brands == list(COFFEE.example_brands)
        assert result.score == 7
        assert result.reasoning.endswith("Market saturated - all major brands present.")

    def test_competitors_counted(self):
        nearby = [NearbyBusiness(name="Starbucks Reserve")]
        result = score_category(COFFEE, 20_000, nearby, None, None)
        assert result.competing_brands == ["Starbucks"]
        assert "Starbucks" not in result.remaining_brands
        assert result.reasoning.endswith("1 competitor(s) nearby.")

    def test_ideal_lot_bonus(self):
        assert score_category(COFFEE, 15_000, [], None, 1.0).score == 6


# ── Ranking ───────────────────────────────────────────────────────────────────

class TestRankCategories:
    def test_scores_in_range(self, catalog):
        results = rank_categories(0, [], None, 0.01, None, catalog)
        assert results
        assert all(1 <= r.score <= 10 for r in results)

    def test_sorted_descending_ties_in_catalog_order(self, catalog, sample_site):
        results = rank_categories(
            sample_site.vpd, sample_site.nearby_businesses, sample_site.demographics,
            sample_site.lot_size_acres, None, catalog,
        )
        order = {cid: i for i, cid in enumerate(catalog)}
        for a, b in zip(results, results[1:]):
            assert a.score >= b.score
            if a.score == b.score:
                assert order[a.category_id] < order[b.category_id]

    def test_no_district_scores_everything(self, catalog):
        results = rank_categories(20_000, [], _demo(IncomeTier.MIDDLE), None, None, catalog)
        assert len(results) == len(catalog)

    def test_district_exclusions(self, catalog):
        district = DISTRICT_PROFILES[DistrictType.HIGHWAY_CORRIDOR]
        ids = {r.category_id for r in rank_categories(30_000, [], None, 2.0, district, catalog)}
        assert "retail_premium" not in ids
        assert "fitness_premium" not in ids
        assert "gas_station" in ids

    @pytest.mark.parametrize("tier", [IncomeTier.UPPER_MIDDLE, IncomeTier.HIGH])
    def test_value_categories_dropped_in_high_income(self, catalog, tier):
        ids = {r.category_id for r in rank_categories(20_000, [], _demo(tier), None, None, catalog)}
        assert not ids & VALUE_CATEGORIES

    def test_value_categories_kept_in_middle_income(self, catalog):
        ids = {
            r.category_id
            for r in rank_categories(20_000, [], _demo(IncomeTier.MIDDLE), None, None, catalog)
        }
        assert VALUE_CATEGORIES <= ids

    def test_effective_tier_default(self):
        assert effective_income_tier(None) is IncomeTier.MIDDLE
