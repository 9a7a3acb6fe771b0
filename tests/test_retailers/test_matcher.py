"""
Tests for site_analyzer.retailers.matcher.

What we test
------------
match_retailer():
  - Weighted score for a full-data site (lot, traffic, demographics, region).
  - Unknown lot / traffic drop those weights from the denominator.
  - Unknown state earns half region credit.
  - Region matches via National, a region group or the state code itself.
  - Hard disqualifications: tiny lot, value-oriented in high income,
    premium-oriented in low income, income far outside the band,
    score below the cut-off.
match_retailers():
  - Only actively-expanding retailers; at most max_results; scores
    non-increasing and within [0, 100]; ties keep dataset order;
    total_matches counts before truncation.
format_investment(): "$1.2M - $2.5M" or None.
"""

from __future__ import annotations

import pytest

from site_analyzer.config import MatcherConfig
from site_analyzer.retailers.matcher import (
    RetailerSiteFacts,
    format_investment,
    match_retailer,
    match_retailers,
)
from site_analyzer.taxonomy.site_taxonomy import IncomeTier


# ── Helpers ───────────────────────────────────────────────────────────────────

def _facts(**overrides) -> RetailerSiteFacts:
    fields = dict(
        lot_size_acres=1.4,
        vpd=24_000,
        median_income=72_000,
        income_tier=IncomeTier.MIDDLE,
        population=45_000,
        state_code="FL",
    )
    fields.update(overrides)
    return RetailerSiteFacts(**fields)


# ── Scoring ───────────────────────────────────────────────────────────────────

class TestMatchRetailerScore:
    def test_full_data(self, make_retailer):
        # 30 + 0.7*25 + 25 + 20 = 92.5
        result = match_retailer(make_retailer(), _facts())
        assert result is not None
        assert result.match_score == 93
        d = result.match_details
        assert d.lot_size.matches and d.traffic.matches
        assert d.demographics.matches and d.region.matches
        assert d.region.note == "Expanding nationally"

    def test_unknown_lot_and_traffic_omitted(self, make_retailer):
        result = match_retailer(make_retailer(), _facts(lot_size_acres=None, vpd=None))
        assert result.match_score == 100
        assert result.match_details.lot_size.note == "Lot size not available"
        assert not result.match_details.lot_size.matches
        assert result.match_details.traffic.note == "Traffic data not available"

    def test_unknown_state_half_region_credit(self, make_retailer):
        # 30 + 17.5 + 25 + 10 = 82.5
        result = match_retailer(make_retailer(), _facts(state_code=None))
        assert result.match_score == 83
        assert result.match_details.region.note == "Location data not available"

    def test_region_mismatch(self, make_retailer):
        # 30 + 17.5 + 25 + 4 = 76.5
        result = match_retailer(make_retailer(expansion_regions=["Texas"]), _facts())
        assert result.match_score == 77
        assert not result.match_details.region.matches

    def test_region_group_match(self, make_retailer):
        result = match_retailer(make_retailer(expansion_regions=["Sun Belt"]), _facts())
        assert result.match_details.region.matches
        assert result.match_details.region.note == "Actively targeting: Sun Belt"

    def test_state_code_region_match(self, make_retailer):
        result = match_retailer(make_retailer(expansion_regions=["GA", "FL"]), _facts())
        assert result.match_details.region.matches

    def test_slightly_small_lot(self, make_retailer):
        result = match_retailer(make_retailer(min_lot_size=1.5, max_lot_size=2.0), _facts())
        assert result.match_details.lot_size.note == "Site is slightly small (1.4 vs 1.5 min)"
        # 18 + 17.5 + 25 + 20 = 80.5
        assert result.match_score == 81

    def test_missing_demographics(self, make_retailer):
        facts = _facts(median_income=None, income_tier=None, population=None)
        result = match_retailer(make_retailer(), facts)
        assert result.match_details.demographics.note == "Demographics data not available"
        assert not result.match_details.demographics.matches

    def test_result_copies_dataset_fields(self, make_retailer):
        result = match_retailer(make_retailer(notes="Drive-thru only"), _facts())
        assert result.franchise_available
        assert result.franchise_fee == 35_000
        assert result.total_investment == "$1.2M - $2.5M"
        assert result.expansion_regions == ("National",)
        assert result.notes == "Drive-thru only"


class TestDisqualification:
    def test_lot_under_half_minimum(self, make_retailer):
        assert match_retailer(make_retailer(min_lot_size=3.0, max_lot_size=4.0), _facts()) is None

    def test_income_far_above_max(self, make_retailer):
        facts = _facts(median_income=125_000, income_tier=IncomeTier.UPPER_MIDDLE)
        assert match_retailer(make_retailer(max_median_income=90_000), facts) is None

    def test_income_far_below_min(self, make_retailer):
        facts = _facts(median_income=25_000, income_tier=IncomeTier.MODERATE)
        assert match_retailer(make_retailer(), facts) is None

    def test_value_retailer_in_high_income(self, make_retailer):
        retailer = make_retailer(
            income_preference=["low", "moderate"], min_median_income=None, max_median_income=None
        )
        assert match_retailer(retailer, _facts(income_tier=IncomeTier.HIGH)) is None

    def test_premium_retailer_in_low_income(self, make_retailer):
        retailer = make_retailer(
            income_preference=["upper-middle", "high"], min_median_income=None, max_median_income=None
        )
        assert match_retailer(retailer, _facts(income_tier=IncomeTier.LOW)) is None

    def test_below_cutoff(self, make_retailer):
        assert match_retailer(make_retailer(), _facts(), min_match_score=95) is None


# ── Batch matching ────────────────────────────────────────────────────────────

class TestMatchRetailers:
    def test_shipped_dataset_sorted_and_bounded(self, retailer_dataset):
        facts = _facts()
        summary = match_retailers(retailer_dataset, facts)
        assert 0 < len(summary.matches) <= 20
        assert summary.total_matches >= len(summary.matches)
        scores = [m.match_score for m in summary.matches]
        assert scores == sorted(scores, reverse=True)
        assert all(30 <= s <= 100 for s in scores)
        for m in summary.matches:
            retailer = retailer_dataset.get(m.retailer_id)
            assert retailer.actively_expanding
            assert retailer.min_lot_size <= 2 * facts.lot_size_acres

    def test_large_lot_chain_never_matches_small_site(self, retailer_dataset):
        summary = match_retailers(retailer_dataset, _facts(lot_size_acres=1.0))
        assert "bucees" not in {m.retailer_id for m in summary.matches}

    def test_high_income_site(self, retailer_dataset):
        summary = match_retailers(
            retailer_dataset, _facts(median_income=125_000, income_tier=IncomeTier.HIGH)
        )
        ids = {m.retailer_id for m in summary.matches}
        assert "dollar-general" not in ids
        for m in summary.matches:
            cap = retailer_dataset.get(m.retailer_id).max_median_income
            assert cap is None or 125_000 <= cap * 1.3

    def test_inactive_skipped(self, make_retailer):
        retailers = [make_retailer(actively_expanding=False)]
        assert match_retailers(retailers, _facts()).total_matches == 0

    def test_truncation_keeps_total(self, retailer_dataset):
        full = match_retailers(retailer_dataset, _facts())
        capped = match_retailers(retailer_dataset, _facts(), MatcherConfig(max_results=3))
        assert len(capped.matches) == 3
        assert capped.total_matches == full.total_matches
        assert capped.matches == full.matches[:3]

    def test_ties_keep_input_order(self, make_retailer):
        retailers = [make_retailer(retailer_id="b"), make_retailer(retailer_id="a")]
        summary = match_retailers(retailers, _facts())
        assert [m.retailer_id for m in summary.matches] == ["b", "a"]

    def test_from_site(self, sample_site):
        facts = RetailerSiteFacts.from_site(sample_site, "FL")
        assert facts.vpd == 24_000
        assert facts.income_tier is IncomeTier.MIDDLE
        assert facts.population == 45_000

    def test_from_bare_site(self, bare_site):
        facts = RetailerSiteFacts.from_site(bare_site, None)
        assert facts == RetailerSiteFacts()


# ── Formatting ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "lo, hi, expected",
    [
        (1_200_000, 2_500_000, "$1.2M - $2.5M"),
        (500_000, 2_000_000, "$0.5M - $2.0M"),
        (None, 2_000_000, None),
        (1_000_000, None, None),
    ],
)
def test_format_investment(lo, hi, expected) -> None:
    assert format_investment(lo, hi) == expected
