"""
Tests for site_analyzer.catalog.lot_reference.

What we test
------------
load_lot_reference():
  - Loads the shipped reference; categories in first-seen order.
  - Missing file raises FileNotFoundError; bad JSON and bad records raise
    ValueError.
LotReference.matching_tenants():
  - Inclusive range bounds; closest typical lot first; ties keep file order.
LotReference.tenant_fit():
  - Every fit quality band, name matching in both directions, unknown
    tenants.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from site_analyzer.catalog.lot_reference import load_lot_reference, parse_lot_reference
from site_analyzer.taxonomy.site_taxonomy import LotFit


def _tenant(tid: int, name: str, typical: float, lo: float, hi: float, **overrides) -> dict:
    rec = {
        "id": tid,
        "tenant": name,
        "category": "QUICK-SERVICE RESTAURANT (QSR)",
        "building_sf_min": 2000,
        "building_sf_max": 3000,
        "typical_lot_acres": typical,
        "lot_min_acres": lo,
        "lot_max_acres": hi,
    }
    rec.update(overrides)
    return rec


@pytest.fixture
def small_reference():
    return parse_lot_reference([
        _tenant(1, "Burger Barn", 1.0, 0.8, 1.5),
        _tenant(2, "Taco Hut", 0.9, 0.6, 1.2),
        _tenant(3, "Mega Mart", 12.0, 10.0, 15.0, category="BIG BOX / WAREHOUSE RETAIL"),
        _tenant(4, "Sub Stop", 1.1, 0.9, 1.3),
    ])


# ── Loading ───────────────────────────────────────────────────────────────────

class TestShippedReference:
    def test_loads(self, lot_reference):
        assert len(lot_reference) == 136
        assert lot_reference.categories()[0] == "BIG BOX / WAREHOUSE RETAIL"
        assert "QUICK-SERVICE RESTAURANT (QSR)" in lot_reference.categories()

    def test_ranges_are_ordered(self, lot_reference):
        for t in lot_reference:
            assert t.lot_min_acres <= t.typical_lot_acres <= t.lot_max_acres

    def test_repr(self, lot_reference):
        assert repr(lot_reference) == "LotReference(136 tenants)"

    def test_tenants_for_one_acre_include_qsr(self, lot_reference):
        names = [t.tenant for t in lot_reference.matching_tenants(1.0)]
        assert "Chick-fil-A" in names
        assert "Walmart Supercenter" not in names


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Lot reference not found"):
        load_lot_reference(tmp_path / "nope.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "lots.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_lot_reference(path)


def test_top_level_must_be_array() -> None:
    with pytest.raises(ValueError, match="must be a JSON array"):
        parse_lot_reference({"tenant": "Burger Barn"})


def test_typical_outside_range_rejected(tmp_path: Path) -> None:
    path = tmp_path / "lots.json"
    path.write_text(json.dumps([_tenant(1, "Odd Lot", 3.0, 0.5, 1.0)]), encoding="utf-8")
    with pytest.raises(ValueError, match="record 0 is invalid"):
        load_lot_reference(path)


# ── matching_tenants ──────────────────────────────────────────────────────────

class TestMatchingTenants:
    def test_closest_typical_first(self, small_reference):
        names = [t.tenant for t in small_reference.matching_tenants(1.05)]
        # |1.0-1.05| == |1.1-1.05|; file order breaks the tie
        assert names == ["Burger Barn", "Sub Stop", "Taco Hut"]

    def test_bounds_inclusive(self, small_reference):
        assert [t.tenant for t in small_reference.matching_tenants(1.5)] == ["Burger Barn"]
        assert [t.tenant for t in small_reference.matching_tenants(0.6)] == ["Taco Hut"]

    def test_nothing_fits(self, small_reference):
        assert small_reference.matching_tenants(5.0) == []

    def test_by_category(self, small_reference):
        assert [t.tenant for t in small_reference.by_category("BIG BOX / WAREHOUSE RETAIL")] == [
            "Mega Mart"
        ]


# ── tenant_fit ────────────────────────────────────────────────────────────────

class TestTenantFit:
    @pytest.mark.parametrize("lot, fits, quality", [
        (0.5, False, LotFit.TOO_SMALL),
        (0.95, True, LotFit.IDEAL),
        (1.1, True, LotFit.IDEAL),
        (1.3, True, LotFit.ACCEPTABLE),
        (0.85, True, LotFit.ACCEPTABLE),
        (2.0, True, LotFit.TIGHT),
        (2.5, True, LotFit.TOO_LARGE),
    ])
    def test_quality_bands(self, small_reference, lot, fits, quality):
        result = small_reference.tenant_fit("Burger Barn", lot)
        assert result.tenant == "Burger Barn"
        assert (result.fits, result.quality) == (fits, quality)

    def test_name_case_insensitive_and_partial(self, small_reference):
        assert small_reference.tenant_fit("burger", 1.0).tenant == "Burger Barn"
        assert small_reference.tenant_fit("The Taco Hut Express", 0.9).tenant == "Taco Hut"

    def test_unknown_tenant(self, small_reference):
        result = small_reference.tenant_fit("Spaceport", 1.0)
        assert result.tenant is None
        assert result.fits is False
        assert result.quality == LotFit.TOO_SMALL

    def test_blank_name_matches_nothing(self, small_reference):
        assert small_reference.find_tenant("   ") is None

    def test_shipped_starbucks(self, lot_reference):
        result = lot_reference.tenant_fit("starbucks", 0.6)
        assert result.tenant == "Starbucks (Drive-Thru)"
        assert result.quality == LotFit.IDEAL
