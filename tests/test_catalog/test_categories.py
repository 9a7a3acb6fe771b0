"""
Tests for site_analyzer.catalog.categories.

What we test
------------
- The catalog holds all 87 categories, keyed by their own id.
- Every entry satisfies min <= ideal for VPD and lot size.
- Every entry has at least one example brand and one preferred tier.
- Table order is stable (big_box first).
- The catalog mapping is read-only.
- VALUE_CATEGORIES are all real catalog ids.
- get_category() raises KeyError with the known ids for unknown input.
"""

from __future__ import annotations

import pytest

from site_analyzer.catalog.categories import (
    CATEGORY_CATALOG,
    VALUE_CATEGORIES,
    get_category,
    load_category_catalog,
)
from site_analyzer.taxonomy.site_taxonomy import IncomeTier


class TestCatalogShape:
    def test_entry_count(self, catalog):
        assert len(catalog) == 87

    def test_keys_match_ids(self, catalog):
        for cid, category in catalog.items():
            assert cid == category.category_id

    def test_thresholds_ordered(self, catalog):
        for category in catalog.values():
            assert 0 < category.min_vpd <= category.ideal_vpd
            assert 0 < category.lot_size_min <= category.lot_size_ideal

    def test_brands_and_tiers_present(self, catalog):
        for category in catalog.values():
            assert category.example_brands
            assert category.income_preferences

    def test_table_order(self, catalog):
        ids = list(catalog)
        assert ids[0] == "big_box"
        assert ids[-1] == "college_town_entertainment"

    def test_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_CATALOG["new"] = CATEGORY_CATALOG["big_box"]  # type: ignore[index]

    def test_load_returns_shared_mapping(self):
        assert load_category_catalog() is CATEGORY_CATALOG


class TestKnownEntries:
    def test_retail_premium(self):
        c = get_category("retail_premium")
        assert (c.min_vpd, c.ideal_vpd) == (15_000, 22_000)
        assert (c.lot_size_min, c.lot_size_ideal) == (1.5, 3.0)
        assert IncomeTier.HIGH in c.income_preferences

    def test_big_box_needs_large_lot(self):
        assert get_category("big_box").lot_size_min == 8.0

    def test_grocery_premium_upper_tiers_only(self):
        assert set(get_category("grocery_premium").income_preferences) == {
            IncomeTier.UPPER_MIDDLE, IncomeTier.HIGH,
        }


class TestValueCategories:
    def test_all_in_catalog(self, catalog):
        assert VALUE_CATEGORIES <= set(catalog)

    def test_members(self):
        assert "fast_food_value" in VALUE_CATEGORIES
        assert "discount_retail" in VALUE_CATEGORIES
        assert "coffee_premium" not in VALUE_CATEGORIES


class TestGetCategory:
    def test_unknown_id(self):
        with pytest.raises(KeyError, match="Unknown category 'nope'"):
            get_category("nope")
