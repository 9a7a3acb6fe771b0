"""Tests for site_analyzer.catalog.regions."""

from __future__ import annotations

from site_analyzer.catalog.regions import (
    NATIONAL,
    REGION_NAMES,
    STATE_REGIONS,
    region_groups_for_state,
)


class TestRegionGroupsForState:
    def test_florida(self):
        assert region_groups_for_state("FL") == ["Southeast", "Sun Belt"]

    def test_texas_overlapping_groups(self):
        assert region_groups_for_state("TX") == ["Southwest", "Texas", "Sun Belt"]

    def test_lowercase_accepted(self):
        assert region_groups_for_state("fl") == ["Southeast", "Sun Belt"]

    def test_unknown_state(self):
        assert region_groups_for_state("ZZ") == []

    def test_none(self):
        assert region_groups_for_state(None) == []

    def test_returns_fresh_list(self):
        groups = region_groups_for_state("FL")
        groups.append("Mutated")
        assert region_groups_for_state("FL") == ["Southeast", "Sun Belt"]


class TestStateRegions:
    def test_dc_included(self):
        assert "Mid-Atlantic" in STATE_REGIONS["DC"]

    def test_every_group_named(self):
        for groups in STATE_REGIONS.values():
            assert set(groups) <= REGION_NAMES

    def test_national_is_a_region_name(self):
        assert NATIONAL in REGION_NAMES
