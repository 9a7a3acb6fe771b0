"""
Tests for site_analyzer.catalog.retailer_loader.

What we test
------------
load_retailer_dataset():
  - Loads the shipped dataset; ids unique; file order kept.
  - Missing file raises FileNotFoundError.
  - Invalid JSON raises ValueError.
parse_retailer_records():
  - Non-array top level, non-object record, missing id, duplicate id and
    per-record validation failures all raise ValueError.
  - Records with both franchise flags set or a zero min_vpd are accepted.
RetailerDataset:
  - get / contains / len / expanding().
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from site_analyzer.catalog.retailer_loader import (
    RetailerDataset,
    load_retailer_dataset,
    parse_retailer_records,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _record(rid: str, **overrides) -> dict:
    rec = {
        "retailer_id": rid,
        "name": rid.title(),
        "category": "QSR",
        "min_lot_size": 0.5,
        "max_lot_size": 1.0,
        "min_vpd": 10000,
        "ideal_vpd": 20000,
        "income_preference": ["middle"],
    }
    rec.update(overrides)
    return rec


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "retailers.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# ── Shipped dataset ───────────────────────────────────────────────────────────

class TestShippedDataset:
    def test_loads(self, retailer_dataset):
        assert len(retailer_dataset) == 33

    def test_file_order(self, retailer_dataset):
        assert next(iter(retailer_dataset)).retailer_id == "chick-fil-a"

    def test_expanding_excludes_inactive(self, retailer_dataset):
        expanding = {r.retailer_id for r in retailer_dataset.expanding()}
        assert "cvs" not in expanding
        assert "panera-bread" not in expanding
        assert "chick-fil-a" in expanding

    def test_get_and_contains(self, retailer_dataset):
        assert "trader-joes" in retailer_dataset
        assert retailer_dataset.get("trader-joes").min_median_income == 75_000
        with pytest.raises(KeyError):
            retailer_dataset.get("nope")


# ── File errors ───────────────────────────────────────────────────────────────

def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_retailer_dataset(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_retailer_dataset(path)


def test_load_from_file(tmp_path: Path) -> None:
    path = _write(tmp_path, [_record("a"), _record("b", actively_expanding=False)])
    dataset = load_retailer_dataset(path)
    assert [r.retailer_id for r in dataset] == ["a", "b"]
    assert [r.retailer_id for r in dataset.expanding()] == ["a"]


# ── Record validation ─────────────────────────────────────────────────────────

class TestParseRetailerRecords:
    def test_not_a_list(self):
        with pytest.raises(ValueError, match="JSON array"):
            parse_retailer_records({"retailer_id": "a"})

    def test_record_not_object(self):
        with pytest.raises(ValueError, match="index 1"):
            parse_retailer_records([_record("a"), "b"])

    def test_missing_id(self):
        rec = _record("a")
        del rec["retailer_id"]
        with pytest.raises(ValueError, match="missing 'retailer_id'"):
            parse_retailer_records([rec])

    def test_duplicate_id(self):
        with pytest.raises(ValueError, match="Duplicate retailer_id 'a'"):
            parse_retailer_records([_record("a"), _record("a")])

    def test_invalid_bounds(self):
        with pytest.raises(ValueError, match="Retailer 'a'"):
            parse_retailer_records([_record("a", min_lot_size=2.0, max_lot_size=1.0)])

    def test_unknown_income_tier(self):
        with pytest.raises(ValueError):
            parse_retailer_records([_record("a", income_preference=["rich"])])

    def test_empty_list(self):
        assert len(parse_retailer_records([])) == 0

    def test_loose_records_still_load(self):
        dataset = parse_retailer_records([
            _record("a", franchise_available=True, corporate_only=True),
            _record("b", min_vpd=0),
        ])
        assert len(dataset) == 2
        assert dataset.get("b").min_vpd == 0


def test_dataset_rejects_duplicates_directly(make_retailer) -> None:
    r = make_retailer()
    with pytest.raises(ValueError, match="Duplicate"):
        RetailerDataset([r, r])
