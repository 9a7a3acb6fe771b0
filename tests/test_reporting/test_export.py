"""
Tests for site_analyzer.reporting.export.

What we test
------------
write_rows_csv():   header from first row or fixed columns, extra keys
                    dropped, header-only file for no rows, parent dirs.
write_json():       nested dirs, str fallback for non-JSON values.
export_*():         analysis JSON shape; retailer and category CSV tables
                    follow the published column order.
flatten_*():        one flat row per match / category, in rank order.
"""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

import pytest

from site_analyzer.catalog.retailer_loader import RetailerDataset
from site_analyzer.pipeline.orchestrator import score_and_match
from site_analyzer.reporting.export import (
    RETAILER_COLUMNS,
    SUITABILITY_COLUMNS,
    export_analysis_json,
    export_retailer_matches_csv,
    export_suitability_csv,
    flatten_retailer_matches_for_export,
    flatten_suitability_for_export,
    write_json,
    write_rows_csv,
)


@pytest.fixture
def analysis(sample_site, catalog, retailer_dataset):
    return score_and_match(sample_site, catalog, retailer_dataset)


def _read_csv(path: Path) -> list[dict]:
    with path.open(encoding="utf-8", newline="") as fh:
        return list(csv.DictReader(fh))


# ── write_rows_csv ────────────────────────────────────────────────────────────


def test_header_taken_from_first_row(tmp_path: Path) -> None:
    rows = [
        {"retailer_id": "chick-fil-a", "match_score": 93},
        {"retailer_id": "wawa", "match_score": 71},
    ]
    out = write_rows_csv(rows, tmp_path / "scores.csv")

    assert out == tmp_path / "scores.csv"
    loaded = _read_csv(out)
    assert [r["retailer_id"] for r in loaded] == ["chick-fil-a", "wawa"]
    assert loaded[0]["match_score"] == "93"


def test_fixed_columns_order_and_drop_extras(tmp_path: Path) -> None:
    out = write_rows_csv([{"a": 1, "b": 2, "c": 3}], tmp_path / "cols.csv", columns=["c", "a"])
    assert out.read_text(encoding="utf-8").splitlines()[0] == "c,a"


def test_no_rows_without_columns_is_empty(tmp_path: Path) -> None:
    out = write_rows_csv([], tmp_path / "empty.csv")
    assert out.read_text(encoding="utf-8") == ""


def test_no_rows_with_columns_writes_header(tmp_path: Path) -> None:
    out = write_rows_csv([], tmp_path / "header.csv", columns=["x", "y"])
    assert out.read_text(encoding="utf-8").strip() == "x,y"


def test_csv_parent_dirs_created(tmp_path: Path) -> None:
    out = write_rows_csv([{"x": 1}], tmp_path / "nested" / "dir" / "rows.csv")
    assert out.exists()


# ── write_json ────────────────────────────────────────────────────────────────


def test_write_json_nested_dir_and_str_fallback(tmp_path: Path) -> None:
    out = write_json({"when": date(2026, 3, 2), "scores": [1, 2]}, tmp_path / "sub" / "d.json")
    assert json.loads(out.read_text(encoding="utf-8")) == {
        "when": "2026-03-02",
        "scores": [1, 2],
    }


def test_export_analysis_json(analysis, tmp_path: Path) -> None:
    """The written file is the model's JSON form."""
    out = export_analysis_json(analysis, tmp_path / "analysis.json")
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["state_code"] == "FL"
    assert loaded["district"]["type"] == "suburban_retail"
    assert loaded["feasibility"]["overall"] == analysis.feasibility.overall
    assert len(loaded["retailer_matches"]["matches"]) == len(analysis.retailer_matches.matches)
    assert loaded["site_grade"]["overall_grade"] == analysis.site_grade.overall_grade


# ── Flatteners ────────────────────────────────────────────────────────────────


def test_flatten_retailer_matches(analysis) -> None:
    rows = flatten_retailer_matches_for_export(analysis)
    assert len(rows) == len(analysis.retailer_matches.matches)
    first = rows[0]
    assert first["rank"] == 1
    assert first["retailer_id"] == analysis.retailer_matches.matches[0].retailer_id
    assert first["state_code"] == "FL"
    assert isinstance(first["lot_match"], bool)
    assert all(not isinstance(v, (dict, list, tuple)) for v in first.values())
    assert tuple(first) == RETAILER_COLUMNS


def test_flatten_suitability(analysis) -> None:
    rows = flatten_suitability_for_export(analysis)
    assert [r["rank"] for r in rows] == list(range(1, len(rows) + 1))
    assert rows[0]["score"] == analysis.suitability[0].score
    assert all(isinstance(r["remaining_brands"], str) for r in rows)
    assert tuple(rows[0]) == SUITABILITY_COLUMNS


# ── Table exports ─────────────────────────────────────────────────────────────


def test_export_retailer_matches_csv(analysis, tmp_path: Path) -> None:
    out = export_retailer_matches_csv(analysis, tmp_path / "m.csv")
    rows = _read_csv(out)
    assert len(rows) == len(analysis.retailer_matches.matches)
    assert rows[0]["name"] == analysis.retailer_matches.matches[0].name
    assert rows[0]["rank"] == "1"


def test_export_suitability_csv(analysis, tmp_path: Path) -> None:
    out = export_suitability_csv(analysis, tmp_path / "c.csv")
    rows = _read_csv(out)
    assert rows[0]["category_id"] == analysis.suitability[0].category_id


def test_export_retailer_matches_csv_without_matches(bare_site, catalog, tmp_path: Path) -> None:
    empty = score_and_match(bare_site, catalog, RetailerDataset([]))
    out = export_retailer_matches_csv(empty, tmp_path / "none.csv")
    assert out.read_text(encoding="utf-8").splitlines() == [",".join(RETAILER_COLUMNS)]
