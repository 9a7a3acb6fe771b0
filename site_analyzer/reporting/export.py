"""
File exports of a ``SiteAnalysis`` for spreadsheets and downstream tools.

``analyze --output`` writes the full analysis as JSON; ``analyze --csv`` and
``--categories-csv`` write the retailer matches and the category ranking as
flat CSV tables (one row per match or category, nested fields spread into
columns and lists joined with ``"; "``).

Every writer creates missing parent directories and returns the path it
wrote.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from site_analyzer.models.results import SiteAnalysis

logger = logging.getLogger(__name__)

RETAILER_COLUMNS: tuple[str, ...] = (
    "address", "state_code", "rank", "retailer_id", "name", "category", "match_score",
    "lot_match", "lot_note", "traffic_match", "traffic_note",
    "demographics_match", "demographics_note", "region_match", "region_note",
    "franchise_available", "corporate_only", "franchise_fee", "total_investment",
    "expansion_regions",
)

SUITABILITY_COLUMNS: tuple[str, ...] = (
    "address", "rank", "category_id", "category_name", "score", "market_saturated",
    "lot_size_issue", "remaining_brands", "competing_brands", "reasoning",
)


def _prepare(path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def write_rows_csv(
    rows: Iterable[dict[str, Any]],
    path: Path,
    columns: Optional[Sequence[str]] = None,
) -> Path:
    """Write ``rows`` as a UTF-8 CSV table with a header line.

    ``columns`` fixes the header; without it the first row's keys are used.
    Keys outside the header are dropped. With no rows and no ``columns`` the
    file is left empty; with ``columns`` it still gets a header.
    """
    path = _prepare(path)
    rows = list(rows)
    header = list(columns) if columns else (list(rows[0]) if rows else [])
    with path.open("w", newline="", encoding="utf-8") as fh:
        if header:
            writer = csv.DictWriter(fh, fieldnames=header, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)
    logger.debug("Wrote %d CSV rows to %s", len(rows), path)
    return path


def write_json(payload: Any, path: Path) -> Path:
    """Dump ``payload`` as indented JSON; non-JSON values fall back to ``str``."""
    path = _prepare(path)
    path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    return path


def export_analysis_json(analysis: SiteAnalysis, path: Path) -> Path:
    """Write a ``SiteAnalysis`` as JSON (``model_dump(mode="json")``)."""
    return write_json(analysis.model_dump(mode="json"), path)


def export_retailer_matches_csv(analysis: SiteAnalysis, path: Path) -> Path:
    return write_rows_csv(flatten_retailer_matches_for_export(analysis), path, RETAILER_COLUMNS)


def export_suitability_csv(analysis: SiteAnalysis, path: Path) -> Path:
    return write_rows_csv(flatten_suitability_for_export(analysis), path, SUITABILITY_COLUMNS)


def flatten_retailer_matches_for_export(analysis: SiteAnalysis) -> list[dict]:
    """One row per retailer match in rank order, keyed by ``RETAILER_COLUMNS``.

    Per-factor flags and notes become ``<factor>_match`` / ``<factor>_note``
    columns; a missing fee or investment is an empty string.
    """
    rows: list[dict] = []
    for rank, match in enumerate(analysis.retailer_matches.matches, start=1):
        d = match.match_details
        rows.append(
            {
                "address":             analysis.address,
                "state_code":          analysis.state_code or "",
                "rank":                rank,
                "retailer_id":         match.retailer_id,
                "name":                match.name,
                "category":            match.category,
                "match_score":         match.match_score,
                "lot_match":           d.lot_size.matches,
                "lot_note":            d.lot_size.note,
                "traffic_match":       d.traffic.matches,
                "traffic_note":        d.traffic.note,
                "demographics_match":  d.demographics.matches,
                "demographics_note":   d.demographics.note,
                "region_match":        d.region.matches,
                "region_note":         d.region.note,
                "franchise_available": match.franchise_available,
                "corporate_only":      match.corporate_only,
                "franchise_fee":       match.franchise_fee if match.franchise_fee is not None else "",
                "total_investment":    match.total_investment or "",
                "expansion_regions":   "; ".join(match.expansion_regions),
            }
        )
    return rows


def flatten_suitability_for_export(analysis: SiteAnalysis) -> list[dict]:
    """One flat row per ranked category; brand lists joined with ``"; "``."""
    return [
        {
            "address":          analysis.address,
            "rank":             rank,
            "category_id":      r.category_id,
            "category_name":    r.category_name,
            "score":            r.score,
            "market_saturated": r.market_saturated,
            "lot_size_issue":   r.lot_size_issue or "",
            "remaining_brands": "; ".join(r.remaining_brands),
            "competing_brands": "; ".join(r.competing_brands),
            "reasoning":        r.reasoning,
        }
        for rank, r in enumerate(analysis.suitability, start=1)
    ]
