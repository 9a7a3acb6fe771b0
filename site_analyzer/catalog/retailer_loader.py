"""
Retailer Requirement Dataset loader: JSON → immutable id-indexed dataset.

The dataset (``config/data/retailers.json`` by default) is maintained by the
data team and loaded once at process start. It is a JSON array of objects
whose keys match the ``RetailerRequirement`` fields.

Validation rules
----------------
- The top-level value must be a JSON array of objects.
- ``retailer_id`` must be present and unique.
- Each record must pass ``RetailerRequirement`` validation
  (``min <= max`` for lot size, VPD and median income).

Every rule violation raises ``ValueError`` naming the offending index or id;
a missing file raises ``FileNotFoundError``.

Usage
-----
    from site_analyzer.catalog.retailer_loader import load_retailer_dataset

    dataset = load_retailer_dataset(Path("config/data/retailers.json"))
    for retailer in dataset.expanding():
        ...
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from site_analyzer.models.requirements import RetailerRequirement

logger = logging.getLogger(__name__)


class RetailerDataset:
    """Read-only, id-indexed collection of ``RetailerRequirement`` records.

    Iteration yields retailers in file order.
    """

    def __init__(self, retailers: list[RetailerRequirement]) -> None:
        by_id: dict[str, RetailerRequirement] = {}
        for retailer in retailers:
            if retailer.retailer_id in by_id:
                raise ValueError(f"Duplicate retailer_id '{retailer.retailer_id}'.")
            by_id[retailer.retailer_id] = retailer
        self._by_id: Mapping[str, RetailerRequirement] = MappingProxyType(by_id)
        self._ordered: tuple[RetailerRequirement, ...] = tuple(retailers)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[RetailerRequirement]:
        return iter(self._ordered)

    def __contains__(self, retailer_id: object) -> bool:
        return retailer_id in self._by_id

    def get(self, retailer_id: str) -> RetailerRequirement:
        """Return the record for ``retailer_id``; raises ``KeyError`` if unknown."""
        return self._by_id[retailer_id]

    def expanding(self) -> Iterator[RetailerRequirement]:
        """Yield only actively-expanding retailers, in file order."""
        return (r for r in self._ordered if r.actively_expanding)

    def __repr__(self) -> str:
        return f"RetailerDataset({len(self)} retailers)"


def parse_retailer_records(records: Any) -> RetailerDataset:
    """Validate already-decoded JSON records and build a ``RetailerDataset``.

    Raises:
        ValueError: On any structural or per-record validation failure.
    """
    if not isinstance(records, list):
        raise ValueError(
            f"Retailer dataset must be a JSON array, got {type(records).__name__}."
        )

    retailers: list[RetailerRequirement] = []
    seen_ids: set[str] = set()
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ValueError(f"Retailer at index {i} is not a JSON object.")
        rid = rec.get("retailer_id")
        if not rid:
            raise ValueError(f"Retailer at index {i} is missing 'retailer_id'.")
        if rid in seen_ids:
            raise ValueError(f"Duplicate retailer_id '{rid}' at index {i}.")
        seen_ids.add(rid)
        try:
            retailers.append(RetailerRequirement.model_validate(rec))
        except ValidationError as exc:
            raise ValueError(f"Retailer '{rid}' (index {i}) is invalid: {exc}") from exc

    return RetailerDataset(retailers)


def load_retailer_dataset(path: Path) -> RetailerDataset:
    """Load and validate the retailer dataset JSON file at ``path``.

    Args:
        path: Path to a JSON array of retailer requirement records.

    Returns:
        An immutable ``RetailerDataset``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or any record is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Retailer dataset not found: {path}")

    try:
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Retailer dataset {path} is not valid JSON: {exc}") from exc

    dataset = parse_retailer_records(records)
    logger.info(
        "Loaded %d retailers (%d actively expanding) from %s",
        len(dataset),
        sum(1 for _ in dataset.expanding()),
        path,
    )
    return dataset
