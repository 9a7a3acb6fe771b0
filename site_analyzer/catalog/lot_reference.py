"""
Tenant lot-size reference: which named tenants fit a lot of a given size.

The reference (``config/data/lot_reference.json`` by default) lists, per
tenant, the typical lot and the acceptable lot range along with building
footprint and parking ratio. It answers two broker questions:

  - "What could go on 1.2 acres?"  → ``LotReference.matching_tenants``
  - "Does a Chick-fil-A fit here?" → ``LotReference.tenant_fit``

Fit quality for a named tenant
------------------------------
    lot < min                          → too_small   (does not fit)
    lot > 1.5 * max                    → too_large   (fits)
    0.9 * typical <= lot <= 1.1 * typ. → ideal
    min <= lot <= max                  → acceptable
    otherwise (max < lot <= 1.5 * max) → tight

Tenant names match case-insensitively when either name contains the
other; the first record in file order wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from site_analyzer.models.requirements import TenantLotRequirement
from site_analyzer.models.results import TenantLotFit
from site_analyzer.taxonomy.site_taxonomy import LotFit

logger = logging.getLogger(__name__)

IDEAL_BAND = 0.10
OVERSIZE_FACTOR = 1.5


class LotReference:
    """Read-only tenant lot reference, iterated in file order."""

    def __init__(self, tenants: list[TenantLotRequirement]) -> None:
        self._ordered: tuple[TenantLotRequirement, ...] = tuple(tenants)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[TenantLotRequirement]:
        return iter(self._ordered)

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(t.category for t in self._ordered))

    def by_category(self, category: str) -> list[TenantLotRequirement]:
        return [t for t in self._ordered if t.category == category]

    def matching_tenants(self, lot_acres: float) -> list[TenantLotRequirement]:
        """Tenants whose lot range covers ``lot_acres``, closest typical lot first.

        Ties keep file order.
        """
        fitting = [
            t for t in self._ordered
            if t.lot_min_acres <= lot_acres <= t.lot_max_acres
        ]
        return sorted(fitting, key=lambda t: abs(t.typical_lot_acres - lot_acres))

    def find_tenant(self, name: str) -> TenantLotRequirement | None:
        needle = name.strip().lower()
        if not needle:
            return None
        for tenant in self._ordered:
            hay = tenant.tenant.lower()
            if needle in hay or hay in needle:
                return tenant
        return None

    def tenant_fit(self, name: str, lot_acres: float) -> TenantLotFit:
        """Whether the tenant called ``name`` fits ``lot_acres``.

        An unknown tenant is reported as not fitting (``too_small``) with
        ``tenant=None``.
        """
        tenant = self.find_tenant(name)
        if tenant is None:
            return TenantLotFit(tenant=None, fits=False, quality=LotFit.TOO_SMALL)

        if lot_acres < tenant.lot_min_acres:
            return TenantLotFit(tenant=tenant.tenant, fits=False, quality=LotFit.TOO_SMALL)
        if lot_acres > tenant.lot_max_acres * OVERSIZE_FACTOR:
            return TenantLotFit(tenant=tenant.tenant, fits=True, quality=LotFit.TOO_LARGE)

        typical = tenant.typical_lot_acres
        if typical * (1 - IDEAL_BAND) <= lot_acres <= typical * (1 + IDEAL_BAND):
            quality = LotFit.IDEAL
        elif lot_acres <= tenant.lot_max_acres:
            quality = LotFit.ACCEPTABLE
        else:
            quality = LotFit.TIGHT
        return TenantLotFit(tenant=tenant.tenant, fits=True, quality=quality)

    def __repr__(self) -> str:
        return f"LotReference({len(self)} tenants)"


def parse_lot_reference(records: Any) -> LotReference:
    """Validate decoded JSON records into a ``LotReference``.

    Raises:
        ValueError: Top level is not an array, or a record is invalid.
    """
    if not isinstance(records, list):
        raise ValueError(
            f"Lot reference must be a JSON array, got {type(records).__name__}."
        )
    tenants: list[TenantLotRequirement] = []
    for i, rec in enumerate(records):
        try:
            tenants.append(TenantLotRequirement.model_validate(rec))
        except ValidationError as exc:
            raise ValueError(f"Lot reference record {i} is invalid: {exc}") from exc
    return LotReference(tenants)


def load_lot_reference(path: Path) -> LotReference:
    """Load the tenant lot reference JSON file at ``path``.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: The file is not valid JSON or a record is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Lot reference not found: {path}")
    try:
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Lot reference {path} is not valid JSON: {exc}") from exc

    reference = parse_lot_reference(records)
    logger.info(
        "Loaded %d tenant lot records in %d categories from %s",
        len(reference), len(reference.categories()), path,
    )
    return reference
