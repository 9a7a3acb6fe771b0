"""
Business real-estate profiles: which brands a given site could attract.

``config/data/business_profiles.json`` holds one ``BusinessProfile`` per
brand: building size, lot range, drive-through needs, construction
preference and the kinds of space the brand will take. Two questions are
answered from it:

``BusinessProfileCatalog.fit_lot``
    Brands whose lot and building ranges roughly cover the site (lot within
    0.8x min to 2x max, building within 0.7x min to 1.5x max).

``BusinessProfileCatalog.recommend_for_site``
    Brands that would plausibly sign for this specific site, given whether
    it is in a shopping center, can host a drive-through, is new
    construction and has corner or highway exposure.

``assess_drive_through`` decides whether the lot can host a drive-through
at all from its size, corner access and stacking room.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from site_analyzer.models.requirements import BusinessProfile
from site_analyzer.models.results import DriveThroughAssessment
from site_analyzer.taxonomy.site_taxonomy import ConstructionPreference, DriveThrough

logger = logging.getLogger(__name__)

# Drive-through thresholds.
MIN_DRIVE_THROUGH_LOT = 0.4
MIN_STACKING = 6
GOOD_STACKING = 8
DUAL_LANE_STACKING = 12
SINGLE_ACCESS_MIN_LOT = 0.7

# Tolerances around a profile's published ranges.
_FIT_LOT = (0.8, 2.0)
_FIT_SQFT = (0.7, 1.5)
_SITE_LOT_MIN = 0.7
_SITE_SQFT = (0.6, 2.0)


def assess_drive_through(
    lot_acres: float,
    has_corner_access: bool,
    stacking_spaces: int,
) -> DriveThroughAssessment:
    """Whether a drive-through can work on this lot, with a one-line reason."""
    if lot_acres < MIN_DRIVE_THROUGH_LOT:
        return DriveThroughAssessment(
            feasible=False, notes="Lot too small for drive-through stacking"
        )
    if stacking_spaces < MIN_STACKING:
        return DriveThroughAssessment(
            feasible=False,
            notes="Insufficient stacking space (need 8-12 cars minimum for QSR)",
        )
    if not has_corner_access and lot_acres < SINGLE_ACCESS_MIN_LOT:
        return DriveThroughAssessment(
            feasible=False, notes="Single access point limits drive-through traffic flow"
        )
    if stacking_spaces >= DUAL_LANE_STACKING:
        return DriveThroughAssessment(
            feasible=True, notes="Excellent drive-through potential with dual lane capability"
        )
    if stacking_spaces >= GOOD_STACKING:
        return DriveThroughAssessment(
            feasible=True, notes="Good drive-through potential for single lane operation"
        )
    return DriveThroughAssessment(
        feasible=True,
        notes="Marginal drive-through feasibility - may limit to lower volume concepts",
    )


class BusinessProfileCatalog:
    """Read-only brand profiles, iterated in file order."""

    def __init__(self, profiles: list[BusinessProfile]) -> None:
        by_name: dict[str, BusinessProfile] = {}
        for profile in profiles:
            key = profile.name.lower()
            if key in by_name:
                raise ValueError(f"Duplicate business profile '{profile.name}'.")
            by_name[key] = profile
        self._by_name = by_name
        self._ordered: tuple[BusinessProfile, ...] = tuple(profiles)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[BusinessProfile]:
        return iter(self._ordered)

    def get(self, name: str) -> Optional[BusinessProfile]:
        """Case-insensitive exact-name lookup."""
        return self._by_name.get(name.strip().lower())

    def by_category(self, category: str) -> list[BusinessProfile]:
        wanted = category.lower()
        return [p for p in self._ordered if p.category.lower() == wanted]

    def fit_lot(self, lot_acres: float, sqft: Optional[int] = None) -> list[BusinessProfile]:
        lot_lo, lot_hi = _FIT_LOT
        sqft_lo, sqft_hi = _FIT_SQFT
        fits: list[BusinessProfile] = []
        for p in self._ordered:
            if p.min_lot_acres and lot_acres < p.min_lot_acres * lot_lo:
                continue
            if p.max_lot_acres and lot_acres > p.max_lot_acres * lot_hi:
                continue
            if sqft and (sqft < p.min_sqft * sqft_lo or sqft > p.max_sqft * sqft_hi):
                continue
            fits.append(p)
        return fits

    def recommend_for_site(
        self,
        lot_acres: float,
        sqft: Optional[int] = None,
        *,
        is_shopping_center: bool = False,
        has_drive_through_potential: bool = False,
        is_new_construction: bool = False,
        has_highway_visibility: bool = False,
        has_corner_lot: bool = False,
    ) -> list[BusinessProfile]:
        """Brands that would plausibly sign for this site.

        Filters, in order: shopping-center tolerance, lot at least 70% of
        the brand minimum, building within 0.6x-2x of the brand range,
        required drive-through, new-construction-only brands. Survivors keep
        file order, then corner-preferring brands move first on a corner lot
        and highway-visibility brands move first on a highway site.
        """
        sqft_lo, sqft_hi = _SITE_SQFT
        picks: list[BusinessProfile] = []
        for p in self._ordered:
            if is_shopping_center and not p.shopping_center_ok:
                continue
            if p.min_lot_acres and lot_acres < p.min_lot_acres * _SITE_LOT_MIN:
                continue
            if sqft and (sqft < p.min_sqft * sqft_lo or sqft > p.max_sqft * sqft_hi):
                continue
            if not has_drive_through_potential and p.drive_through == DriveThrough.REQUIRED:
                continue
            if (
                not is_new_construction
                and p.construction_preference == ConstructionPreference.NEW_ONLY
            ):
                continue
            picks.append(p)

        if has_corner_lot:
            picks.sort(key=lambda p: not p.corner_lot_preferred)
        if has_highway_visibility:
            picks.sort(key=lambda p: not p.highway_visibility)
        return picks

    def __repr__(self) -> str:
        return f"BusinessProfileCatalog({len(self)} profiles)"


def parse_business_profiles(records: Any) -> BusinessProfileCatalog:
    """Validate decoded JSON records into a ``BusinessProfileCatalog``.

    Raises:
        ValueError: Top level is not an array, a record is invalid, or a
            brand name repeats.
    """
    if not isinstance(records, list):
        raise ValueError(
            f"Business profiles must be a JSON array, got {type(records).__name__}."
        )
    profiles: list[BusinessProfile] = []
    for i, rec in enumerate(records):
        try:
            profiles.append(BusinessProfile.model_validate(rec))
        except ValidationError as exc:
            raise ValueError(f"Business profile {i} is invalid: {exc}") from exc
    return BusinessProfileCatalog(profiles)


def load_business_profiles(path: Path) -> BusinessProfileCatalog:
    """Load the business profile JSON file at ``path``.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: The file is not valid JSON or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Business profiles not found: {path}")
    try:
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Business profiles {path} are not valid JSON: {exc}") from exc

    catalog = parse_business_profiles(records)
    logger.info("Loaded %d business profiles from %s", len(catalog), path)
    return catalog
