"""
Business-type site profiles for the site grader.

Fourteen broad business types ("qsr", "bank", "warehouse", ...) each carry
the traffic band and physical-site preferences used when a site is graded
for that type. Unlike the 87-entry category catalog, these are coarse
archetypes a broker picks from when asking "is this lot good for a bank?".

Built once at import time and exposed read-only. Iteration order is table
order.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from site_analyzer.models.requirements import BusinessTypeRequirement
from site_analyzer.taxonomy.site_taxonomy import Importance

_LO = Importance.LOW
_MD = Importance.MEDIUM
_HI = Importance.HIGH


def _type(
    type_id: str,
    description: str,
    vpd: tuple[int, int],
    corner: bool,
    multi_access: bool,
    parking: Importance,
    truck: bool,
    visibility: Importance,
) -> BusinessTypeRequirement:
    return BusinessTypeRequirement(
        type_id=type_id,
        description=description,
        min_vpd=vpd[0],
        ideal_vpd=vpd[1],
        corner_preferred=corner,
        multiple_access_preferred=multi_access,
        parking_importance=parking,
        truck_access=truck,
        visibility_importance=visibility,
    )


#            id                    description                        VPD min/ideal     corner  multi  parking truck  visibility
_TYPES: tuple[BusinessTypeRequirement, ...] = (
    _type("qsr", "Quick Service Restaurant / Fast Food", (20_000, 30_000), True, True, _MD, False, _HI),
    _type("fast_casual", "Fast Casual Dining", (15_000, 25_000), True, True, _MD, False, _HI),
    _type("casual_dining", "Sit-Down Restaurant", (12_000, 20_000), False, False, _HI, False, _MD),
    _type("retail_strip", "Retail Strip Center", (18_000, 28_000), True, True, _HI, False, _HI),
    _type("retail_standalone", "Standalone Retail", (15_000, 25_000), True, False, _HI, False, _HI),
    _type("office", "Office Building", (5_000, 15_000), False, False, _HI, False, _LO),
    _type("medical", "Medical / Healthcare Facility", (8_000, 18_000), False, True, _HI, False, _MD),
    _type("warehouse", "Warehouse / Distribution", (2_000, 8_000), False, False, _LO, True, _LO),
    _type("industrial", "Industrial / Manufacturing", (3_000, 10_000), False, False, _MD, True, _LO),
    _type("gas_station", "Gas Station / Convenience", (20_000, 35_000), True, True, _LO, False, _HI),
    _type("bank", "Bank / Financial Services", (15_000, 25_000), True, True, _MD, False, _HI),
    _type("coffee", "Coffee Shop / Drive-Thru", (18_000, 28_000), True, True, _MD, False, _HI),
    _type("hotel", "Hotel / Hospitality", (10_000, 25_000), False, False, _HI, False, _MD),
    _type("auto_service", "Auto Service / Car Wash", (12_000, 22_000), True, True, _HI, False, _HI),
)

BUSINESS_TYPES: Mapping[str, BusinessTypeRequirement] = MappingProxyType(
    {t.type_id: t for t in _TYPES}
)


def get_business_type(type_id: str) -> BusinessTypeRequirement:
    """Return the profile for ``type_id``.

    Raises:
        ValueError: Unknown id; the message lists the valid ones.
    """
    try:
        return BUSINESS_TYPES[type_id]
    except KeyError:
        raise ValueError(
            f"Unknown business type '{type_id}'. Valid: {', '.join(BUSINESS_TYPES)}"
        ) from None
