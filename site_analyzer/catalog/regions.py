"""
US state → expansion region groups.

Retailer expansion plans are published as a mix of national coverage,
named regions ("Southeast", "Sun Belt") and individual states. A site's
state code is expanded to every named region it belongs to so the matcher
can compare all three forms directly.

A state may belong to several overlapping groups.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

NATIONAL = "National"

_REGION_MEMBERS: dict[str, tuple[str, ...]] = {
    "Northeast": ("CT", "MA", "ME", "NH", "NJ", "NY", "PA", "RI", "VT"),
    "Mid-Atlantic": ("DC", "DE", "MD", "NJ", "NY", "PA", "VA", "WV"),
    "Southeast": (
        "AL", "AR", "FL", "GA", "KY", "LA", "MS", "NC", "SC", "TN", "VA", "WV",
    ),
    "Midwest": (
        "IA", "IL", "IN", "KS", "MI", "MN", "MO", "ND", "NE", "OH", "SD", "WI",
    ),
    "Southwest": ("AZ", "NM", "OK", "TX"),
    "Texas": ("TX",),
    "Mountain West": ("CO", "ID", "MT", "NV", "UT", "WY"),
    "West Coast": ("CA", "OR", "WA"),
    "Pacific Northwest": ("ID", "OR", "WA"),
    "Sun Belt": (
        "AL", "AZ", "CA", "FL", "GA", "LA", "MS", "NC", "NM", "NV", "SC", "TN", "TX",
    ),
    "Non-Contiguous": ("AK", "HI"),
}


def _invert(members: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
    by_state: dict[str, list[str]] = {}
    for region, states in members.items():
        for state in states:
            by_state.setdefault(state, []).append(region)
    return {state: tuple(regions) for state, regions in sorted(by_state.items())}


STATE_REGIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(_invert(_REGION_MEMBERS))
"""Read-only USPS code → region groups, in ``_REGION_MEMBERS`` order."""

REGION_NAMES: frozenset[str] = frozenset(_REGION_MEMBERS) | {NATIONAL}


def region_groups_for_state(state_code: Optional[str]) -> list[str]:
    """Return the named region groups containing ``state_code``.

    Unknown or missing codes return an empty list.

    Example::

        >>> region_groups_for_state("FL")
        ['Southeast', 'Sun Belt']
    """
    if not state_code:
        return []
    return list(STATE_REGIONS.get(state_code.strip().upper(), ()))
