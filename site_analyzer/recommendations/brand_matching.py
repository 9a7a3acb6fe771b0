"""
Brand deduplication against nearby businesses.

Names are normalised to lower-case ASCII alphanumerics (``"Chick-fil-A"`` →
``"chickfila"``) and compared by substring in both directions, so
``"Dunkin'"`` matches a nearby ``"Dunkin Donuts"`` and a nearby ``"Target"``
matches the example ``"Target Express"``.

A nearby name that normalises to the empty string is ignored; otherwise it
would be a substring of every brand.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from site_analyzer.models.site import NearbyBusiness

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_brand(name: str) -> str:
    return _NON_ALNUM_RE.sub("", name.lower())


def _nearby_keys(nearby_businesses: Sequence[NearbyBusiness]) -> list[str]:
    keys = (normalize_brand(b.name) for b in nearby_businesses)
    return [k for k in keys if k]


def _present(brand_key: str, nearby_keys: Iterable[str]) -> bool:
    return any(existing in brand_key or brand_key in existing for existing in nearby_keys)


def split_existing(
    brands: Sequence[str],
    nearby_businesses: Sequence[NearbyBusiness],
) -> tuple[list[str], list[str]]:
    """Partition ``brands`` into (not yet nearby, already nearby), order kept."""
    nearby_keys = _nearby_keys(nearby_businesses)
    remaining: list[str] = []
    existing: list[str] = []
    for brand in brands:
        key = normalize_brand(brand)
        if key and _present(key, nearby_keys):
            existing.append(brand)
        else:
            remaining.append(brand)
    return remaining, existing


def filter_existing(
    brands: Sequence[str],
    nearby_businesses: Sequence[NearbyBusiness],
) -> list[str]:
    """Return ``brands`` minus those already present near the site."""
    return split_existing(brands, nearby_businesses)[0]
