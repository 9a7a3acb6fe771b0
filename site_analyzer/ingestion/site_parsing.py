"""
Site input parsing: free-text lot sizes, state codes and site JSON files.

Lot-size text comes from an upstream image/records collaborator as loose
prose ("Approximately 1.2 - 1.5 acres", "about 21,780 sq ft", "Unable to
determine"). ``parse_lot_size`` converts it to acres or ``None``; it never
raises, and an unparsable string is simply "unknown" downstream.

Site JSON layout (``load_site_context``)
---------------------------------------
A single object whose keys match ``SiteContext`` fields. Two conveniences:
  - ``lot_size_estimate`` (free text) is parsed into ``lot_size_acres`` when
    the latter is absent.
  - ``state_code`` is derived from ``address`` when absent.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from site_analyzer.models.site import SiteContext

logger = logging.getLogger(__name__)

SQFT_PER_ACRE = 43_560

_ACRE_RANGE_RE = re.compile(
    r"(\d*\.?\d+)\s*(?:-|to)?\s*(\d*\.?\d+)?\s*acre", re.IGNORECASE
)
_SQFT_RE = re.compile(
    r"(\d{1,3}(?:,\d{3})+|\d+)\s*(?:sq\.?\s*ft|square\s*feet)", re.IGNORECASE
)
_STATE_ZIP_RE = re.compile(r"\b([A-Z]{2})\s*\d{5}")


def parse_lot_size(text: Optional[str]) -> Optional[float]:
    """Parse a free-text lot-size estimate into acres.

    Examples::

        >>> parse_lot_size("1.2 - 1.5 acres")
        1.35
        >>> parse_lot_size("Approximately 0.75 acres")
        0.75
        >>> parse_lot_size(".75 acres")
        0.75
        >>> parse_lot_size("43,560 sq ft")
        1.0
        >>> parse_lot_size("Unable to determine") is None
        True

    Returns:
        Acres as a float, or ``None`` when the text is empty, says "unable",
        or contains no recognisable quantity.
    """
    if not text or "unable" in text.lower():
        return None

    match = _ACRE_RANGE_RE.search(text)
    if match:
        low = float(match.group(1))
        if match.group(2):
            return (low + float(match.group(2))) / 2
        return low

    match = _SQFT_RE.search(text)
    if match:
        sqft = float(match.group(1).replace(",", ""))
        return sqft / SQFT_PER_ACRE

    return None


def extract_state_code(address: Optional[str]) -> Optional[str]:
    """Return the two-letter state code preceding a ZIP code in ``address``.

    The first ``XX 12345`` token wins; a ZIP+4 written without a hyphen
    (``"FL 326011234"``) still counts. ``None`` when no such token exists.
    """
    if not address:
        return None
    match = _STATE_ZIP_RE.search(address)
    return match.group(1) if match else None


def build_site_context(data: dict[str, Any]) -> SiteContext:
    """Validate a decoded site object into a ``SiteContext``.

    Raises:
        ValueError: If the object does not validate.
    """
    data = dict(data)
    if data.get("lot_size_acres") is None and data.get("lot_size_estimate"):
        data["lot_size_acres"] = parse_lot_size(data["lot_size_estimate"])
    if not data.get("state_code"):
        data["state_code"] = extract_state_code(data.get("address"))

    try:
        return SiteContext.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid site context: {exc}") from exc


def load_site_context(path: Path) -> SiteContext:
    """Load a ``SiteContext`` from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON object or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Site file not found: {path}")

    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Site file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Site file {path} must contain a JSON object.")

    site = build_site_context(data)
    logger.debug(
        "Loaded site %r: %d nearby businesses, lot=%s",
        site.address, len(site.nearby_businesses), site.lot_size_acres,
    )
    return site
