"""
Numeric helpers shared by the scorers.

``round_half_up`` is used everywhere a score is "rounded": Python's builtin
``round()`` uses banker's rounding (``round(6.5) == 6``), whereas every
threshold table in this package was authored against half-up rounding
(6.5 → 7).
"""

from __future__ import annotations

import math

# Weighted sums such as 0.35 * 10 carry binary noise; snap to this many
# decimals before rounding so exact halves stay halves.
_SNAP_DECIMALS = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positives."""
    return int(math.floor(round(value, _SNAP_DECIMALS) + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
