"""Interval index to dial angle mapping."""
from __future__ import annotations

import math


class InvalidIntervalCount(ValueError):
    """Raised when an interval set would have no intervals."""


def require_interval_count(total: int) -> int:
    try:
        count = int(total)
    except (TypeError, ValueError) as exc:
        raise InvalidIntervalCount(f"interval count {total!r} is not an integer") from exc
    if count <= 0:
        raise InvalidIntervalCount(f"interval count must be positive, got {count}")
    return count


def angle_of(index: int, total: int) -> float:
    """Return the angle in radians of interval ``index`` out of ``total``.

    Index 0 maps to 0 radians (the 3 o'clock direction of a canvas). Interval
    sets carry their quarter-turn rotation in their label ordering, so no offset
    is applied here.
    """

    count = require_interval_count(total)
    return (2.0 * math.pi / count) * index
