"""Clock hand polygons sized from the face radius."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Sequence, Tuple

from enigmatum.geometry import Bounds, Point

_LOGGER = logging.getLogger("Enigmatum.Face.Hands")

_BASE_ANGLE = math.pi / 6.0


class Hand(str, Enum):
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


# Fraction of the face radius each hand spans; the hands nest as concentric triangles.
HAND_RADIUS_FRACTIONS: Dict[Hand, float] = {
    Hand.HOUR: 1.0,
    Hand.MINUTE: 0.5,
    Hand.SECOND: 0.25,
}


@dataclass(frozen=True)
class HandPolygon:
    hand: Hand
    path: Tuple[Point, ...]
    bounds_signature: Tuple[int, int, int, int]

    @property
    def closed(self) -> bool:
        return True


@dataclass(frozen=True)
class HandSet:
    hour: HandPolygon
    minute: HandPolygon
    second: HandPolygon

    def get(self, hand: Hand) -> HandPolygon:
        if hand is Hand.HOUR:
            return self.hour
        if hand is Hand.MINUTE:
            return self.minute
        return self.second

    def __iter__(self) -> Iterator[HandPolygon]:
        return iter((self.hour, self.minute, self.second))


def build_triangle(center: Point, hand_radius: float) -> Tuple[Point, ...]:
    """Apex straight up from the centre, base corners 30 degrees below horizontal."""

    dx = hand_radius * math.cos(_BASE_ANGLE)
    dy = hand_radius * math.sin(_BASE_ANGLE)
    return (
        Point(center.x, center.y - hand_radius),
        Point(center.x + dx, center.y + dy),
        Point(center.x - dx, center.y + dy),
    )


def rotate_path(path: Sequence[Point], degrees: float, pivot: Point) -> Tuple[Point, ...]:
    """Rotate clockwise on screen (y grows downward) about ``pivot``."""

    if degrees % 360.0 == 0.0:
        return tuple(path)
    radians = math.radians(degrees)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    rotated = []
    for point in path:
        dx = point.x - pivot.x
        dy = point.y - pivot.y
        rotated.append(Point(pivot.x + dx * cos_a - dy * sin_a, pivot.y + dx * sin_a + dy * cos_a))
    return tuple(rotated)


class ClockHandGeometry:
    """Caches the three hand polygons for the last surface bounds seen."""

    def __init__(self) -> None:
        self._hands: Optional[HandSet] = None
        self._bounds_signature: Optional[Tuple[int, int, int, int]] = None
        self.rebuild_count = 0

    def get_or_build(self, bounds: Bounds) -> HandSet:
        bounds.require_valid()
        if self._hands is not None and self._bounds_signature == bounds.signature:
            return self._hands
        self._hands = self._build(bounds)
        self._bounds_signature = bounds.signature
        self.rebuild_count += 1
        _LOGGER.debug("Recalculated clock hands for %dx%d surface", bounds.width, bounds.height)
        return self._hands

    @staticmethod
    def _build(bounds: Bounds) -> HandSet:
        center = bounds.exact_center()
        radius = min(bounds.width, bounds.height) / 2.0
        signature = bounds.signature
        polygons = {
            hand: HandPolygon(hand, build_triangle(center, radius * fraction), signature)
            for hand, fraction in HAND_RADIUS_FRACTIONS.items()
        }
        return HandSet(hour=polygons[Hand.HOUR], minute=polygons[Hand.MINUTE], second=polygons[Hand.SECOND])
