"""Surface bounds and point helpers shared by the layout and hand caches."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


class InvalidBounds(ValueError):
    """Raised when a drawing surface has no usable area."""


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    """Integer surface rectangle, edges inclusive-exclusive like a canvas rect."""

    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def from_size(cls, width: int, height: int) -> "Bounds":
        return cls(0, 0, int(width), int(height))

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def exact_center(self) -> Point:
        return Point((self.left + self.right) * 0.5, (self.top + self.bottom) * 0.5)

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def require_valid(self) -> None:
        if self.is_degenerate():
            raise InvalidBounds(f"surface {self.width}x{self.height} has no drawable area")

    @property
    def signature(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)

    def scaled(self, factor: float) -> "Bounds":
        """Return bounds shrunk or grown about the exact center by ``factor``.

        A drawable rect never scales below 1x1, so tiny surfaces keep every ring.
        """

        if factor == 1.0:
            return self
        center = self.exact_center()
        half_w = self.width * factor / 2.0
        half_h = self.height * factor / 2.0
        left = round_half_up(center.x - half_w)
        top = round_half_up(center.y - half_h)
        right = round_half_up(center.x + half_w)
        bottom = round_half_up(center.y + half_h)
        if not self.is_degenerate():
            right = max(right, left + 1)
            bottom = max(bottom, top + 1)
        return Bounds(left, top, right, bottom)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""

    return int(math.floor(value + 0.5))


def compare_axis(center: float, point: float) -> int:
    """Classify ``point`` against ``center`` after rounding both to whole units.

    Returns -1 when the point lies before the center (left or above), 1 when it
    lies after it (right or below) and 0 when both round to the same unit.
    """

    rounded_center = round_half_up(center)
    rounded_point = round_half_up(point)
    if rounded_point < rounded_center:
        return -1
    if rounded_point > rounded_center:
        return 1
    return 0
