"""Text measurement wrapper used when placing dial marks."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Tuple


class MetricsUnavailable(RuntimeError):
    """Raised when a label cannot be measured by the text collaborator."""

    def __init__(self, label: str, reason: str) -> None:
        super().__init__(f"cannot measure {label!r}: {reason}")
        self.label = label
        self.reason = reason


@dataclass(frozen=True)
class BoundingBox:
    width: float
    height: float

    @property
    def half_width(self) -> float:
        return self.width / 2.0

    @property
    def half_height(self) -> float:
        return self.height / 2.0


TextMeasurer = Callable[[str, float, str], BoundingBox]


class MarkMetrics:
    """Delegates label measurement to an injected measurer.

    Nothing is cached here; the layout cache owns the only cache policy.
    """

    def __init__(self, measurer: TextMeasurer, font_family: str = "Sans Serif") -> None:
        self._measurer = measurer
        self._font_family = font_family

    @property
    def font_family(self) -> str:
        return self._font_family

    @property
    def context(self) -> Tuple[str, ...]:
        """Inputs besides label and size that change measured boxes."""

        return (self._font_family,)

    def measure(self, label: str, point_size: float) -> BoundingBox:
        try:
            measured = self._measurer(label, point_size, self._font_family)
        except MetricsUnavailable:
            raise
        except Exception as exc:
            raise MetricsUnavailable(label, str(exc) or type(exc).__name__) from exc
        try:
            width = float(measured.width)
            height = float(measured.height)
        except (AttributeError, TypeError, ValueError) as exc:
            raise MetricsUnavailable(label, f"measurer returned {measured!r}") from exc
        if not (math.isfinite(width) and math.isfinite(height)) or width < 0.0 or height < 0.0:
            raise MetricsUnavailable(label, f"invalid box {width}x{height}")
        return BoundingBox(width=width, height=height)
